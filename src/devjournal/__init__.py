"""DevJournal core: configuration, identity, completion API access and error types."""

from .completion_client import (
    CompletionClient,
    GatewayCompletionClient,
    OllamaCompletionClient,
    create_completion_client,
)
from .config import Config
from .exceptions import (
    DevJournalError,
    InvalidRequestError,
    MalformedModelOutputError,
    NoEntriesError,
    PersistenceError,
    StorageError,
    UnauthorizedError,
    UpstreamError,
)
from .identity import IdentityVerifier, JwtIdentityVerifier
from .json_extraction import JsonKind, extract_json

__all__ = [
    "CompletionClient",
    "GatewayCompletionClient",
    "OllamaCompletionClient",
    "create_completion_client",
    "Config",
    "DevJournalError",
    "InvalidRequestError",
    "MalformedModelOutputError",
    "NoEntriesError",
    "PersistenceError",
    "StorageError",
    "UnauthorizedError",
    "UpstreamError",
    "IdentityVerifier",
    "JwtIdentityVerifier",
    "JsonKind",
    "extract_json",
]
