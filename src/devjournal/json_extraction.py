"""
モデル応答テキストからのJSON抽出

LLMは前置きや後書き付きでJSONを返すことが多いため、
最初の開き括弧から最後の閉じ括弧までを貪欲に切り出してパースする。
ネットワークに依存しない純粋関数として単体テスト可能にしている。
"""

import json
import re
from enum import Enum
from typing import Any

from .exceptions import MalformedModelOutputError


class JsonKind(str, Enum):
    """抽出対象のJSONの種類"""

    OBJECT = "object"
    ARRAY = "array"


_PATTERNS = {
    JsonKind.OBJECT: re.compile(r"\{[\s\S]*\}"),
    JsonKind.ARRAY: re.compile(r"\[[\s\S]*\]"),
}

_EXPECTED_TYPES = {
    JsonKind.OBJECT: dict,
    JsonKind.ARRAY: list,
}


def extract_json(text: str, kind: JsonKind = JsonKind.OBJECT) -> Any:
    """
    テキストから最初の {...} または [...] を取り出してパースする

    Args:
        text: モデルの生テキスト応答
        kind: 抽出するJSONの種類

    Returns:
        パース済みのdictまたはlist

    Raises:
        MalformedModelOutputError: 該当部分が無い、パースできない、型が違う場合
    """
    kind = JsonKind(kind)
    match = _PATTERNS[kind].search(text or "")
    if not match:
        raise MalformedModelOutputError("Invalid JSON response from AI")

    try:
        value = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise MalformedModelOutputError(f"Invalid JSON response from AI: {e}") from e

    if not isinstance(value, _EXPECTED_TYPES[kind]):
        raise MalformedModelOutputError(
            f"Invalid JSON response from AI: expected {kind.value}"
        )
    return value
