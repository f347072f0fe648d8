"""
呼び出し元の識別（Bearerトークン → オーナーID）

関連:
  - config.AuthConfig: シークレット・アルゴリズム・audience
  - src/server/dependencies.py: get_identity_verifier / get_current_owner
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from .config import AuthConfig
from .exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def extract_token_from_header(authorization: Optional[str]) -> Optional[str]:
    """Authorizationヘッダーからトークンを取り出す"""
    if not authorization:
        return None

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]


class IdentityVerifier:
    """認証情報からオーナーIDを解決するインターフェース"""

    def resolve(self, authorization: Optional[str]) -> str:
        """
        Args:
            authorization: Authorizationヘッダーの値

        Returns:
            オーナーID

        Raises:
            UnauthorizedError: 認証情報が無い・無効な場合
        """
        raise NotImplementedError


class JwtIdentityVerifier(IdentityVerifier):
    """共有シークレットで署名されたJWTを検証し、subクレームを返す"""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        audience: Optional[str] = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.audience = audience

    @classmethod
    def from_config(cls, auth: AuthConfig) -> "JwtIdentityVerifier":
        return cls(secret=auth.jwt_secret, algorithm=auth.jwt_algorithm, audience=auth.audience)

    def resolve(self, authorization: Optional[str]) -> str:
        token = extract_token_from_header(authorization)
        if not token:
            raise UnauthorizedError()

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            logger.info(f"Rejected access token: {e}")
            raise UnauthorizedError() from e

        subject = payload.get("sub")
        if not subject:
            raise UnauthorizedError()
        return str(subject)

    def create_access_token(
        self,
        subject: str,
        expires_delta: Optional[timedelta] = None,
        extra_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """開発・テスト用のアクセストークンを発行"""
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
        to_encode: Dict[str, Any] = dict(extra_claims or {})
        to_encode.update({"sub": subject, "exp": expire})
        if self.audience is not None:
            to_encode.setdefault("aud", self.audience)
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)
