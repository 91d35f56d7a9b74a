# student_api/core/security.py
from __future__ import annotations

import base64
import binascii
import time
from dataclasses import dataclass, field
from typing import Callable

import jwt
from jwt import InvalidTokenError

from student_api.core.errors import ConfigurationError, ExpiredToken, InvalidToken

# HS256 needs at least 256 bits of key material
MIN_KEY_BYTES = 32
ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenConfig:
    secret_key: bytes = field(repr=False)
    ttl_ms: int
    algorithm: str = ALGORITHM

    @classmethod
    def from_base64(cls, secret: str | None, ttl_ms: int) -> TokenConfig:
        """Decode the signing key from configuration, failing fast on bad input."""
        if not secret:
            raise ConfigurationError("token signing secret is not configured")
        try:
            key = base64.b64decode(secret, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError("token signing secret is not valid base64") from e
        if len(key) < MIN_KEY_BYTES:
            raise ConfigurationError(
                f"token signing secret must decode to at least {MIN_KEY_BYTES} bytes"
            )
        if ttl_ms <= 0:
            raise ConfigurationError("token TTL must be positive")
        return cls(secret_key=key, ttl_ms=ttl_ms)

    @classmethod
    def from_settings(cls, settings) -> TokenConfig:
        return cls.from_base64(
            settings.jwt_secret.get_secret_value(), settings.jwt_expiration_ms
        )


def _now_ms(clock: Callable[[], int]) -> int:
    # clock returns integer nanoseconds; floor keeps now < exp exact
    return clock() // 1_000_000


def _is_numeric_date(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class TokenService:
    """Issues and verifies HS256-signed tokens carrying ``sub``, ``iat`` and ``exp``.

    ``iat``/``exp`` are NumericDates with millisecond precision. Expiry is
    checked here rather than by PyJWT, which truncates ``exp`` to whole
    seconds; a token is expired once ``now >= exp``.
    """

    def __init__(self, config: TokenConfig, clock: Callable[[], int] = time.time_ns):
        self._config = config
        self._clock = clock

    def issue(self, subject: str) -> str:
        if not isinstance(subject, str) or not subject:
            raise ValueError("subject must be a non-empty string")
        issued_ms = _now_ms(self._clock)
        expires_ms = issued_ms + self._config.ttl_ms
        payload = {
            "sub": subject,
            "iat": issued_ms / 1000,
            "exp": expires_ms / 1000,
        }
        return jwt.encode(payload, self._config.secret_key, algorithm=self._config.algorithm)

    def verify(self, token: str) -> str:
        """Return the token's subject, or raise InvalidToken / ExpiredToken."""
        if not isinstance(token, str) or not token:
            raise InvalidToken()
        try:
            claims = jwt.decode(
                token,
                self._config.secret_key,
                algorithms=[self._config.algorithm],
                options={
                    "require": ["sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except InvalidTokenError as e:
            raise InvalidToken(f"Invalid token: {e}") from e

        subject = claims["sub"]
        if not isinstance(subject, str) or not subject:
            raise InvalidToken("Invalid token: bad sub claim")
        for name in ("iat", "exp"):
            if not _is_numeric_date(claims[name]):
                raise InvalidToken(f"Invalid token: bad {name} claim")

        if self._clock() >= round(claims["exp"] * 1000) * 1_000_000:
            raise ExpiredToken()
        return subject
