"""Signing and verification of Meredith access tokens."""

import time
from datetime import UTC, datetime
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import JoseError, JsonWebToken
from fastapi import HTTPException
from loguru import logger

from src.meredith.core.models.auth import TokenClaims
from src.meredith.runtime.config.config_data import JWTConfig
from src.meredith.runtime.context import get_config

_RESERVED_CLAIMS = {"iss", "sub", "aud", "exp", "iat", "nbf", "jti"}


class JwtService:
    """Issue and verify HS256 tokens signed with the configured shared secret.

    An explicit ``JWTConfig`` pins the settings; otherwise the active
    configuration is read on every call.
    """

    def __init__(self, config: JWTConfig | None = None) -> None:
        self._config = config

    def _jwt_config(self) -> JWTConfig:
        cfg = self._config or get_config().jwt
        if not cfg.secret:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")
        return cfg

    def generate_jwt(
        self,
        subject: str,
        roles: list[str] | None = None,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int | None = None,
        algorithm: str = "HS256",
    ) -> str:
        """Generate a signed token for ``subject``.

        Args:
            subject: Subject (sub) claim, typically the user id
            roles: Roles to embed in the ``roles`` claim
            claims: Additional claims; registered claim names are ignored
            expires_in_seconds: Token lifetime, defaults to the configured one
            algorithm: Signing algorithm, must be in the allowed list

        Returns:
            Signed JWT string
        """
        cfg = self._jwt_config()

        if algorithm not in cfg.allowed_algorithms:
            logger.debug(
                "Attempted to use disallowed algorithm: {}, only {} are allowed",
                algorithm,
                cfg.allowed_algorithms,
            )
            raise HTTPException(status_code=500, detail=f"Algorithm {algorithm} not allowed")

        now = int(time.time())
        lifetime = expires_in_seconds if expires_in_seconds is not None else cfg.expires_in_seconds
        payload: dict[str, Any] = {
            "iss": cfg.issuer,
            "sub": subject,
            "aud": cfg.audiences,
            "exp": now + lifetime,
            "iat": now,
            "nbf": now,
            "jti": generate_token(16),
        }
        if roles:
            payload["roles"] = roles
        if claims:
            payload.update({k: v for k, v in claims.items() if k not in _RESERVED_CLAIMS})

        header = {"alg": algorithm, "typ": "JWT"}
        try:
            token = JsonWebToken(cfg.allowed_algorithms).encode(header, payload, cfg.secret)
        except JoseError as e:
            raise HTTPException(status_code=500, detail=f"JWT encoding failed: {e}") from e

        return token.decode() if isinstance(token, bytes) else token

    def verify_jwt(self, token: str) -> TokenClaims:
        """Verify signature, issuer, audience and timestamps of ``token``.

        Raises:
            HTTPException: 401 when the token is not acceptable
        """
        cfg = self._jwt_config()

        claims_options = {
            "iss": {"essential": True, "value": cfg.issuer},
            "aud": {"essential": True, "values": cfg.audiences},
            "sub": {"essential": True},
            "exp": {"essential": True},
        }

        try:
            claims = JsonWebToken(cfg.allowed_algorithms).decode(
                token, cfg.secret, claims_options=claims_options
            )
            claims.validate(leeway=cfg.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.debug("Rejected token: {}", exc)
            raise HTTPException(status_code=401, detail=f"JWT error: {exc}") from exc

        roles = claims.get("roles") or []
        if isinstance(roles, str):
            roles = roles.split()

        return TokenClaims(
            subject=str(claims["sub"]),
            issuer=str(claims["iss"]),
            roles=list(roles),
            expires_at=datetime.fromtimestamp(int(claims["exp"]), UTC),
            raw=dict(claims),
        )
