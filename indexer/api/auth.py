"""
Request authorization.

Accepts either the static service token (``Authorization: SecureToken <token>``)
or an OAuth bearer JWT issued by the configured authority
(``Authorization: Bearer <jwt>``). Bearer tokens are validated against the
signing keys published in the authority's OpenID discovery document.

Dependencies: fastapi, PyJWT
System role: Authorization dependency for the search API
"""

import hmac
import json
import logging
import time
import urllib.request
from dataclasses import dataclass, field
from typing import Any

import jwt
from fastapi import Depends, Header, HTTPException, status

from indexer.api.deps import get_settings_dependency
from indexer.configs import Settings
from indexer.configs.auth import AuthSettings
from indexer.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

SECURE_TOKEN_SCHEME = "SecureToken"
BEARER_SCHEME = "Bearer"

_bearer_verifiers: dict[tuple[str, str], "OAuthBearerVerifier"] = {}


@dataclass
class AuthContext:
    """Identity of an authorized caller."""

    scheme: str
    subject: str
    claims: dict[str, Any] = field(default_factory=dict)


def verify_secure_token(token: str, expected: str) -> AuthContext:
    """
    Check a SecureToken credential against the configured token.

    Raises:
        AuthenticationError: If no token is configured or the token differs
    """
    if not expected:
        raise AuthenticationError("secure token authentication is disabled", SECURE_TOKEN_SCHEME)
    if not hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        raise AuthenticationError("invalid secure token", SECURE_TOKEN_SCHEME)
    return AuthContext(scheme=SECURE_TOKEN_SCHEME, subject="service")


class OAuthBearerVerifier:
    """Validates RS256 bearer tokens issued by an OpenID Connect authority."""

    def __init__(self, authority: str, audience: str, cache_seconds: int = 300) -> None:
        self.authority = authority.rstrip("/")
        self.audience = audience
        self.cache_seconds = cache_seconds
        self._metadata: dict[str, Any] | None = None
        self._metadata_fetched_at = 0.0
        self._jwk_client: jwt.PyJWKClient | None = None

    @property
    def discovery_url(self) -> str:
        return f"{self.authority}/.well-known/openid-configuration"

    def _fetch_metadata(self) -> dict[str, Any]:
        with urllib.request.urlopen(self.discovery_url, timeout=5) as resp:  # nosec B310 - runtime-configured URL
            return json.loads(resp.read().decode("utf-8"))

    def _get_metadata(self) -> dict[str, Any]:
        if self._metadata is None or time.time() - self._metadata_fetched_at >= self.cache_seconds:
            self._metadata = self._fetch_metadata()
            self._metadata_fetched_at = time.time()
            self._jwk_client = None
        return self._metadata

    def _get_jwk_client(self) -> jwt.PyJWKClient:
        metadata = self._get_metadata()
        if self._jwk_client is None:
            jwks_uri = metadata.get("jwks_uri")
            if not jwks_uri:
                raise AuthenticationError("authority publishes no jwks_uri", BEARER_SCHEME)
            self._jwk_client = jwt.PyJWKClient(jwks_uri, cache_keys=True, lifespan=self.cache_seconds)
        return self._jwk_client

    def verify(self, token: str) -> AuthContext:
        """
        Validate signature, issuer, audience and lifetime of a bearer token.

        Raises:
            AuthenticationError: If the token is not acceptable
        """
        try:
            signing_key = self._get_jwk_client().get_signing_key_from_jwt(token)
            issuer = self._get_metadata().get("issuer", self.authority)
            claims = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.audience or None,
                issuer=issuer,
                options={"verify_aud": bool(self.audience), "require": ["exp"]},
            )
        except jwt.PyJWTError as e:
            raise AuthenticationError(f"invalid bearer token: {e}", BEARER_SCHEME) from e
        except OSError as e:
            raise AuthenticationError(f"authority unreachable: {e}", BEARER_SCHEME) from e

        subject = claims.get("sub") or claims.get("client_id") or ""
        return AuthContext(scheme=BEARER_SCHEME, subject=str(subject), claims=claims)


def get_bearer_verifier(auth_settings: AuthSettings) -> OAuthBearerVerifier | None:
    """Get the cached verifier for the configured authority, if any."""
    if not auth_settings.oauth_authority:
        return None
    cache_key = (auth_settings.oauth_authority, auth_settings.oauth_audience)
    verifier = _bearer_verifiers.get(cache_key)
    if verifier is None:
        verifier = OAuthBearerVerifier(
            authority=auth_settings.oauth_authority,
            audience=auth_settings.oauth_audience,
            cache_seconds=auth_settings.jwks_cache_seconds,
        )
        _bearer_verifiers[cache_key] = verifier
    return verifier


def reset_bearer_verifiers() -> None:
    """Testing helper to drop cached verifiers and their key sets."""
    _bearer_verifiers.clear()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": f"{SECURE_TOKEN_SCHEME}, {BEARER_SCHEME}"},
    )


def require_authorization(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthContext:
    """
    FastAPI dependency authorizing the caller.

    Args:
        authorization: Authorization header
        settings: Application settings (injected)

    Returns:
        AuthContext: Authorized caller

    Raises:
        HTTPException(401): Missing or invalid credentials
    """
    if not authorization or " " not in authorization.strip():
        raise _unauthorized("missing authorization header")

    scheme, credentials = authorization.strip().split(" ", 1)
    credentials = credentials.strip()

    try:
        if scheme.lower() == SECURE_TOKEN_SCHEME.lower():
            return verify_secure_token(credentials, settings.auth.security_token)
        if scheme.lower() == BEARER_SCHEME.lower():
            verifier = get_bearer_verifier(settings.auth)
            if verifier is None:
                raise AuthenticationError("bearer authentication is disabled", BEARER_SCHEME)
            return verifier.verify(credentials)
    except AuthenticationError as e:
        logger.warning(
            "Request authorization failed",
            extra={"scheme": e.scheme, "error": e.message},
        )
        raise _unauthorized(e.message) from e

    raise _unauthorized(f"unsupported authorization scheme: {scheme}")
