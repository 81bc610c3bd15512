"""Security Helpers — password hashing and signed access tokens.

Invariants:
    - Clear-text passwords are never stored; only bcrypt hashes leave hash_password()
    - Tokens are HS256 JWTs carrying sub, role, iss, iat, exp (no audience)
    - decode_access_token() rejects bad signature, wrong issuer, expiry, missing claims
      by raising AuthenticationError — callers never see PyJWT exceptions

Design Decisions:
    - passlib CryptContext for hashing: scheme upgrades without touching callers
    - TokenClaims as frozen dataclass: routes depend on a plain value, not a dict
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt
from passlib.context import CryptContext

from user_management_api.config import get_settings
from user_management_api.core.errors import AuthenticationError

ROLE_ADMIN = "Admin"
ROLE_USER = "User"


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of an access token."""
    subject: str
    role: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_in: int


# ─── Password hashing ────────────────────────────────────────────

@lru_cache
def _crypt_context(rounds: int) -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
    )


def hash_password(password: str) -> str:
    return _crypt_context(get_settings().password_hash_rounds).hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a clear-text password against a stored hash. Malformed hashes never match."""
    try:
        return _crypt_context(get_settings().password_hash_rounds).verify(
            password, password_hash,
        )
    except ValueError:
        return False


# ─── Access tokens ───────────────────────────────────────────────

def create_access_token(
    subject: str, role: str, expires_delta: timedelta | None = None,
) -> IssuedToken:
    """Sign a token for subject with the configured key and issuer."""
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.jwt_expire_minutes)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "role": role,
        "iss": settings.jwt_issuer,
        "iat": now,
        "exp": now + lifetime,
    }
    token = jwt.encode(payload, settings.jwt_key, algorithm=settings.jwt_algorithm)
    return IssuedToken(token=token, expires_in=int(lifetime.total_seconds()))


def decode_access_token(token: str) -> TokenClaims:
    """Verify signature, issuer and lifetime; return the claims."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_key,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            options={"require": ["exp", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidIssuerError:
        raise AuthenticationError("Token issuer is not trusted")
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid token")

    return TokenClaims(
        subject=payload["sub"],
        role=payload.get("role", ROLE_USER),
        issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
