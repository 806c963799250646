# -*- coding: utf-8 -*-
"""Auth — password hashing, signed session tokens and the FastAPI role guards.

Tokens are HS256 JWTs carrying the user's role. The role in the token is informational; guards
always use the role stored on the user row, so a demoted coach loses access immediately.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request
from pydantic import BaseModel

from ..config import settings
from .storage import get_user_by_id

TOKEN_COOKIE_NAME = "coachhub_token"

# Override, edit and triage operations are only available to these roles.
COACH_ROLES = frozenset({"coach", "admin"})

_HASH_ALG = "sha256"
_HASH_ITERATIONS = 200_000
_JWT_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenClaims(BaseModel):
    sub: str
    email: str = ""
    role: str = "client"
    iat: int = 0
    exp: int = 0


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode((text + "=" * (-len(text) % 4)).encode("ascii"))


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac(_HASH_ALG, password.encode("utf-8"), salt, _HASH_ITERATIONS)
    return f"pbkdf2_{_HASH_ALG}${_HASH_ITERATIONS}${_b64(salt)}${_b64(digest)}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, iterations, salt, expected = password_hash.split("$", 3)
        alg = scheme.removeprefix("pbkdf2_")
        if alg == scheme:
            return False
        actual = hashlib.pbkdf2_hmac(alg, password.encode("utf-8"), _unb64(salt), int(iterations))
    except ValueError:
        return False
    return hmac.compare_digest(actual, _unb64(expected))


def _sign(signing_input: bytes) -> bytes:
    return hmac.new(settings.jwt_secret.encode("utf-8"), signing_input, hashlib.sha256).digest()


def create_access_token(*, user_id: str, email: str, role: str) -> str:
    now = datetime.now(timezone.utc)
    claims = TokenClaims(
        sub=user_id,
        email=email,
        role=role,
        iat=int(now.timestamp()),
        exp=int((now + timedelta(days=int(settings.token_ttl_days))).timestamp()),
    )
    segments = [
        _b64(json.dumps(_JWT_HEADER, separators=(",", ":")).encode("utf-8")),
        _b64(json.dumps(claims.model_dump(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")),
    ]
    signing_input = ".".join(segments).encode("ascii")
    return f"{signing_input.decode('ascii')}.{_b64(_sign(signing_input))}"


def decode_token(token: str) -> TokenClaims:
    """Verify signature and expiry. Any failure is a 401."""
    parts = token.split(".")
    if len(parts) != 3:
        raise HTTPException(status_code=401, detail="Invalid token")
    header_b64, claims_b64, sig_b64 = parts
    try:
        expected = _sign(f"{header_b64}.{claims_b64}".encode("ascii"))
        signature = _unb64(sig_b64)
        raw = json.loads(_unb64(claims_b64).decode("utf-8"))
    except ValueError as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc
    if not hmac.compare_digest(expected, signature):
        raise HTTPException(status_code=401, detail="Invalid token")
    if not isinstance(raw, dict) or not raw.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")
    claims = TokenClaims.model_validate(raw)
    if claims.exp and claims.exp < int(datetime.now(timezone.utc).timestamp()):
        raise HTTPException(status_code=401, detail="Token expired")
    return claims


def get_token_from_request(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    # The auth middleware may already have resolved the user.
    user = getattr(request.state, "user", None)
    if user:
        return user

    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    claims = decode_token(token)
    user = get_user_by_id(claims.sub)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user


def is_coach(user: Dict[str, Any]) -> bool:
    return user.get("role") in COACH_ROLES


def require_coach(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if not is_coach(user):
        raise HTTPException(status_code=403, detail="Forbidden")
    return user


def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Forbidden")
    return user
