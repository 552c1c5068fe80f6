"""
Request-scoped dependencies: the store client, settings, the submission logger
and the admin bearer-token guard.

All of them read from `app.state`, which `create_app` populates. Tests swap
them with `app.dependency_overrides`.
"""

from __future__ import annotations

import secrets

from fastapi import Depends, Header, HTTPException, Request, status

from lunaris_api.config import Settings
from lunaris_api.db.postgres import PostgresStore
from lunaris_api.utils.logger import SubmissionLogger


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> PostgresStore:
    store = request.app.state.store
    if store is None:
        raise RuntimeError("Store is not initialized. It is created on startup.")
    return store


def get_submission_logger(request: Request) -> SubmissionLogger:
    return request.app.state.submission_logger


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise _unauthorized("Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise _unauthorized("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise _unauthorized("Authorization must be: Bearer <token>.")
    return token


def require_admin(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    expected = (settings.admin_api_token or "").strip()
    if not expected:
        # Without a configured token the admin endpoints stay closed.
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin access is not configured.",
        )

    token = _extract_bearer_token(authorization)
    if not secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin token.",
        )
