# app/auth/auth.py
import hmac

from fastapi import Header, HTTPException

from ..config import settings


def admin_key_ok(header_key: str | None, admin_key: str | None) -> bool:
    if not header_key or not admin_key:
        return False
    # Timing-safe compare
    return hmac.compare_digest(header_key.encode(), admin_key.encode())


def require_admin_key(x_admin_key: str | None = Header(None)) -> None:
    """Guards catalogue writes: x-admin-key must match ADMIN_KEY (unset ADMIN_KEY rejects all)."""
    if not admin_key_ok(x_admin_key, settings.ADMIN_KEY):
        raise HTTPException(status_code=401, detail="Unauthorized")
