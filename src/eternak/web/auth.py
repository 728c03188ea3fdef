"""
Edit-access check for FastAPI routes.

Destructive or identity-changing routes depend on require_edit_access,
which compares the X-Access-Password header with the configured edit
password.
"""

import logging
import secrets

from fastapi import APIRouter, Header, HTTPException
from pydantic import BaseModel

from eternak.config import settings

logger = logging.getLogger(__name__)

WRONG_PASSWORD_MESSAGE = "Kata sandi salah. Silakan coba lagi."

router = APIRouter(prefix="/access", tags=["access"])


class AccessRequest(BaseModel):
    password: str


def check_password(password: str | None) -> bool:
    if not password:
        return False
    return secrets.compare_digest(password.encode(), settings.edit_password.encode())


async def require_edit_access(x_access_password: str | None = Header(None)) -> None:
    """
    Reject the request unless X-Access-Password matches.

    Raises 401 for a missing or wrong password.
    """
    if not check_password(x_access_password):
        logger.warning("Rejected edit with missing or wrong password")
        raise HTTPException(status_code=401, detail=WRONG_PASSWORD_MESSAGE)


@router.post("/verify")
async def verify_access(req: AccessRequest):
    """Check a password before the UI opens an edit dialog."""
    if not check_password(req.password):
        raise HTTPException(status_code=401, detail=WRONG_PASSWORD_MESSAGE)
    return {"success": True}
