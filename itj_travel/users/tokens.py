"""Signed session tokens shared by the REST API and the Socket.IO server.

Access tokens are simplejwt access tokens carrying the membership claims the
realtime layer needs (``id``, ``phone``, ``role``, ``groupId``). The socket
server trusts those claims for the lifetime of a connection; a membership
change is only picked up after the client reconnects with a fresh token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Any

import jwt
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

if TYPE_CHECKING:  # import for type checking only
    from itj_travel.users.models import User

GROUP_ID_CLAIM = "groupId"
ROLE_CLAIM = "role"
PHONE_CLAIM = "phone"


class TokenVerificationError(Exception):
    """Raised when a credential is missing, malformed, expired or forged."""

    def __init__(self, message: str, *, expired: bool = False) -> None:
        super().__init__(message)
        self.expired = expired


@dataclass(frozen=True)
class IdentityClaim:
    subject_id: str
    group_id: str | None
    role: str
    phone: str = ""


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def issue_access_token(user: User) -> str:
    """Issue an access token reflecting the user's *current* group membership."""

    token = AccessToken.for_user(user)
    token[PHONE_CLAIM] = user.phone
    token[ROLE_CLAIM] = user.role
    token[GROUP_ID_CLAIM] = user.group_id
    return str(token)


def claim_from_token(token: AccessToken) -> IdentityClaim:
    subject_id = _optional_str(token.get("id"))
    if subject_id is None:
        msg = "Token has no subject"
        raise TokenVerificationError(msg)
    return IdentityClaim(
        subject_id=subject_id,
        group_id=_optional_str(token.get(GROUP_ID_CLAIM)),
        role=str(token.get(ROLE_CLAIM) or ""),
        phone=str(token.get(PHONE_CLAIM) or ""),
    )


def _is_expired(raw: str) -> bool:
    """True only for a genuinely signed token whose ``exp`` lies in the past."""

    try:
        payload = jwt.decode(
            raw,
            api_settings.VERIFYING_KEY or api_settings.SIGNING_KEY,
            algorithms=[api_settings.ALGORITHM],
            options={"verify_exp": False, "verify_aud": False},
        )
    except jwt.PyJWTError:
        return False
    exp = payload.get("exp")
    return isinstance(exp, (int, float)) and exp < timezone.now().timestamp()


def verify_access_token(raw: str | None) -> IdentityClaim:
    """Validate signature, expiry and type of ``raw`` and return its claims.

    No database access happens here; the token is the source of truth for the
    connection's identity.
    """

    if not raw:
        msg = "Token missing"
        raise TokenVerificationError(msg)
    try:
        token = AccessToken(raw)
    except TokenError as exc:
        raise TokenVerificationError(str(exc), expired=_is_expired(raw)) from exc
    return claim_from_token(token)
