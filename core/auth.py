# core/auth.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from core.schemas import Role, UserAccount

# Password the sheet assumes for rows whose SENHA cell is empty
SHEET_DEFAULT_PASSWORD = "123456"


class AuthOutcome(str, Enum):
    OK = "ok"
    NOT_CONFIGURED = "not_configured"
    NOT_FOUND = "not_found"
    INACTIVE = "inactive"


AUTH_MESSAGES = {
    AuthOutcome.NOT_CONFIGURED: "Configuration error: the spreadsheet URL is not set.",
    AuthOutcome.NOT_FOUND: "Access denied: user not found or wrong password.",
    AuthOutcome.INACTIVE: "Access blocked: this user is inactive.",
}


@dataclass(frozen=True)
class AuthResult:
    outcome: AuthOutcome
    user: Optional[UserAccount] = None

    @property
    def ok(self) -> bool:
        return self.outcome is AuthOutcome.OK

    @property
    def message(self) -> str:
        return AUTH_MESSAGES.get(self.outcome, "")


def _stored_password(user: UserAccount) -> str:
    return (user.password or SHEET_DEFAULT_PASSWORD).strip()


def authenticate(users: Iterable[UserAccount], email: str, password: str, configured: bool = True) -> AuthResult:
    """
    Login check against the accounts read from the users sheet.

    Email: trimmed + case-insensitive. Password: trimmed, exact.
    An inactive account is refused even when the password is right.
    """
    if not configured:
        return AuthResult(AuthOutcome.NOT_CONFIGURED)

    key = (email or "").strip().lower()
    pwd = (password or "").strip()
    for u in users or []:
        if u.login_key == key and _stored_password(u) == pwd:
            if not u.is_active:
                return AuthResult(AuthOutcome.INACTIVE, u)
            return AuthResult(AuthOutcome.OK, u)
    return AuthResult(AuthOutcome.NOT_FOUND)


def is_admin(user: Optional[UserAccount]) -> bool:
    return user is not None and user.role is Role.ADMIN
