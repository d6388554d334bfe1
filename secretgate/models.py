from dataclasses import dataclass
from typing import Optional
from enum import Enum

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials, please try again."
SECRET_PATH = "/secret"

class AuthOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

@dataclass(frozen=True)
class AuthResult:
    """Outcome of a single authenticate call, independent of HTTP."""
    outcome: AuthOutcome
    redirect_to: Optional[str] = None
    message: Optional[str] = None
    unlocked: bool = False  # True only for the call that flipped the flag

    @property
    def ok(self) -> bool:
        return self.outcome == AuthOutcome.SUCCESS

    @classmethod
    def success(cls, unlocked: bool = False) -> "AuthResult":
        return cls(AuthOutcome.SUCCESS, redirect_to=SECRET_PATH, unlocked=unlocked)

    @classmethod
    def rejected(cls) -> "AuthResult":
        return cls(AuthOutcome.INVALID_CREDENTIALS, message=INVALID_CREDENTIALS_MESSAGE)
