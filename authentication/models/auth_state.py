"""
auth_state.py

State, configuration and result types of the authentication gate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class GateState(str, Enum):
    UNINITIALIZED = "uninitialized"
    FIRST_LAUNCH = "first_launch"     # no PIN set yet
    LOCKED = "locked"
    AUTHENTICATED = "authenticated"


class AuthMethod(str, Enum):
    PIN = "pin"
    BIOMETRICS = "biometrics"


@dataclass
class AuthConfig:
    """
    Persisted authentication settings plus the volatile session flag.

    ``pin_code`` holds the stored credential (a bcrypt hash; legacy stores may
    still contain the cleartext PIN). Empty means "no PIN set".
    ``is_authenticated`` is never persisted.
    """
    pin_code: str = ""
    is_first_launch: bool = True
    use_pin: bool = False
    use_biometrics: bool = True
    is_authenticated: bool = False

    @property
    def has_pin(self) -> bool:
        return bool(self.pin_code)


@dataclass(frozen=True)
class AuthResult:
    success: bool
    message: str = ""
    state: Optional[GateState] = None
