"""
pin_policy.py

Input rules of the PIN creation dialog. The gate itself stores whatever
non-empty PIN it is handed; callers validate first.
"""

from __future__ import annotations

from authentication.models.auth_state import AuthResult

PIN_LENGTH = 4


def validate_new_pin(pin: str, confirm: str, *, length: int = PIN_LENGTH) -> AuthResult:
    if len(pin) != length or not pin.isdigit():
        return AuthResult(False, f"PIN must be {length} digits")
    if pin != confirm:
        return AuthResult(False, "PIN codes don't match")
    return AuthResult(True)


def can_create_pin(pin: str, confirm: str, *, length: int = PIN_LENGTH) -> bool:
    """Enabled-state of the "Create" button."""
    return len(pin) == length and len(confirm) == length and pin == confirm
