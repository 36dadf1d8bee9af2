"""core/contracts/auth.py
=====================

Platform biometric verifier contract.

The gate only needs two things from the platform: which biometry is
available (probed once) and a one-shot evaluation that reports back through
a callback, possibly from another thread.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional


class BiometryType(str, Enum):
    NONE = "none"
    FINGERPRINT = "fingerprint"
    FACE = "face"


# (success, failure reason)
BiometricCallback = Callable[[bool, Optional[str]], None]


class IBiometricVerifier(ABC):

    @abstractmethod
    def availability(self) -> BiometryType:
        """Return the biometry the device offers (NONE if unavailable)."""

    @abstractmethod
    def evaluate(self, reason: str, on_result: BiometricCallback) -> None:
        """Prompt the user; call *on_result* exactly once."""
