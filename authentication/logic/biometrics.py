"""
biometrics.py

Biometric verifier adapters. Desktop builds have no platform biometry, so
the default adapter reports NONE and fails every evaluation.
"""

from __future__ import annotations

from core.contracts.auth import BiometricCallback, BiometryType, IBiometricVerifier


class UnavailableBiometrics(IBiometricVerifier):

    def availability(self) -> BiometryType:
        return BiometryType.NONE

    def evaluate(self, reason: str, on_result: BiometricCallback) -> None:
        on_result(False, "Biometrics unavailable")
