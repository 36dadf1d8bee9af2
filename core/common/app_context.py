# core/common/app_context.py
"""
Runtime context & service wiring for PaperRoost.

IMPORTANT ARCHITECTURE RULE:
- ConfigService is the SINGLE source of truth for paths and tunables.
- Services receive their collaborators through the constructor; nothing
  below reaches for a module-level singleton except the logger.
"""

from __future__ import annotations

from typing import Optional

from authentication.logic.auth_gate import AuthenticationGate
from authentication.logic.biometrics import UnavailableBiometrics
from authentication.logic.pin_repository import PinRepository
from contracts.logic.contract_service import ContractService
from contracts.logic.contract_store import ContractStore, StoreResult
from core.common.session_events import SessionEventHub
from core.config.config_service import ConfigService
from core.contracts.auth import IBiometricVerifier
from core.logging.logic.logger import logger
from core.security.blob_cipher import BlobCipher
from core.settings.logic.settings_manager import SettingsManager, StoreKeys
from signature.logic.signature_service import SignatureService
from signature.models.signature_config import RasterStyle


class AppContext:
    """Central runtime context (no GUI state)."""

    def __init__(self, config: ConfigService, *,
                 settings: Optional[SettingsManager] = None,
                 biometrics: Optional[IBiometricVerifier] = None) -> None:
        self.config = config

        # ---------- Storage ------------------------------------------------
        self.settings_manager = settings or SettingsManager(config.database.app_store)
        self.cipher = BlobCipher(self.settings_manager) if config.contracts.encrypt_store else None

        # ---------- Services ----------------------------------------------
        self.events = SessionEventHub()
        self.signatures = SignatureService(style=RasterStyle.from_config(config.signature))
        self.contract_store = ContractStore(self.settings_manager, cipher=self.cipher,
                                            sample_count=config.contracts.sample_count)
        self.contracts = ContractService(store=self.contract_store, signatures=self.signatures)
        self.pin_repository = PinRepository(self.settings_manager,
                                            rounds=config.security.bcrypt_rounds)
        self.gate = AuthenticationGate(pin_repository=self.pin_repository,
                                       biometrics=biometrics or UnavailableBiometrics(),
                                       events=self.events)

    # ------------------------------------------------------------------ #
    #  Lifecycle                                                         #
    # ------------------------------------------------------------------ #
    def start(self) -> None:
        """Load persisted state: gate config first, then the contract list."""
        state = self.gate.initialize()
        count = self.contract_store.load()
        logger.log("App", "Started", message=f"gate={state.value} contracts={count}")

    def shutdown(self) -> None:
        self.settings_manager.close()
        logger.log("App", "Stopped")

    # ------------------------------------------------------------------ #
    #  Onboarding flag                                                   #
    # ------------------------------------------------------------------ #
    @property
    def onboarding_complete(self) -> bool:
        return self.settings_manager.get_bool(StoreKeys.ONBOARDING_COMPLETE, False)

    def complete_onboarding(self) -> None:
        self.settings_manager.set(StoreKeys.ONBOARDING_COMPLETE, True)
        logger.log("App", "OnboardingComplete")

    def reset_onboarding(self) -> None:
        """Show the introduction again on the next unlock."""
        self.settings_manager.set(StoreKeys.ONBOARDING_COMPLETE, False)
        logger.log("App", "OnboardingReset")

    # ------------------------------------------------------------------ #
    #  Reset                                                             #
    # ------------------------------------------------------------------ #
    def reset_all_data(self) -> StoreResult:
        """Remove every contract and retire the store key; the PIN is left alone."""
        result = self.contracts.reset_all_data()
        if self.cipher is not None:
            self.cipher.rotate()
        return result
