"""
auth_gate.py

Business logic of the app lock: PIN creation/reset, PIN and biometric
unlock, logout on backgrounding. *All* audit events are logged **here** -
never in GUI classes.

State is derived, not stored:

    UNINITIALIZED  before initialize()
    AUTHENTICATED  session flag set
    FIRST_LAUNCH   no PIN stored
    LOCKED         PIN stored, session flag clear
"""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Callable, Optional

from authentication.logic.biometrics import UnavailableBiometrics
from authentication.logic.pin_repository import PinRepository
from authentication.models.auth_state import AuthConfig, AuthMethod, AuthResult, GateState
from core.common.session_events import GateEvent, GateListener, SessionEventHub, SessionEventType
from core.contracts.auth import BiometryType, IBiometricVerifier
from core.helpers.date_time_helper import utc_now
from core.logging.logic.logger import logger

AuthCallback = Callable[[AuthResult], None]


class AuthenticationGate:
    """Decides whether application content may be shown."""

    REASON = "Authenticate to access PaperRoost"

    # ------------------------------------------------------------------ #
    # Construction                                                       #
    # ------------------------------------------------------------------ #
    def __init__(self, *, pin_repository: PinRepository,
                 biometrics: Optional[IBiometricVerifier] = None,
                 events: Optional[SessionEventHub] = None) -> None:
        self._repo = pin_repository
        self._biometrics = biometrics or UnavailableBiometrics()
        self._events = events or SessionEventHub()
        self._lock = threading.RLock()
        self._cfg = AuthConfig()
        self._biometry = BiometryType.NONE
        self._initialized = False
        self._failed_attempts = 0

    def initialize(self) -> GateState:
        """Load persisted config and probe biometry (once)."""
        with self._lock:
            self._cfg = self._repo.load()
            self._cfg.is_authenticated = False
            self._biometry = self._biometrics.availability()
            self._initialized = True
        if self._biometry == BiometryType.NONE:
            logger.log("Auth", "NoBiometrics", message="PIN is the only unlock method")
        else:
            logger.log("Auth", "BiometricsDetected", message=self._biometry.value)
        return self.state

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> GateState:
        with self._lock:
            if not self._initialized:
                return GateState.UNINITIALIZED
            if self._cfg.is_authenticated:
                return GateState.AUTHENTICATED
            if not self._cfg.has_pin:
                return GateState.FIRST_LAUNCH
            return GateState.LOCKED

    @property
    def is_authenticated(self) -> bool:
        return self.state == GateState.AUTHENTICATED

    @property
    def config(self) -> AuthConfig:
        """Snapshot copy; mutate through the gate's operations."""
        with self._lock:
            return replace(self._cfg)

    @property
    def biometry_type(self) -> BiometryType:
        return self._biometry

    @property
    def available_methods(self) -> frozenset[AuthMethod]:
        methods = set()
        with self._lock:
            if self._cfg.has_pin:
                methods.add(AuthMethod.PIN)
            if self._cfg.use_biometrics and self._biometry != BiometryType.NONE:
                methods.add(AuthMethod.BIOMETRICS)
        return frozenset(methods)

    @property
    def failed_attempts(self) -> int:
        return self._failed_attempts

    # ------------------------------------------------------------------ #
    # Observers                                                          #
    # ------------------------------------------------------------------ #
    def subscribe(self, cb: GateListener) -> None:
        self._events.subscribe(cb)

    def unsubscribe(self, cb: GateListener) -> None:
        self._events.unsubscribe(cb)

    # ------------------------------------------------------------------ #
    # PIN lifecycle                                                      #
    # ------------------------------------------------------------------ #
    def create_pin(self, new_pin: str) -> AuthResult:
        """Store *new_pin* and enter the app right away."""
        self._require_init()
        if not new_pin:
            return AuthResult(False, "PIN must not be empty", self.state)

        hashed = self._repo.hash_pin(new_pin)

        def _apply(cfg: AuthConfig) -> None:
            cfg.pin_code = hashed
            cfg.is_first_launch = False
            cfg.use_pin = True
            cfg.is_authenticated = True

        state = self._transition("pin_created", "create_pin", _apply, persist=True)
        self._failed_attempts = 0
        logger.log("Auth", "PinCreated", message="PIN created, session unlocked")
        return AuthResult(True, "PIN created", state)

    def reset_pin(self) -> AuthResult:
        """Forget the PIN; the gate returns to FIRST_LAUNCH."""
        self._require_init()

        def _apply(cfg: AuthConfig) -> None:
            cfg.pin_code = ""
            cfg.is_first_launch = True
            cfg.use_pin = False
            cfg.is_authenticated = False

        state = self._transition("pin_reset", "reset_pin", _apply, persist=True)
        logger.log("Auth", "PinReset")
        return AuthResult(True, "PIN reset", state)

    # ------------------------------------------------------------------ #
    # Unlock                                                             #
    # ------------------------------------------------------------------ #
    def authenticate_with_pin(self, candidate: str) -> AuthResult:
        """
        Compare *candidate* with the stored PIN. On success the session flag
        is set before this returns.
        """
        self._require_init()
        with self._lock:
            stored = self._cfg.pin_code
        if not stored:
            return AuthResult(False, "No PIN set", self.state)

        ok, needs_rehash = self._repo.verify(candidate, stored)
        if not ok:
            self._failed_attempts += 1
            logger.log("Auth", "PinRejected", level="WARNING",
                       message=f"failed attempts: {self._failed_attempts}")
            return AuthResult(False, "Incorrect PIN. Please try again.", self.state)

        rehashed = self._repo.hash_pin(candidate) if needs_rehash else None

        def _apply(cfg: AuthConfig) -> None:
            if rehashed:
                cfg.pin_code = rehashed
            cfg.is_authenticated = True

        state = self._transition("unlocked", "pin", _apply, persist=bool(rehashed))
        self._failed_attempts = 0
        logger.log("Auth", "PinAccepted",
                   message="legacy PIN re-hashed" if rehashed else None)
        return AuthResult(True, "", state)

    def authenticate_with_biometrics(self, on_complete: Optional[AuthCallback] = None) -> None:
        """
        Ask the platform verifier. *on_complete* fires exactly once. Failure
        leaves the state unchanged and does not fall back to PIN entry.
        """
        self._require_init()
        if AuthMethod.BIOMETRICS not in self.available_methods:
            self._finish(on_complete, AuthResult(False, "Biometrics unavailable", self.state))
            return

        done = threading.Event()

        def _on_result(success: bool, error: Optional[str]) -> None:
            if done.is_set():
                return
            done.set()
            if success:
                def _apply(cfg: AuthConfig) -> None:
                    cfg.is_authenticated = True
                state = self._transition("unlocked", "biometrics", _apply)
                logger.log("Auth", "BiometricsAccepted")
                self._finish(on_complete, AuthResult(True, "", state))
            else:
                logger.log("Auth", "BiometricsRejected", level="WARNING", message=error)
                self._finish(on_complete, AuthResult(False, error or "Authentication failed", self.state))

        self._biometrics.evaluate(self.REASON, _on_result)

    def authenticate(self, on_complete: Optional[AuthCallback] = None) -> None:
        """
        Pick the unlock path: biometrics if enabled and available, otherwise
        defer to PIN entry, otherwise (no method configured) let the user in.
        """
        self._require_init()
        methods = self.available_methods
        if AuthMethod.BIOMETRICS in methods:
            self.authenticate_with_biometrics(on_complete)
            return
        with self._lock:
            use_pin = self._cfg.use_pin
        if use_pin:
            self._finish(on_complete, AuthResult(False, "PIN required", self.state))
            return

        def _apply(cfg: AuthConfig) -> None:
            cfg.is_authenticated = True
        state = self._transition("unlocked", "no_method", _apply)
        logger.log("Auth", "OpenAccess", message="no authentication method configured")
        self._finish(on_complete, AuthResult(True, "", state))

    # ------------------------------------------------------------------ #
    # Lock                                                               #
    # ------------------------------------------------------------------ #
    def logout(self, reason: str = "logout") -> None:
        """Clear the session flag; the PIN stays."""
        self._require_init()

        def _apply(cfg: AuthConfig) -> None:
            cfg.is_authenticated = False
        self._transition("locked", reason, _apply, persist=True)
        logger.log("Auth", "Logout", message=reason)

    def on_background(self) -> None:
        self.logout(reason="background")

    # ------------------------------------------------------------------ #
    # Internals                                                          #
    # ------------------------------------------------------------------ #
    def _require_init(self) -> None:
        if not self._initialized:
            raise RuntimeError("AuthenticationGate.initialize() has not been called")

    def _transition(self, event: SessionEventType, reason: str,
                    mutate: Callable[[AuthConfig], None], *, persist: bool = False) -> GateState:
        with self._lock:
            old = self.state
            mutate(self._cfg)
            snapshot = replace(self._cfg)
            new = self.state
        if persist and not self._repo.save(snapshot):
            logger.log("Auth", "PersistFailed", level="ERROR", message=reason)
        if old != new:
            self._events.emit(GateEvent(type=event, old_state=old.value, new_state=new.value,
                                        reason=reason, ts_utc=utc_now()))
        return new

    @staticmethod
    def _finish(cb: Optional[AuthCallback], result: AuthResult) -> None:
        if cb is not None:
            cb(result)
