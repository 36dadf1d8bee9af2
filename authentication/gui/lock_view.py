"""
lock_view.py – Tkinter lock screen (GUI layer).

The view writes no log entries; every audit event is logged by
AuthenticationGate. The view reports the outcome via *on_unlocked*.
"""
from __future__ import annotations

from typing import Callable

import tkinter as tk
from tkinter import ttk, StringVar

from authentication.logic.auth_gate import AuthenticationGate
from authentication.models.auth_state import AuthMethod, AuthResult
from core.contracts.auth import BiometryType

_BIOMETRY_LABELS = {
    BiometryType.FINGERPRINT: "Unlock with Fingerprint",
    BiometryType.FACE: "Unlock with Face",
}


class LockView(tk.Frame):
    """PIN entry plus optional biometric unlock."""

    def __init__(self, parent, gate: AuthenticationGate, on_unlocked, *args,
                 dispatch: Callable[..., None], **kwargs):
        super().__init__(parent, *args, **kwargs)
        self._gate = gate
        self._on_unlocked = on_unlocked
        # dispatch(fn, *args) must run fn on the Tk thread
        self._dispatch = dispatch

        # --- form ------------------------------------------------------
        self._pin_var = StringVar()
        self._error_var = StringVar()

        box = ttk.Frame(self)
        box.place(relx=0.5, rely=0.4, anchor="center")

        ttk.Label(box, text="PaperRoost", font=("Arial", 22, "bold")).grid(row=0, column=0, pady=(0, 4))
        ttk.Label(box, text="Enter your PIN to continue").grid(row=1, column=0, pady=(0, 10))

        self._entry = ttk.Entry(box, show="●", width=12, justify="center", textvariable=self._pin_var)
        self._entry.grid(row=2, column=0, pady=4)
        self._entry.bind("<Return>", lambda e: self._attempt_pin())
        self._entry.focus_set()

        ttk.Label(box, textvariable=self._error_var, foreground="red").grid(row=3, column=0, pady=2)
        ttk.Button(box, text="Unlock", command=self._attempt_pin).grid(row=4, column=0, pady=4, sticky="ew")

        if AuthMethod.BIOMETRICS in gate.available_methods:
            label = _BIOMETRY_LABELS.get(gate.biometry_type, "Unlock with Biometrics")
            ttk.Button(box, text=label, command=self._attempt_biometrics).grid(
                row=5, column=0, pady=4, sticky="ew"
            )

    # ------------------------------------------------------------------ #
    # Internals                                                          #
    # ------------------------------------------------------------------ #
    def _attempt_pin(self) -> None:
        result = self._gate.authenticate_with_pin(self._pin_var.get())
        self._pin_var.set("")
        self._handle(result)

    def _attempt_biometrics(self) -> None:
        # verifier may answer from another thread
        self._gate.authenticate_with_biometrics(lambda r: self._dispatch(self._handle, r))

    def _handle(self, result: AuthResult) -> None:
        if result.success:
            self._error_var.set("")
            self._on_unlocked(result)
        else:
            self._error_var.set(result.message)
