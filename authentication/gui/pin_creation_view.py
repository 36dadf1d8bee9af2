"""
pin_creation_view.py – first-launch PIN setup (GUI layer).

Input rules come from pin_policy; the gate stores the PIN and logs.
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk, StringVar

from authentication.logic.auth_gate import AuthenticationGate
from authentication.logic.pin_policy import PIN_LENGTH, can_create_pin, validate_new_pin


class PinCreationView(tk.Frame):

    def __init__(self, parent, gate: AuthenticationGate, on_created, *args,
                 pin_length: int = PIN_LENGTH, **kwargs):
        super().__init__(parent, *args, **kwargs)
        self._gate = gate
        self._on_created = on_created
        self._length = pin_length

        self._pin_var = StringVar()
        self._confirm_var = StringVar()
        self._error_var = StringVar()

        box = ttk.Frame(self)
        box.place(relx=0.5, rely=0.4, anchor="center")

        ttk.Label(box, text="Create PIN", font=("Arial", 20, "bold")).grid(row=0, column=0, columnspan=2, pady=(0, 4))
        ttk.Label(box, text=f"Choose a {self._length}-digit PIN to protect your contracts")\
            .grid(row=1, column=0, columnspan=2, pady=(0, 10))

        ttk.Label(box, text="PIN:").grid(row=2, column=0, sticky="e", padx=5, pady=4)
        pin_entry = ttk.Entry(box, show="●", width=12, textvariable=self._pin_var)
        pin_entry.grid(row=2, column=1, padx=5, pady=4)
        ttk.Label(box, text="Confirm PIN:").grid(row=3, column=0, sticky="e", padx=5, pady=4)
        ttk.Entry(box, show="●", width=12, textvariable=self._confirm_var).grid(row=3, column=1, padx=5, pady=4)

        ttk.Label(box, textvariable=self._error_var, foreground="red").grid(row=4, column=0, columnspan=2)
        self._create_btn = ttk.Button(box, text="Create PIN", command=self._create, state="disabled")
        self._create_btn.grid(row=5, column=0, columnspan=2, pady=8, sticky="ew")

        self._pin_var.trace_add("write", self._on_input)
        self._confirm_var.trace_add("write", self._on_input)
        pin_entry.focus_set()

    # ------------------------------------------------------------------ #
    # Internals                                                          #
    # ------------------------------------------------------------------ #
    def _on_input(self, *_):
        # keep digits only, clipped to the PIN length
        for var in (self._pin_var, self._confirm_var):
            raw = var.get()
            clean = "".join(ch for ch in raw if ch.isdigit())[: self._length]
            if clean != raw:
                var.set(clean)
        enabled = can_create_pin(self._pin_var.get(), self._confirm_var.get(), length=self._length)
        self._create_btn.configure(state="normal" if enabled else "disabled")

    def _create(self) -> None:
        check = validate_new_pin(self._pin_var.get(), self._confirm_var.get(), length=self._length)
        if not check.success:
            self._error_var.set(check.message)
            return
        result = self._gate.create_pin(self._pin_var.get())
        if result.success:
            self._on_created(result)
        else:
            self._error_var.set(result.message)
