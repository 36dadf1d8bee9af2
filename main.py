"""
main.py
=======

Root window of PaperRoost. Switches between the lock screen, the PIN setup
and the contract list depending on the authentication gate's state.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import Frame, Label, Button, X, LEFT, RIGHT, messagebox
from typing import Callable, Optional

from authentication.gui.lock_view import LockView
from authentication.gui.pin_creation_view import PinCreationView
from authentication.models.auth_state import AuthResult, GateState
from contracts.gui.contract_list_view import ContractListView
from core.common.app_context import AppContext
from core.common.call_queue import CallQueue
from core.common.session_events import GateEvent
from core.config.config_service import config_service
from core.logging.gui.log_view import LogView

UI_POLL_MS = 50

ONBOARDING_TEXT = (
    "Welcome to PaperRoost!\n\n"
    "• Keep all your contracts in one place\n"
    "• Sign contracts with your own handwriting\n"
    "• Protect your data with a PIN\n\n"
    "Sample contracts have been added so you can look around."
)


class MainWindow(tk.Tk):
    """Hauptfenster: lock screen or content, never both."""

    def __init__(self, ctx: AppContext) -> None:
        super().__init__()
        self.ctx = ctx
        self.gate = ctx.gate

        self.title(ctx.config.general.app_name)
        self.geometry("1100x700")
        self.active_view: Optional[tk.Frame] = None
        # callbacks from verifier threads; only the Tk thread drains it
        self._ui_calls = CallQueue()

        # ---------- Frames ---------------------------------------------
        self.nav_frame = Frame(self, height=40, bg="#dddddd")
        self.nav_frame.pack(side="top", fill=X)

        self.display_area = Frame(self, bg="white")
        self.display_area.pack(fill="both", expand=True)

        self.status_bar = Label(self, text="Welcome", anchor="w", bg="#eeeeee")
        self.status_bar.pack(side="bottom", fill=X)

        # ---------- Buttons --------------------------------------------
        self.nav_buttons = Frame(self.nav_frame, bg="#dddddd")
        self.nav_buttons.pack(side=LEFT)
        Button(self.nav_buttons, text="Contracts", command=lambda: self._show_for_state(self.gate.state),
               padx=12, pady=2).pack(side=LEFT, padx=5, pady=5)
        Button(self.nav_buttons, text="Logs", command=self.load_logs_view, padx=12, pady=2)\
            .pack(side=LEFT, padx=5, pady=5)
        Button(self.nav_buttons, text="Reset PIN", command=self._reset_pin, padx=12, pady=2)\
            .pack(side=LEFT, padx=5, pady=5)
        Button(self.nav_buttons, text="Reset all data", command=self._reset_data, padx=12, pady=2)\
            .pack(side=LEFT, padx=5, pady=5)
        Button(self.nav_buttons, text="Show Onboarding", command=self._show_onboarding_again, padx=12, pady=2)\
            .pack(side=LEFT, padx=5, pady=5)
        self.lock_button = Button(self.nav_frame, text="Lock", command=self._lock, padx=12, pady=2)
        self.lock_button.pack(side=RIGHT, padx=10, pady=5)

        # ---------- Gate wiring ----------------------------------------
        self.gate.subscribe(self._on_gate_event)
        self.bind("<Unmap>", self._on_unmap)
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self._drain_ui_calls()
        self._show_for_state(self.gate.state)
        if self.gate.state == GateState.LOCKED:
            self.gate.authenticate(lambda r: self.dispatch(self._on_auto_unlock, r))

    # ------------------------------------------------------------------ #
    # View-Handling                                                      #
    # ------------------------------------------------------------------ #
    def clear_display_area(self) -> None:
        for widget in self.display_area.winfo_children():
            widget.destroy()
        self.active_view = None

    def _show_for_state(self, state: GateState) -> None:
        self.clear_display_area()
        unlocked = state == GateState.AUTHENTICATED
        for btn in self.nav_buttons.winfo_children():
            btn.config(state="normal" if unlocked else "disabled")
        self.lock_button.config(state="normal" if unlocked else "disabled")

        if state == GateState.FIRST_LAUNCH:
            self.active_view = PinCreationView(self.display_area, self.gate, self._on_unlocked,
                                               pin_length=self.ctx.config.security.pin_length)
            self.set_status("Create a PIN to get started")
        elif state == GateState.AUTHENTICATED:
            self.active_view = ContractListView(
                self.display_area,
                store=self.ctx.contract_store,
                service=self.ctx.contracts,
                signatures=self.ctx.signatures,
                stroke_width=self.ctx.config.signature.stroke_width,
            )
            self.set_status(f"{len(self.ctx.contract_store)} contracts")
        else:
            self.active_view = LockView(self.display_area, self.gate, self._on_unlocked,
                                        dispatch=self.dispatch)
            self.set_status("Locked")
        self.active_view.pack(fill="both", expand=True)

    def load_logs_view(self) -> None:
        if not self.gate.is_authenticated:
            return
        self.clear_display_area()
        self.active_view = LogView(self.display_area)
        self.active_view.pack(fill="both", expand=True)
        self.set_status("Logs loaded")

    def set_status(self, message: str) -> None:
        self.status_bar.config(text=message)

    # ------------------------------------------------------------------ #
    # Gate callbacks                                                     #
    # ------------------------------------------------------------------ #
    def dispatch(self, fn: Callable, *args) -> None:
        """Run *fn* on the Tk thread; safe to call from any thread."""
        self._ui_calls.put(fn, *args)

    def _drain_ui_calls(self) -> None:
        self._ui_calls.drain()
        self._drain_job = self.after(UI_POLL_MS, self._drain_ui_calls)

    def _on_gate_event(self, ev: GateEvent) -> None:
        self.dispatch(self._show_for_state, GateState(ev.new_state))

    def _on_unlocked(self, _result: AuthResult) -> None:
        self._show_onboarding()

    def _show_onboarding(self) -> None:
        if not self.ctx.onboarding_complete:
            messagebox.showinfo("Welcome", ONBOARDING_TEXT, parent=self)
            self.ctx.complete_onboarding()

    def _on_auto_unlock(self, result: AuthResult) -> None:
        if result.success:
            self._on_unlocked(result)

    def _on_unmap(self, e) -> None:
        # fires for every child widget too; only the root going iconic counts
        if e.widget is self and self.gate.is_authenticated:
            self.gate.on_background()

    # ------------------------------------------------------------------ #
    # Menu actions                                                       #
    # ------------------------------------------------------------------ #
    def _lock(self) -> None:
        self.gate.logout()

    def _reset_pin(self) -> None:
        if messagebox.askyesno("Reset PIN", "Remove the current PIN? You will create a new one.",
                               parent=self):
            self.gate.reset_pin()

    def _show_onboarding_again(self) -> None:
        self.ctx.reset_onboarding()
        self._show_onboarding()

    def _reset_data(self) -> None:
        if not messagebox.askyesno("Reset all data",
                                   "Delete all contracts? This cannot be undone.", parent=self):
            return
        self.ctx.reset_all_data()
        if isinstance(self.active_view, ContractListView):
            self.active_view.refresh()
        self.set_status("All contracts removed")

    def _on_close(self) -> None:
        self.after_cancel(self._drain_job)
        self.gate.unsubscribe(self._on_gate_event)
        self.ctx.shutdown()
        self.destroy()


# --------------------------------------------------------------------------- #
# Stand-alone-Start                                                           #
# --------------------------------------------------------------------------- #
def main() -> None:
    ctx = AppContext(config_service)
    ctx.start()
    MainWindow(ctx).mainloop()


if __name__ == "__main__":
    main()
