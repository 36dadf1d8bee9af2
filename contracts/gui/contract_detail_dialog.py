# contracts/gui/contract_detail_dialog.py
from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

from PIL import ImageTk

from core.helpers.date_time_helper import format_date
from signature.logic.image_codec import PngImageCodec
from signature.logic.signature_service import SignatureService

from ..logic.contract_service import ContractService
from ..models.contract import Contract
from ..models.contract_enums import ContractStatus


class ContractDetailDialog(tk.Toplevel):
    """Read-only view of one contract with status change and delete."""

    def __init__(self, parent: tk.Misc, contract: Contract, *,
                 service: ContractService, signatures: SignatureService) -> None:
        super().__init__(parent)
        self.title(contract.title)
        self.transient(parent)
        self.grab_set()
        self.resizable(False, False)

        self.changed = False
        self._contract = contract
        self._service = service
        self._photo: Optional[ImageTk.PhotoImage] = None

        self.columnconfigure(1, weight=1)
        rows = (
            ("Type", contract.contract_type.value),
            ("Participants", contract.participants or "–"),
            ("Start", format_date(contract.start_date)),
            ("End", format_date(contract.end_date)),
            ("Created", format_date(contract.created_at)),
            ("Attachment", contract.attachment_name or "–"),
        )
        ttk.Label(self, text=contract.title, font=("Arial", 16, "bold"))\
            .grid(row=0, column=0, columnspan=2, sticky="w", padx=10, pady=(10, 6))
        for i, (label, value) in enumerate(rows, start=1):
            ttk.Label(self, text=f"{label}:").grid(row=i, column=0, sticky="e", padx=10, pady=2)
            ttk.Label(self, text=value).grid(row=i, column=1, sticky="w", padx=10, pady=2)
        r = len(rows) + 1

        ttk.Label(self, text="Notes:").grid(row=r, column=0, sticky="ne", padx=10, pady=2)
        ttk.Label(self, text=contract.notes or "–", wraplength=380, justify="left")\
            .grid(row=r, column=1, sticky="w", padx=10, pady=2)
        r += 1

        # Signature, re-rendered into the preview box
        ttk.Label(self, text="Signature:").grid(row=r, column=0, sticky="ne", padx=10, pady=2)
        png = signatures.rerender(contract.signature_data, (400, 240))
        if png is not None:
            self._photo = ImageTk.PhotoImage(PngImageCodec().decode(png))
            ttk.Label(self, image=self._photo, relief="groove").grid(row=r, column=1, sticky="w", padx=10, pady=4)
        else:
            ttk.Label(self, text="No signature").grid(row=r, column=1, sticky="w", padx=10, pady=4)
        r += 1

        # Status
        ttk.Label(self, text="Status:").grid(row=r, column=0, sticky="e", padx=10, pady=4)
        self.status_var = tk.StringVar(value=contract.status.value)
        cb = ttk.Combobox(self, textvariable=self.status_var, state="readonly",
                          values=[s.value for s in ContractStatus])
        cb.grid(row=r, column=1, sticky="w", padx=10, pady=4)
        cb.bind("<<ComboboxSelected>>", lambda e: self._change_status())
        r += 1

        btns = ttk.Frame(self)
        btns.grid(row=r, column=0, columnspan=2, sticky="ew", padx=10, pady=(6, 10))
        ttk.Button(btns, text="Delete", command=self._delete).pack(side="left")
        ttk.Button(btns, text="Close", command=self.destroy).pack(side="right")

    def _change_status(self) -> None:
        status = ContractStatus(self.status_var.get())
        if status == self._contract.status:
            return
        result = self._service.change_status(self._contract, status)
        if not result.success:
            messagebox.showerror("Error", result.message, parent=self)
            return
        self._contract = self._contract.with_status(status)
        self.changed = True

    def _delete(self) -> None:
        if not messagebox.askyesno("Delete contract?",
                                   f"Delete '{self._contract.title}'? This cannot be undone.",
                                   parent=self):
            return
        result = self._service.delete(self._contract)
        if not result.success:
            messagebox.showerror("Error", result.message, parent=self)
            return
        self.changed = True
        self.destroy()

