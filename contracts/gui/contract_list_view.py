"""
contract_list_view.py

Tkinter list of all contracts with search, status/type filters, sorting and
per-status counts. Double-click opens the detail dialog.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import Frame, Label, ttk

from core.helpers.date_time_helper import format_date
from signature.logic.signature_service import SignatureService

from ..logic.contract_query import ALL, SortKey, count_by_status, filter_contracts, sort_contracts
from ..logic.contract_service import ContractService
from ..logic.contract_store import ContractStore
from ..models.contract_enums import ContractStatus, ContractType
from .contract_detail_dialog import ContractDetailDialog
from .contract_form_dialog import ContractFormDialog


class ContractListView(tk.Frame):
    COLUMNS = ("title", "type", "status", "participants", "start", "end")

    def __init__(self, parent, *, store: ContractStore, service: ContractService,
                 signatures: SignatureService, stroke_width: int = 4):
        super().__init__(parent)
        self._store = store
        self._service = service
        self._signatures = signatures
        self._stroke_width = stroke_width

        self._build_ui()
        self.refresh()

    def _build_ui(self):
        filter_frame = Frame(self)
        filter_frame.pack(fill="x", padx=5, pady=5)

        self.search_var = tk.StringVar()
        self.status_var = tk.StringVar(value=ALL)
        self.type_var = tk.StringVar(value=ALL)
        self.sort_var = tk.StringVar(value=SortKey.DATE.value)

        Label(filter_frame, text="Search:").pack(side="left")
        search = ttk.Entry(filter_frame, textvariable=self.search_var, width=24)
        search.pack(side="left", padx=5)

        Label(filter_frame, text="Status:").pack(side="left")
        ttk.Combobox(filter_frame, textvariable=self.status_var, state="readonly", width=11,
                     values=[ALL] + [s.value for s in ContractStatus]).pack(side="left", padx=5)

        Label(filter_frame, text="Type:").pack(side="left")
        ttk.Combobox(filter_frame, textvariable=self.type_var, state="readonly", width=13,
                     values=[ALL] + [t.value for t in ContractType]).pack(side="left", padx=5)

        Label(filter_frame, text="Sort by:").pack(side="left")
        ttk.Combobox(filter_frame, textvariable=self.sort_var, state="readonly", width=8,
                     values=[k.value for k in SortKey]).pack(side="left", padx=5)

        ttk.Button(filter_frame, text="New Contract", command=self._new_contract).pack(side="right", padx=5)

        for var in (self.search_var, self.status_var, self.type_var, self.sort_var):
            var.trace_add("write", lambda *_: self.refresh())

        self.tree = ttk.Treeview(self, columns=self.COLUMNS, show="headings", selectmode="browse")
        self.tree.heading("title", text="Title")
        self.tree.heading("type", text="Type")
        self.tree.heading("status", text="Status")
        self.tree.heading("participants", text="Participants")
        self.tree.heading("start", text="Start")
        self.tree.heading("end", text="End")
        self.tree.column("title", width=260)
        self.tree.column("participants", width=240)
        for col in ("type", "status", "start", "end"):
            self.tree.column(col, width=100, anchor="center")
        for status in ContractStatus:
            self.tree.tag_configure(status.value, foreground=status.color)
        self.tree.pack(fill="both", expand=True, padx=5, pady=5)
        self.tree.bind("<Double-1>", self._open_selected)

        self.counts_label = Label(self, anchor="w")
        self.counts_label.pack(fill="x", padx=5, pady=(0, 5))

    # ------------------------------------------------------------------ #
    # Data                                                               #
    # ------------------------------------------------------------------ #
    def refresh(self):
        everything = self._store.list()
        shown = filter_contracts(everything, text=self.search_var.get().strip(),
                                 status=self.status_var.get(), contract_type=self.type_var.get())
        shown = sort_contracts(shown, SortKey(self.sort_var.get()))

        for i in self.tree.get_children():
            self.tree.delete(i)
        for c in shown:
            self.tree.insert("", "end", iid=c.id, tags=(c.status.value,), values=(
                c.title, c.contract_type.value, c.status.value, c.participants,
                format_date(c.start_date), format_date(c.end_date),
            ))

        counts = count_by_status(everything)
        summary = "   ".join(f"{s.value}: {n}" for s, n in counts.items())
        self.counts_label.config(text=f"{len(shown)} of {len(everything)} shown   |   {summary}")

    # ------------------------------------------------------------------ #
    # Actions                                                            #
    # ------------------------------------------------------------------ #
    def _open_selected(self, _event=None):
        sel = self.tree.selection()
        if not sel:
            return
        contract = self._store.get(sel[0])
        if contract is None:
            return
        dlg = ContractDetailDialog(self, contract, service=self._service, signatures=self._signatures)
        self.wait_window(dlg)
        if dlg.changed:
            self.refresh()

    def _new_contract(self):
        dlg = ContractFormDialog(self, service=self._service, stroke_width=self._stroke_width)
        self.wait_window(dlg)
        if dlg.contract is not None:
            self.refresh()
