# contracts/gui/contract_form_dialog.py
from __future__ import annotations

import tkinter as tk
from datetime import timedelta
from pathlib import Path
from tkinter import ttk, filedialog, messagebox
from typing import List, Optional

from PIL import ImageTk

from core.helpers.date_time_helper import parse_local_date, utc_now
from signature.gui.signature_capture_dialog import SignatureCaptureDialog
from signature.logic.image_codec import PngImageCodec
from signature.models.signature_enums import RasterSize
from signature.models.stroke import Line

from ..logic.contract_service import ContractDraft, ContractService
from ..models.contract import Contract
from ..models.contract_enums import FORM_TYPES, ContractType


class ContractFormDialog(tk.Toplevel):
    """
    "New Contract" form. Validation and persistence are delegated to
    ContractService; the dialog only collects input.

    Usage:
        dlg = ContractFormDialog(parent, service=ctx.contracts)
        parent.wait_window(dlg)
        dlg.contract   # saved record or None
    """

    def __init__(self, parent: tk.Misc, *, service: ContractService, stroke_width: int = 4) -> None:
        super().__init__(parent)
        self.title("New Contract")
        self.transient(parent)
        self.grab_set()
        self.resizable(False, False)

        self.contract: Optional[Contract] = None
        self._service = service
        self._stroke_width = stroke_width
        self._lines: Optional[List[Line]] = None
        self._signature_png: Optional[bytes] = None
        self._attachment: Optional[bytes] = None
        self._attachment_name: Optional[str] = None
        self._preview: Optional[ImageTk.PhotoImage] = None

        today = utc_now().astimezone().date()
        self.title_var = tk.StringVar()
        self.type_var = tk.StringVar(value=ContractType.EMPLOYMENT.value)
        self.start_var = tk.StringVar(value=today.isoformat())
        self.end_var = tk.StringVar(value=(today + timedelta(days=365)).isoformat())
        self.participants_var = tk.StringVar()
        self.attachment_var = tk.StringVar(value="No attachment")

        self.columnconfigure(1, weight=1)
        r = 0
        ttk.Label(self, text="Title:").grid(row=r, column=0, sticky="e", padx=8, pady=4)
        ttk.Entry(self, textvariable=self.title_var, width=40).grid(row=r, column=1, sticky="ew", padx=8, pady=4)
        r += 1
        ttk.Label(self, text="Type:").grid(row=r, column=0, sticky="e", padx=8, pady=4)
        ttk.Combobox(self, textvariable=self.type_var, state="readonly",
                     values=[t.value for t in FORM_TYPES]).grid(row=r, column=1, sticky="w", padx=8, pady=4)
        r += 1
        ttk.Label(self, text="Start date (YYYY-MM-DD):").grid(row=r, column=0, sticky="e", padx=8, pady=4)
        ttk.Entry(self, textvariable=self.start_var, width=14).grid(row=r, column=1, sticky="w", padx=8, pady=4)
        r += 1
        ttk.Label(self, text="End date (YYYY-MM-DD):").grid(row=r, column=0, sticky="e", padx=8, pady=4)
        ttk.Entry(self, textvariable=self.end_var, width=14).grid(row=r, column=1, sticky="w", padx=8, pady=4)
        r += 1
        ttk.Label(self, text="Participants:").grid(row=r, column=0, sticky="e", padx=8, pady=4)
        ttk.Entry(self, textvariable=self.participants_var, width=40).grid(row=r, column=1, sticky="ew", padx=8, pady=4)
        r += 1
        ttk.Label(self, text="Notes:").grid(row=r, column=0, sticky="ne", padx=8, pady=4)
        self.notes_txt = tk.Text(self, width=40, height=4)
        self.notes_txt.grid(row=r, column=1, sticky="ew", padx=8, pady=4)
        r += 1

        # Signature
        ttk.Label(self, text="Signature:").grid(row=r, column=0, sticky="ne", padx=8, pady=4)
        sig = ttk.Frame(self)
        sig.grid(row=r, column=1, sticky="w", padx=8, pady=4)
        self.sig_label = ttk.Label(sig, text="No signature", relief="groove", width=30, anchor="center")
        self.sig_label.pack(side="left")
        ttk.Button(sig, text="Add Signature", command=self._capture_signature).pack(side="left", padx=(6, 0))
        r += 1

        # Attachment
        ttk.Label(self, text="Attachment:").grid(row=r, column=0, sticky="e", padx=8, pady=4)
        att = ttk.Frame(self)
        att.grid(row=r, column=1, sticky="w", padx=8, pady=4)
        ttk.Label(att, textvariable=self.attachment_var).pack(side="left")
        ttk.Button(att, text="Choose…", command=self._choose_attachment).pack(side="left", padx=(6, 0))
        r += 1

        btns = ttk.Frame(self)
        btns.grid(row=r, column=0, columnspan=2, sticky="e", padx=8, pady=(6, 10))
        ttk.Button(btns, text="Cancel", command=self.destroy).pack(side="right", padx=(6, 0))
        ttk.Button(btns, text="Save", command=self._save).pack(side="right")

        self.bind("<Escape>", lambda e: self.destroy())

    # ------------------------------------------------------------------ #
    # Actions                                                            #
    # ------------------------------------------------------------------ #
    def _capture_signature(self) -> None:
        dlg = SignatureCaptureDialog(self, stroke_width=self._stroke_width)
        self.wait_window(dlg)
        if not dlg.lines:
            return
        png = self._service.render_signature(dlg.lines)
        if png is None:
            messagebox.showerror("Error", "Signature unavailable", parent=self)
            return
        self._lines = dlg.lines
        self._signature_png = png
        self._show_signature(png)

    def _show_signature(self, png: bytes) -> None:
        img = PngImageCodec().decode(png)
        img.thumbnail(RasterSize.THUMBNAIL.value)
        self._preview = ImageTk.PhotoImage(img)
        self.sig_label.configure(image=self._preview, text="")

    def _choose_attachment(self) -> None:
        p = filedialog.askopenfilename(
            parent=self,
            title="Choose attachment",
            filetypes=[("Images", "*.png *.jpg *.jpeg *.gif"), ("All files", "*.*")],
        )
        if not p:
            return
        try:
            self._attachment = Path(p).read_bytes()
        except OSError as exc:
            messagebox.showerror("Error", f"Cannot read file:\n{exc}", parent=self)
            return
        self._attachment_name = Path(p).name
        self.attachment_var.set(self._attachment_name)

    def _save(self) -> None:
        try:
            start = parse_local_date(self.start_var.get())
            end = parse_local_date(self.end_var.get())
        except ValueError:
            messagebox.showerror("Error", "Please enter dates as YYYY-MM-DD", parent=self)
            return

        draft = ContractDraft(
            title=self.title_var.get(),
            contract_type=ContractType.parse(self.type_var.get()),
            start_date=start,
            end_date=end,
            participants=self.participants_var.get().strip(),
            notes=self.notes_txt.get("1.0", "end-1c").strip(),
            signature_data=self._signature_png,
            attachment_data=self._attachment,
            attachment_name=self._attachment_name,
        )
        result = self._service.save_draft(draft, lines=self._lines)
        if not result.success:
            messagebox.showerror("Error", result.message, parent=self)
            return
        self.contract = result.contract
        messagebox.showinfo("Saved", result.message, parent=self)
        self.destroy()
