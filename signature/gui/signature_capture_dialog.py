# signature/gui/signature_capture_dialog.py
from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import List, Optional

from ..logic.stroke_capture import StrokeCapture
from ..models.signature_enums import REFERENCE_CANVAS
from ..models.stroke import Line, Point


class SignatureCaptureDialog(tk.Toplevel):
    """
    Freehand signature pad. Pointer events are forwarded 1:1 to a
    StrokeCapture session in reference-canvas units; the dialog only paints.

    Usage:
        dlg = SignatureCaptureDialog(parent)
        parent.wait_window(dlg)
        lines = dlg.lines      # None if cancelled
    """
    CANVAS_W = 500
    CANVAS_H = 300

    def __init__(self, parent: tk.Misc, *, stroke_width: int = 4) -> None:
        super().__init__(parent)
        self.title("Add Signature")
        self.transient(parent)
        self.grab_set()
        self.resizable(False, False)

        self.lines: Optional[List[Line]] = None
        self._capture = StrokeCapture()
        self._sx = REFERENCE_CANVAS[0] / self.CANVAS_W
        self._sy = REFERENCE_CANVAS[1] / self.CANVAS_H
        self._pen = max(1, round(stroke_width / self._sx))
        self._line_id: Optional[int] = None
        self._coords: list[float] = []

        self.columnconfigure(0, weight=1)

        ttk.Label(self, text="Sign below").grid(row=0, column=0, sticky="w", padx=10, pady=(10, 4))

        # Canvas
        self.canvas = tk.Canvas(
            self, width=self.CANVAS_W, height=self.CANVAS_H, bg="white",
            highlightthickness=1, highlightbackground="#888"
        )
        self.canvas.grid(row=1, column=0, sticky="nsew", padx=10, pady=4)
        self.canvas.bind("<ButtonPress-1>", self._on_down)
        self.canvas.bind("<B1-Motion>", self._on_move)
        self.canvas.bind("<ButtonRelease-1>", self._on_up)

        # Footer
        btns = ttk.Frame(self)
        btns.grid(row=2, column=0, sticky="ew", padx=10, pady=(4, 10))
        ttk.Button(btns, text="Clear", command=self._clear).pack(side="left")
        ttk.Button(btns, text="Cancel", command=self._cancel).pack(side="right", padx=(6, 0))
        self._save_btn = ttk.Button(btns, text="Save", command=self._save, state="disabled")
        self._save_btn.pack(side="right")

        self.bind("<Escape>", lambda e: self._cancel())

    # Canvas handlers
    def _to_ref(self, e) -> Point:
        return Point(e.x * self._sx, e.y * self._sy)

    def _on_down(self, e):
        self._capture.begin_stroke(self._to_ref(e))
        self._coords = [e.x, e.y]
        # zero-length segment with round caps shows the dot of a tap
        self._line_id = self.canvas.create_line(
            e.x, e.y, e.x, e.y,
            fill="black", width=self._pen,
            capstyle="round", joinstyle="round",
        )

    def _on_move(self, e):
        if not self._capture.is_stroke_open:
            return
        self._capture.extend_stroke(self._to_ref(e))
        self._coords += [e.x, e.y]
        if self._line_id is not None:
            self.canvas.coords(self._line_id, *self._coords)

    def _on_up(self, e):
        self._capture.end_stroke()
        self._line_id = None
        self._coords = []
        self._refresh_buttons()

    # Actions
    def _refresh_buttons(self) -> None:
        self._save_btn.configure(state="disabled" if self._capture.is_empty else "normal")

    def _clear(self):
        self.canvas.delete("all")
        self._capture.clear_all()
        self._refresh_buttons()

    def _cancel(self):
        self.lines = None
        self.destroy()

    def _save(self):
        if self._capture.is_empty:
            return
        self.lines = self._capture.lines
        self.destroy()
