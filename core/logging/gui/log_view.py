"""
log_view.py

Tkinter-GUI zur Anzeige und Filterung der Audit-Logs.
"""

import tkinter as tk
from tkinter import Frame, Label, Button, ttk

from core.helpers.date_time_helper import utc_to_local_str
from core.logging.logic.logger import LEVELS, Logger, logger


class LogView(tk.Frame):
    def __init__(self, parent, log: Logger = logger, limit: int = 500):
        super().__init__(parent)
        self.log = log
        self.limit = limit

        self._build_ui()
        self._load_filter_options()
        self._load_logs()

    def _build_ui(self):
        filter_frame = Frame(self)
        filter_frame.pack(fill="x", padx=5, pady=5)

        self.filter_feature_var = tk.StringVar()
        self.filter_level_var = tk.StringVar()

        Label(filter_frame, text="Feature:").pack(side="left")
        self.filter_feature_cb = ttk.Combobox(filter_frame, textvariable=self.filter_feature_var)
        self.filter_feature_cb.pack(side="left", padx=5)

        Label(filter_frame, text="Level:").pack(side="left")
        self.filter_level_cb = ttk.Combobox(filter_frame, textvariable=self.filter_level_var, state="readonly")
        self.filter_level_cb.pack(side="left", padx=5)

        Button(filter_frame, text="Apply filter", command=self._load_logs).pack(side="left", padx=10)

        self.tree = ttk.Treeview(self, columns=("timestamp", "log_level", "feature", "event", "message"), show="headings")
        self.tree.heading("timestamp", text="Time")
        self.tree.heading("log_level", text="Level")
        self.tree.heading("feature", text="Feature")
        self.tree.heading("event", text="Event")
        self.tree.heading("message", text="Message")
        self.tree.column("message", width=380)
        self.tree.pack(fill="both", expand=True, padx=5, pady=5)

    def _load_filter_options(self):
        features = sorted({e.feature for e in self.log.fetch_logs(self.limit)})
        self.filter_feature_cb['values'] = [""] + features
        self.filter_level_cb['values'] = [""] + list(LEVELS)

    def _load_logs(self):
        logs = self.log.query_logs(
            feature=self.filter_feature_var.get() or None,
            level=self.filter_level_var.get() or None,
            limit=self.limit,
        )

        for i in self.tree.get_children():
            self.tree.delete(i)

        for entry in logs:
            ts = utc_to_local_str(entry.timestamp.isoformat())
            self.tree.insert("", "end", values=(ts, entry.log_level, entry.feature, entry.event, entry.message or ""))
