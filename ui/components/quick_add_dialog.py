import logging

import customtkinter as ctk
from models.transaction import TransactionDraft
from services.advice_service import AdviceService
from services.category_service import CategoryService
from services.transaction_service import TransactionService
from utils.constants import PARSE_RETRY_MESSAGE

logger = logging.getLogger(__name__)


class QuickAddDialog(ctk.CTkToplevel):
    """Type a sentence like "Spent 40 on groceries" and save it as a transaction."""

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        advice_service: AdviceService,
        currency: str,
        view_month: tuple[int, int],
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._advice_svc = advice_service
        self._currency = currency
        self._view_year, self._view_month = view_month
        self.saved = False

        self.title("Quick Add")
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text="Describe the transaction:", anchor="w",
        ).grid(row=0, column=0, padx=16, pady=(16, 4), sticky="ew")

        self._text_var = ctk.StringVar()
        entry = ctk.CTkEntry(
            self, textvariable=self._text_var, width=360,
            placeholder_text="Paid 1200 rent, repeats monthly",
        )
        entry.grid(row=1, column=0, padx=16, pady=4, sticky="ew")
        entry.bind("<Return>", lambda _e: self._on_parse())

        self._status_var = ctk.StringVar()
        if not self._advice_svc.enabled:
            self._status_var.set("Set ANTHROPIC_API_KEY to use Quick Add.")
        ctk.CTkLabel(
            self, textvariable=self._status_var,
            text_color="#F44336", wraplength=360, anchor="w", justify="left",
        ).grid(row=2, column=0, padx=16, pady=(0, 4), sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=3, column=0, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._on_cancel,
        ).pack(side="left")
        self._add_btn = ctk.CTkButton(btn_frame, text="Add", width=110, command=self._on_parse)
        self._add_btn.pack(side="right")
        if not self._advice_svc.enabled:
            self._add_btn.configure(state="disabled")

        self.protocol("WM_DELETE_WINDOW", self._on_cancel)
        self.transient(master)
        self.grab_set()
        entry.focus_set()
        self._center()

    def _on_parse(self):
        text = self._text_var.get().strip()
        if not text or not self._advice_svc.enabled:
            return
        self._status_var.set("")
        self._add_btn.configure(state="disabled", text="Parsing…")
        self._advice_svc.request_parse(
            text, self._cat_svc.get_all(), self._currency, on_result=self._on_parsed,
        )

    def _on_parsed(self, draft: TransactionDraft | None):
        if not self.winfo_exists():
            return
        self._add_btn.configure(state="normal", text="Add")
        if draft is None:
            self._status_var.set(PARSE_RETRY_MESSAGE)
            return
        try:
            self._tx_svc.create_from_draft(draft, self._view_year, self._view_month)
        except ValueError as e:
            logger.info("Parsed draft rejected: %s", e)
            self._status_var.set(PARSE_RETRY_MESSAGE)
            return
        self.saved = True
        self.destroy()

    def _on_cancel(self):
        self._advice_svc.cancel("parse")
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
