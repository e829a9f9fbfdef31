import customtkinter as ctk
from models.transaction import Transaction
from services.category_service import CategoryService
from services.filter_service import TransactionFilter
from services.settings_service import SettingsService
from services.transaction_service import TransactionService
from utils.currency import format_for_type
from utils.date_helpers import format_display_date


_MAX_RENDERED_ROWS = 100
_ALL_CATEGORIES = "All categories"


class TransactionsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        settings_service: SettingsService,
        get_month,   # callable → (year, month)
        on_edit,     # callable(Transaction)
        on_delete,   # callable(Transaction)
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._settings_svc = settings_service
        self._get_month = get_month
        self._on_edit = on_edit
        self._on_delete = on_delete

        self._type_var = ctk.StringVar(value="all")
        self._category_var = ctk.StringVar(value=_ALL_CATEGORIES)
        self._recurrence_var = ctk.StringVar(value="all")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_filter_bar()
        self._build_header()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkSegmentedButton(
            bar,
            values=["all", "expense", "income"],
            variable=self._type_var,
            command=lambda _: self._load(),
            width=220,
        ).grid(row=0, column=0, padx=8, pady=6)

        self._category_combo = ctk.CTkComboBox(
            bar, values=[_ALL_CATEGORIES],
            variable=self._category_var, width=180, state="readonly",
            command=lambda _: self._load(),
        )
        self._category_combo.grid(row=0, column=1, padx=8)

        ctk.CTkSegmentedButton(
            bar,
            values=["all", "recurring", "non-recurring"],
            variable=self._recurrence_var,
            command=lambda _: self._load(),
            width=260,
        ).grid(row=0, column=2, padx=8)

    def _current_filter(self) -> TransactionFilter:
        categories = self._cat_svc.get_all()
        names = [_ALL_CATEGORIES] + [c.name for c in categories]
        self._category_combo.configure(values=names)

        category_id = "all"
        chosen = self._category_var.get()
        if chosen != _ALL_CATEGORIES:
            match = next((c for c in categories if c.name == chosen), None)
            if match is None:
                self._category_var.set(_ALL_CATEGORIES)
            else:
                category_id = match.id
        return TransactionFilter(
            type=self._type_var.get(),
            category_id=category_id,
            recurrence=self._recurrence_var.get(),
        )

    # ── Column headers ───────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=1, column=0, sticky="ew", padx=8, pady=(4, 0))
        cols = [("Date", 100), ("Description", 220), ("Category", 140),
                ("Repeats", 80), ("Amount", 100), ("Actions", 100)]
        for i, (label, width) in enumerate(cols):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        year, month = self._get_month()
        rows = self._tx_svc.get_for_month(year, month, self._current_filter())

        if not rows:
            ctk.CTkLabel(
                self._scroll, text="No transactions for this period.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        for idx, tx in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx)

        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(rows)} transactions. Use the filters to narrow results.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, tx: Transaction):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        ctk.CTkLabel(row, text=format_display_date(tx.date), width=100, anchor="w").grid(
            row=0, column=0, padx=4, pady=4
        )
        ctk.CTkLabel(row, text=tx.description, width=220, anchor="w").grid(
            row=0, column=1, padx=4
        )
        ctk.CTkLabel(row, text=self._cat_svc.display_name(tx.category_id), width=140, anchor="w").grid(
            row=0, column=2, padx=4
        )
        repeats = (tx.recurrence or "monthly").title() if tx.is_recurring else "-"
        ctk.CTkLabel(row, text=repeats, width=80, anchor="w").grid(row=0, column=3, padx=4)

        ctk.CTkLabel(
            row, text=format_for_type(tx.amount, tx.type, self._settings_svc.currency),
            width=100, anchor="e",
            text_color="#10b981" if tx.is_income else "#ef4444",
        ).grid(row=0, column=4, padx=4)

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=5, padx=(4, 6))
        ctk.CTkButton(
            acts, text="Edit", width=44, height=24,
            command=lambda t=tx: self._on_edit(t),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            acts, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda t=tx: self._on_delete(t),
        ).pack(side="left")
