import customtkinter as ctk
from models.category import Category
from models.transaction import Transaction
from services.advice_service import AdviceService
from services.category_service import CategoryService
from services.transaction_service import TransactionService
from utils.constants import DEFAULT_RECURRENCE, RECURRENCE_FREQUENCIES

_NO_CATEGORY = "(none)"
_FREQUENCIES = [f for f in RECURRENCE_FREQUENCIES if f != "none"]


class TransactionForm(ctk.CTkToplevel):
    """Add or edit a master transaction.

    Editing keeps the master's date; new entries get the default date for
    the viewed month.
    """

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        advice_service: AdviceService,
        view_month: tuple[int, int],
        transaction: Transaction | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._advice_svc = advice_service
        self._view_year, self._view_month = view_month
        self._transaction = transaction
        self.saved = False

        tx = transaction
        self.title("Edit Transaction" if tx else "Add Transaction")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0

        # Type
        self._label("Type:", r)
        self._type_var = ctk.StringVar(value=tx.type if tx else "expense")
        type_frame = ctk.CTkFrame(self, fg_color="transparent")
        type_frame.grid(row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="w")
        for t in ("expense", "income"):
            ctk.CTkRadioButton(
                type_frame, text=t.title(),
                variable=self._type_var, value=t,
                command=self._on_type_change,
            ).pack(side="left", padx=4)
        r += 1

        # Description
        self._label("Description:", r)
        self._desc_var = ctk.StringVar(value=tx.description if tx else "")
        desc_entry = ctk.CTkEntry(self, textvariable=self._desc_var, width=220)
        desc_entry.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        desc_entry.bind("<FocusOut>", self._suggest_category)
        r += 1

        # Amount
        self._label("Amount:", r)
        self._amount_var = ctk.StringVar(value=f"{tx.amount:.2f}" if tx else "")
        ctk.CTkEntry(self, textvariable=self._amount_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        # Category
        self._label("Category:", r)
        self._cats: list[Category] = self._cat_svc.get_all()
        current = _NO_CATEGORY
        if tx and not tx.is_income:
            cat = self._cat_svc.get_by_id(tx.category_id)
            current = cat.name if cat else _NO_CATEGORY
        self._cat_var = ctk.StringVar(value=current)
        self._cat_combo = ctk.CTkComboBox(
            self, values=[_NO_CATEGORY] + [c.name for c in self._cats],
            variable=self._cat_var, width=220, state="readonly",
        )
        self._cat_combo.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Recurrence
        self._label("Recurring:", r)
        rec_frame = ctk.CTkFrame(self, fg_color="transparent")
        rec_frame.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        self._recurring_var = ctk.BooleanVar(value=tx.is_recurring if tx else False)
        ctk.CTkCheckBox(
            rec_frame, text="", width=24, variable=self._recurring_var,
            command=self._on_recurring_change,
        ).pack(side="left")
        freq = tx.recurrence if tx and tx.recurrence in _FREQUENCIES else DEFAULT_RECURRENCE
        self._freq_var = ctk.StringVar(value=freq)
        self._freq_combo = ctk.CTkComboBox(
            rec_frame, values=_FREQUENCIES, variable=self._freq_var,
            width=140, state="readonly",
        )
        self._freq_combo.pack(side="left", padx=(8, 0))
        r += 1

        ctk.CTkLabel(
            self, text="Only monthly repeats are shown in later months.",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, sticky="ew")
        r += 1

        self._build_footer(r)
        self._on_type_change()
        self._on_recurring_change()

        self.transient(master)
        self.grab_set()
        self._center()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=text).grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    def _build_footer(self, r):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame, text="Save", width=110, command=self._on_save,
        ).pack(side="right")

    def _on_type_change(self):
        is_income = self._type_var.get() == "income"
        self._cat_combo.configure(state="disabled" if is_income else "readonly")

    def _on_recurring_change(self):
        self._freq_combo.configure(state="readonly" if self._recurring_var.get() else "disabled")

    def _suggest_category(self, _event=None):
        if (
            self._type_var.get() != "expense"
            or self._cat_var.get() != _NO_CATEGORY
            or not self._desc_var.get().strip()
            or not self._advice_svc.enabled
        ):
            return
        self._advice_svc.request_category(
            self._desc_var.get().strip(), self._cats, on_result=self._on_suggestion,
        )

    def _on_suggestion(self, category: Category | None):
        if category is None or not self.winfo_exists():
            return
        if self._cat_var.get() == _NO_CATEGORY:
            self._cat_var.set(category.name)
            self._cat_combo.set(category.name)

    def _selected_category_id(self) -> str | None:
        name = self._cat_var.get()
        cat = next((c for c in self._cats if c.name == name), None)
        return cat.id if cat else None

    def _on_save(self):
        amount = self._amount_var.get().strip()
        fields = dict(
            amount=amount or None,
            description=self._desc_var.get(),
            type_=self._type_var.get(),
            category_id=self._selected_category_id(),
            is_recurring=self._recurring_var.get(),
            recurrence=self._freq_var.get() if self._recurring_var.get() else "none",
        )
        try:
            if self._transaction:
                self._tx_svc.update(self._transaction.id, **fields)
            else:
                self._tx_svc.create(
                    view_year=self._view_year, view_month=self._view_month, **fields
                )
            self.saved = True
            self.destroy()
        except ValueError as e:
            self._error_var.set(str(e))

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
