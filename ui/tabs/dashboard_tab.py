import customtkinter as ctk
from services.budget_service import summarize_month, category_spending, expense_breakdown
from services.category_service import CategoryService
from services.settings_service import SettingsService
from services.transaction_service import TransactionService
from ui.components.spending_chart import SpendingChart
from utils.constants import STATUS_COLORS
from utils.currency import format_currency


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        settings_service: SettingsService,
        get_month,          # callable → (year, month)
        on_edit_category,   # callable(Category)
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._settings_svc = settings_service
        self._get_month = get_month
        self._on_edit_category = on_edit_category

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_summary_cards()
        self._build_advice_panel()
        self._build_bottom_section()
        self._load()

    def refresh(self):
        self._load()

    def show_advice(self, text: str):
        self._advice_label.configure(text=text)

    def _build_summary_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=0, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2), weight=1)

    def _build_advice_panel(self):
        panel = ctk.CTkFrame(self, fg_color=("#e0e7ff", "gray20"), corner_radius=10)
        panel.grid(row=1, column=0, sticky="ew", padx=22, pady=(0, 12))
        panel.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            panel, text="✨ Budget Buddy", anchor="w",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).grid(row=0, column=0, sticky="ew", padx=12, pady=(8, 0))
        self._advice_label = ctk.CTkLabel(
            panel, text="", anchor="w", justify="left", wraplength=900,
        )
        self._advice_label.grid(row=1, column=0, sticky="ew", padx=12, pady=(2, 10))

    def _build_bottom_section(self):
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 12))
        bottom.grid_columnconfigure(0, weight=1)
        bottom.grid_columnconfigure(1, weight=1)
        bottom.grid_rowconfigure(0, weight=1)

        self._chart = SpendingChart(bottom)
        self._chart.grid(row=0, column=0, sticky="nsew", padx=(0, 8))

        self._budget_frame = ctk.CTkScrollableFrame(
            bottom, label_text="Category Budgets", height=260
        )
        self._budget_frame.grid(row=0, column=1, sticky="nsew", padx=(8, 0))

    def _load(self):
        year, month = self._get_month()
        symbol = self._settings_svc.currency
        effective = self._tx_svc.get_for_month(year, month)
        categories = self._cat_svc.get_all()
        summary = summarize_month(effective, self._settings_svc.monthly_income)

        # Summary cards
        for w in self._card_frame.winfo_children():
            w.destroy()
        card_data = [
            ("Total Income", summary.total_income, "#10b981", None),
            ("Expenses", summary.total_expenses, "#ef4444", summary.spend_percentage),
            ("Remaining", summary.remaining, "#3b82f6" if summary.remaining >= 0 else "#f59e0b", None),
        ]
        for i, (label, value, color, pct) in enumerate(card_data):
            self._make_card(i, label, format_currency(value, symbol), color, pct)

        # Category progress
        for w in self._budget_frame.winfo_children():
            w.destroy()
        spending = category_spending(effective, categories)
        if not spending:
            ctk.CTkLabel(
                self._budget_frame, text="No categories yet. Add one with '+ Category'.",
                text_color="gray60",
            ).pack(pady=20)
        for item in spending:
            f = ctk.CTkFrame(self._budget_frame, fg_color="transparent")
            f.pack(fill="x", pady=4, padx=4)
            top_row = ctk.CTkFrame(f, fg_color="transparent")
            top_row.pack(fill="x")
            ctk.CTkButton(
                top_row, text=item.category.name, anchor="w", width=10,
                fg_color="transparent", hover_color=("gray80", "gray30"),
                text_color=item.category.color,
                command=lambda c=item.category: self._on_edit_category(c),
            ).pack(side="left")
            if item.has_limit:
                detail = f"{format_currency(item.spent, symbol)} / {format_currency(item.limit, symbol)}"
            else:
                detail = f"{format_currency(item.spent, symbol)} ({item.percent:.0f}% of spend)"
            ctk.CTkLabel(top_row, text=detail, anchor="e", text_color="gray60").pack(side="right")
            bar = ctk.CTkProgressBar(f, progress_color=STATUS_COLORS[item.status])
            bar.pack(fill="x", pady=2)
            bar.set(item.bar_fraction)

        self._chart.draw(expense_breakdown(effective, categories), symbol)

    def _make_card(self, col, label, text, color, percent=None):
        card = ctk.CTkFrame(self._card_frame, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12), text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        ctk.CTkLabel(
            card, text=text, font=ctk.CTkFont(size=20, weight="bold"), text_color=color,
        ).grid(row=1, column=0, pady=(4, 4 if percent is not None else 12), padx=16)
        if percent is not None:
            bar = ctk.CTkProgressBar(
                card, progress_color="#ef4444" if percent > 100 else "#3b82f6",
            )
            bar.grid(row=2, column=0, sticky="ew", padx=16)
            bar.set(min(percent, 100.0) / 100.0)
            ctk.CTkLabel(
                card, text=f"{percent:.0f}% of income spent",
                font=ctk.CTkFont(size=11), text_color="gray60",
            ).grid(row=3, column=0, pady=(2, 10))
