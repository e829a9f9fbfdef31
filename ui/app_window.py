import logging

import customtkinter as ctk

from models.category import Category
from models.transaction import Transaction
from services.advice_service import AdviceClient, AdviceService
from services.category_service import CategoryService
from services.settings_service import SettingsService
from services.transaction_service import TransactionService
from storage.budget_store import BudgetStore
from storage.json_storage import JsonStateStorage
from ui.components.alert_banner import AlertBanner
from ui.components.category_form import CategoryForm
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.onboarding_dialog import OnboardingDialog
from ui.components.quick_add_dialog import QuickAddDialog
from ui.components.settings_dialog import SettingsDialog
from ui.components.transaction_form import TransactionForm
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.transactions_tab import TransactionsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT, ADVICE_LOADING_MESSAGE
from utils.date_helpers import current_month, friendly_month, prev_month, next_month

logger = logging.getLogger(__name__)

_ADVICE_DEBOUNCE_MS = 1000


class AppWindow(ctk.CTk):
    """Main window. Owns the viewed month and saves the store after every change."""

    def __init__(
        self,
        store: BudgetStore,
        storage: JsonStateStorage,
        tx_service: TransactionService,
        category_service: CategoryService,
        settings_service: SettingsService,
        advice_client: AdviceClient,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._store = store
        self._storage = storage
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._settings_svc = settings_service
        self._advice_svc = AdviceService(advice_client, dispatch=lambda fn: self.after(0, fn))
        self._advice_job = None

        self._year, self._month = current_month()

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_header()
        self._build_banner_area()
        self._build_tabs()
        self._update_month_label()
        self._schedule_advice()

        if not self._store.has_onboarded:
            self.after(200, self._run_onboarding)

    # ── Header ───────────────────────────────────────────────────────────────
    def _build_header(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=48)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(
            bar, text=APP_NAME, font=ctk.CTkFont(size=16, weight="bold"),
        ).pack(side="left", padx=(12, 16), pady=8)

        ctk.CTkButton(bar, text="◀", width=28, command=self._prev_month).pack(side="left")
        self._month_label = ctk.CTkLabel(
            bar, text="", width=140, anchor="center",
            font=ctk.CTkFont(size=14, weight="bold"),
        )
        self._month_label.pack(side="left", padx=6)
        ctk.CTkButton(bar, text="▶", width=28, command=self._next_month).pack(side="left")

        self._theme_btn = ctk.CTkButton(
            bar, text="", width=36,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._toggle_theme,
        )
        self._theme_btn.pack(side="right", padx=(4, 12))
        self._update_theme_button()

        ctk.CTkButton(
            bar, text="Settings", width=80,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._open_settings,
        ).pack(side="right", padx=4)
        ctk.CTkButton(
            bar, text="+ Category", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self.open_category_form(),
        ).pack(side="right", padx=4)
        ctk.CTkButton(
            bar, text="Quick Add", width=90,
            command=self._open_quick_add,
        ).pack(side="right", padx=4)
        ctk.CTkButton(
            bar, text="+ Add Transaction", width=130,
            command=lambda: self.open_transaction_form(),
        ).pack(side="right", padx=4)

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=1, column=0, sticky="ew", padx=8)

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        for tab_name in ("Dashboard", "Transactions"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            tx_service=self._tx_svc,
            category_service=self._cat_svc,
            settings_service=self._settings_svc,
            get_month=self.get_view_month,
            on_edit_category=self.open_category_form,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._transactions_tab = TransactionsTab(
            self._tabview.tab("Transactions"),
            tx_service=self._tx_svc,
            category_service=self._cat_svc,
            settings_service=self._settings_svc,
            get_month=self.get_view_month,
            on_edit=self.open_transaction_form,
            on_delete=self.delete_transaction,
        )
        self._transactions_tab.grid(row=0, column=0, sticky="nsew")

    # ── Month navigation ─────────────────────────────────────────────────────
    def get_view_month(self) -> tuple[int, int]:
        return self._year, self._month

    def _prev_month(self):
        self._year, self._month = prev_month(self._year, self._month)
        self._on_month_changed()

    def _next_month(self):
        self._year, self._month = next_month(self._year, self._month)
        self._on_month_changed()

    def _on_month_changed(self):
        self._update_month_label()
        self._refresh_tabs()
        self._schedule_advice()

    def _update_month_label(self):
        self._month_label.configure(text=friendly_month(self._year, self._month))

    # ── Change handling ──────────────────────────────────────────────────────
    def notify_changed(self):
        """Persist, redraw and re-ask for advice after any mutation."""
        self._persist()
        self._refresh_tabs()
        self._schedule_advice()

    def _persist(self):
        try:
            self._storage.save(self._store.to_state())
        except OSError as e:
            self.show_banner(f"Could not save your data: {e}", color="#F44336")

    def _refresh_tabs(self):
        self._dashboard_tab.refresh()
        self._transactions_tab.refresh()

    def _schedule_advice(self):
        if not self._store.has_onboarded:
            return
        if self._advice_job is not None:
            self.after_cancel(self._advice_job)
        self._dashboard_tab.show_advice(ADVICE_LOADING_MESSAGE)
        self._advice_job = self.after(_ADVICE_DEBOUNCE_MS, self._request_advice)

    def _request_advice(self):
        self._advice_job = None
        year, month = self.get_view_month()
        self._advice_svc.request_advice(
            self._store.monthly_income,
            self._tx_svc.get_for_month(year, month),
            self._cat_svc.get_all(),
            self._store.currency,
            on_result=self._on_advice,
        )

    def _on_advice(self, text: str):
        if self.winfo_exists():
            self._dashboard_tab.show_advice(text)

    # ── Transactions ─────────────────────────────────────────────────────────
    def open_transaction_form(self, transaction: Transaction | None = None):
        master = self._tx_svc.resolve_master(transaction) if transaction else None
        if transaction and master is None:
            self.show_banner("That transaction no longer exists.", color="#FF9800")
            self._refresh_tabs()
            return
        form = TransactionForm(
            self,
            tx_service=self._tx_svc,
            category_service=self._cat_svc,
            advice_service=self._advice_svc,
            view_month=self.get_view_month(),
            transaction=master,
        )
        self.wait_window(form)
        if form.saved:
            self.notify_changed()

    def delete_transaction(self, transaction: Transaction):
        message = f"Delete '{transaction.description}'?"
        if transaction.is_recurring:
            message += "\n\nThis is a recurring transaction; it will be removed from all months."
        dialog = ConfirmDialog(self, "Delete Transaction", message, confirm_text="Delete")
        if dialog.result and self._tx_svc.delete(transaction.id):
            self.notify_changed()

    def _open_quick_add(self):
        dialog = QuickAddDialog(
            self,
            tx_service=self._tx_svc,
            category_service=self._cat_svc,
            advice_service=self._advice_svc,
            currency=self._store.currency,
            view_month=self.get_view_month(),
        )
        self.wait_window(dialog)
        if dialog.saved:
            self.notify_changed()

    # ── Categories & settings ────────────────────────────────────────────────
    def open_category_form(self, category: Category | None = None):
        form = CategoryForm(
            self, self._cat_svc, category=category, currency=self._store.currency,
        )
        self.wait_window(form)
        if form.saved:
            self.notify_changed()

    def _open_settings(self):
        dialog = SettingsDialog(self, self._settings_svc, self._store)
        self.wait_window(dialog)
        if dialog.saved:
            self.notify_changed()

    def _toggle_theme(self):
        theme = self._settings_svc.toggle_theme()
        ctk.set_appearance_mode(theme)
        self._update_theme_button()
        self._persist()
        self._dashboard_tab.refresh()

    def _update_theme_button(self):
        self._theme_btn.configure(text="☀" if self._store.theme == "dark" else "☾")

    def _run_onboarding(self):
        dialog = OnboardingDialog(self, self._cat_svc, self._settings_svc)
        self.wait_window(dialog)
        if dialog.completed:
            self.notify_changed()
        else:
            self.destroy()

    # ── Banners ──────────────────────────────────────────────────────────────
    def show_banner(self, message: str, color: str = "#2196F3"):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        AlertBanner(self._banner_frame, message=message, color=color).pack(fill="x", pady=2)
