import customtkinter as ctk
from services.settings_service import SettingsService
from storage.budget_store import BudgetStore
from utils.app_config import CONFIG_DIR, get_data_file
from utils.constants import CURRENCIES


class SettingsDialog(ctk.CTkToplevel):
    """Edit income baseline, currency and profile."""

    def __init__(self, master, settings_service: SettingsService, store: BudgetStore, **kwargs):
        super().__init__(master, **kwargs)
        self._svc = settings_service
        self.saved = False

        self.title("Settings")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0
        self._income_var = ctk.StringVar(value=f"{store.monthly_income:.2f}")
        self._row("Monthly income:", ctk.CTkEntry(self, textvariable=self._income_var, width=220), r)
        r += 1

        self._currency_var = ctk.StringVar(value=store.currency)
        self._row("Currency:", ctk.CTkComboBox(
            self, values=[c["symbol"] for c in CURRENCIES],
            variable=self._currency_var, width=220, state="readonly",
        ), r)
        r += 1

        self._name_var = ctk.StringVar(value=store.user_name or "")
        self._row("Name:", ctk.CTkEntry(self, textvariable=self._name_var, width=220), r)
        r += 1

        self._email_var = ctk.StringVar(value=store.user_email or "")
        self._row("E-mail:", ctk.CTkEntry(self, textvariable=self._email_var, width=220), r)
        r += 1

        ctk.CTkLabel(
            self, text=f"Data file: {get_data_file()}\nConfig folder: {CONFIG_DIR}",
            text_color="gray60", font=ctk.CTkFont(size=11),
            justify="left", anchor="w", wraplength=340,
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(8, 0), sticky="ew")
        r += 1

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(btn_frame, text="Save", width=90, command=self._on_save).pack(side="right")

        self.transient(master)
        self.grab_set()
        self._center()

    def _row(self, label, widget, r):
        ctk.CTkLabel(self, text=label).grid(
            row=r, column=0, padx=(16, 8), pady=(16 if r == 0 else 4, 4), sticky="e"
        )
        widget.grid(row=r, column=1, padx=(0, 16), pady=(16 if r == 0 else 4, 4), sticky="ew")

    def _on_save(self):
        try:
            self._svc.update_profile(self._name_var.get(), self._email_var.get())
            self._svc.set_monthly_income(self._income_var.get().strip() or 0)
            self._svc.set_currency(self._currency_var.get())
        except ValueError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
