import customtkinter as ctk
from services.category_service import CategoryService
from services.settings_service import SettingsService
from utils.constants import APP_NAME, CURRENCIES


def _currency_label(c: dict) -> str:
    return f"{c['symbol']}  {c['code']} ({c['name']})"


class OnboardingDialog(ctk.CTkToplevel):
    """First-run wizard: pick a category template, then currency and income."""

    def __init__(self, master, category_service: CategoryService,
                 settings_service: SettingsService, **kwargs):
        super().__init__(master, **kwargs)
        self._cat_svc = category_service
        self._settings_svc = settings_service
        self.completed = False

        self.title(f"Welcome to {APP_NAME}")
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        self._template_var = ctk.StringVar(value=self._cat_svc.get_templates()[0]["id"])
        self._currency_var = ctk.StringVar(value=_currency_label(CURRENCIES[0]))
        self._income_var = ctk.StringVar()
        self._error_var = ctk.StringVar()

        self._body = ctk.CTkFrame(self, fg_color="transparent")
        self._body.grid(row=0, column=0, sticky="nsew", padx=20, pady=(20, 8))
        self._body.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=380, anchor="w",
        ).grid(row=1, column=0, padx=20, sticky="ew")

        self._footer = ctk.CTkFrame(self, fg_color="transparent")
        self._footer.grid(row=2, column=0, sticky="ew", padx=20, pady=(4, 20))

        self._show_templates()

        self.protocol("WM_DELETE_WINDOW", self.destroy)
        self.transient(master)
        self.grab_set()
        self._center()

    def _clear(self):
        for frame in (self._body, self._footer):
            for w in frame.winfo_children():
                w.destroy()
        self._error_var.set("")

    # ── Step 1: template ─────────────────────────────────────────────────────
    def _show_templates(self):
        self._clear()
        ctk.CTkLabel(
            self._body, text="Choose a starting point",
            font=ctk.CTkFont(size=18, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w", pady=(0, 8))

        for i, tpl in enumerate(self._cat_svc.get_templates(), start=1):
            names = ", ".join(c["name"] for c in tpl["categories"])
            card = ctk.CTkFrame(self._body, corner_radius=8)
            card.grid(row=i, column=0, sticky="ew", pady=3)
            card.grid_columnconfigure(0, weight=1)
            ctk.CTkRadioButton(
                card, text=tpl["name"], value=tpl["id"], variable=self._template_var,
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=0, padx=10, pady=(8, 0), sticky="w")
            ctk.CTkLabel(
                card, text=f"{tpl['description']}\n{names}",
                text_color="gray60", justify="left", anchor="w", wraplength=360,
            ).grid(row=1, column=0, padx=36, pady=(0, 8), sticky="w")

        ctk.CTkButton(self._footer, text="Next", width=100,
                      command=self._show_money).pack(side="right")

    # ── Step 2: currency & income ────────────────────────────────────────────
    def _show_money(self):
        self._clear()
        ctk.CTkLabel(
            self._body, text="Your monthly budget",
            font=ctk.CTkFont(size=18, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w", pady=(0, 8))

        ctk.CTkLabel(self._body, text="Currency:", anchor="w").grid(row=1, column=0, sticky="w")
        ctk.CTkComboBox(
            self._body, values=[_currency_label(c) for c in CURRENCIES],
            variable=self._currency_var, width=300, state="readonly",
        ).grid(row=2, column=0, sticky="w", pady=(0, 8))

        ctk.CTkLabel(self._body, text="Monthly income:", anchor="w").grid(row=3, column=0, sticky="w")
        ctk.CTkEntry(
            self._body, textvariable=self._income_var, width=300, placeholder_text="e.g. 3500",
        ).grid(row=4, column=0, sticky="w")

        ctk.CTkButton(
            self._footer, text="Back", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._show_templates,
        ).pack(side="left")
        ctk.CTkButton(self._footer, text="Get Started", width=120,
                      command=self._on_finish).pack(side="right")

    def _on_finish(self):
        label = self._currency_var.get()
        symbol = next(c["symbol"] for c in CURRENCIES if _currency_label(c) == label)
        try:
            self._settings_svc.complete_onboarding(self._income_var.get().strip() or 0, symbol)
            self._cat_svc.apply_template(self._template_var.get())
        except ValueError as e:
            self._error_var.set(str(e))
            return
        self.completed = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
