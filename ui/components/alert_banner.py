import customtkinter as ctk


class AlertBanner(ctk.CTkFrame):
    """Coloured notice above the tabs; closes itself after `timeout_ms` if given."""

    def __init__(self, master, message: str, color: str = "#2196F3",
                 timeout_ms: int | None = 8000, **kwargs):
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, text_color="white",
            anchor="w", padx=10, pady=6, wraplength=900, justify="left",
        ).grid(row=0, column=0, sticky="ew")

        ctk.CTkButton(
            self, text="✕", width=28, height=24,
            fg_color="transparent", hover_color=color,
            text_color="white", command=self.destroy,
        ).grid(row=0, column=1, padx=(0, 4))

        if timeout_ms:
            self.after(timeout_ms, self._expire)

    def _expire(self):
        if self.winfo_exists():
            self.destroy()
