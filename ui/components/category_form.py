import customtkinter as ctk
from tkinter import colorchooser
from models.category import Category
from services.category_service import CategoryService
from ui.components.confirm_dialog import ConfirmDialog
from utils.constants import COLORS


class CategoryForm(ctk.CTkToplevel):
    """Add, edit or delete a category, including its monthly spending limit."""

    def __init__(
        self,
        master,
        category_service: CategoryService,
        category: Category | None = None,
        currency: str = "$",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._svc = category_service
        self._category = category
        self.saved = False

        self.title("Edit Category" if category else "New Category")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0

        # Name
        ctk.CTkLabel(self, text="Name:").grid(
            row=r, column=0, padx=(16, 8), pady=(16, 4), sticky="e"
        )
        self._name_var = ctk.StringVar(value=category.name if category else "")
        ctk.CTkEntry(self, textvariable=self._name_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="ew"
        )
        r += 1

        # Monthly limit
        ctk.CTkLabel(self, text=f"Monthly limit ({currency}):").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        limit = category.budget_limit if category and category.budget_limit else None
        self._limit_var = ctk.StringVar(value=f"{limit:.2f}" if limit else "")
        ctk.CTkEntry(
            self, textvariable=self._limit_var, width=220, placeholder_text="No limit",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Color
        ctk.CTkLabel(self, text="Color:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        color_row = ctk.CTkFrame(self, fg_color="transparent")
        color_row.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        self._color_var = ctk.StringVar(value=category.color if category else COLORS[0])
        for color in COLORS:
            ctk.CTkButton(
                color_row, text="", width=22, height=22, corner_radius=11,
                fg_color=color, hover_color=color,
                command=lambda c=color: self._set_color(c),
            ).pack(side="left", padx=1)
        ctk.CTkButton(
            color_row, text="…", width=28, height=22,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._pick_color,
        ).pack(side="left", padx=(6, 0))
        r += 1

        self._swatch = ctk.CTkLabel(
            self, text="Selected colour", height=24, corner_radius=4,
            fg_color=self._color_var.get(), text_color="white",
        )
        self._swatch.grid(row=r, column=1, padx=(0, 16), pady=(0, 4), sticky="w")
        r += 1

        # Error
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        # Buttons
        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        if category:
            ctk.CTkButton(
                btn_frame, text="Delete", width=80,
                fg_color="#F44336", hover_color="#D32F2F",
                command=self._on_delete,
            ).pack(side="left", padx=8)
        ctk.CTkButton(btn_frame, text="Save", width=90, command=self._on_save).pack(side="right")

        self.transient(master)
        self.grab_set()
        self._center()

    def _set_color(self, color: str):
        self._color_var.set(color)
        self._swatch.configure(fg_color=color)

    def _pick_color(self):
        result = colorchooser.askcolor(
            color=self._color_var.get(), parent=self, title="Pick Category Color"
        )
        if result and result[1]:
            self._set_color(result[1])

    def _on_save(self):
        raw_limit = self._limit_var.get().strip()
        try:
            limit = float(raw_limit) if raw_limit else None
        except ValueError:
            self._error_var.set("Invalid limit.")
            return
        name = self._name_var.get()
        color = self._color_var.get()
        try:
            if self._category:
                self._svc.update(self._category.id, name=name, color=color, budget_limit=limit)
            else:
                self._svc.create(name, color=color, budget_limit=limit)
            self.saved = True
            self.destroy()
        except ValueError as e:
            self._error_var.set(str(e))

    def _on_delete(self):
        dlg = ConfirmDialog(
            self, "Delete Category",
            f"Delete '{self._category.name}'? Its transactions stay and show as Uncategorized.",
            confirm_text="Delete",
        )
        if dlg.result:
            self._svc.delete(self._category.id)
            self.saved = True
            self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
