import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from services.advice_service import AdviceClient
from services.category_service import CategoryService
from services.settings_service import SettingsService
from services.transaction_service import TransactionService
from storage.budget_store import BudgetStore
from storage.json_storage import JsonStateStorage

from ui.app_window import AppWindow
from utils.app_config import get_advice_model, get_api_key, get_data_file, get_log_level, load_env
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main():
    # ── Bootstrap: environment, logging, data file location ──────────────────
    load_env()
    configure_logging(get_log_level())
    data_file = get_data_file()
    logger.info("Using data file %s", data_file)

    # ── State ────────────────────────────────────────────────────────────────
    storage = JsonStateStorage(data_file)
    store = BudgetStore.from_state(storage.load())

    # ── Services ─────────────────────────────────────────────────────────────
    category_svc = CategoryService(store)
    tx_svc = TransactionService(store, category_svc)
    settings_svc = SettingsService(store)
    advice_client = AdviceClient(api_key=get_api_key(), model=get_advice_model())

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(store.theme)
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        store=store,
        storage=storage,
        tx_service=tx_svc,
        category_service=category_svc,
        settings_service=settings_svc,
        advice_client=advice_client,
    )
    app.mainloop()


if __name__ == "__main__":
    main()
