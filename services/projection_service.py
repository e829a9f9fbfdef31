"""Month projection: the list of transactions visible in a calendar month.

One-off transactions show in the month of their own date. Recurring masters
are projected onto the viewed month; a projected instance is a copy of its
master that keeps the master's id and carries the computed occurrence date.
"""
import logging
from dataclasses import replace
from datetime import datetime

from models.transaction import Transaction
from utils.constants import DEFAULT_RECURRENCE
from utils.date_helpers import parse_datetime, format_datetime, clamp_day_to_month, same_month, validate_month

logger = logging.getLogger(__name__)


def is_monthly(tx: Transaction) -> bool:
    """Recurring masters without an explicit frequency recur monthly."""
    return tx.is_recurring and (tx.recurrence or DEFAULT_RECURRENCE) == "monthly"


def occurs_in_month(tx: Transaction, year: int, month: int) -> bool:
    """True when the transaction is visible in (year, month)."""
    anchor = parse_datetime(tx.date)
    if anchor is None:
        return False
    if not is_monthly(tx):
        return same_month(anchor, year, month)
    return (anchor.year, anchor.month) <= (year, month)


def project_instance(master: Transaction, year: int, month: int) -> Transaction | None:
    """Instance of a recurring master for (year, month), or None if it has none.

    Monthly masters land on min(anchor day, days in month) with the anchor's
    hour and minute. Daily, weekly and yearly masters are not expanded: they
    show only in their own anchor month, unchanged.
    """
    anchor = parse_datetime(master.date)
    if anchor is None:
        logger.warning("Skipping transaction %s with unreadable date %r", master.id, master.date)
        return None
    if (anchor.year, anchor.month) > (year, month):
        return None  # not started yet

    if is_monthly(master):
        day = clamp_day_to_month(year, month, anchor.day)
        occurrence = datetime(year, month, day, anchor.hour, anchor.minute)
        return replace(master, date=format_datetime(occurrence))

    if same_month(anchor, year, month):
        return replace(master)
    return None


def project_month(transactions: list[Transaction], year: int, month: int) -> list[Transaction]:
    """Effective transactions for (year, month), most recent first.

    Never mutates its input; equal dates keep their input order.
    """
    validate_month(year, month)

    regular: list[Transaction] = []
    for tx in transactions:
        if tx.is_recurring:
            continue
        anchor = parse_datetime(tx.date)
        if anchor is None:
            logger.warning("Skipping transaction %s with unreadable date %r", tx.id, tx.date)
            continue
        if same_month(anchor, year, month):
            regular.append(replace(tx))

    projected: list[Transaction] = []
    for tx in transactions:
        if not tx.is_recurring:
            continue
        instance = project_instance(tx, year, month)
        if instance is not None:
            projected.append(instance)

    effective = regular + projected
    effective.sort(key=lambda t: parse_datetime(t.date), reverse=True)
    return effective
