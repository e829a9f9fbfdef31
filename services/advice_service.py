"""
LLM collaborators: budget advice, category suggestion and free-text
transaction parsing, backed by the Claude API.

Every call degrades instead of raising: a missing key or an API error turns
into a placeholder message or None. AdviceService runs the calls on worker
threads and drops any response older than the last one applied.
"""
import json
import logging
import threading
from typing import Callable, Optional

import anthropic

from models.category import Category
from models.transaction import Transaction, TransactionDraft
from services.budget_service import category_spent, summarize_month
from utils.constants import (
    ADVICE_EMPTY_MESSAGE, ADVICE_ERROR_MESSAGE, ADVICE_MAX_TOKENS, ADVICE_NO_KEY_MESSAGE,
    DEFAULT_ADVICE_MODEL, DEFAULT_RECURRENCE, FALLBACK_CATEGORY_NAME,
    RECURRENCE_FREQUENCIES, TRANSACTION_TYPES,
)

logger = logging.getLogger(__name__)


def match_category(name: Optional[str], categories: list[Category]) -> Optional[Category]:
    """Case-insensitive exact match of a suggested name; None when nothing fits."""
    if not name:
        return None
    wanted = name.strip().strip('"').strip().lower()
    return next((c for c in categories if c.name.lower() == wanted), None)


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        text = "\n".join(lines[1:-1]) if len(lines) > 2 else ""
    return text.strip()


class AdviceClient:
    """
    Thin wrapper over the Anthropic messages API
    """

    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_ADVICE_MODEL, client=None):
        """
        Args:
            api_key: Anthropic API key; without one (and without a client) the
                collaborators are disabled and return placeholders
            model: Claude model name
            client: pre-built client object exposing messages.create()
        """
        self.model = model
        if client is not None:
            self.client = client
            self.enabled = True
        elif api_key:
            self.client = anthropic.Anthropic(api_key=api_key)
            self.enabled = True
        else:
            logger.warning("No ANTHROPIC_API_KEY found. AI features disabled.")
            self.client = None
            self.enabled = False

    def _complete(self, prompt: str, max_tokens: int = ADVICE_MAX_TOKENS, temperature: float = 0.7) -> str:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        if not message.content:
            return ""
        return (getattr(message.content[0], "text", "") or "").strip()

    def get_advice(
        self,
        monthly_income: float,
        transactions: list[Transaction],
        categories: list[Category],
        currency: str = "$",
    ) -> str:
        """A short tip about the month's effective transactions."""
        if not self.enabled:
            return ADVICE_NO_KEY_MESSAGE

        summary = summarize_month(transactions, monthly_income)
        breakdown = ", ".join(
            f"{c.name}: {currency}{category_spent(transactions, c.id):.2f}" for c in categories
        ) or "no categories yet"

        prompt = f"""You are a friendly, encouraging financial buddy inside a budgeting app called ZenBudget.

Here is the user's current month snapshot:
- Monthly income goal: {currency}{monthly_income:.2f}
- Total income this month: {currency}{summary.total_income:.2f}
- Total expenses so far: {currency}{summary.total_expenses:.2f}
- Remaining budget: {currency}{summary.remaining:.2f}
- Category breakdown: {breakdown}

Give a short, 2-3 sentence insight or tip.
If they are over budget, be gentle but firm. If they are doing well, congratulate them.
Keep the tone casual and accessible to anyone from age 10 to 80. Avoid financial jargon."""

        try:
            text = self._complete(prompt)
        except Exception as e:
            logger.warning("Advice request failed: %s", e)
            return ADVICE_ERROR_MESSAGE
        return text or ADVICE_EMPTY_MESSAGE

    def suggest_category(self, description: str, categories: list[Category]) -> Optional[str]:
        """Name of the best-fitting category for an expense description, or None."""
        if not self.enabled or not description or not categories:
            return None

        names = ", ".join(c.name for c in categories)
        prompt = f"""I have a list of budget categories: [{names}].
I spent money on: "{description}".
Which category name from the list best fits this expense?
Return ONLY the exact category name. If none fit perfectly, return "{FALLBACK_CATEGORY_NAME}"."""

        try:
            text = self._complete(prompt, max_tokens=30, temperature=0.0)
        except Exception as e:
            logger.warning("Category suggestion failed: %s", e)
            return None
        return text or None

    def parse_transaction(
        self, text: str, categories: list[Category], currency: str = "$"
    ) -> Optional[TransactionDraft]:
        """Turn a sentence like 'paid 40 for gas yesterday' into a draft, or None."""
        if not self.enabled or not text or not text.strip():
            return None

        names = ", ".join(c.name for c in categories) or "(none)"
        prompt = f"""Extract a single budget transaction from this text: "{text.strip()}"
Amounts are in {currency}. Existing expense categories: [{names}].

Respond with ONLY a JSON object (no markdown, no explanations):
{{
  "amount": 12.5,
  "description": "Short description",
  "type": "expense",
  "categoryName": "Existing or new category name, or null for income",
  "isRecurring": false,
  "recurrence": "none"
}}

Rules:
- type is "expense" or "income"
- recurrence is one of: none, daily, weekly, monthly, yearly
- Prefer an existing category name when one fits
- If the text is not a transaction, respond with null"""

        try:
            reply = self._complete(prompt, max_tokens=200, temperature=0.0)
            data = json.loads(_strip_code_fence(reply))
        except json.JSONDecodeError as e:
            logger.warning("Transaction parse reply not valid JSON: %s", e)
            return None
        except Exception as e:
            logger.warning("Transaction parse failed: %s", e)
            return None
        return self._to_draft(data, categories)

    def _to_draft(self, data, categories: list[Category]) -> Optional[TransactionDraft]:
        if not isinstance(data, dict):
            return None
        try:
            amount = float(data.get("amount"))
        except (TypeError, ValueError):
            return None
        description = str(data.get("description") or "").strip()
        if amount < 0 or not description:
            return None

        type_ = data.get("type") if data.get("type") in TRANSACTION_TYPES else "expense"
        is_recurring = bool(data.get("isRecurring", False))
        recurrence = data.get("recurrence")
        if not is_recurring:
            recurrence = "none"
        elif recurrence not in RECURRENCE_FREQUENCIES or recurrence == "none":
            recurrence = DEFAULT_RECURRENCE

        category_id = None
        new_category_name = None
        if type_ == "expense":
            name = data.get("categoryName")
            match = match_category(name, categories)
            if match is not None:
                category_id = match.id
            elif isinstance(name, str) and name.strip():
                new_category_name = name.strip()

        return TransactionDraft(
            amount=amount,
            description=description,
            type=type_,
            category_id=category_id,
            new_category_name=new_category_name,
            is_recurring=is_recurring,
            recurrence=recurrence,
        )


class AdviceService:
    """Runs collaborator calls in the background, newest request wins.

    Each request on a channel gets a sequence number. A result is handed to
    its callback only if no newer request on that channel has already been
    applied, so a slow early response can never overwrite a later one.
    Results are passed through `dispatch`, which the UI uses to hop back onto
    the Tk thread.
    """

    def __init__(
        self,
        client: AdviceClient,
        dispatch: Callable[[Callable[[], None]], None] | None = None,
        run_async: bool = True,
    ):
        self._client = client
        self._dispatch = dispatch or (lambda fn: fn())
        self._run_async = run_async
        self._lock = threading.Lock()
        self._issued: dict[str, int] = {}
        self._applied: dict[str, int] = {}

    @property
    def enabled(self) -> bool:
        return self._client.enabled

    def request_advice(
        self,
        monthly_income: float,
        transactions: list[Transaction],
        categories: list[Category],
        currency: str,
        on_result: Callable[[str], None],
    ) -> int:
        return self._submit(
            "advice",
            lambda: self._client.get_advice(monthly_income, transactions, categories, currency),
            on_result,
            fallback=ADVICE_ERROR_MESSAGE,
        )

    def request_category(
        self,
        description: str,
        categories: list[Category],
        on_result: Callable[[Optional[Category]], None],
    ) -> int:
        return self._submit(
            "category",
            lambda: match_category(self._client.suggest_category(description, categories), categories),
            on_result,
        )

    def request_parse(
        self,
        text: str,
        categories: list[Category],
        currency: str,
        on_result: Callable[[Optional[TransactionDraft]], None],
    ) -> int:
        return self._submit(
            "parse",
            lambda: self._client.parse_transaction(text, categories, currency),
            on_result,
        )

    def cancel(self, channel: str = "advice"):
        """Ignore whatever is still in flight on the channel."""
        with self._lock:
            self._applied[channel] = self._issued.get(channel, 0)

    def _submit(self, channel: str, call, on_result, fallback=None) -> int:
        with self._lock:
            seq = self._issued.get(channel, 0) + 1
            self._issued[channel] = seq

        def work():
            try:
                result = call()
            except Exception:
                logger.exception("%s request %d failed", channel, seq)
                result = fallback
            self._dispatch(lambda: self._deliver(channel, seq, result, on_result))

        if self._run_async:
            threading.Thread(target=work, daemon=True).start()
        else:
            work()
        return seq

    def _deliver(self, channel: str, seq: int, result, on_result):
        with self._lock:
            if seq <= self._applied.get(channel, 0):
                logger.debug("Dropping stale %s response %d", channel, seq)
                return
            self._applied[channel] = seq
        on_result(result)
