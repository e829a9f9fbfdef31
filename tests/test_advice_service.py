from types import SimpleNamespace

from models.category import Category
from models.transaction import Transaction
from services.advice_service import AdviceClient, AdviceService, match_category
from utils.constants import (
    ADVICE_EMPTY_MESSAGE, ADVICE_ERROR_MESSAGE, ADVICE_NO_KEY_MESSAGE,
)


class _FakeMessages:
    def __init__(self, replies):
        self._replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=reply)])


def _client(*replies):
    fake = SimpleNamespace(messages=_FakeMessages(replies))
    return AdviceClient(model="test-model", client=fake), fake.messages


def _categories():
    return [Category("c1", "Groceries"), Category("c2", "Transportation")]


def test_without_key_everything_degrades():
    client = AdviceClient(api_key=None)

    assert not client.enabled
    assert client.get_advice(1000, [], []) == ADVICE_NO_KEY_MESSAGE
    assert client.suggest_category("bus", _categories()) is None
    assert client.parse_transaction("spent 5 on bus", _categories()) is None


def test_advice_text_and_prompt():
    client, messages = _client("  Nice work staying under budget!  ")
    txs = [Transaction("t", 40.0, "c1", "Milk", "2024-03-01", "expense")]

    text = client.get_advice(1000, txs, _categories(), "$")

    assert text == "Nice work staying under budget!"
    call = messages.calls[0]
    assert call["model"] == "test-model"
    prompt = call["messages"][0]["content"]
    assert "Groceries: $40.00" in prompt
    assert "Remaining budget: $960.00" in prompt


def test_advice_error_and_empty_reply():
    client, _ = _client(RuntimeError("boom"), "")

    assert client.get_advice(0, [], []) == ADVICE_ERROR_MESSAGE
    assert client.get_advice(0, [], []) == ADVICE_EMPTY_MESSAGE


def test_match_category():
    cats = _categories()

    assert match_category('"groceries"', cats).id == "c1"
    assert match_category("Miscellaneous", cats) is None
    assert match_category(None, cats) is None


def test_parse_transaction_with_code_fence_and_existing_category():
    reply = """```json
{"amount": 42.5, "description": "Weekly shop", "type": "expense",
 "categoryName": "groceries", "isRecurring": true, "recurrence": "weekly"}
```"""
    client, _ = _client(reply)

    draft = client.parse_transaction("spent 42.50 on the weekly shop", _categories())

    assert draft.amount == 42.5
    assert draft.category_id == "c1"
    assert draft.new_category_name is None
    assert draft.is_recurring
    assert draft.recurrence == "weekly"


def test_parse_transaction_new_category_and_income():
    client, _ = _client(
        '{"amount": 30, "description": "Vet", "type": "expense", "categoryName": "Pets"}',
        '{"amount": 500, "description": "Bonus", "type": "income", "categoryName": "Pets"}',
    )

    expense = client.parse_transaction("vet 30", _categories())
    income = client.parse_transaction("bonus 500", _categories())

    assert expense.new_category_name == "Pets"
    assert expense.recurrence == "none"
    assert income.type == "income"
    assert income.category_id is None
    assert income.new_category_name is None


def test_parse_transaction_rejects_garbage():
    client, _ = _client("I am not JSON", "null", '{"amount": "x", "description": "Y"}',
                        RuntimeError("down"))

    for _ in range(4):
        assert client.parse_transaction("hello", _categories()) is None


def test_service_delivers_results_through_dispatch():
    client, _ = _client("Keep it up")
    dispatched = []
    service = AdviceService(client, dispatch=dispatched.append, run_async=False)
    results = []

    seq = service.request_advice(1000, [], [], "$", on_result=results.append)

    assert seq == 1
    assert results == []
    dispatched.pop()()
    assert results == ["Keep it up"]


def test_stale_advice_is_dropped():
    client, _ = _client("old advice", "new advice")
    dispatched = []
    service = AdviceService(client, dispatch=dispatched.append, run_async=False)
    results = []

    service.request_advice(1000, [], [], "$", on_result=results.append)
    service.request_advice(1000, [], [], "$", on_result=results.append)
    # newer response lands first, older one afterwards
    dispatched[1]()
    dispatched[0]()

    assert results == ["new advice"]


def test_cancel_ignores_in_flight_result():
    client, _ = _client("late")
    dispatched = []
    service = AdviceService(client, dispatch=dispatched.append, run_async=False)
    results = []

    service.request_advice(1000, [], [], "$", on_result=results.append)
    service.cancel("advice")
    dispatched[0]()

    assert results == []


def test_channels_are_independent():
    client, _ = _client("Transportation", "some advice")
    service = AdviceService(client, run_async=False)
    categories, advice = [], []

    service.request_category("bus ticket", _categories(), on_result=categories.append)
    service.request_advice(1000, [], [], "$", on_result=advice.append)

    assert categories[0].id == "c2"
    assert advice == ["some advice"]
