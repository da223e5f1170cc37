from __future__ import annotations

import uuid

import pytest

from mercury_mcp.core.tool_registry import ToolInputError, build_default_registry
from mercury_mcp.core.tools.transactions import SEND_MONEY_PERMISSION_MESSAGE

BASE = "https://api.mercury.test/api/v1"


@pytest.mark.asyncio
async def test_get_transactions_without_filters(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {"transactions": []})
    registry = build_default_registry(make_context(recorder))

    await registry.invoke("get_transactions", {"account_id": "abc-123"})

    assert str(recorder.last.url) == f"{BASE}/account/abc-123/transactions"


@pytest.mark.asyncio
async def test_get_transactions_filters_in_declared_order(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {"transactions": []})
    registry = build_default_registry(make_context(recorder))

    await registry.invoke("get_transactions", {"status": "pending", "account_id": "abc-123", "limit": 10})

    assert str(recorder.last.url) == f"{BASE}/account/abc-123/transactions?limit=10&status=pending"


@pytest.mark.asyncio
async def test_get_transactions_rejects_unknown_status(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {})
    registry = build_default_registry(make_context(recorder))

    with pytest.raises(ToolInputError) as excinfo:
        await registry.invoke("get_transactions", {"account_id": "abc-123", "status": "bounced"})

    assert excinfo.value.fields == ["status"]
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_get_transaction_by_id_path(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {"id": "tx-9"})
    registry = build_default_registry(make_context(recorder))

    result = await registry.invoke("get_bank_transaction_by_id", {"account_id": "abc", "transaction_id": "tx-9"})

    assert result.data == {"id": "tx-9"}
    assert str(recorder.last.url) == f"{BASE}/account/abc/transaction/tx-9"


@pytest.mark.asyncio
async def test_get_bank_statements_query(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {"statements": []})
    registry = build_default_registry(make_context(recorder))

    await registry.invoke("get_bank_statements", {"account_id": "abc", "end": "2024-03-31", "start": "2024-01-01"})

    assert str(recorder.last.url) == f"{BASE}/account/abc/statements?start=2024-01-01&end=2024-03-31"


@pytest.mark.asyncio
async def test_send_money_generates_and_echoes_key(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {"id": "tx-1", "status": "pending"})
    registry = build_default_registry(make_context(recorder, key_factory=lambda: str(uuid.uuid4())))

    result = await registry.invoke("send_money", {"account_id": "abc", "recipient_id": "rcp-1", "amount": 25})

    request = recorder.last
    key = request.headers["idempotency-key"]
    assert uuid.UUID(key).version == 4
    assert result.is_error is False
    assert result.data["idempotency_key"] == key
    assert result.data["id"] == "tx-1"
    assert request.method == "POST"
    assert str(request.url) == f"{BASE}/account/abc/transactions"
    assert request.headers["content-type"] == "application/json"
    assert recorder.last_json() == {"recipientId": "rcp-1", "amount": 25}


@pytest.mark.asyncio
async def test_send_money_uses_caller_key_and_renames_fields(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {"id": "tx-2"})
    registry = build_default_registry(make_context(recorder))

    result = await registry.invoke(
        "send_money",
        {
            "account_id": "abc",
            "recipient_id": "rcp-1",
            "amount": 10.5,
            "note": "invoice 42",
            "external_memo": "Thanks!",
            "idempotency_key": "caller-key",
        },
    )

    assert recorder.last.headers["idempotency-key"] == "caller-key"
    assert result.data["idempotency_key"] == "caller-key"
    assert recorder.last_json() == {
        "recipientId": "rcp-1",
        "amount": 10.5,
        "note": "invoice 42",
        "externalMemo": "Thanks!",
    }


@pytest.mark.asyncio
async def test_send_money_conflict_names_key(make_context, make_recorder) -> None:
    registry = build_default_registry(make_context(make_recorder(409, {"errors": "duplicate"})))

    result = await registry.invoke(
        "send_money",
        {"account_id": "abc", "recipient_id": "rcp-1", "amount": 5, "idempotency_key": "K"},
    )

    assert result.is_error is True
    assert result.kind == "conflict"
    assert result.content == (
        "Error sending money: The idempotency key K is already in use. This request has already been processed."
    )


@pytest.mark.asyncio
async def test_send_money_forbidden_mentions_ip_whitelisting(make_context, make_recorder) -> None:
    registry = build_default_registry(make_context(make_recorder(403, {})))

    result = await registry.invoke("send_money", {"account_id": "abc", "recipient_id": "rcp-1", "amount": 5})

    assert result.content == f"Error sending money: {SEND_MONEY_PERMISSION_MESSAGE}"
    assert "whitelist" in result.content


@pytest.mark.parametrize("amount", [0, -3, "lots"])
@pytest.mark.asyncio
async def test_send_money_rejects_non_positive_amount(make_context, make_recorder, amount) -> None:
    recorder = make_recorder(200, {})
    registry = build_default_registry(make_context(recorder))

    with pytest.raises(ToolInputError):
        await registry.invoke("send_money", {"account_id": "abc", "recipient_id": "rcp-1", "amount": amount})

    assert recorder.requests == []


@pytest.mark.asyncio
async def test_request_send_money_body_and_scope_message(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {"requestId": "req-1"})
    registry = build_default_registry(make_context(recorder))

    result = await registry.invoke(
        "request_send_money",
        {"account_id": "abc", "recipient_id": "rcp-1", "amount": 99, "payment_method": "ach"},
    )

    assert str(recorder.last.url) == f"{BASE}/account/abc/request-send-money"
    assert recorder.last_json() == {"recipientId": "rcp-1", "amount": 99, "paymentMethod": "ach"}
    assert result.data == {"requestId": "req-1", "idempotency_key": "generated-key-1"}

    denied = build_default_registry(make_context(make_recorder(403, {})))
    failure = await denied.invoke("request_send_money", {"account_id": "abc", "recipient_id": "r", "amount": 1})
    assert "'Send Money with Approval' scope" in failure.content


@pytest.mark.asyncio
async def test_each_mutation_gets_its_own_key(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {})
    registry = build_default_registry(make_context(recorder))
    arguments = {"account_id": "abc", "recipient_id": "rcp-1", "amount": 1}

    first = await registry.invoke("send_money", arguments)
    second = await registry.invoke("send_money", arguments)

    keys = [request.headers["idempotency-key"] for request in recorder.requests]
    assert keys == ["generated-key-1", "generated-key-2"]
    assert first.data["idempotency_key"] == "generated-key-1"
    assert second.data["idempotency_key"] == "generated-key-2"


@pytest.mark.parametrize(
    ("tool", "arguments", "field"),
    [
        ("send_money", {"account_id": "abc", "recipient_id": "rcp-1", "amount": True}, "amount"),
        ("request_send_money", {"account_id": "abc", "recipient_id": "rcp-1", "amount": True}, "amount"),
        ("get_transactions", {"account_id": "abc", "limit": True}, "limit"),
        ("get_transactions", {"account_id": "abc", "offset": False}, "offset"),
    ],
)
@pytest.mark.asyncio
async def test_booleans_are_not_accepted_as_numbers(make_context, make_recorder, tool, arguments, field) -> None:
    recorder = make_recorder(200, {})
    registry = build_default_registry(make_context(recorder))

    with pytest.raises(ToolInputError) as excinfo:
        await registry.invoke(tool, arguments)

    assert excinfo.value.fields == [field]
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_numeric_strings_are_still_coerced(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {"transactions": []})
    registry = build_default_registry(make_context(recorder))

    await registry.invoke("get_transactions", {"account_id": "abc", "limit": "10"})

    assert str(recorder.last.url) == f"{BASE}/account/abc/transactions?limit=10"


@pytest.mark.parametrize("amount", ["inf", "-inf", "nan", float("inf")])
@pytest.mark.parametrize("tool", ["send_money", "request_send_money"])
@pytest.mark.asyncio
async def test_non_finite_amounts_are_rejected(make_context, make_recorder, tool, amount) -> None:
    recorder = make_recorder(200, {})
    registry = build_default_registry(make_context(recorder))

    with pytest.raises(ToolInputError) as excinfo:
        await registry.invoke(tool, {"account_id": "abc", "recipient_id": "rcp-1", "amount": amount})

    assert excinfo.value.fields == ["amount"]
    assert recorder.requests == []
