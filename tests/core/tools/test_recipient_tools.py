from __future__ import annotations

import pytest

from mercury_mcp.core.tool_registry import ToolInputError, build_default_registry

BASE = "https://api.mercury.test/api/v1"


async def _add(make_context, make_recorder, **arguments):
    recorder = make_recorder(200, {"id": "rcp-1"})
    registry = build_default_registry(make_context(recorder))
    result = await registry.invoke("add_payment_recipient", arguments)
    return recorder, result


@pytest.mark.asyncio
async def test_ach_recipient_body(make_context, make_recorder) -> None:
    recorder, result = await _add(
        make_context,
        make_recorder,
        name="Acme Supplies",
        emails=["billing@acme.com"],
        default_payment_method="ACH",
        ach_account_number="000123",
        ach_routing_number="021000021",
        address_line1="1 Main St",
        city="Springfield",
    )

    request = recorder.last
    assert request.method == "POST"
    assert str(request.url) == f"{BASE}/recipients"
    assert request.headers["idempotency-key"] == "generated-key-1"
    assert recorder.last_json() == {
        "name": "Acme Supplies",
        "emails": ["billing@acme.com"],
        "defaultPaymentMethod": "ACH",
        "electronicRoutingInfo": {
            "accountNumber": "000123",
            "routingNumber": "021000021",
            "electronicAccountType": "businessChecking",
            "address": {"address1": "1 Main St", "city": "Springfield", "country": "US"},
        },
    }
    assert result.data == {"id": "rcp-1", "idempotency_key": "generated-key-1"}


@pytest.mark.asyncio
async def test_ach_without_routing_number_omits_routing_info(make_context, make_recorder) -> None:
    recorder, _ = await _add(
        make_context,
        make_recorder,
        name="Acme",
        emails=["a@acme.com"],
        default_payment_method="ACH",
        ach_account_number="000123",
    )

    assert recorder.last_json() == {
        "name": "Acme",
        "emails": ["a@acme.com"],
        "defaultPaymentMethod": "ACH",
    }


@pytest.mark.asyncio
async def test_check_recipient_without_address_has_no_placeholders(make_context, make_recorder) -> None:
    recorder, _ = await _add(
        make_context,
        make_recorder,
        name="Landlord",
        emails=["rent@landlord.com"],
        default_payment_method="Check",
        city="Springfield",
        idempotency_key="rcp-key",
    )

    body = recorder.last_json()
    assert "checkInfo" not in body
    assert recorder.last.headers["idempotency-key"] == "rcp-key"


@pytest.mark.asyncio
async def test_check_recipient_with_address(make_context, make_recorder) -> None:
    recorder, _ = await _add(
        make_context,
        make_recorder,
        name="Landlord",
        emails=["rent@landlord.com"],
        default_payment_method="Check",
        address_line1="9 Elm Rd",
        postal_code="12345",
        country="CA",
    )

    assert recorder.last_json()["checkInfo"] == {
        "address": {"address1": "9 Elm Rd", "postalCode": "12345", "country": "CA"}
    }


@pytest.mark.asyncio
async def test_domestic_wire_recipient(make_context, make_recorder) -> None:
    recorder, _ = await _add(
        make_context,
        make_recorder,
        name="Vendor",
        emails=["ap@vendor.com"],
        default_payment_method="DomesticWire",
        nickname="vend",
        domestic_wire_account_number="555",
        domestic_wire_routing_number="026009593",
        domestic_wire_bank_name="Big Bank",
    )

    body = recorder.last_json()
    assert body["nickname"] == "vend"
    assert body["domesticWireRoutingInfo"] == {
        "accountNumber": "555",
        "routingNumber": "026009593",
        "bankName": "Big Bank",
    }


@pytest.mark.asyncio
async def test_international_wire_recipient(make_context, make_recorder) -> None:
    recorder, _ = await _add(
        make_context,
        make_recorder,
        name="Overseas GmbH",
        emails=["finance@overseas.com"],
        default_payment_method="InternationalWire",
        international_wire_iban="DE89370400440532013000",
        international_wire_swift_code="COBADEFFXXX",
        international_wire_bank_country="DE",
    )

    assert recorder.last_json()["internationalWireRoutingInfo"] == {
        "iban": "DE89370400440532013000",
        "swiftCode": "COBADEFFXXX",
        "bankDetails": {"country": "DE"},
    }


@pytest.mark.asyncio
async def test_invalid_email_is_rejected_before_any_request(make_context, make_recorder) -> None:
    recorder = make_recorder(200, {})
    registry = build_default_registry(make_context(recorder))

    with pytest.raises(ToolInputError) as excinfo:
        await registry.invoke(
            "add_payment_recipient",
            {"name": "Acme", "emails": ["not-an-email"], "default_payment_method": "ACH"},
        )

    assert excinfo.value.fields == ["emails.0"]
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_unknown_payment_method_is_rejected(make_context, make_recorder) -> None:
    registry = build_default_registry(make_context(make_recorder(200, {})))

    with pytest.raises(ToolInputError) as excinfo:
        await registry.invoke(
            "add_payment_recipient",
            {"name": "Acme", "emails": ["a@acme.com"], "default_payment_method": "Crypto"},
        )

    assert "default_payment_method" in excinfo.value.fields


@pytest.mark.asyncio
async def test_get_payment_recipients_forbidden(make_context, make_recorder) -> None:
    registry = build_default_registry(make_context(make_recorder(403, {})))

    result = await registry.invoke("get_payment_recipients", {})

    assert result.kind == "permission"
    assert result.content == (
        "Error fetching payment recipients: "
        "Permission error: Your API token doesn't have access to recipient information."
    )
