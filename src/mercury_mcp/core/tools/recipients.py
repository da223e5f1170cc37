"""Payment recipient tools."""

from __future__ import annotations

from typing import Literal

from pydantic import EmailStr, Field

from mercury_mcp.core.mercury import MercuryContext, PayloadBuilder, build_request, execute
from mercury_mcp.core.results import ToolResult
from mercury_mcp.core.tools.base import EmptyInput, ToolDefinition, ToolInput, Toolkit

PaymentMethod = Literal["ACH", "Check", "DomesticWire", "InternationalWire"]
ElectronicAccountType = Literal["businessChecking", "businessSavings", "personalChecking", "personalSavings"]

DEFAULT_COUNTRY = "US"
DEFAULT_ACCOUNT_TYPE = "businessChecking"


class AddPaymentRecipientInput(ToolInput):
    name: str = Field(description="The name of the recipient.")
    emails: list[EmailStr] = Field(description="An array of email addresses for the recipient.")
    default_payment_method: PaymentMethod = Field(
        description="The default payment method to use for this recipient."
    )
    nickname: str | None = Field(default=None, description="An optional nickname for the recipient.")

    ach_account_number: str | None = Field(
        default=None, description="The recipient's account number for ACH transfers."
    )
    ach_routing_number: str | None = Field(
        default=None, description="The recipient's routing number for ACH transfers."
    )
    ach_bank_name: str | None = Field(default=None, description="The recipient's bank name for ACH transfers.")
    ach_account_type: ElectronicAccountType | None = Field(
        default=None, description="The type of account for ACH transfers."
    )

    domestic_wire_account_number: str | None = Field(
        default=None, description="The recipient's account number for domestic wire transfers."
    )
    domestic_wire_routing_number: str | None = Field(
        default=None, description="The recipient's routing number for domestic wire transfers."
    )
    domestic_wire_bank_name: str | None = Field(
        default=None, description="The recipient's bank name for domestic wire transfers."
    )

    international_wire_iban: str | None = Field(
        default=None, description="The recipient's IBAN for international wire transfers."
    )
    international_wire_swift_code: str | None = Field(
        default=None, description="The recipient's SWIFT code for international wire transfers."
    )
    international_wire_bank_name: str | None = Field(
        default=None, description="The recipient's bank name for international wire transfers."
    )
    international_wire_bank_city_state: str | None = Field(
        default=None,
        description="The city and state of the recipient's bank for international wire transfers.",
    )
    international_wire_bank_country: str | None = Field(
        default=None,
        description=(
            "The country of the recipient's bank for international wire transfers "
            "(ISO 3166-1 alpha-2 code)."
        ),
    )

    address_line1: str | None = Field(default=None, description="The first line of the recipient's address.")
    address_line2: str | None = Field(default=None, description="The second line of the recipient's address.")
    city: str | None = Field(default=None, description="The city of the recipient's address.")
    region: str | None = Field(default=None, description="The state/region of the recipient's address.")
    postal_code: str | None = Field(default=None, description="The postal code of the recipient's address.")
    country: str | None = Field(
        default=None,
        description="The country of the recipient's address (ISO 3166-1 alpha-2 code).",
    )

    idempotency_key: str | None = Field(
        default=None,
        description=(
            "A unique identifier for this request to prevent duplicates. "
            "If not provided, a UUID will be generated."
        ),
    )


def _address(payload: AddPaymentRecipientInput) -> PayloadBuilder | None:
    # Mercury rejects an address without its first line.
    if not payload.address_line1:
        return None
    return (
        PayloadBuilder()
        .set("address1", payload.address_line1)
        .set("address2", payload.address_line2)
        .set("city", payload.city)
        .set("region", payload.region)
        .set("postalCode", payload.postal_code)
        .set("country", payload.country or DEFAULT_COUNTRY)
    )


def _routing_info(payload: AddPaymentRecipientInput) -> tuple[str, PayloadBuilder] | None:
    method = payload.default_payment_method
    if method == "ACH" and payload.ach_account_number and payload.ach_routing_number:
        routing = (
            PayloadBuilder()
            .set("accountNumber", payload.ach_account_number)
            .set("routingNumber", payload.ach_routing_number)
            .set("bankName", payload.ach_bank_name)
            .set("electronicAccountType", payload.ach_account_type or DEFAULT_ACCOUNT_TYPE)
            .nest("address", _address(payload))
        )
        return "electronicRoutingInfo", routing
    if method == "DomesticWire" and payload.domestic_wire_account_number and payload.domestic_wire_routing_number:
        routing = (
            PayloadBuilder()
            .set("accountNumber", payload.domestic_wire_account_number)
            .set("routingNumber", payload.domestic_wire_routing_number)
            .set("bankName", payload.domestic_wire_bank_name)
            .nest("address", _address(payload))
        )
        return "domesticWireRoutingInfo", routing
    if method == "InternationalWire" and payload.international_wire_iban and payload.international_wire_swift_code:
        bank_details = (
            PayloadBuilder()
            .set("bankName", payload.international_wire_bank_name)
            .set("cityState", payload.international_wire_bank_city_state)
            .set("country", payload.international_wire_bank_country)
        )
        routing = (
            PayloadBuilder()
            .set("iban", payload.international_wire_iban)
            .set("swiftCode", payload.international_wire_swift_code)
            .nest("bankDetails", bank_details)
            .nest("address", _address(payload))
        )
        return "internationalWireRoutingInfo", routing
    if method == "Check":
        return "checkInfo", PayloadBuilder().nest("address", _address(payload))
    return None


async def _get_payment_recipients(_payload: EmptyInput, context: MercuryContext) -> ToolResult:
    request = build_request(context, "GET", ("recipients",))
    return await execute(
        context,
        request,
        action="Error fetching payment recipients",
        permission_message="Permission error: Your API token doesn't have access to recipient information.",
    )


async def _add_payment_recipient(payload: AddPaymentRecipientInput, context: MercuryContext) -> ToolResult:
    body = (
        PayloadBuilder()
        .set("name", payload.name)
        .set("emails", [str(email) for email in payload.emails])
        .set("defaultPaymentMethod", payload.default_payment_method)
        .set("nickname", payload.nickname)
    )
    routing = _routing_info(payload)
    if routing is not None:
        key, builder = routing
        body.nest(key, builder)

    request = build_request(
        context,
        "POST",
        ("recipients",),
        body=body,
        idempotency_key=context.idempotency.provide(payload.idempotency_key),
    )
    return await execute(
        context,
        request,
        action="Error adding payment recipient",
        permission_message="Permission error: Your API token doesn't have permission to add recipients.",
    )


def recipients_toolkit() -> Toolkit[MercuryContext]:
    return Toolkit(
        name="mercury.recipients",
        version="1.0.0",
        description="Payment recipient listing and creation.",
        tools=(
            ToolDefinition(
                name="get_payment_recipients",
                description=(
                    "Retrieve information about all of your payment recipients in Mercury, including their "
                    "banking details, routing information, payment methods, and status."
                ),
                input_model=EmptyInput,
                handler=_get_payment_recipients,
            ),
            ToolDefinition(
                name="add_payment_recipient",
                description=(
                    "Add a new payment recipient to Mercury. You must provide the recipient's name, "
                    "email(s), and default payment method, along with the appropriate routing "
                    "information for the chosen payment method."
                ),
                input_model=AddPaymentRecipientInput,
                handler=_add_payment_recipient,
            ),
        ),
    )


__all__ = ["AddPaymentRecipientInput", "recipients_toolkit"]
