"""Transaction tools.

Listing and lookup are read-only. ``send_money`` and ``request_send_money``
create ACH payments and therefore always carry an idempotency key, either the
one supplied by the caller or a freshly generated UUID that is echoed back in
the result.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from mercury_mcp.core.mercury import (
    MercuryContext,
    PayloadBuilder,
    build_request,
    execute,
    query_params,
)
from mercury_mcp.core.results import ToolResult
from mercury_mcp.core.tools.base import Count, Number, ToolDefinition, ToolInput, Toolkit

TransactionStatus = Literal["pending", "sent", "cancelled", "failed"]
SortOrder = Literal["asc", "desc"]

IDEMPOTENCY_KEY_DESCRIPTION = (
    "A unique identifier for this transaction request to prevent duplicates. "
    "If not provided, a UUID will be generated."
)
SEND_MONEY_PERMISSION_MESSAGE = (
    "Mercury requires a whitelisted IP for this tool. Please go to "
    "https://app.mercury.com/settings/tokens to whitelist your IP. "
    "Please add the IP to the whitelist and try again."
)
REQUEST_SEND_MONEY_PERMISSION_MESSAGE = (
    "Permission error: Your API token doesn't have the 'Send Money with Approval' scope."
)


class GetTransactionsInput(ToolInput):
    account_id: str = Field(description="The ID of the bank account to retrieve transactions for.")
    limit: Count | None = Field(default=None, description="Limit how many transactions to retrieve (default: 500)")
    offset: Count | None = Field(default=None, description="Number of most recent transactions to omit (default: 0)")
    status: TransactionStatus | None = Field(default=None, description="Filter transactions by status")
    start: str | None = Field(
        default=None,
        description="Earliest createdAt date to filter for (YYYY-MM-DD or ISO 8601)",
    )
    end: str | None = Field(
        default=None,
        description="Latest createdAt date to filter for (YYYY-MM-DD or ISO 8601)",
    )
    search: str | None = Field(default=None, description="Search term to look for in transaction descriptions")
    order: SortOrder | None = Field(
        default=None,
        description="Sort order for transactions based on createdAt date (default: desc)",
    )


class GetTransactionByIdInput(ToolInput):
    account_id: str = Field(description="The 36-character account UUID.")
    transaction_id: str = Field(description="The ID of the specific transaction to retrieve details for.")


class SendMoneyInput(ToolInput):
    account_id: str = Field(description="The 36-character account UUID to send money from.")
    recipient_id: str = Field(description="The recipient ID to send money to.")
    amount: Number = Field(gt=0, allow_inf_nan=False, description="The amount to send in USD (positive number).")
    note: str | None = Field(
        default=None,
        description="An optional internal note for the transaction (not visible to the recipient).",
    )
    external_memo: str | None = Field(
        default=None,
        description="An optional memo to be included with the transaction (visible to the recipient).",
    )
    idempotency_key: str | None = Field(default=None, description=IDEMPOTENCY_KEY_DESCRIPTION)


class RequestSendMoneyInput(ToolInput):
    account_id: str = Field(description="The 36-character account UUID to send money from.")
    recipient_id: str = Field(description="The recipient ID to send money to.")
    amount: Number = Field(gt=0, allow_inf_nan=False, description="The amount to send in USD (positive number).")
    memo: str | None = Field(
        default=None,
        description="An optional memo to be included with the transaction (visible to the recipient).",
    )
    payment_method: str | None = Field(default=None, description="The payment method to use. Default is ACH.")
    idempotency_key: str | None = Field(default=None, description=IDEMPOTENCY_KEY_DESCRIPTION)


async def _get_transactions(payload: GetTransactionsInput, context: MercuryContext) -> ToolResult:
    request = build_request(
        context,
        "GET",
        ("account", payload.account_id, "transactions"),
        query=query_params(payload, exclude={"account_id"}),
    )
    return await execute(context, request, action="Error fetching transactions")


async def _get_bank_transaction_by_id(payload: GetTransactionByIdInput, context: MercuryContext) -> ToolResult:
    request = build_request(
        context,
        "GET",
        ("account", payload.account_id, "transaction", payload.transaction_id),
    )
    return await execute(context, request, action="Error fetching transaction details")


async def _send_money(payload: SendMoneyInput, context: MercuryContext) -> ToolResult:
    body = (
        PayloadBuilder()
        .set("recipientId", payload.recipient_id)
        .set("amount", payload.amount)
        .set("note", payload.note)
        .set("externalMemo", payload.external_memo)
    )
    request = build_request(
        context,
        "POST",
        ("account", payload.account_id, "transactions"),
        body=body,
        idempotency_key=context.idempotency.provide(payload.idempotency_key),
    )
    return await execute(
        context,
        request,
        action="Error sending money",
        permission_message=SEND_MONEY_PERMISSION_MESSAGE,
    )


async def _request_send_money(payload: RequestSendMoneyInput, context: MercuryContext) -> ToolResult:
    body = (
        PayloadBuilder()
        .set("recipientId", payload.recipient_id)
        .set("amount", payload.amount)
        .set("memo", payload.memo)
        .set("paymentMethod", payload.payment_method)
    )
    request = build_request(
        context,
        "POST",
        ("account", payload.account_id, "request-send-money"),
        body=body,
        idempotency_key=context.idempotency.provide(payload.idempotency_key),
    )
    return await execute(
        context,
        request,
        action="Error requesting to send money",
        permission_message=REQUEST_SEND_MONEY_PERMISSION_MESSAGE,
    )


def transactions_toolkit() -> Toolkit[MercuryContext]:
    return Toolkit(
        name="mercury.transactions",
        version="1.0.0",
        description="Transaction history and ACH payments.",
        tools=(
            ToolDefinition(
                name="get_transactions",
                description="Retrieve incoming and outgoing money transactions for a specific bank account.",
                input_model=GetTransactionsInput,
                handler=_get_transactions,
            ),
            ToolDefinition(
                name="get_bank_transaction_by_id",
                description=(
                    "Retrieve detailed information about a specific transaction for a specific account, "
                    "including counterparty information, transaction status, and any attachments."
                ),
                input_model=GetTransactionByIdInput,
                handler=_get_bank_transaction_by_id,
            ),
            ToolDefinition(
                name="send_money",
                description=(
                    "Create a new transaction for ACH payments. Note: This tool requires additional "
                    "permissions and IP whitelisting with Mercury, so ask the user to clarify if they have "
                    "whitelisted their IP first. If they have not, use the request_send_money tool instead. "
                    "Only use for valid purposes like paying invoices or automating bill payments."
                ),
                input_model=SendMoneyInput,
                handler=_send_money,
            ),
            ToolDefinition(
                name="request_send_money",
                description=(
                    "Create an ACH payment that requires admin approval from the Mercury web interface. "
                    "Unlike the direct send_money tool, this endpoint does not require IP whitelisting "
                    "when using a Custom token, so ask the user to clarify if they have whitelisted their IP."
                ),
                input_model=RequestSendMoneyInput,
                handler=_request_send_money,
            ),
        ),
    )


__all__ = [
    "GetTransactionByIdInput",
    "GetTransactionsInput",
    "RequestSendMoneyInput",
    "SendMoneyInput",
    "transactions_toolkit",
]
