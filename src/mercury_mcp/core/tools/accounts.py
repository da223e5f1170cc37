"""Read-only account tools: deposit accounts, cards and treasury."""

from __future__ import annotations

from pydantic import Field

from mercury_mcp.core.mercury import MercuryContext, build_request, execute
from mercury_mcp.core.results import ToolResult
from mercury_mcp.core.tools.base import EmptyInput, ToolDefinition, ToolInput, Toolkit


class AccountIdInput(ToolInput):
    id: str = Field(description="Your 36-character account UUID.")


async def _get_bank_accounts(_payload: EmptyInput, context: MercuryContext) -> ToolResult:
    request = build_request(context, "GET", ("accounts",))
    return await execute(context, request, action="Error fetching Mercury accounts")


async def _get_bank_account_by_id(payload: AccountIdInput, context: MercuryContext) -> ToolResult:
    request = build_request(context, "GET", ("account", payload.id))
    return await execute(context, request, action="Error fetching bank account details")


async def _get_credit_cards(payload: AccountIdInput, context: MercuryContext) -> ToolResult:
    request = build_request(context, "GET", ("account", payload.id, "cards"))
    return await execute(context, request, action="Error fetching credit cards")


async def _get_treasury(_payload: EmptyInput, context: MercuryContext) -> ToolResult:
    request = build_request(context, "GET", ("treasury",))
    return await execute(context, request, action="Error fetching treasury information")


def accounts_toolkit() -> Toolkit[MercuryContext]:
    return Toolkit(
        name="mercury.accounts",
        version="1.0.0",
        description="Bank account, card and treasury lookups.",
        tools=(
            ToolDefinition(
                name="get_bank_accounts",
                description="Retrieve information about your bank accounts (not including treasury accounts).",
                input_model=EmptyInput,
                handler=_get_bank_accounts,
            ),
            ToolDefinition(
                name="get_bank_account_by_id",
                description="Retrieve information about a specific bank account.",
                input_model=AccountIdInput,
                handler=_get_bank_account_by_id,
            ),
            ToolDefinition(
                name="get_credit_cards",
                description=(
                    "Retrieve information about cards associated with a specific account. "
                    "Note that status and physical card status are two separate concepts. "
                    'Either one being set to something other than "active" could cause a '
                    "transaction to be declined."
                ),
                input_model=AccountIdInput,
                handler=_get_credit_cards,
            ),
            ToolDefinition(
                name="get_treasury",
                description="Retrieve treasury account information from Mercury.",
                input_model=EmptyInput,
                handler=_get_treasury,
            ),
        ),
    )


__all__ = ["accounts_toolkit", "AccountIdInput"]
