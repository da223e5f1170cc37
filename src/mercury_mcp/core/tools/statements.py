"""Account statement tools."""

from __future__ import annotations

from pydantic import Field

from mercury_mcp.core.mercury import MercuryContext, build_request, execute, query_params
from mercury_mcp.core.results import ToolResult
from mercury_mcp.core.tools.base import ToolDefinition, ToolInput, Toolkit


class GetBankStatementsInput(ToolInput):
    account_id: str = Field(description="Your 36-character account UUID.")
    start: str | None = Field(
        default=None,
        description=(
            "Filter the statements so that their startDate is equal to or later than this date. "
            "Format: YYYY-MM-DD."
        ),
    )
    end: str | None = Field(
        default=None,
        description=(
            "Filter the statements so that their endDate is less than or equal to this date. "
            "Format: YYYY-MM-DD."
        ),
    )


async def _get_bank_statements(payload: GetBankStatementsInput, context: MercuryContext) -> ToolResult:
    request = build_request(
        context,
        "GET",
        ("account", payload.account_id, "statements"),
        query=query_params(payload, exclude={"account_id"}),
    )
    return await execute(context, request, action="Error fetching bank statements")


def statements_toolkit() -> Toolkit[MercuryContext]:
    return Toolkit(
        name="mercury.statements",
        version="1.0.0",
        description="Statement listings for depository accounts.",
        tools=(
            ToolDefinition(
                name="get_bank_statements",
                description=(
                    "Retrieve statement information for a depository account in a given time period "
                    "(Note: For now, treasury and credit accounts are not supported on this endpoint)."
                ),
                input_model=GetBankStatementsInput,
                handler=_get_bank_statements,
            ),
        ),
    )


__all__ = ["statements_toolkit", "GetBankStatementsInput"]
