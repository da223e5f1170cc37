"""Toolkit descriptors for Mercury tools."""

from .accounts import accounts_toolkit
from .recipients import recipients_toolkit
from .statements import statements_toolkit
from .transactions import transactions_toolkit

DEFAULT_TOOLKIT_FACTORIES = [
    accounts_toolkit,
    transactions_toolkit,
    statements_toolkit,
    recipients_toolkit,
]

__all__ = ["DEFAULT_TOOLKIT_FACTORIES"]
