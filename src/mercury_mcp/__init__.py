"""MCP server exposing Mercury banking operations as tools."""

__version__ = "1.0.0"
