"""Structured access to scripture and General Conference talk texts over MCP."""

__version__ = "1.1.0"
