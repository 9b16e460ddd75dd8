"""MCP tool registrations, one module per corpus area."""
