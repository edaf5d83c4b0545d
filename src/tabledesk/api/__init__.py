"""API layer: the read/transform surface used by the CLI and any UI.

1. No persistence imports beyond the row store handed in by the caller
2. View computation stays pure: rows in, new lists out
3. Return Pydantic models or plain rows only
"""
