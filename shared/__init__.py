"""Transport-independent pieces of the Shippo MCP server."""
