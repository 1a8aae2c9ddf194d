# =============================================================================
# tools/__init__.py
# =============================================================================
# The MCP transport layer.  tools/mcp_server.py registers one FastMCP tool
# per catalog entry and forwards every call to core.dispatcher; it holds no
# query or formatting logic of its own.
# =============================================================================
