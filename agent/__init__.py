# =============================================================================
# agent/__init__.py
# =============================================================================
# The Google ADK analyst agent.  It answers operator questions by calling the
# metrics MCP tools and interpreting their text; all numbers come from
# tools/mcp_server.py, none are computed here.
# =============================================================================
