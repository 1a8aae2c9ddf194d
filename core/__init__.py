# =============================================================================
# core/__init__.py
# =============================================================================
# Query templates, the Prometheus client, result formatting, the tool
# catalog and the dispatcher.
#
# Nothing in this package imports FastMCP or Google ADK.  Every module can be
# imported and tested with a fake Prometheus client and no network.
# =============================================================================
