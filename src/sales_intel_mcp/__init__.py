"""Sales intelligence MCP server: Gong, ZoomInfo, Clay and LinkedIn as tools."""

__version__ = "1.0.0"
