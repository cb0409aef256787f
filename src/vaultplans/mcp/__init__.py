"""Optional MCP server exposing plan lifecycle tools."""
