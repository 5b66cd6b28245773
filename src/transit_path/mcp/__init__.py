"""MCP (Model Context Protocol) server module for transit path search.

This module provides an MCP server implementation that exposes shortest
route search and station inspection through the Model Context Protocol.
"""

from .server import TransitMCPServer, main

__all__ = ["TransitMCPServer", "main"]
