"""
Nodit MCP server package.

This package exposes LLM-friendly tools that discover and call Nodit node,
data, webhook and Aptos indexer APIs. See DESIGN.md for full details.
"""

__all__ = ["config"]
