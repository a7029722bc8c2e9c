# src/printlite/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Persistence (order storage)
- Formatting (human-readable output)
- API (inbound request handlers)
"""

__all__ = []
