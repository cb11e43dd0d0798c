"""
Top-level package for the Glamora API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``glamora_api.app.main:app``.
"""

__all__ = []
