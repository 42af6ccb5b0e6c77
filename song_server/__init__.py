"""
Top‑level package for the Song Server.

This file makes ``song_server`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``song_server.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
