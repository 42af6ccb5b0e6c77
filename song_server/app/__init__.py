"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: configuration, logging and the connection pool live in
``core``, request/response models in ``schemas``, storage backends in
``services`` and HTTP routes in ``api``.
"""

from .main import app  # noqa: F401
