"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  The transaction store and its persistence live in
``core``, business rules in ``services``, request and response
models in ``schemas`` and HTTP routes under ``api/<version>/``.
"""

from .main import app  # noqa: F401
