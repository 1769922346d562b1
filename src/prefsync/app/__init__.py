"""Application layer: bootstrap and the context object handed to the editor."""

from .bootstrap import AppContext, create_app_context, open_backend  # noqa: F401

__all__ = ["AppContext", "create_app_context", "open_backend"]
