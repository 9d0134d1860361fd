"""API version 1."""

from humanika.api.v1.router import api_router

__all__ = ["api_router"]
