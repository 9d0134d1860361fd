"""ASGI middleware."""

from humanika.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
