"""Shared utilities, enums, request context and telemetry helpers."""
