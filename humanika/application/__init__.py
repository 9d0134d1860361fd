"""Application layer: DTOs, ports (interfaces) and workflow services."""
