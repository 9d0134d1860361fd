"""Infrastructure layer: persistence, security and service implementations."""
