"""HUMANIKA approval workflow service."""
