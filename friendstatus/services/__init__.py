"""Integrations with storage and with the other services."""
