"""Outbox dispatcher worker."""
