"""Pydantic models shared across the store, sync and API layers."""
