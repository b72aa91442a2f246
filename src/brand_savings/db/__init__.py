"""Supabase access for the record store."""

from .client import get_client

__all__ = ["get_client"]
