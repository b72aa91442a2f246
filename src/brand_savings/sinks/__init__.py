"""
Submission sinks.

The two outbound interfaces the intake controller writes to, plus the
Supabase and httpx implementations.
"""

from .base import RecordStore, WebhookSink
from .record_store import SupabaseRecordStore
from .webhook import HttpWebhookSink

__all__ = [
    "RecordStore",
    "WebhookSink",
    "SupabaseRecordStore",
    "HttpWebhookSink",
]
