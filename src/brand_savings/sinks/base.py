"""
Sink Protocols.

Defines the outbound interfaces invoked by the intake controller.
Only the controller calls these; the record store is always written
before the webhook is notified.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RecordStore(Protocol):
    """
    Persistent store for completed submissions.

    write() must fail closed: any transport or validation problem is
    raised as RecordStoreError, never swallowed.
    """

    async def write(self, collection: str, record: dict[str, Any]) -> None:
        ...


@runtime_checkable
class WebhookSink(Protocol):
    """
    Downstream automation hook.

    notify() waits for the response status and raises WebhookError on
    anything other than 2xx. The response body is not inspected.
    """

    async def notify(self, payload: dict[str, Any]) -> None:
        ...
