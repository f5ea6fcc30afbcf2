"""UpdateSource protocol — how inbound Telegram updates reach the dispatcher."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class UpdateSource(Protocol):
    """Delivers parsed updates to the application's handlers.

    Exactly one source is active per process. The handlers never know which.
    """

    @property
    def name(self) -> str:
        """Mode name (``"polling"`` or ``"webhook"``)."""
        ...

    async def start(self) -> None:
        """Begin delivering updates. The application must already be started."""
        ...

    async def stop(self) -> None:
        """Stop accepting updates."""
        ...
