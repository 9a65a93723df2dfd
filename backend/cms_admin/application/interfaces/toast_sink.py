"""Abstract toast sink — where user-facing notifications are queued."""

from abc import ABC, abstractmethod

from cms_admin.domain.entities import Toast


class ToastSink(ABC):
    """Port for surfacing transient success/failure messages."""

    @abstractmethod
    def push(self, toast: Toast) -> None:
        """Queue a toast for the next rendered page."""
        ...

    @abstractmethod
    def drain(self) -> list[Toast]:
        """Return and clear all queued toasts."""
        ...
