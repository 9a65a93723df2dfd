"""Session-backed toast sink — toasts survive the post/redirect/get cycle."""

from collections.abc import MutableMapping
from typing import Any

from cms_admin.application.interfaces import ToastSink
from cms_admin.domain.entities import Toast

SESSION_KEY = "toasts"


class SessionToastSink(ToastSink):
    """Queues toasts in the signed cookie session of one request."""

    def __init__(self, session: MutableMapping[str, Any]):
        self._session = session

    def push(self, toast: Toast) -> None:
        queued = list(self._session.get(SESSION_KEY, []))
        queued.append(toast.to_dict())
        self._session[SESSION_KEY] = queued

    def drain(self) -> list[Toast]:
        queued = self._session.pop(SESSION_KEY, None) or []
        return [Toast.from_dict(item) for item in queued if isinstance(item, dict)]
