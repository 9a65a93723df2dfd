"""Explicit lifecycle of a list or form view.

Replaces independent ``loading`` / ``submitting`` flags with one phase so
impossible combinations cannot be represented.
"""

from enum import Enum

from cms_admin.domain.exceptions import InvalidTransitionError


class ViewPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_ALLOWED: dict[ViewPhase, frozenset[ViewPhase]] = {
    ViewPhase.IDLE: frozenset({ViewPhase.LOADING, ViewPhase.SUBMITTING}),
    ViewPhase.LOADING: frozenset({ViewPhase.READY, ViewPhase.FAILED}),
    ViewPhase.READY: frozenset({ViewPhase.SUBMITTING, ViewPhase.LOADING}),
    ViewPhase.SUBMITTING: frozenset({ViewPhase.SUCCEEDED, ViewPhase.FAILED}),
    ViewPhase.SUCCEEDED: frozenset(),
    ViewPhase.FAILED: frozenset({ViewPhase.SUBMITTING, ViewPhase.LOADING}),
}


class ViewLifecycle:
    """Tracks the phase of one view and rejects unreachable transitions."""

    def __init__(self, phase: ViewPhase = ViewPhase.IDLE):
        self._phase = phase

    @property
    def phase(self) -> ViewPhase:
        return self._phase

    def can_move_to(self, target: ViewPhase) -> bool:
        return target in _ALLOWED[self._phase]

    def move_to(self, target: ViewPhase) -> ViewPhase:
        if not self.can_move_to(target):
            raise InvalidTransitionError(self._phase.value, target.value)
        self._phase = target
        return self._phase

    def start_loading(self) -> None:
        self.move_to(ViewPhase.LOADING)

    def start_submitting(self) -> None:
        self.move_to(ViewPhase.SUBMITTING)

    def finish(self, ok: bool) -> ViewPhase:
        """Leave LOADING/SUBMITTING for the matching terminal phase."""
        if self._phase == ViewPhase.LOADING:
            return self.move_to(ViewPhase.READY if ok else ViewPhase.FAILED)
        return self.move_to(ViewPhase.SUCCEEDED if ok else ViewPhase.FAILED)
