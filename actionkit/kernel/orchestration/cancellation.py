"""Cooperative cancellation primitives.

A :class:`CancellationToken` is handed by reference to the code that runs
an action. Raising it never interrupts work in flight; the executor checks
it at resumption points and decides how to record the outcome.
"""

from __future__ import annotations


class CancellationToken:
    """Advisory cancellation flag shared between an owner and a worker."""

    __slots__ = ("_aborted", "_reason")

    def __init__(self) -> None:
        self._aborted = False
        self._reason: str | None = None

    @property
    def aborted(self) -> bool:
        return self._aborted

    @property
    def reason(self) -> str | None:
        return self._reason

    def _raise(self, reason: str | None) -> None:
        # first reason wins
        if self._aborted:
            return
        self._aborted = True
        self._reason = reason

    def __repr__(self) -> str:
        return f"CancellationToken(aborted={self._aborted}, reason={self._reason!r})"


class AbortController:
    """Owns a :class:`CancellationToken` and is the only thing that can raise it."""

    __slots__ = ("_signal",)

    def __init__(self) -> None:
        self._signal = CancellationToken()

    @property
    def signal(self) -> CancellationToken:
        return self._signal

    def abort(self, reason: str | None = None) -> None:
        """Raise the signal. Idempotent."""
        self._signal._raise(reason)


__all__ = ["AbortController", "CancellationToken"]
