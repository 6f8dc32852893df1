"""Work deferred until the request's changes are durable."""

import sys
from collections.abc import Awaitable, Callable

import logfire

AfterCommitCallback = Callable[[], Awaitable[None]]


class AfterCommit:
    """Callbacks run once the current request's transaction has committed.

    The persistence component owns the transaction and calls `run()` after
    a successful commit. Nothing runs when the transaction rolls back.
    """

    def __init__(self) -> None:
        self._callbacks: list[tuple[str, AfterCommitCallback]] = []

    @property
    def pending(self) -> list[str]:
        """Names of callbacks still waiting for the commit."""
        return [name for name, _ in self._callbacks]

    def add(self, name: str, callback: AfterCommitCallback) -> None:
        self._callbacks.append((name, callback))

    async def run(self) -> None:
        """Run queued callbacks in order.

        The commit has already happened, so a failing callback is logged and
        the remaining ones still run.
        """
        callbacks, self._callbacks = self._callbacks, []
        for name, callback in callbacks:
            try:
                await callback()
            except Exception as e:
                logfire.error(
                    "After-commit callback failed",
                    callback=name,
                    error=str(e),
                    _exc_info=sys.exc_info(),
                )
