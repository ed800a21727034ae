"""Per-tick handlers and notification signals."""

from __future__ import annotations

from typing import Callable, Generator

from .properties import settings


class Signal:
    """A list of handlers fired together, in connection order."""

    def __init__(self):
        self._handlers: list[Callable] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def connect(self, handler: Callable) -> Callable:
        if handler not in self._handlers:
            self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Callable) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def disconnect_all(self) -> None:
        self._handlers.clear()

    def fire(self, *args) -> None:
        for handler in list(self._handlers):
            handler(*args)


class Ticker:
    """Frame-step signal that drives cooperative tasks.

    A task is a generator; it runs up to its first ``yield`` when spawned and
    then one more step every time the host calls :meth:`step`, typically once
    per rendered frame. A task that returns is dropped.
    """

    def __init__(self):
        self._tasks: list[Generator] = []
        self.frame = 0

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, task: Generator) -> None:
        if self._advance(task):
            self._tasks.append(task)

    def step(self) -> int:
        """Advance every task once; return how many are still running.

        A task that raises is dropped. The remaining tasks still run this
        frame, then the first error is re-raised.
        """
        self.frame += 1
        error = None
        for task in list(self._tasks):
            try:
                alive = self._advance(task)
            except Exception as exc:
                self._tasks.remove(task)
                if error is None:
                    error = exc
                continue
            if not alive:
                self._tasks.remove(task)
        if error is not None:
            raise error
        return len(self._tasks)

    def run_until_idle(self, max_steps: int = 100_000) -> int:
        """Step until no task is left; return the number of steps taken."""
        steps = 0
        while self._tasks and steps < max_steps:
            self.step()
            steps += 1
        if settings.debug:
            print(f"[SS] ticker idle after {steps} steps, pending={len(self._tasks)}")
        return steps

    @staticmethod
    def _advance(task: Generator) -> bool:
        try:
            next(task)
        except StopIteration:
            return False
        return True


default_ticker = Ticker()


__all__ = ["Signal", "Ticker", "default_ticker"]
