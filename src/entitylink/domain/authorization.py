"""Authorization state carried by a unit of work."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(slots=True)
class AuthorizationState:
    """Stack of "ignore authorization" flags.

    ``turn_off`` pushes the current state and disables checks; ``restore`` pops
    it again, so nested elevations unwind in order.
    """

    ignore: bool = False
    _previous: list[bool] = field(default_factory=list[bool], repr=False)

    def turn_off(self) -> None:
        self._previous.append(self.ignore)
        self.ignore = True

    def restore(self) -> None:
        if not self._previous:
            raise RuntimeError("restore() called without a matching turn_off()")
        self.ignore = self._previous.pop()

    @property
    def depth(self) -> int:
        return len(self._previous)

    @contextmanager
    def elevated(self) -> Iterator[None]:
        """Bypass authorization checks for the duration of the block."""

        self.turn_off()
        try:
            yield
        finally:
            self.restore()
