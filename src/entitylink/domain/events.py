"""Dispatch content-change notifications to record consumers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from entitylink.domain.model import Record
    from entitylink.domain.ports import ResolutionUnitOfWork

log = logging.getLogger(__name__)


@runtime_checkable
class Consumer(Protocol):
    """Reacts to changed records within one unit of work."""

    @property
    def name(self) -> str: ...

    def consume(self, uow: ResolutionUnitOfWork, record: Record | None) -> None: ...

    def end(self, uow: ResolutionUnitOfWork) -> None:
        """Called once the batch of events has been consumed."""
        ...

    def finish(self, uow: ResolutionUnitOfWork) -> None: ...


class EventDispatcher:
    """Feed every changed record to every consumer, then close the batch.

    ``end`` runs for each consumer even when consuming failed, so per-batch
    state (such as the set of already processed records) never leaks into the
    next batch. Errors still propagate; the caller owns rollback.
    """

    def __init__(self, consumers: Sequence[Consumer]) -> None:
        self.consumers = tuple(consumers)

    def dispatch(self, uow: ResolutionUnitOfWork, records: Iterable[Record | None]) -> int:
        count = 0
        try:
            for record in records:
                count += 1
                for consumer in self.consumers:
                    consumer.consume(uow, record)
        finally:
            for consumer in self.consumers:
                consumer.end(uow)
        log.debug("Dispatched %d events to %d consumers", count, len(self.consumers))
        return count

    def finish(self, uow: ResolutionUnitOfWork) -> None:
        for consumer in self.consumers:
            consumer.finish(uow)
