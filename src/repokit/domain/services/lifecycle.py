"""Per-repository lifecycle observer channels.

Each repository owns one Observers set with one ObserverChannel per
LifecyclePhase.  Channels are independent: subscribing to BEFORE_SAVE does
not make BEFORE_PERSIST fire.  Within a channel, observers run one at a time
in subscription order and each is awaited before the next starts.  The
first failure stops the channel and surfaces as ObserverError.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator
from typing import Any

from repokit.domain.models.enums import LifecyclePhase
from repokit.domain.models.events import LifecycleEvent
from repokit.exceptions import ObserverError

logger = logging.getLogger(__name__)

Observer = Callable[[LifecycleEvent], Awaitable[None] | None]


class ObserverChannel:
    """Ordered list of observers for a single lifecycle phase."""

    def __init__(self, phase: LifecyclePhase) -> None:
        self.phase = phase
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> Observer:
        """Register an observer; returns it so this can be used as a decorator."""
        self._observers.append(observer)
        return observer

    def unsubscribe(self, observer: Observer) -> None:
        """Remove the earliest registration of observer.  Raises ValueError if absent."""
        self._observers.remove(observer)

    def __len__(self) -> int:
        return len(self._observers)

    def __iter__(self) -> Iterator[Observer]:
        return iter(list(self._observers))

    async def fire(self, entity: Any) -> None:
        if not self._observers:
            return

        event = LifecycleEvent(phase=self.phase, entity=entity)
        # Snapshot so observers that (un)subscribe mid-fire don't change this run.
        for observer in list(self._observers):
            try:
                result = observer(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                logger.warning("Observer %r failed during %s: %s", observer, self.phase.value, exc)
                raise ObserverError(self.phase.value, observer) from exc
        logger.debug("Fired %s to %d observer(s)", self.phase.value, len(self._observers))


class Observers:
    """The six lifecycle channels owned by one repository instance."""

    def __init__(self) -> None:
        self.before_persist = ObserverChannel(LifecyclePhase.BEFORE_PERSIST)
        self.after_persist = ObserverChannel(LifecyclePhase.AFTER_PERSIST)
        self.before_save = ObserverChannel(LifecyclePhase.BEFORE_SAVE)
        self.after_save = ObserverChannel(LifecyclePhase.AFTER_SAVE)
        self.before_remove = ObserverChannel(LifecyclePhase.BEFORE_REMOVE)
        self.after_remove = ObserverChannel(LifecyclePhase.AFTER_REMOVE)

    def channel(self, phase: LifecyclePhase | str) -> ObserverChannel:
        return getattr(self, LifecyclePhase(phase).value)

    def subscribe(self, phase: LifecyclePhase | str, observer: Observer) -> Observer:
        return self.channel(phase).subscribe(observer)
