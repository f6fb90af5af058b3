"""
Single-slot publisher of "the currently active node".

Every tree controller subscribes once and keeps a local cache of the last
value. A new subscriber immediately receives the latest value (``None``
until something is selected) and then every later value, in the order the
subscriptions were made.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from filepane.models import FileNode

logger = logging.getLogger(__name__)

OnNext = Callable[[Optional[FileNode]], None]
OnError = Callable[[Exception], None]


class Subscription:
    """Handle returned by :meth:`SelectionBroadcaster.subscribe`."""

    def __init__(self, owner: "SelectionBroadcaster", on_next: OnNext,
                 on_error: Optional[OnError] = None):
        self._owner = owner
        self.on_next = on_next
        self.on_error = on_error
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._owner._detach(self)

    def _deliver(self, value: Optional[FileNode]) -> None:
        try:
            self.on_next(value)
        except Exception as exc:
            if self.on_error is None:
                raise
            self.on_error(exc)


class SelectionBroadcaster:
    def __init__(self):
        self._value: Optional[FileNode] = None
        self._subscriptions: List[Subscription] = []

    @property
    def current(self) -> Optional[FileNode]:
        return self._value

    def set_active(self, node: Optional[FileNode]) -> None:
        """Replace the slot value and notify subscribers synchronously."""
        self._value = node
        logger.debug("active node -> %r", node)
        # copy: a subscriber may unsubscribe while being notified
        for subscription in list(self._subscriptions):
            if not subscription.closed:
                subscription._deliver(node)

    def subscribe(self, on_next: OnNext, on_error: Optional[OnError] = None) -> Subscription:
        subscription = Subscription(self, on_next, on_error)
        self._subscriptions.append(subscription)
        subscription._deliver(self._value)
        return subscription

    def _detach(self, subscription: Subscription) -> None:
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]


# process-wide default slot
current_selected = SelectionBroadcaster()
