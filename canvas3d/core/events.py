"""Shared publish/subscribe channel for modules and the host.

Handlers run synchronously on the dispatching thread, in subscription order.
A handler that raises is logged and skipped so one broken module cannot stop
the others (or the render loop) from receiving the event.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional

from .errors import is_contained

logger = logging.getLogger(__name__)

ANIMATE = "animate"

Handler = Callable[["Event"], Any]


@dataclass(frozen=True)
class Event:
    """A dispatched event: its type plus an optional caller-defined payload."""
    type: str
    detail: Any = None


@dataclass(eq=False)
class Subscription:
    """Token returned by EventBus.subscribe()."""
    bus: "EventBus"
    type: str
    handler: Handler
    owner: Optional[Hashable] = None
    active: bool = field(default=True)

    def cancel(self) -> bool:
        """Remove this subscription from its bus."""
        return self.bus._remove(self)


class EventBus:
    """Synchronous event bus shared by every module."""

    def __init__(self):
        self._subscriptions: Dict[str, List[Subscription]] = {}
        self._owner_stack: List[Hashable] = []

    @property
    def current_owner(self) -> Optional[Hashable]:
        """Owner tag applied to subscriptions made right now."""
        return self._owner_stack[-1] if self._owner_stack else None

    @contextmanager
    def owned_by(self, owner: Hashable) -> Iterator[None]:
        """Tag every subscription made inside the block with owner."""
        self._owner_stack.append(owner)
        try:
            yield
        finally:
            self._owner_stack.pop()

    def subscribe(self, event_type: str, handler: Handler) -> Subscription:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: Event name (e.g. "animate")
            handler: Callable receiving a single Event

        Returns:
            Subscription token that can cancel itself
        """
        if not callable(handler):
            raise TypeError(f"Event handler for '{event_type}' must be callable")

        subscription = Subscription(self, event_type, handler, owner=self.current_owner)
        self._subscriptions.setdefault(event_type, []).append(subscription)
        logger.debug(f"Subscribed {handler!r} to '{event_type}' (owner={subscription.owner})")
        return subscription

    def unsubscribe(self, event_type: str, handler: Handler) -> bool:
        """Remove the first subscription of handler to event_type."""
        for subscription in self._subscriptions.get(event_type, []):
            if subscription.handler == handler:
                return self._remove(subscription)
        return False

    def unsubscribe_owner(self, owner: Hashable) -> int:
        """Remove every subscription tagged with owner. Returns the count."""
        removed = 0
        for subscriptions in list(self._subscriptions.values()):
            for subscription in list(subscriptions):
                if subscription.owner == owner:
                    self._remove(subscription)
                    removed += 1
        if removed:
            logger.info(f"Removed {removed} event handler(s) owned by {owner}")
        return removed

    def reassign_owner(self, old: Hashable, new: Hashable) -> int:
        """Retag subscriptions owned by old as owned by new."""
        moved = 0
        for subscriptions in self._subscriptions.values():
            for subscription in subscriptions:
                if subscription.owner == old:
                    subscription.owner = new
                    moved += 1
        return moved

    def dispatch(self, event_type: str, detail: Any = None) -> int:
        """
        Dispatch an event to every handler currently subscribed to its type.

        Handlers subscribed during the dispatch are not invoked for it, and
        handlers removed during the dispatch are skipped.

        Returns:
            Number of handlers invoked
        """
        event = Event(event_type, detail)
        invoked = 0
        for subscription in list(self._subscriptions.get(event_type, [])):
            if not subscription.active:
                continue
            invoked += 1
            with self.owned_by(subscription.owner):
                try:
                    subscription.handler(event)
                except BaseException as e:
                    if not is_contained(e):
                        raise
                    logger.exception(
                        f"Handler {subscription.handler!r} for '{event_type}' "
                        f"(owner={subscription.owner}) raised"
                    )
        return invoked

    def listener_count(self, event_type: Optional[str] = None) -> int:
        """Number of live subscriptions, for one type or in total."""
        if event_type is not None:
            return len(self._subscriptions.get(event_type, []))
        return sum(len(subs) for subs in self._subscriptions.values())

    def owners(self) -> List[Hashable]:
        """Distinct non-empty owners with live subscriptions."""
        seen = []
        for subscriptions in self._subscriptions.values():
            for subscription in subscriptions:
                if subscription.owner is not None and subscription.owner not in seen:
                    seen.append(subscription.owner)
        return seen

    def _remove(self, subscription: Subscription) -> bool:
        subscriptions = self._subscriptions.get(subscription.type, [])
        if subscription not in subscriptions:
            return False
        subscriptions.remove(subscription)
        subscription.active = False
        if not subscriptions:
            del self._subscriptions[subscription.type]
        return True
