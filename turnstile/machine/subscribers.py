"""Subscriber registry."""

import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

SubscriberPayload = Dict[str, Any]
Subscriber = Callable[[SubscriberPayload], None]


def omit_none(payload: SubscriberPayload) -> SubscriberPayload:
    """Drop keys whose value is None."""
    return {key: value for key, value in payload.items() if value is not None}


class SubscriberSet:
    """
    Manages and notifies subscribers.

    The same subscriber may be added more than once; it is then called once
    per registration.
    """

    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []

    def __len__(self) -> int:
        return len(self._subscribers)

    def subscribe(self, subscriber: Subscriber) -> None:
        """Add a subscriber."""
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Remove the first registration of a subscriber. Ignore unknown ones."""
        try:
            self._subscribers.remove(subscriber)
        except ValueError:
            logger.debug("Ignoring unsubscribe of unknown subscriber")

    def notify(self, payload: SubscriberPayload) -> SubscriberPayload:
        """
        Call every subscriber, in registration order, with the payload.

        Returns:
            The payload that was delivered, without None values
        """
        delivered = omit_none(payload)

        for subscriber in list(self._subscribers):
            subscriber(delivered)

        return delivered
