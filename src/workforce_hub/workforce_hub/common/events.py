from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable

from ..core.enums import Collection

logger = logging.getLogger(__name__)

Listener = Callable[[Collection], None]


class ChangeFeed:
    """Explicit change-notification channel per record collection.

    Services publish after every create/update/delete. Subscribers (the UI
    layer) re-fetch the snapshot and re-run the pure aggregations; nothing is
    patched incrementally.
    """

    def __init__(self):
        self._listeners: dict[Collection, list[Listener]] = defaultdict(list)

    def subscribe(self, collection: Collection, listener: Listener) -> Callable[[], None]:
        self._listeners[collection].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(collection, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def publish(self, collection: Collection) -> None:
        logger.debug("Publishing change", extra={"collection": collection.value})
        for listener in list(self._listeners.get(collection, [])):
            try:
                listener(collection)
            except Exception:
                # the write is already committed; listener errors are only logged
                logger.exception("Change listener failed for %s", collection.value, extra={"collection": collection.value})

    def listener_count(self, collection: Collection) -> int:
        return len(self._listeners.get(collection, []))
