# storefront/core/observable.py
import logging
from typing import Callable, List

logger = logging.getLogger("storefront.observable")

Listener = Callable[[], None]


class Observable:
    """Explicit subscription point; listeners run after every mutation."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        # Copy: a listener may unsubscribe itself while we iterate.
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Store listener %r failed", listener)
