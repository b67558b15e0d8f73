"""Network activity indicator shared by every display surface."""

import weakref
from typing import Callable

from forumprofile.logging import get_logger
from forumprofile.surface.base import DisplaySurface


class NetworkActivityIndicator:
    """
    Process-wide count of busy activity sources.

    The indicator is visible while the count is above zero. Only touched from
    the event loop thread, so no locking.
    """

    def __init__(self):
        self._count = 0
        self._listeners: list[Callable[[bool], None]] = []
        self._log = get_logger("activity")

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_active(self) -> bool:
        return self._count > 0

    def add_listener(self, listener: Callable[[bool], None]) -> Callable[[], None]:
        """
        Observe visibility changes of the indicator.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def increment(self) -> None:
        self._count += 1
        if self._count == 1:
            self._notify(True)

    def decrement(self) -> None:
        if self._count == 0:
            self._log.warning("unbalanced_activity_decrement")
            return
        self._count -= 1
        if self._count == 0:
            self._notify(False)

    def _notify(self, active: bool) -> None:
        for listener in list(self._listeners):
            listener(active)


_shared = NetworkActivityIndicator()


def shared_indicator() -> NetworkActivityIndicator:
    """Return the process-wide indicator."""
    return _shared


class _Contribution:
    """One tracker's share of the indicator."""

    def __init__(self, indicator: NetworkActivityIndicator):
        self.indicator = indicator
        self.on = False

    def set(self, value: bool) -> None:
        if value and not self.on:
            self.indicator.increment()
        elif not value and self.on:
            self.indicator.decrement()
        self.on = value


def _release(contribution: _Contribution, unsubscribe: Callable[[], None]) -> None:
    contribution.set(False)
    unsubscribe()


class ActivityTracker:
    """
    Keeps the network activity indicator on while a surface is loading.

    Each tracker contributes at most one to the indicator. Closing the
    tracker, or dropping it, turns it off before it stops observing the
    surface.

    Example:
        with ActivityTracker(surface):
            await surface.load_document(html, base_url)
    """

    def __init__(self, surface: DisplaySurface, indicator: NetworkActivityIndicator | None = None):
        self.surface = surface
        self.indicator = indicator or shared_indicator()
        self._contribution = _Contribution(self.indicator)
        # The surface holds the contribution, not the tracker
        unsubscribe = surface.on_loading_changed(self._contribution.set)
        self._finalizer = weakref.finalize(self, _release, self._contribution, unsubscribe)
        self._contribution.set(surface.loading)

    @property
    def on(self) -> bool:
        return self._contribution.on

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def _loading_changed(self, loading: bool) -> None:
        if self._finalizer.alive:
            self._contribution.set(loading)

    def close(self) -> None:
        """Turn off and stop observing the surface. Safe to call twice."""
        self._finalizer()

    def __enter__(self) -> "ActivityTracker":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
