"""Abstract display surface interface."""

from abc import ABC, abstractmethod
from typing import Any, Callable

from forumprofile.logging import get_logger

MessageHandler = Callable[[str, Any], None]
LoadingListener = Callable[[bool], None]


class DisplaySurface(ABC):
    """
    Embedded document renderer that shows the generated markup.

    Subclasses supply document loading and script evaluation. Script
    injection, bridge handler registration and the ``loading`` signal are
    shared bookkeeping kept here.
    """

    def __init__(self):
        self.user_scripts: list[str] = []
        self._handlers: dict[str, MessageHandler] = {}
        self._loading = False
        self._loading_listeners: list[LoadingListener] = []
        self._log = get_logger("surface")

    def add_user_script(self, source: str) -> None:
        """
        Add a script to run at the end of every document load.

        Scripts run in the order they were added.
        """
        self.user_scripts.append(source)

    def add_message_handler(self, name: str, handler: MessageHandler) -> None:
        """
        Subscribe to a named bridge channel.

        Args:
            name: Message name posted from the document
            handler: Called with (name, body)
        """
        self._handlers[name] = handler

    @property
    def message_names(self) -> list[str]:
        """Names of the registered bridge channels."""
        return list(self._handlers)

    def post_message(self, name: str, body: Any) -> None:
        """Deliver a message posted by script running in the document."""
        handler = self._handlers.get(name)
        if handler is None:
            self._log.warning("unregistered_bridge_message", name=name)
            return
        handler(name, body)

    @property
    def loading(self) -> bool:
        """Whether a document load is in progress."""
        return self._loading

    def _set_loading(self, value: bool) -> None:
        if value == self._loading:
            return
        self._loading = value
        for listener in list(self._loading_listeners):
            listener(value)

    def on_loading_changed(self, listener: LoadingListener) -> Callable[[], None]:
        """
        Register a listener for changes of the ``loading`` signal.

        Returns:
            Callable that removes the listener
        """
        self._loading_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._loading_listeners:
                self._loading_listeners.remove(listener)

        return unsubscribe

    @abstractmethod
    async def load_document(self, html: str, base_url: str) -> None:
        """
        Replace the displayed document.

        Args:
            html: Markup to display
            base_url: Address used to resolve relative links in the markup
        """
        ...

    @abstractmethod
    async def evaluate_script(self, code: str) -> Any:
        """Evaluate script in the currently loaded document."""
        ...

    async def close(self) -> None:
        """Release the underlying renderer. Listeners see loading end first."""
        self._set_loading(False)
        self._loading_listeners.clear()
        self._handlers.clear()
