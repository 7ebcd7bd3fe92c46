"""Save notifications and the listener interface consumed by the handler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from rich.console import Console
from rich.markup import escape


@dataclass(frozen=True)
class SaveEvent:
    """A document that is about to be saved.

    ``source_path`` is ``None`` for documents with no backing file.
    """

    source_path: str | None
    text: str


class SaveListener(Protocol):
    def before_document_saving(self, source_path: str | None, text: str) -> Any: ...


class Connection:
    """Handle returned by :meth:`SaveNotifier.subscribe`."""

    def __init__(self, notifier: SaveNotifier, listener: SaveListener) -> None:
        self._notifier = notifier
        self.listener = listener

    @property
    def connected(self) -> bool:
        return self._notifier.is_subscribed(self.listener)

    def disconnect(self) -> None:
        self._notifier.unsubscribe(self.listener)


class SaveNotifier:
    """Delivers save notifications to subscribed listeners, in order.

    A listener that raises is reported on the console and delivery goes on
    to the next one; the save itself is never interrupted.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._listeners: list[SaveListener] = []
        self._console = console or Console(stderr=True, soft_wrap=True)

    def subscribe(self, listener: SaveListener) -> Connection:
        self._listeners.append(listener)
        return Connection(self, listener)

    def unsubscribe(self, listener: SaveListener) -> bool:
        """Remove *listener*; returns ``False`` if it was not subscribed."""
        if listener not in self._listeners:
            return False
        self._listeners.remove(listener)
        return True

    def is_subscribed(self, listener: SaveListener) -> bool:
        return listener in self._listeners

    def fire(self, event: SaveEvent) -> list[Any]:
        """Notify every listener about one document; return their results."""
        results = []
        for listener in list(self._listeners):
            try:
                results.append(listener.before_document_saving(event.source_path, event.text))
            except Exception as exc:  # noqa: BLE001
                self._report(listener, exc)
        return results

    def fire_all(self, events: Iterable[SaveEvent]) -> list[Any]:
        """Notify listeners about a batch of documents saved together.

        Listeners with a ``before_all_documents_saving`` method get the
        whole batch at once; the rest get one call per document.
        """
        events = list(events)
        results: list[Any] = []
        for listener in list(self._listeners):
            batch = getattr(listener, "before_all_documents_saving", None)
            try:
                if batch is not None:
                    results.extend(batch(events))
                else:
                    for event in events:
                        results.append(listener.before_document_saving(event.source_path, event.text))
            except Exception as exc:  # noqa: BLE001
                self._report(listener, exc)
        return results

    def _report(self, listener: SaveListener, exc: Exception) -> None:
        self._console.print(
            f"  [red]ERROR[/red] Save listener {escape(type(listener).__name__)} failed: {escape(str(exc))}"
        )
