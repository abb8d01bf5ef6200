from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bakery.services.resources import ResourceURI

if TYPE_CHECKING:
    from bakery.services.catalog_store import CatalogStore

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[ResourceURI], None]


@dataclass
class RowSet:
    """Rows returned by a query, tagged with the resource they were read from."""

    rows: list[dict[str, Any]]
    columns: tuple[str, ...]
    notification_resource: ResourceURI

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None


@dataclass(eq=False)
class _Observer:
    resource: ResourceURI
    callback: ChangeCallback
    notify_for_descendants: bool

    def wants(self, changed: ResourceURI) -> bool:
        if changed == self.resource or changed.is_ancestor_of(self.resource):
            return True
        return self.notify_for_descendants and self.resource.is_ancestor_of(changed)


class ChangeNotifier:
    """Delivers change notifications to observers registered on resources."""

    def __init__(self) -> None:
        self._observers: list[_Observer] = []

    def register(
        self,
        resource: str | ResourceURI,
        callback: ChangeCallback,
        notify_for_descendants: bool = False,
    ) -> Callable[[], None]:
        """Register ``callback`` and return a function that unregisters it."""

        observer = _Observer(ResourceURI.parse(resource), callback, notify_for_descendants)
        self._observers.append(observer)

        def unregister() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unregister

    def notify(self, resource: str | ResourceURI) -> None:
        changed = ResourceURI.parse(resource)
        targets = [observer for observer in self._observers if observer.wants(changed)]
        logger.debug("Notifying %d observer(s) of change to %s", len(targets), changed)
        for observer in targets:
            try:
                observer.callback(changed)
            except Exception:
                # The write has already committed; one failing observer must not hide it.
                logger.exception("Change observer for %s failed on %s", observer.resource, changed)


class LiveQuery:
    """Keeps a query result fresh by re-running it whenever its resource changes."""

    def __init__(
        self,
        store: CatalogStore,
        target: str | ResourceURI,
        columns: Sequence[str] | None = None,
        filter: str | None = None,
        filter_args: Sequence[Any] | None = None,
        order: str | None = None,
    ) -> None:
        self._store = store
        self._query_args = (target, columns, filter, filter_args, order)
        self.reload_count = 0
        self.rows = store.query(*self._query_args)
        self._unregister = store.notifier.register(
            self.rows.notification_resource, self._on_change, notify_for_descendants=True
        )

    def _on_change(self, changed: ResourceURI) -> None:
        self.rows = self._store.query(*self._query_args)
        self.reload_count += 1

    def close(self) -> None:
        self._unregister()

    def __enter__(self) -> LiveQuery:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
