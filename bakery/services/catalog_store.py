from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import ColumnElement, Engine, TextClause, delete, false, insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from bakery.core.errors import InvalidResource, StoreError, UnsupportedOperation, ValidationError
from bakery.db.session import CatalogDatabase
from bakery.models.cake import Cake
from bakery.schemas.cake import CakeCreate, CakeUpdate
from bakery.services.notifications import ChangeNotifier, RowSet
from bakery.services.resources import (
    COLUMN_ID,
    COLUMN_NAME,
    COLUMN_OCCASION,
    MatchKind,
    ResourceMatch,
    ResourceRouter,
    ResourceURI,
)

logger = logging.getLogger(__name__)

cakes = Cake.__table__

# Largest value an SQLite INTEGER column can hold.
MAX_ROW_ID = 2**63 - 1

_VALIDATION_MESSAGES = {COLUMN_NAME: "name required", COLUMN_OCCASION: "invalid occasion"}

# A quoted SQL literal is consumed whole so a "?" inside it is left alone.
_PLACEHOLDER = re.compile(r"'(?:[^']|'')*'|\?")


def _raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    field = str(exc.errors()[0]["loc"][0])
    raise ValidationError(_VALIDATION_MESSAGES.get(field, f"invalid {field}"), field=field) from exc


def _selection_clause(selection: str, selection_args: Sequence[Any] | None) -> TextClause:
    """Turn a ``?``-placeholder filter into a text clause with bound values."""

    args = list(selection_args or ())
    params: dict[str, Any] = {}

    def bind(match: re.Match[str]) -> str:
        if match.group(0) != "?":
            return match.group(0)
        index = len(params)
        if index >= len(args):
            raise StoreError(f"Filter {selection!r} has more placeholders than the {len(args)} argument(s) given")
        params[f"arg_{index}"] = args[index]
        return f":arg_{index}"

    clause = _PLACEHOLDER.sub(bind, selection)
    if len(params) != len(args):
        raise StoreError(f"Filter {selection!r} takes {len(params)} argument(s), got {len(args)}")
    return text(clause).bindparams(**params)


class CatalogStore:
    """CRUD access to the cakes table, addressed by resource identifiers.

    Every target is classified by the router first. An item target replaces
    any caller-supplied filter with ``id = <item id>``; the two are never
    merged. Successful mutations that touch at least one row notify observers
    of the addressed resource after the write has committed.
    """

    def __init__(
        self,
        database: CatalogDatabase,
        router: ResourceRouter,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self.database = database
        self.router = router
        self.notifier = notifier or ChangeNotifier()
        self._session_factory: sessionmaker[Session] | None = None

    @classmethod
    def from_engine(cls, engine: Engine, authority: str) -> CatalogStore:
        return cls(CatalogDatabase(engine), ResourceRouter(authority))

    @property
    def collection_uri(self) -> ResourceURI:
        return self.router.collection_uri

    def _sessions(self) -> sessionmaker[Session]:
        if self._session_factory is None:
            engine = self.database.open()
            self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        return self._session_factory

    def _resolve(self, target: str | ResourceURI, operation: str) -> ResourceMatch:
        resolved = self.router.match(target)
        if not resolved.matched:
            raise InvalidResource(f"Cannot {operation} unknown URI {resolved.uri}", resource=resolved.uri)
        return resolved

    @staticmethod
    def _where(
        resolved: ResourceMatch, selection: str | None, selection_args: Sequence[Any] | None
    ) -> ColumnElement[bool] | TextClause | None:
        if resolved.kind is MatchKind.ITEM:
            if resolved.item_id > MAX_ROW_ID:
                return false()
            return cakes.c.id == resolved.item_id
        if selection is None:
            return None
        return _selection_clause(selection, selection_args)

    def query(
        self,
        target: str | ResourceURI,
        columns: Sequence[str] | None = None,
        filter: str | None = None,
        filter_args: Sequence[Any] | None = None,
        order: str | None = None,
    ) -> RowSet:
        """Return the rows addressed by ``target``.

        The result is tagged with ``target`` so a caller can re-query when a
        change notification arrives for it.
        """

        resolved = self._resolve(target, "query")
        names = tuple(columns) if columns else tuple(cakes.c.keys())
        unknown = [name for name in names if name not in cakes.c]
        if unknown:
            raise StoreError(f"Unknown column(s) {', '.join(unknown)} for table {cakes.name}")

        statement = select(*(cakes.c[name] for name in names))
        where = self._where(resolved, filter, filter_args)
        if where is not None:
            statement = statement.where(where)
        if order:
            statement = statement.order_by(text(order))

        try:
            with self._sessions()() as session:
                rows = [dict(row) for row in session.execute(statement).mappings()]
        except (SQLAlchemyError, OverflowError) as exc:
            logger.error("Failed to query %s: %s", resolved.uri, exc)
            raise StoreError(f"Failed to query {resolved.uri}") from exc

        logger.debug("Query on %s returned %d row(s)", resolved.uri, len(rows))
        return RowSet(rows=rows, columns=names, notification_resource=resolved.uri)

    def insert(self, target: str | ResourceURI, values: Mapping[str, Any]) -> ResourceURI:
        """Insert a cake and return the identifier of the new row."""

        resolved = self._resolve(target, "insert into")
        if resolved.kind is not MatchKind.COLLECTION:
            raise UnsupportedOperation(f"Insertion is not supported for {resolved.uri}", resource=resolved.uri)

        try:
            checked = CakeCreate.model_validate(dict(values))
        except PydanticValidationError as exc:
            _raise_validation_error(exc)

        row = dict(values)
        row[COLUMN_OCCASION] = checked.occasion

        try:
            with self._sessions().begin() as session:
                result = session.execute(insert(cakes).values(**row))
                new_id = result.inserted_primary_key[0]
        except (SQLAlchemyError, OverflowError) as exc:
            logger.error("Failed to insert row for %s: %s", resolved.uri, exc)
            raise StoreError(f"Failed to insert row for {resolved.uri}") from exc

        self.notifier.notify(resolved.uri)
        return resolved.uri.with_appended_id(new_id)

    def update(
        self,
        target: str | ResourceURI,
        values: Mapping[str, Any],
        filter: str | None = None,
        filter_args: Sequence[Any] | None = None,
    ) -> int:
        """Update the addressed rows and return how many changed.

        Only the fields present in ``values`` are validated; zero matched
        rows is a normal result.
        """

        resolved = self._resolve(target, "update")
        if COLUMN_ID in values:
            raise ValidationError("id cannot be changed", field=COLUMN_ID)
        checked_fields = {key: values[key] for key in (COLUMN_NAME, COLUMN_OCCASION) if key in values}
        try:
            checked = CakeUpdate.model_validate(checked_fields)
        except PydanticValidationError as exc:
            _raise_validation_error(exc)

        row = dict(values)
        if COLUMN_OCCASION in row:
            row[COLUMN_OCCASION] = checked.occasion
        if not row:
            return 0

        where = self._where(resolved, filter, filter_args)
        try:
            statement = update(cakes).values(**row)
            if where is not None:
                statement = statement.where(where)
            with self._sessions().begin() as session:
                rows_updated = session.execute(statement).rowcount
        except (SQLAlchemyError, OverflowError) as exc:
            logger.error("Failed to update %s: %s", resolved.uri, exc)
            raise StoreError(f"Failed to update {resolved.uri}") from exc

        logger.debug("Updated %d row(s) for %s", rows_updated, resolved.uri)
        if rows_updated:
            self.notifier.notify(resolved.uri)
        return rows_updated

    def delete(
        self,
        target: str | ResourceURI,
        filter: str | None = None,
        filter_args: Sequence[Any] | None = None,
    ) -> int:
        """Physically remove the addressed rows and return how many went."""

        resolved = self._resolve(target, "delete from")
        statement = delete(cakes)
        where = self._where(resolved, filter, filter_args)
        if where is not None:
            statement = statement.where(where)

        try:
            with self._sessions().begin() as session:
                rows_deleted = session.execute(statement).rowcount
        except (SQLAlchemyError, OverflowError) as exc:
            logger.error("Failed to delete from %s: %s", resolved.uri, exc)
            raise StoreError(f"Failed to delete from {resolved.uri}") from exc

        logger.debug("Deleted %d row(s) for %s", rows_deleted, resolved.uri)
        if rows_deleted:
            self.notifier.notify(resolved.uri)
        return rows_deleted

    def get_type(self, target: str | ResourceURI) -> str:
        return self.router.get_type(target)
