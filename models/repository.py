"""Generisches In-Memory-Repository: eine Sammlung pro Datensatztyp, nach ID indiziert."""

import logging
from typing import Generic, Iterator, Optional, Protocol, TypeVar

from models.errors import DuplicateIdError

logger = logging.getLogger(__name__)


class HasId(Protocol):
    id: int


T = TypeVar("T", bound=HasId)


class Repository(Generic[T]):
    """Maßgebliche Sammlung aller Datensätze eines Typs.

    - IDs sind innerhalb des Repositories eindeutig.
    - find_by_id() liefert das gespeicherte Objekt selbst (keine Kopie);
      Änderungen erfolgen direkt über diese Referenz.
    - delete_by_id() berührt weder andere Repositories noch Klassen-Verknüpfungen.
    - list_all() liefert die Einfügereihenfolge.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind                 # "Student", "Teacher", "Classroom"
        self._items: dict[int, T] = {}

    def insert(self, entity: T) -> T:
        """Fügt einen Datensatz ein. Bei bereits vergebener ID: DuplicateIdError."""
        if entity.id in self._items:
            raise DuplicateIdError(self.kind, entity.id)
        self._items[entity.id] = entity
        logger.debug(f"{self.kind} {entity.id} eingefügt")
        return entity

    def find_by_id(self, entity_id: int) -> Optional[T]:
        return self._items.get(entity_id)

    def delete_by_id(self, entity_id: int) -> bool:
        """Entfernt den Datensatz; False wenn die ID nicht existiert."""
        if self._items.pop(entity_id, None) is None:
            return False
        logger.debug(f"{self.kind} {entity_id} gelöscht")
        return True

    def list_all(self) -> list[T]:
        return list(self._items.values())

    def ids(self) -> list[int]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self.list_all())

    def __repr__(self) -> str:
        return f"Repository({self.kind!r}, {len(self)} Einträge)"
