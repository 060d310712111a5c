from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class InMemoryRepository(Generic[T]):
    """
    Repo générique en mémoire, clé primaire configurable.
    - Conserve l'ordre d'insertion
    - Stocke et rend des copies: un objet lu n'est jamais l'objet stocké
    """

    def __init__(self, entity_name: str = "entity", key: str = "id") -> None:
        self.entity_name = entity_name
        self.key = key
        self._lock = threading.Lock()
        self._rows: Dict[str, T] = {}

    # ---------------- Helpers ---------------- #

    def _key_of(self, item: T) -> str:
        obj_id = getattr(item, self.key, None)
        if not obj_id:
            raise ValueError(f"{self.entity_name} without '{self.key}'")
        return str(obj_id)

    @staticmethod
    def _copy(item: T) -> T:
        return item.model_copy(deep=True)

    # ---------------- CRUD ---------------- #

    def list_all(self) -> List[T]:
        return [self._copy(it) for it in self._rows.values()]

    def exists(self, obj_id: str) -> bool:
        return str(obj_id) in self._rows

    def get_by_id(self, obj_id: str) -> Optional[T]:
        it = self._rows.get(str(obj_id))
        return self._copy(it) if it is not None else None

    def add(self, item: T) -> T:
        k = self._key_of(item)
        with self._lock:
            if k in self._rows:
                raise ValueError(f"{self.entity_name} with {self.key}={k} already exists")
            self._rows[k] = self._copy(item)
        return item

    def update(self, item: T) -> T:
        k = self._key_of(item)
        with self._lock:
            if k not in self._rows:
                raise KeyError(f"{self.entity_name} with {self.key}={k} not found")
            self._rows[k] = self._copy(item)
        return item

    def upsert(self, item: T) -> T:
        """Met à jour si l'item existe (même id), sinon l'ajoute."""
        k = self._key_of(item)
        with self._lock:
            self._rows[k] = self._copy(item)
        return item

    def delete(self, obj_id: str) -> bool:
        with self._lock:
            return self._rows.pop(str(obj_id), None) is not None

    # ---------------- Recherches ---------------- #

    def find(self, predicate: Callable[[T], bool]) -> List[T]:
        return [self._copy(r) for r in self._rows.values() if predicate(r)]

    def find_one(self, predicate: Callable[[T], bool]) -> Optional[T]:
        for r in self._rows.values():
            if predicate(r):
                return self._copy(r)
        return None
