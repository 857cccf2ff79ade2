"""
In-memory fruit store keyed by fruit id.

Pure container: no validation and no ownership rules. Callers must check
that an id exists before update() or delete().
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from orchard.fruits.models import Fruit


class FruitStore:
    def __init__(self):
        self._fruits: Dict[str, Fruit] = {}
        self._lock = threading.Lock()

    def __contains__(self, fruit_id: object) -> bool:
        return fruit_id in self._fruits

    def create(self, fruit: Fruit) -> str:
        with self._lock:
            self._fruits[fruit.id] = fruit
        return fruit.id

    def get(self, fruit_id: str) -> Optional[Fruit]:
        return self._fruits.get(fruit_id)

    def list(self) -> List[Fruit]:
        return list(self._fruits.values())

    def update(self, fruit_id: str, fruit: Fruit) -> None:
        with self._lock:
            self._fruits[fruit_id] = fruit

    def delete(self, fruit_id: str) -> None:
        with self._lock:
            del self._fruits[fruit_id]
