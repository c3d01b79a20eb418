# observer_list.py
from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import Any

from registry_errors import IndexOutOfRange

logger = logging.getLogger(__name__)


class ObserverList:
    """
    Упорядоченный список наблюдателей.

    - порядок вставки сохраняется, дубликаты разрешены;
    - сравнение только по ссылке (is), __eq__ наблюдателя не используется;
    - мутации и снятие снимка идут под блокировкой, сами обработчики
      вызываются владельцем уже без неё.
    """

    def __init__(self) -> None:
        self._items: list[Any] = []
        self._lock = threading.Lock()

    # ===== мутации =====
    def add(self, observer: Any) -> int:
        with self._lock:
            self._items.append(observer)
            n = len(self._items)
        logger.debug("add %r -> %d", observer, n)
        return n

    def remove_at(self, index: int) -> None:
        with self._lock:
            n = len(self._items)
            if not 0 <= index < n:
                raise IndexOutOfRange(index, n)
            removed = self._items.pop(index)
        logger.debug("remove_at(%d) -> %r", index, removed)

    def remove(self, observer: Any) -> int:
        """
        index_of(observer, 0) + remove_at под одной блокировкой.
        Возвращает индекс удалённого вхождения либо -1.
        """
        with self._lock:
            for i, item in enumerate(self._items):
                if item is observer:
                    del self._items[i]
                    break
            else:
                return -1
        logger.debug("remove %r (index %d)", observer, i)
        return i

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    # ===== чтение =====
    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return self.count()

    def get(self, index: int) -> Any | None:
        """Наблюдатель по индексу либо None, если индекс вне диапазона."""
        with self._lock:
            if 0 <= index < len(self._items):
                return self._items[index]
        return None

    def index_of(self, observer: Any, start_index: int = 0) -> int:
        with self._lock:
            for i in range(max(start_index, 0), len(self._items)):
                if self._items[i] is observer:
                    return i
        return -1

    def snapshot(self) -> tuple[Any, ...]:
        with self._lock:
            return tuple(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"ObserverList({list(self.snapshot())!r})"
