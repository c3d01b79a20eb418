# registry_errors.py
from __future__ import annotations

from typing import Any


class RegistryError(Exception):
    """Базовая ошибка реестра наблюдателей."""


class IndexOutOfRange(RegistryError, IndexError):
    """Индекс за пределами списка наблюдателей (remove_at)."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Индекс {index} вне диапазона [0, {count}).")
        self.index = index
        self.count = count


class ObserverNotFound(RegistryError, LookupError):
    """
    Наблюдатель/подписка не зарегистрированы.
    Поднимается только в строгом режиме (strict_removal=True),
    по умолчанию удаление отсутствующего — тихий no-op.
    """

    def __init__(self, target: Any) -> None:
        super().__init__(f"Наблюдатель не найден: {target!r}")
        self.target = target


class HandlerFailure(RegistryError):
    """
    Один или несколько обработчиков упали во время рассылки
    (только при isolate_failures=True).

    failures: list[(observer, exception)] в порядке вызова.
    """

    def __init__(self, failures: list[tuple[Any, BaseException]]) -> None:
        names = ", ".join(type(exc).__name__ for _, exc in failures)
        super().__init__(f"Ошибки в обработчиках ({len(failures)}): {names}")
        self.failures = failures
