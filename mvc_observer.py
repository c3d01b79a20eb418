# mvc_observer.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol

from observer_list import ObserverList
from registry_config import RegistryConfig
from registry_errors import HandlerFailure, ObserverNotFound

logger = logging.getLogger(__name__)


class Observer(Protocol):
    def update(self, context: Any) -> None: ...


def dispatch(
    targets: Iterable[Any],
    call: Callable[[Any], None],
    *,
    isolate: bool = False,
) -> None:
    """
    Вызывает call(target) для каждого элемента снимка по порядку.

    isolate=False: первая ошибка пробрасывается как есть, остальные
    наблюдатели в этом проходе не вызываются.
    isolate=True: ошибки собираются, проход доходит до конца,
    затем поднимается HandlerFailure (цепочка от первой ошибки).
    """
    failures: list[tuple[Any, BaseException]] = []
    for target in targets:
        if not isolate:
            call(target)
            continue
        try:
            call(target)
        except Exception as exc:
            logger.exception("Обработчик %r упал во время рассылки", target)
            failures.append((target, exc))

    if failures:
        raise HandlerFailure(failures) from failures[0][1]


class Subject:
    """
    Владеет одним ObserverList (композиция) и рассылает уведомления
    по снимку состава на момент вызова notify().
    """

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self._observers = ObserverList()
        self._config = config or RegistryConfig()

    @property
    def observers(self) -> ObserverList:
        return self._observers

    def add_observer(self, observer: Observer) -> None:
        self._observers.add(observer)

    def remove_observer(self, observer: Observer) -> None:
        """Удаляет первое вхождение. Отсутствующий наблюдатель — no-op (или ошибка в strict)."""
        if self._observers.remove(observer) != -1:
            return
        if self._config.strict_removal:
            raise ObserverNotFound(observer)
        logger.warning("remove_observer: %r не зарегистрирован", observer)

    def notify(self, context: Any) -> None:
        snapshot = self._observers.snapshot()
        logger.debug("notify(%r) -> %d наблюдателей", context, len(snapshot))
        dispatch(
            snapshot,
            lambda obs: obs.update(context),
            isolate=self._config.isolate_failures,
        )
