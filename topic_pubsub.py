# topic_pubsub.py
from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mvc_observer import dispatch
from observer_list import ObserverList
from registry_config import RegistryConfig
from registry_errors import ObserverNotFound

logger = logging.getLogger(__name__)

Handler = Callable[[str, Any], None]


@dataclass(frozen=True, eq=False)
class Subscription:
    """
    Токен подписки. Сравнивается по ссылке (eq=False), поэтому одна и та же
    функция, подписанная дважды, даёт два независимых токена.
    """

    token: str
    topic: str
    handler: Handler


class PubSub:
    """
    Тематический реестр подписчиков: topic -> ObserverList[Subscription].

    Создаётся явно и передаётся по ссылке, глобального канала нет:
    несколько реестров живут независимо.
    """

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self._config = config or RegistryConfig()
        self._topics: dict[str, ObserverList] = {}
        self._lock = threading.Lock()
        self._uid = itertools.count()

    # ===== подписка =====
    def subscribe(self, topic: str, handler: Handler) -> Subscription:
        with self._lock:
            sub = Subscription(str(next(self._uid)), topic, handler)
            self._topics.setdefault(topic, ObserverList()).add(sub)
        logger.debug("subscribe %r -> token %s", topic, sub.token)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        """Удаляет ровно эту подписку. Повторный вызов — no-op (или ошибка в strict)."""
        with self._lock:
            lst = self._topics.get(subscription.topic)
            removed = lst is not None and lst.remove(subscription) != -1
            if lst is not None and not lst.count():
                del self._topics[subscription.topic]

        if removed:
            logger.debug("unsubscribe token %s (%r)", subscription.token, subscription.topic)
            return
        if self._config.strict_removal:
            raise ObserverNotFound(subscription)
        logger.warning("unsubscribe: токен %s уже снят", subscription.token)

    def unsubscribe_all(self, topic: str) -> int:
        """Снимает всех подписчиков темы, возвращает их количество."""
        with self._lock:
            lst = self._topics.pop(topic, None)
        n = lst.count() if lst is not None else 0
        logger.debug("unsubscribe_all %r -> %d", topic, n)
        return n

    # ===== публикация =====
    def publish(self, topic: str, data: Any = None) -> bool:
        """
        Рассылает (topic, data) снимку подписчиков темы.
        Нет подписчиков -> False, без ошибки.
        """
        with self._lock:
            lst = self._topics.get(topic)
            snapshot = lst.snapshot() if lst is not None else ()

        if not snapshot:
            logger.debug("publish %r: подписчиков нет", topic)
            return False

        logger.debug("publish %r -> %d подписчиков", topic, len(snapshot))
        dispatch(
            snapshot,
            lambda sub: sub.handler(topic, data),
            isolate=self._config.isolate_failures,
        )
        return True

    # ===== служебные =====
    def topics(self) -> list[str]:
        with self._lock:
            return list(self._topics)

    def subscriber_count(self, topic: str) -> int:
        with self._lock:
            lst = self._topics.get(topic)
            return lst.count() if lst is not None else 0
