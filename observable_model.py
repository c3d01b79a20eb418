# observable_model.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from mvc_observer import Observer, Subject
from registry_config import RegistryConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ModelChange:
    """Контекст уведомления: какие атрибуты изменились, (old, new)."""

    model: ObservableModel
    changed: dict[str, tuple[Any, Any]]


class CallbackView:
    """Обёртка: голая функция callback(change) как Observer."""

    def __init__(self, callback: Callable[[ModelChange], None]) -> None:
        self.callback = callback

    def update(self, context: Any) -> None:
        self.callback(context)

    def __repr__(self) -> str:
        return f"CallbackView({self.callback!r})"


class ObservableModel:
    """
    Модель (MVC): хранит атрибуты и уведомляет представления об изменениях.
    Subject держится членом класса, а не подмешивается.

    Уведомление уходит только если set() реально что-то поменял.

    Ключевые аргументы конструктора `defaults` и `config` служебные:
    атрибуты модели с такими именами задаются через defaults
    (ObservableModel({"config": ...})) или через set().
    """

    def __init__(
        self,
        defaults: dict[str, Any] | None = None,
        *,
        config: RegistryConfig | None = None,
        **attrs: Any,
    ) -> None:
        self._attrs: dict[str, Any] = {**(defaults or {}), **attrs}
        self._subject = Subject(config)

    # ===== представления =====
    def add_view(self, view: Observer) -> None:
        self._subject.add_observer(view)

    def remove_view(self, view: Observer) -> None:
        self._subject.remove_observer(view)

    def add_subscriber(self, callback: Callable[[ModelChange], None]) -> CallbackView:
        view = CallbackView(callback)
        self.add_view(view)
        return view

    @property
    def views(self) -> Subject:
        return self._subject

    # ===== атрибуты =====
    def get(self, name: str, default: Any = None) -> Any:
        return self._attrs.get(name, default)

    def set(self, **changes: Any) -> bool:
        changed: dict[str, tuple[Any, Any]] = {}
        for key, value in changes.items():
            old = self._attrs.get(key)
            if key in self._attrs and old == value:
                continue
            self._attrs[key] = value
            changed[key] = (old, value)

        if not changed:
            return False

        logger.debug("%r: изменены %s", self, ", ".join(changed))
        self._subject.notify(ModelChange(self, changed))
        return True

    def to_dict(self) -> dict[str, Any]:
        return dict(self._attrs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attrs!r})"


class Photo(ObservableModel):
    """Фото галереи. Пустой src при создании заменяется заглушкой."""

    DEFAULTS: dict[str, Any] = {
        "src": "placeholder.jpg",
        "caption": "A default image",
        "viewed": False,
    }

    def __init__(
        self,
        defaults: dict[str, Any] | None = None,
        *,
        config: RegistryConfig | None = None,
        **attrs: Any,
    ) -> None:
        super().__init__({**self.DEFAULTS, **(defaults or {})}, config=config, **attrs)
        if not self._attrs.get("src"):
            self._attrs["src"] = self.DEFAULTS["src"]


class ObservableCollection:
    """
    Группа моделей: подписывается на каждую и пересылает её ModelChange
    своим наблюдателям, так что следить за каждой моделью отдельно не нужно.

    Модель входит в коллекцию не более одного раза (сравнение по ссылке).
    """

    def __init__(
        self,
        models: Iterable[ObservableModel] = (),
        *,
        config: RegistryConfig | None = None,
    ) -> None:
        self._subject = Subject(config)
        self._members: list[tuple[ObservableModel, CallbackView]] = []
        for m in models:
            self.add(m)

    # ===== состав =====
    def add(self, model: ObservableModel) -> bool:
        if self._find(model) != -1:
            return False
        view = model.add_subscriber(self._subject.notify)
        self._members.append((model, view))
        logger.debug("collection: +%r (%d)", model, len(self._members))
        return True

    def remove(self, model: ObservableModel) -> bool:
        idx = self._find(model)
        if idx == -1:
            return False
        _, view = self._members.pop(idx)
        model.remove_view(view)
        logger.debug("collection: -%r (%d)", model, len(self._members))
        return True

    def _find(self, model: ObservableModel) -> int:
        for i, (m, _) in enumerate(self._members):
            if m is model:
                return i
        return -1

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[ObservableModel]:
        return iter([m for m, _ in self._members])

    def __contains__(self, model: object) -> bool:
        return any(m is model for m, _ in self._members)

    # ===== наблюдатели =====
    def add_view(self, view: Observer) -> None:
        self._subject.add_observer(view)

    def remove_view(self, view: Observer) -> None:
        self._subject.remove_observer(view)

    def add_subscriber(self, callback: Callable[[ModelChange], None]) -> CallbackView:
        view = CallbackView(callback)
        self.add_view(view)
        return view

    # ===== выборки =====
    def filter(self, predicate: Callable[[ObservableModel], bool]) -> list[ObservableModel]:
        return [m for m, _ in self._members if predicate(m)]


class PhotoGallery(ObservableCollection):
    def viewed(self) -> list[ObservableModel]:
        return self.filter(lambda photo: bool(photo.get("viewed")))

    def unviewed(self) -> list[ObservableModel]:
        return self.filter(lambda photo: not photo.get("viewed"))
