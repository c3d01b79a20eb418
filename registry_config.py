# registry_config.py
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any

import yaml  # type: ignore[import-untyped]

DEFAULT_CONFIG_PATH = "observer_registry.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True, frozen=True)
class RegistryConfig:
    """
    Настройки реестра наблюдателей.

      - strict_removal:   удаление отсутствующего наблюдателя -> ObserverNotFound
                          (по умолчанию тихий no-op)
      - isolate_failures: упавший обработчик не прерывает рассылку,
                          ошибки собираются в HandlerFailure
      - log_level:        уровень логирования для демо
    """

    strict_removal: bool = False
    isolate_failures: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        for name in ("strict_removal", "isolate_failures"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"Поле '{name}' должно быть true/false.")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(
                f"Поле 'log_level' должно быть одним из: {', '.join(_LOG_LEVELS)}."
            )
        # frozen: нормализуем регистр через object.__setattr__
        object.__setattr__(self, "log_level", self.log_level.upper())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegistryConfig:
        known = {f.name for f in fields(cls)}
        unknown = [str(k) for k in sorted(set(data) - known, key=str)]
        if unknown:
            raise ValueError(f"Неизвестные ключи конфигурации: {', '.join(unknown)}.")
        return cls(**data)


def load_config(path: str = DEFAULT_CONFIG_PATH) -> RegistryConfig:
    """
    Читает YAML-маппинг настроек. Пустой файл -> значения по умолчанию.
    FileNotFoundError пробрасывается как есть.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return RegistryConfig()
    if not isinstance(data, dict):
        raise ValueError("YAML конфигурации должен быть маппингом (ключ: значение).")
    return RegistryConfig.from_dict(data)


def configure_logging(level: str = "WARNING") -> None:
    """Базовая настройка логирования для консольного демо."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
