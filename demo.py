# demo.py
from __future__ import annotations

import argparse
import logging
import os
from typing import Any

from mvc_observer import Subject
from observable_model import ModelChange, Photo
from registry_config import DEFAULT_CONFIG_PATH, RegistryConfig, configure_logging, load_config
from topic_pubsub import PubSub

logger = logging.getLogger(__name__)


# ---------- чекбоксы: один управляющий Subject, N наблюдателей ----------
class Checkbox:
    def __init__(self, name: str) -> None:
        self.name = name
        self.checked = False

    def update(self, context: Any) -> None:
        self.checked = bool(context)


def run_checkbox(config: RegistryConfig) -> list[Checkbox]:
    control = Subject(config)
    boxes = [Checkbox(f"cb{i}") for i in range(1, 4)]
    for cb in boxes:
        control.add_observer(cb)

    control.notify(True)
    print("Отмечены:", ", ".join(cb.name for cb in boxes if cb.checked))

    control.remove_observer(boxes[0])
    control.notify(False)
    print("После снятия:", {cb.name: cb.checked for cb in boxes})
    return boxes


# ---------- почта: две подписки на одну тему ----------
def run_mailbox(config: RegistryConfig) -> int:
    channel = PubSub(config)
    counter = {"n": 0}

    def preview(topic: str, data: Any) -> None:
        print(f"[{topic}] от {data['sender']}: {data['body']}")

    def count_new(topic: str, data: Any) -> None:
        counter["n"] += 1
        print(f"Новых писем: {counter['n']}")

    sub1 = channel.subscribe("inbox/newMessage", preview)
    sub2 = channel.subscribe("inbox/newMessage", count_new)

    channel.publish(
        "inbox/newMessage",
        {"sender": "hello@google.com", "body": "Hey there! How are you doing today?"},
    )

    channel.unsubscribe(sub1)
    channel.unsubscribe(sub2)
    delivered = channel.publish("inbox/newMessage", {"sender": "-", "body": "-"})
    print("После отписки доставлено:", delivered)
    return counter["n"]


# ---------- модель + представление ----------
def run_model(config: RegistryConfig) -> list[str]:
    photo = Photo(config=config)
    rendered: list[str] = []

    def render(change: ModelChange) -> None:
        html = (
            f'<li class="photo"><h2>{change.model.get("caption")}</h2>'
            f'<img src="{change.model.get("src")}"/></li>'
        )
        rendered.append(html)
        print("render:", html)

    photo.add_subscriber(render)
    photo.set(src="sunset.jpg", caption="Sunset")
    photo.set(src="sunset.jpg")  # без изменений, рендера нет
    photo.set(viewed=True)
    return rendered


SCENARIOS = {
    "checkbox": run_checkbox,
    "mailbox": run_mailbox,
    "model": run_model,
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Демо реестра наблюдателей")
    parser.add_argument(
        "--scenario", "-s",
        choices=[*SCENARIOS, "all"],
        default="all",
    )
    parser.add_argument(
        "--config", "-c",
        help=f"YAML с настройками (по умолчанию {DEFAULT_CONFIG_PATH}, если есть)",
        default=None,
    )
    args = parser.parse_args(argv)

    if args.config:
        config = load_config(args.config)
    elif os.path.exists(DEFAULT_CONFIG_PATH):
        config = load_config(DEFAULT_CONFIG_PATH)
    else:
        config = RegistryConfig()
    configure_logging(config.log_level)

    names = list(SCENARIOS) if args.scenario == "all" else [args.scenario]
    for name in names:
        print(f"==== {name} ====")
        logger.info("Сценарий %s", name)
        SCENARIOS[name](config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
