from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
import importlib
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import cast

LOG = logging.getLogger(__name__)

MenuAction = Callable[[], object]

QUIT_KEY = "q"
QUIT_LABEL = "Quit"


class MenuConfigError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class MenuItem:
    key: str
    label: str
    action: MenuAction | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or len(self.key) != 1:
            raise MenuConfigError(f"Menu key must be a single character: {self.key!r}")


QUIT_ITEM = MenuItem(key=QUIT_KEY, label=QUIT_LABEL)


@dataclass(frozen=True, slots=True)
class Menu:
    title: str
    items: tuple[MenuItem, ...] = ()


class MenuRegistry:
    """Ordered mapping of menu name to :class:`Menu`.

    Insertion order is kept; it decides the selector keys of the menu of menus.
    Menus may be added until :meth:`freeze` is called; a runner freezes the
    registry it is given.
    """

    __slots__ = ("_menus", "_view", "_frozen")

    def __init__(self, menus: Mapping[str, Menu] | None = None) -> None:
        self._menus: dict[str, Menu] = {}
        self._view = MappingProxyType(self._menus)
        self._frozen = False
        for name, menu in (menus or {}).items():
            self.add(name, menu)

    @classmethod
    def from_menus(cls, menus: Iterable[tuple[str, Menu]]) -> MenuRegistry:
        return cls(dict(menus))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, name: str, menu: Menu) -> MenuRegistry:
        if self._frozen:
            raise MenuConfigError(f"Menu registry is frozen; cannot add {name!r}")
        _validate_menu(name, menu)
        if name in self._menus:
            LOG.warning("menu %r registered twice, replacing it", name)
        self._menus[name] = menu
        return self

    def freeze(self) -> MenuRegistry:
        self._frozen = True
        return self

    @property
    def menus(self) -> Mapping[str, Menu]:
        return self._view

    def get(self, name: str | None) -> Menu | None:
        if name is None:
            return None
        return self._menus.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._menus)

    def __iter__(self) -> Iterator[str]:
        return iter(self._menus)

    def __len__(self) -> int:
        return len(self._menus)

    def __contains__(self, name: object) -> bool:
        return name in self._menus

    def __repr__(self) -> str:
        return f"MenuRegistry({list(self._menus)!r})"


def _validate_menu(name: str, menu: Menu) -> None:
    if not isinstance(name, str) or not name:
        raise MenuConfigError(f"Menu name must be a non-empty string: {name!r}")
    if not isinstance(menu, Menu):
        raise MenuConfigError(f"Menu {name!r} is not a Menu: {menu!r}")

    seen: set[str] = set()
    for item in menu.items:
        if item.key == QUIT_KEY:
            LOG.warning("menu %r: item %r shadows the quit key", name, item.label)
        if item.key in seen:
            LOG.warning(
                "menu %r: duplicate key %r, first item wins", name, item.key
            )
        seen.add(item.key)


def load_entrypoint(target: str) -> MenuAction:
    module_name, sep, func_name = target.partition(":")
    if sep != ":" or not module_name or not func_name:
        raise MenuConfigError(f"Invalid entrypoint: {target}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise MenuConfigError(f"Cannot import entrypoint module: {target}") from exc
    func = getattr(module, func_name, None)
    if not callable(func):
        raise MenuConfigError(f"Entrypoint is not callable: {target}")

    return cast(MenuAction, func)


def parse_registry(payload: object) -> MenuRegistry:
    """Build a registry from decoded JSON.

    Expected shape::

        {"menus": {"<name>": {"title": "...",
                              "items": [{"key": "k", "label": "...",
                                         "action": "module:func"}]}}}

    ``action`` is optional; an item without one aborts when picked.
    """
    if not isinstance(payload, dict):
        raise MenuConfigError("Menu config root must be an object")
    raw_menus = cast(dict[str, object], payload).get("menus")
    if not isinstance(raw_menus, dict):
        raise MenuConfigError("Menu config must contain a 'menus' object")

    menus: dict[str, Menu] = {}
    for name, raw_menu in cast(dict[str, object], raw_menus).items():
        menus[name] = _parse_menu(name, raw_menu)
    return MenuRegistry(menus)


def _parse_menu(name: str, raw_menu: object) -> Menu:
    if not isinstance(raw_menu, dict):
        raise MenuConfigError(f"Menu {name!r} must be an object")
    menu_dict = cast(dict[str, object], raw_menu)

    title = menu_dict.get("title")
    if not isinstance(title, str) or not title.strip():
        raise MenuConfigError(f"Menu {name!r} is missing a title")

    raw_items = menu_dict.get("items", [])
    if not isinstance(raw_items, list):
        raise MenuConfigError(f"Menu {name!r}: 'items' must be a list")

    items: list[MenuItem] = []
    for index, raw_item in enumerate(cast(list[object], raw_items), start=1):
        if not isinstance(raw_item, dict):
            raise MenuConfigError(f"Menu {name!r}: item {index} must be an object")
        item_dict = cast(dict[str, object], raw_item)
        key = item_dict.get("key")
        label = item_dict.get("label")
        if not isinstance(label, str):
            raise MenuConfigError(f"Menu {name!r}: item {index} is missing a label")
        if not isinstance(key, str):
            raise MenuConfigError(f"Menu {name!r}: item {index} is missing a key")

        raw_action = item_dict.get("action")
        action: MenuAction | None = None
        if raw_action is not None:
            if not isinstance(raw_action, str):
                raise MenuConfigError(
                    f"Menu {name!r}: item {index} action must be 'module:function'"
                )
            action = load_entrypoint(raw_action)
        items.append(MenuItem(key=key, label=label, action=action))

    return Menu(title=title, items=tuple(items))


def load_registry(path: Path | str) -> MenuRegistry:
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MenuConfigError(f"Cannot read menu config {config_path}: {exc}") from exc
    try:
        payload = cast(object, json.loads(text))
    except json.JSONDecodeError as exc:
        raise MenuConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

    registry = parse_registry(payload)
    LOG.debug("loaded %d menus from %s", len(registry), config_path)
    return registry
