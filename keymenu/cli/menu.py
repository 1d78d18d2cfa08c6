from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from string import ascii_lowercase

from .io import MenuIO
from .registry import (
    QUIT_ITEM,
    Menu,
    MenuConfigError,
    MenuItem,
    MenuRegistry,
)

LOG = logging.getLogger(__name__)

MENUS_TITLE = "Menus"
TITLE_SEPARATOR = ": "
ITEM_DELIMITER = ", "
UNCONFIGURED_MESSAGE = "No menus configured. Set up the menu registry first."
ABORTED_MESSAGE = "Aborted."

# The i-th registered menu is selected by the i-th letter. Entry 17 takes "q"
# and shadows Quit.
SELECTOR_KEYS = tuple(ascii_lowercase)


@dataclass(frozen=True, slots=True)
class MenuSelection:
    key: str | None
    item: MenuItem | None
    aborted: bool


@dataclass(frozen=True, slots=True)
class MenuBinding:
    """Zero-argument callable that runs one named menu."""

    runner: MenuRunner
    menu_name: str

    def __call__(self) -> MenuSelection:
        return self.runner.run(self.menu_name)


def with_quit(menu: Menu) -> tuple[MenuItem, ...]:
    return (*menu.items, QUIT_ITEM)


def render_item(item: MenuItem) -> str:
    return f"[{item.key}] {item.label}"


def build_prompt(menu: Menu) -> str:
    rendered = ITEM_DELIMITER.join(render_item(item) for item in with_quit(menu))
    return f"{menu.title}{TITLE_SEPARATOR}{rendered}"


def select_item(key: str, items: Sequence[MenuItem]) -> MenuItem | None:
    return next((item for item in items if item.key == key), None)


def menu_of_menus(registry: MenuRegistry, runner: MenuRunner) -> Menu:
    if len(registry) > len(SELECTOR_KEYS):
        raise MenuConfigError(
            f"Too many menus for single-key selection: {len(registry)} "
            f"(at most {len(SELECTOR_KEYS)})"
        )
    items = tuple(
        MenuItem(
            key=key,
            label=registry.menus[name].title,
            action=MenuBinding(runner=runner, menu_name=name),
        )
        for key, name in zip(SELECTOR_KEYS, registry)
    )
    return Menu(title=MENUS_TITLE, items=items)


class MenuRunner:
    def __init__(self, registry: MenuRegistry, io: MenuIO | None = None) -> None:
        self.registry = registry.freeze()
        self.io = io if io is not None else MenuIO()

    def resolve(self, menu_name: str | None = None) -> Menu:
        menu = self.registry.get(menu_name)
        if menu is not None:
            return menu
        if menu_name is not None:
            LOG.debug("unknown menu %r, showing menu of menus", menu_name)
        return menu_of_menus(self.registry, self)

    def run(self, menu_name: str | None = None) -> MenuSelection:
        if not self.registry:
            self.io.write(UNCONFIGURED_MESSAGE)
            return MenuSelection(key=None, item=None, aborted=True)

        menu = self.resolve(menu_name)
        items = with_quit(menu)
        choices = frozenset(item.key for item in items)
        key = self.io.read_key(build_prompt(menu), choices)

        item = select_item(key, items)
        if item is None or item.action is None:
            LOG.debug("menu %r aborted with key %r", menu.title, key)
            self.io.write(ABORTED_MESSAGE)
            return MenuSelection(key=key, item=item, aborted=True)

        LOG.debug("menu %r: dispatching %r", menu.title, item.label)
        if isinstance(item.action, MenuBinding):
            # The nested menu decides the outcome.
            return item.action()
        item.action()
        return MenuSelection(key=key, item=item, aborted=False)


def bind(runner: MenuRunner, menu_name: str) -> MenuBinding:
    return MenuBinding(runner=runner, menu_name=menu_name)
