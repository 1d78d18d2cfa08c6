from .io import MenuIO
from .menu import (
    MenuBinding,
    MenuRunner,
    MenuSelection,
    bind,
    build_prompt,
    menu_of_menus,
    select_item,
    with_quit,
)
from .registry import (
    Menu,
    MenuConfigError,
    MenuItem,
    MenuRegistry,
    load_entrypoint,
    load_registry,
    parse_registry,
)

__all__ = [
    "MenuIO",
    "Menu",
    "MenuItem",
    "MenuRegistry",
    "MenuConfigError",
    "MenuRunner",
    "MenuSelection",
    "MenuBinding",
    "bind",
    "build_prompt",
    "menu_of_menus",
    "select_item",
    "with_quit",
    "load_entrypoint",
    "load_registry",
    "parse_registry",
]
