from .cli import (
    Menu,
    MenuBinding,
    MenuConfigError,
    MenuIO,
    MenuItem,
    MenuRegistry,
    MenuRunner,
    MenuSelection,
    bind,
    build_prompt,
    load_registry,
    menu_of_menus,
)

__all__ = [
    "Menu",
    "MenuItem",
    "MenuRegistry",
    "MenuConfigError",
    "MenuIO",
    "MenuRunner",
    "MenuSelection",
    "MenuBinding",
    "bind",
    "build_prompt",
    "menu_of_menus",
    "load_registry",
]
