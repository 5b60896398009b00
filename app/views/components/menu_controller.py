"""Menu bar for the gallery window, built from a declarative action table."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMenuBar

# (menu title, [(action name, label, shortcut or None) | None for a separator])
MENU_LAYOUT: list[tuple[str, list[tuple[str, str, QKeySequence | str | None] | None]]] = [
    (
        "File",
        [
            ("open_catalog", "Open Catalog…", QKeySequence.Open),
            None,
            ("exit", "Exit", QKeySequence.Quit),
        ],
    ),
    (
        "View",
        [
            ("slideshow", "Start Slideshow", "F5"),
            ("clear_filters", "Clear Filters", None),
        ],
    ),
    (
        "Log",
        [
            ("open_latest_log", "Open Latest Log", None),
            ("open_log_directory", "Open Log Directory", None),
        ],
    ),
]


class MenuController:
    """Owns the main window's menu bar and its named actions."""

    def __init__(self, main_window: QMainWindow) -> None:
        self.window = main_window
        self.actions: dict[str, QAction] = {}

    def setup_menus(self) -> dict[str, QAction]:
        """Build every menu in `MENU_LAYOUT` and install the bar on the window.

        Returns:
            Mapping of action name to `QAction`.
        """
        menubar = QMenuBar(self.window)
        for title, entries in MENU_LAYOUT:
            menu = menubar.addMenu(title)
            for entry in entries:
                if entry is None:
                    menu.addSeparator()
                    continue
                name, label, shortcut = entry
                action = menu.addAction(label)
                if shortcut is not None:
                    action.setShortcut(QKeySequence(shortcut))
                self.actions[name] = action
        self.window.setMenuBar(menubar)
        return self.actions

    def connect_actions(self, handlers: dict[str, Callable]) -> None:
        """Connect `triggered` of each named action to its handler.

        Actions without a handler stay inert, except "exit" which closes the
        window.
        """
        for name, action in self.actions.items():
            handler = handlers.get(name)
            if handler is None and name == "exit":
                handler = self.window.close
            if handler is not None:
                action.triggered.connect(handler)

    def enable_action(self, name: str, enabled: bool = True) -> None:
        action = self.actions.get(name)
        if action is not None:
            action.setEnabled(enabled)
