"""LayoutManager: Manages main window layout and splitter behavior."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication, QHBoxLayout, QMainWindow, QSplitter, QWidget


class LayoutManager:
    """Builds the filter-panel | grid splitter and sizes the window."""

    FILTER_STRETCH_FACTOR = 2
    GRID_STRETCH_FACTOR = 8
    FILTER_PANEL_WIDTH = 260
    WINDOW_SIZE_RATIO = 0.7

    def __init__(self, main_window: QMainWindow) -> None:
        self.window = main_window
        self.splitter: QSplitter | None = None

    def setup_main_layout(self, filter_widget: QWidget, grid_widget: QWidget) -> QWidget:
        """Create the main horizontal splitter layout.

        Args:
            filter_widget: Widget containing the filter panel
            grid_widget: Widget containing the gallery grid

        Returns:
            Central widget configured with the layout
        """
        central = QWidget(self.window)
        root = QHBoxLayout(central)

        self.splitter = QSplitter(Qt.Horizontal)
        self.splitter.addWidget(filter_widget)
        self.splitter.addWidget(grid_widget)
        self.splitter.setStretchFactor(0, self.FILTER_STRETCH_FACTOR)
        self.splitter.setStretchFactor(1, self.GRID_STRETCH_FACTOR)
        root.addWidget(self.splitter)

        return central

    def setup_initial_window_size(self) -> None:
        """Setup initial window size based on screen dimensions."""
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        rect = screen.availableGeometry()
        width = int(rect.width() * self.WINDOW_SIZE_RATIO)
        height = int(rect.height() * self.WINDOW_SIZE_RATIO)
        self.window.resize(width, height)
        if self.splitter is not None:
            self.splitter.setSizes([self.FILTER_PANEL_WIDTH, max(1, width - self.FILTER_PANEL_WIDTH)])
