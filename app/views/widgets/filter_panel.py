"""Filter panel: title search plus tag and category multi-selects."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from app.views.constants import ITEM_ID_ROLE


class FilterPanel(QWidget):
    """Emits the selected facets whenever the user changes one."""

    searchChanged = Signal(str)
    tagsChanged = Signal(list)  # list[str] of tag ids
    categoriesChanged = Signal(list)  # list[str] of category ids
    clearRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        root = QVBoxLayout(self)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search by title...")
        self.search_edit.setClearButtonEnabled(True)
        root.addWidget(self.search_edit)

        root.addWidget(QLabel("<b>Tags</b>"))
        self.tag_list = QListWidget()
        root.addWidget(self.tag_list)

        root.addWidget(QLabel("<b>Categories</b>"))
        self.category_list = QListWidget()
        root.addWidget(self.category_list)

        btns = QHBoxLayout()
        self.btn_clear = QPushButton("Clear Filters")
        btns.addStretch(1)
        btns.addWidget(self.btn_clear)
        root.addLayout(btns)

        self.search_edit.textChanged.connect(self.searchChanged.emit)
        self.tag_list.itemChanged.connect(lambda _item: self.tagsChanged.emit(self.selected_tags()))
        self.category_list.itemChanged.connect(
            lambda _item: self.categoriesChanged.emit(self.selected_categories())
        )
        self.btn_clear.clicked.connect(self.clearRequested.emit)

    # Public API
    def set_options(
        self, tags: list[tuple[str, str]], categories: list[tuple[str, str]]
    ) -> None:
        """Populate the lists with `(value, label)` options, all unchecked."""
        self._fill(self.tag_list, tags)
        self._fill(self.category_list, categories)

    def selected_tags(self) -> list[str]:
        return self._checked_values(self.tag_list)

    def selected_categories(self) -> list[str]:
        return self._checked_values(self.category_list)

    def reset(self) -> None:
        """Clear the search text and uncheck everything without emitting per item."""
        for lst in (self.tag_list, self.category_list):
            lst.blockSignals(True)
            for i in range(lst.count()):
                lst.item(i).setCheckState(Qt.Unchecked)
            lst.blockSignals(False)
        self.search_edit.blockSignals(True)
        self.search_edit.clear()
        self.search_edit.blockSignals(False)

    # Internals
    def _fill(self, lst: QListWidget, options: list[tuple[str, str]]) -> None:
        lst.blockSignals(True)
        lst.clear()
        for value, label in options:
            item = QListWidgetItem(label)
            item.setData(ITEM_ID_ROLE, value)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Unchecked)
            lst.addItem(item)
        lst.blockSignals(False)

    def _checked_values(self, lst: QListWidget) -> list[str]:
        values: list[str] = []
        for i in range(lst.count()):
            item = lst.item(i)
            if item.checkState() == Qt.Checked:
                values.append(str(item.data(ITEM_ID_ROLE)))
        return values
