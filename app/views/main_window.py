"""Gallery main window: filter panel, thumbnail grid and slideshow launcher."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox
from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from app.viewmodels.photo_vm import PhotoVM
from app.viewmodels.presentation_vm import PresentationController
from app.views.components.menu_controller import MenuController
from app.views.dialogs.photo_detail_dialog import PhotoDetailDialog
from app.views.gallery_grid import GalleryGrid
from app.views.image_tasks import ImageTaskRunner
from app.views.layout.layout_manager import LayoutManager
from app.views.slideshow_window import SlideshowWindow
from app.views.widgets.filter_panel import FilterPanel
from infrastructure.logging import open_latest_log, open_log_directory


class MainWindow(QMainWindow):
    """Main gallery window.

    The window wires user input to `GalleryVM` and re-renders the grid from
    the view-model after every change; it keeps no filter state of its own.
    """

    # Receiver signal for ImageTaskRunner
    imageLoaded = Signal(str, str, object)  # token, path, QImage

    def __init__(
        self,
        vm: GalleryVM,
        presentation: PresentationController,
        image_service: Any | None = None,
        thumb_size: int | None = None,
    ) -> None:
        """Initialize MainWindow with its services.

        Args:
            vm: Gallery view-model
            presentation: Slideshow controller shared with the slideshow window
            image_service: Image service for thumbnails and slides
            thumb_size: Maximum grid thumbnail side in pixels
        """
        super().__init__()
        self._vm = vm
        self._presentation = presentation
        self._img = image_service

        self.menu_controller = MenuController(self)
        self.layout_manager = LayoutManager(self)

        self._runner = ImageTaskRunner(service=self._img, receiver=self)
        self.filter_panel = FilterPanel()
        self.grid = GalleryGrid(None, self._runner, thumb_size=thumb_size)
        self.slideshow = SlideshowWindow(presentation, self._img)

        self.setWindowTitle("Photo Gallery")
        self.setCentralWidget(self.layout_manager.setup_main_layout(self.filter_panel, self.grid))
        self.layout_manager.setup_initial_window_size()
        self.menu_controller.setup_menus()

        self._connect_signals()
        self.statusBar().showMessage("Ready", 3000)

    def _connect_signals(self) -> None:
        handlers = {
            "open_catalog": self.on_open_catalog,
            "exit": self.close,
            "slideshow": self.on_start_slideshow,
            "clear_filters": self.on_clear_filters,
            "open_latest_log": open_latest_log,
            "open_log_directory": open_log_directory,
        }
        self.menu_controller.connect_actions(handlers)

        self.filter_panel.searchChanged.connect(self._on_search_changed)
        self.filter_panel.tagsChanged.connect(self._on_tags_changed)
        self.filter_panel.categoriesChanged.connect(self._on_categories_changed)
        self.filter_panel.clearRequested.connect(self.on_clear_filters)
        self.grid.photoActivated.connect(self.on_photo_activated)
        self.imageLoaded.connect(self.grid.on_image_loaded)

    # Public API

    def load_catalog(self, path: str) -> bool:
        """Load `path` into the view-model; on failure keep the current catalog."""
        try:
            self._vm.load(path)
        except (OSError, ValueError) as ex:
            logger.error("Failed to load catalog {}: {}", path, ex)
            QMessageBox.warning(self, "Open Catalog", f"Failed to load catalog:\n{ex}")
            return False
        self.filter_panel.set_options(self._vm.tag_options, self._vm.category_options)
        self.filter_panel.reset()
        self._vm.clear_filters()
        self.refresh()
        return True

    def refresh(self) -> None:
        """Re-render the grid and status from the view-model."""
        photos = [PhotoVM(p) for p in self._vm.filtered]
        self.grid.show_photos(photos)
        self.menu_controller.enable_action("slideshow", self._vm.can_start_slideshow)
        self.statusBar().showMessage(f"{len(photos)} of {self._vm.photo_count} photos")

    # Menu action handlers

    def on_open_catalog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Catalog", self._vm.get_source_path() or "", "Catalog (*.json)"
        )
        if path:
            self.load_catalog(path)

    def on_start_slideshow(self) -> None:
        if not self._vm.start_slideshow():
            self.statusBar().showMessage("No photos to show", 3000)
            return
        self.slideshow.showFullScreen()
        self.slideshow.activateWindow()

    def on_clear_filters(self) -> None:
        self.filter_panel.reset()
        self._vm.clear_filters()
        self.refresh()

    def on_photo_activated(self, photo_id: str) -> None:
        photo = self._vm.photo_by_id(photo_id)
        if photo is None:
            logger.warning("Activated photo not in catalog: {}", photo_id)
            return
        dlg = PhotoDetailDialog(
            PhotoVM(photo),
            self._vm.tag_names_for(photo),
            self._vm.category_names_for(photo),
            self._img,
            self,
        )
        dlg.exec()

    # Filter handlers

    def _on_search_changed(self, text: str) -> None:
        self._vm.set_search(text)
        self.refresh()

    def _on_tags_changed(self, tag_ids: list) -> None:
        self._vm.set_selected_tags(tag_ids)
        self.refresh()

    def _on_categories_changed(self, category_ids: list) -> None:
        self._vm.set_selected_categories(category_ids)
        self.refresh()

    # Qt events

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Tear down the slideshow so no timer or audio survives the app window."""
        self.slideshow.dispose()
        self.slideshow.deleteLater()
        event.accept()
