from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from app.viewmodels.presentation_vm import PresentationController
from app.views.main_window import MainWindow
from infrastructure.audio_session import AudioSession
from infrastructure.image_service import ImageService
from infrastructure.json_repository import JsonCatalogRepository
from infrastructure.logging import init_logging
from infrastructure.qt_media import QtAudioBackend, QtTimer
from infrastructure.settings import JsonSettings, SlideshowSettings, thumbnail_size

BASE_DIR = Path(__file__).parent


def build_presentation(slideshow: SlideshowSettings, app: QApplication) -> PresentationController:
    """Create the controller with a Qt timer and a per-session audio factory."""

    def audio_factory(on_error) -> AudioSession:
        backend = QtAudioBackend(slideshow.audio_path or "", parent=app)
        return AudioSession(backend, volume=slideshow.volume, on_error=on_error)

    return PresentationController(
        QtTimer(parent=app), audio_factory, interval_ms=slideshow.interval_ms
    )


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    log_dir = init_logging()
    settings = JsonSettings(BASE_DIR / "settings.json")
    slideshow = SlideshowSettings.from_settings(settings)
    logger.info(
        "Starting Photo Gallery (logs: {}, slideshow every {} ms, audio: {})",
        log_dir,
        slideshow.interval_ms,
        slideshow.audio_path,
    )

    app = QApplication(argv)

    presentation = build_presentation(slideshow, app)
    vm = GalleryVM(JsonCatalogRepository(), presentation)
    win = MainWindow(
        vm=vm,
        presentation=presentation,
        image_service=ImageService(settings),
        thumb_size=thumbnail_size(settings),
    )

    catalog = argv[1] if len(argv) > 1 else settings.resolve_path("catalog.default_path")
    if catalog and Path(catalog).exists():
        win.load_catalog(catalog)
    else:
        win.refresh()
    win.show()

    code = app.exec()
    # the window normally closes it; this covers abnormal loop exits
    presentation.close()
    return code


if __name__ == "__main__":
    raise SystemExit(main())
