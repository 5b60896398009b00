"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

from PySide6.QtCore import Qt

# Data roles
ITEM_ID_ROLE: int = Qt.UserRole  # tag/category id on filter list items

# Grid defaults
DEFAULT_THUMB_SIZE: int = 320  # overridable by settings.json
GRID_MIN_THUMB_PX: int = 160
GRID_SPACING_PX: int = 8
GRID_MARGIN_RATIO: float = 0.02  # left/right and top/bottom

# Slideshow
SLIDESHOW_BACKGROUND: str = "background-color: black;"
SLIDESHOW_CONTROLS_STYLE: str = (
    "QWidget#controls { background-color: rgba(0, 0, 0, 128); }"
    "QPushButton, QLabel { color: white; background: transparent; border: none; font-size: 18px; }"
    "QPushButton:hover { color: #60a5fa; }"
)
ICON_PLAY: str = "▶"
ICON_PAUSE: str = "⏸"
ICON_MUTED: str = "🔇"
ICON_UNMUTED: str = "🔊"
ICON_PREV: str = "‹"
ICON_NEXT: str = "›"
ICON_CLOSE: str = "✕"
