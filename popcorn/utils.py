import logging
import re
from typing import Optional

from PySide6.QtCore    import Qt # type: ignore
from PySide6.QtGui     import QColor, QPalette # type: ignore
from PySide6.QtWidgets import QApplication # type: ignore

from popcorn.settings import LOG_PATH, ACCENT_COLOR

_LOGGER = logging.getLogger("popcorn")


def _ensure_handler() -> logging.Logger:
    """Attach the debug-file handler exactly once."""
    if getattr(_LOGGER, "_popcorn_configured", False):
        return _LOGGER

    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%S")
    )
    _LOGGER.addHandler(handler)
    _LOGGER.setLevel(logging.DEBUG)
    setattr(_LOGGER, "_popcorn_configured", True)
    return _LOGGER


def log_debug(message: str) -> None:
    """Append timestamped message to the log file."""
    _ensure_handler().debug(message)


_MINUTES_RE = re.compile(r"(\d+)\s*min", re.I)


def parse_minutes(raw: str | int | None) -> Optional[int]:
    """'142 min' → 142, anything unparsable → None."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    m = _MINUTES_RE.search(raw)
    return int(m.group(1)) if m else None


def parse_float(raw: str | float | None) -> Optional[float]:
    """OMDb numbers come as text and use 'N/A' for missing."""
    if raw is None:
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def na_to_none(value: str | None) -> Optional[str]:
    return None if value in (None, "", "N/A") else value


def apply_dark_palette(app: QApplication) -> None:
    """Apply a dark Fusion palette to the application."""
    palette = QPalette()
    palette.setColor(QPalette.Window,        QColor("#212529"))
    palette.setColor(QPalette.WindowText,    QColor("#dee2e6"))
    palette.setColor(QPalette.Base,          QColor("#2b3035"))
    palette.setColor(QPalette.AlternateBase, QColor("#343a40"))
    palette.setColor(QPalette.Button,        QColor("#343a40"))
    palette.setColor(QPalette.ButtonText,    QColor("#dee2e6"))
    palette.setColor(QPalette.Text,          QColor("#dee2e6"))
    palette.setColor(QPalette.Link,          QColor(ACCENT_COLOR))
    palette.setColor(QPalette.Highlight,     QColor(ACCENT_COLOR))
    palette.setColor(QPalette.HighlightedText, Qt.white)
    app.setStyle("Fusion")
    app.setPalette(palette)
