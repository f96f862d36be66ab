from __future__ import annotations
from PySide6.QtCore    import Qt, Signal, Slot # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QToolButton, QFrame,
)

from popcorn.settings import MAX_RATING


# -------------------------------------------------------------------------
class Box(QFrame):
    """Panel with a –/+ button that hides or shows its content."""

    def __init__(self, content: QWidget, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFrameShape(QFrame.StyledPanel)
        self.content = content
        self._open = True

        self.btn_toggle = QToolButton()
        self.btn_toggle.setText("–")
        self.btn_toggle.setAutoRaise(True)
        self.btn_toggle.clicked.connect(self.toggle)

        top = QHBoxLayout()
        top.addStretch()
        top.addWidget(self.btn_toggle)

        root = QVBoxLayout(self)
        root.setContentsMargins(8, 4, 8, 8)
        root.addLayout(top)
        root.addWidget(content, 1)

    @property
    def is_open(self) -> bool:
        return self._open

    @Slot()
    def toggle(self) -> None:
        opening = self._open = not self._open
        self.content.setVisible(opening)
        self.btn_toggle.setText("–" if opening else "+")


# -------------------------------------------------------------------------
def loader_label() -> QLabel:
    lbl = QLabel("Loading...", alignment=Qt.AlignCenter)
    lbl.setStyleSheet("font-size:18px; text-transform:uppercase;")
    return lbl


class ErrorLabel(QLabel):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("", parent, alignment=Qt.AlignCenter)
        self.setWordWrap(True)
        self.set_message(None)

    def set_message(self, message: str | None) -> None:
        self.setText(f"⛔ {message or 'Something went wrong'}")


# -------------------------------------------------------------------------
class _Star(QToolButton):
    hovered = Signal(bool)

    def enterEvent(self, event):
        super().enterEvent(event)
        self.hovered.emit(True)

    def leaveEvent(self, event):
        super().leaveEvent(event)
        self.hovered.emit(False)


class StarRating(QWidget):
    """
    Row of clickable stars. Emits ``ratingChanged(int)`` when the user picks
    a value; hovering previews without emitting.
    """
    ratingChanged = Signal(int)

    def __init__(self, max_rating: int = MAX_RATING, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._rating = 0
        self._hover = 0

        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(2)

        self.stars: list[QToolButton] = []
        for n in range(1, max_rating + 1):
            btn = _Star()
            btn.setAutoRaise(True)
            btn.setCursor(Qt.PointingHandCursor)
            btn.clicked.connect(lambda _checked=False, n=n: self.set_rating(n))
            btn.hovered.connect(lambda inside, n=n: self._preview(n if inside else 0))
            row.addWidget(btn)
            self.stars.append(btn)

        self.lbl_value = QLabel("")
        self.lbl_value.setMinimumWidth(24)
        row.addWidget(self.lbl_value)
        row.addStretch()
        self._paint()

    def rating(self) -> int:
        return self._rating

    @Slot(int)
    def set_rating(self, value: int) -> None:
        self._rating = value
        self._paint()
        self.ratingChanged.emit(value)

    def _preview(self, value: int) -> None:
        self._hover = value
        self._paint()

    def _paint(self) -> None:
        shown = self._hover or self._rating
        for i, btn in enumerate(self.stars, start=1):
            btn.setText("★" if i <= shown else "☆")
            btn.setStyleSheet(f"color:{'#fcc419' if i <= shown else '#868e96'}; font-size:18px;")
        self.lbl_value.setText(str(shown) if shown else "")
