from __future__ import annotations
from typing import Sequence

from PySide6.QtCore    import Qt, Signal # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QFrame, QLabel, QVBoxLayout, QHBoxLayout, QListWidget, QListWidgetItem,
    QScrollArea, QToolButton, QWidget,
)

from popcorn.metadata.core.models import MovieSummary, WatchedEntry
from popcorn.metadata.analytics.stats import WatchedSummary, format_stat


class MoviesList(QListWidget):
    """Search results; emits the IMDb id of the clicked row."""
    movieSelected = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("MoviesList")
        self.setSpacing(2)
        self.itemClicked.connect(
            lambda item: self.movieSelected.emit(item.data(Qt.UserRole))
        )

    def set_movies(self, movies: Sequence[MovieSummary]) -> None:
        self.clear()
        for m in movies:
            item = QListWidgetItem(f"{m.title}\n🗓 {m.year or '—'}")
            item.setData(Qt.UserRole, m.imdb_id)
            item.setToolTip(m.title)
            self.addItem(item)


class WatchedSummaryView(QFrame):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("WatchedSummary")
        self.setFrameShape(QFrame.StyledPanel)

        title = QLabel("Movies you watched")
        title.setStyleSheet("font-weight:bold; text-transform:uppercase;")

        self.lbl_count   = QLabel()
        self.lbl_imdb    = QLabel()
        self.lbl_user    = QLabel()
        self.lbl_runtime = QLabel()

        row = QHBoxLayout()
        for w in (self.lbl_count, self.lbl_imdb, self.lbl_user, self.lbl_runtime):
            row.addWidget(w)

        root = QVBoxLayout(self)
        root.addWidget(title)
        root.addLayout(row)

    def set_summary(self, s: WatchedSummary) -> None:
        self.lbl_count.setText(f"#️⃣ {s.count} movies")
        self.lbl_imdb.setText(f"⭐️ {format_stat(s.avg_imdb_rating)}")
        self.lbl_user.setText(f"🌟 {format_stat(s.avg_user_rating)}")
        self.lbl_runtime.setText(f"⏳ {format_stat(s.avg_runtime)} min")


class _WatchedRow(QFrame):
    deleteRequested = Signal(str)

    def __init__(self, entry: WatchedEntry, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("WatchedRow")
        self.imdb_id = entry.imdb_id

        title = QLabel(entry.title)
        title.setWordWrap(True)
        title.setStyleSheet("font-weight:bold;")

        rating = "—" if entry.imdb_rating is None else f"{entry.imdb_rating:g}"
        runtime = "—" if entry.runtime_minutes is None else entry.runtime_minutes
        stats = QLabel(f"⭐️ {rating}    🌟 {entry.user_rating}    ⏳ {runtime} min")

        self.btn_delete = QToolButton()
        self.btn_delete.setText("×")
        self.btn_delete.setToolTip("Remove from list")
        self.btn_delete.clicked.connect(lambda: self.deleteRequested.emit(self.imdb_id))

        text = QVBoxLayout()
        text.addWidget(title)
        text.addWidget(stats)

        row = QHBoxLayout(self)
        row.setContentsMargins(6, 4, 6, 4)
        row.addLayout(text, 1)
        row.addWidget(self.btn_delete, 0, Qt.AlignVCenter)


class WatchedList(QScrollArea):
    """Watched entries, one row each, with a delete button per row."""
    deleteRequested = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWidgetResizable(True)
        self._body = QWidget()
        self._rows = QVBoxLayout(self._body)
        self._rows.setAlignment(Qt.AlignTop)
        self.setWidget(self._body)
        self._row_widgets: list[_WatchedRow] = []

    def rows(self) -> list[_WatchedRow]:
        return list(self._row_widgets)

    def set_entries(self, entries: Sequence[WatchedEntry]) -> None:
        for w in self._row_widgets:
            self._rows.removeWidget(w)
            w.deleteLater()
        self._row_widgets = []
        for e in entries:
            row = _WatchedRow(e)
            row.deleteRequested.connect(self.deleteRequested)
            self._rows.addWidget(row)
            self._row_widgets.append(row)
