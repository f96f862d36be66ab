from __future__ import annotations
from PySide6.QtCore    import Qt, Signal, Slot # type: ignore
from PySide6.QtWidgets import ( # type: ignore
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QStackedWidget,
)

from popcorn.metadata.core.models import MovieDetail, WatchedEntry
from popcorn.metadata.fetchers import DetailState
from popcorn.gui.widgets import ErrorLabel, StarRating, loader_label


class MovieDetailsPage(QWidget):
    """
    Detail panel for the selected movie.

    Shows a loader while the record is in flight, the error line if it
    failed, otherwise the full card. Emits ``addRequested(detail, rating)``
    when the user adds the movie to the list.
    """
    closeRequested = Signal()
    addRequested   = Signal(object, int)

    _LOADING, _ERROR, _CARD = range(3)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._detail: MovieDetail | None = None
        self._build_ui()

    # ------------------------------------------------------------------ ui
    def _build_ui(self) -> None:
        self.stack = QStackedWidget()
        self.stack.addWidget(loader_label())
        self.error = ErrorLabel()
        self.stack.addWidget(self.error)

        card = QWidget()
        lay  = QVBoxLayout(card)
        lay.setAlignment(Qt.AlignTop)

        head = QHBoxLayout()
        self.btn_back = QPushButton("←")
        self.btn_back.setFixedWidth(36)
        self.btn_back.setAutoDefault(False)
        self.btn_back.clicked.connect(self.closeRequested)
        self.lbl_title = QLabel()
        self.lbl_title.setWordWrap(True)
        self.lbl_title.setStyleSheet("font-size:20px; font-weight:bold;")
        head.addWidget(self.btn_back, 0, Qt.AlignTop)
        head.addWidget(self.lbl_title, 1)
        lay.addLayout(head)

        self.lbl_released = QLabel()
        self.lbl_genre    = QLabel()
        self.lbl_imdb     = QLabel()
        for w in (self.lbl_released, self.lbl_genre, self.lbl_imdb):
            lay.addWidget(w)

        # rating block: either "already rated" or stars + add button
        self.lbl_rated = QLabel()
        self.stars     = StarRating()
        self.btn_add   = QPushButton("+ Add to list")
        self.btn_add.setAutoDefault(False)
        self.stars.ratingChanged.connect(lambda r: self.btn_add.setVisible(r > 0))
        self.btn_add.clicked.connect(self._on_add)
        lay.addWidget(self.lbl_rated)
        lay.addWidget(self.stars)
        lay.addWidget(self.btn_add)

        self.lbl_plot     = QLabel()
        self.lbl_plot.setWordWrap(True)
        self.lbl_actors   = QLabel()
        self.lbl_actors.setWordWrap(True)
        self.lbl_director = QLabel()
        for w in (self.lbl_plot, self.lbl_actors, self.lbl_director):
            lay.addWidget(w)

        self.stack.addWidget(card)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addWidget(self.stack)

    # ----------------------------------------------------------- rendering
    def show_state(self, state: DetailState, watched: WatchedEntry | None) -> None:
        if state.loading:
            self.stack.setCurrentIndex(self._LOADING)
            return
        if state.error is not None or state.detail is None:
            self.error.set_message(state.error)
            self.stack.setCurrentIndex(self._ERROR)
            return
        self._fill(state.detail, watched)
        self.stack.setCurrentIndex(self._CARD)

    def _fill(self, d: MovieDetail, watched: WatchedEntry | None) -> None:
        self._detail = d
        self.lbl_title.setText(d.title)
        self.lbl_released.setText(f"{d.released or '—'} • {d.runtime or '—'}")
        self.lbl_genre.setText(d.genre or "")
        rating = "—" if d.imdb_rating is None else f"{d.imdb_rating:g}"
        self.lbl_imdb.setText(f"⭐ {rating} IMDb rating")
        self.lbl_plot.setText(f"<em>{d.plot or ''}</em>")
        self.lbl_actors.setText(f"<b>Starring</b>: {d.actors or '—'}")
        self.lbl_director.setText(f"<b>Directed</b> by: {d.director or '—'}")

        already = watched is not None
        self.lbl_rated.setVisible(already)
        self.stars.setVisible(not already)
        self.btn_add.setVisible(False)
        if already:
            self.lbl_rated.setText(f"You rated this movie {watched.user_rating} ⭐")
        else:
            self.stars.set_rating(0)

    @Slot()
    def _on_add(self) -> None:
        if self._detail is not None and self.stars.rating() > 0:
            self.addRequested.emit(self._detail, self.stars.rating())
