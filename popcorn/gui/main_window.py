# gui/main_window.py
from __future__ import annotations

from PySide6.QtCore    import Qt, Slot
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QLabel, QLineEdit, QHBoxLayout, QVBoxLayout,
    QSplitter, QStackedWidget,
)

from popcorn.settings           import APP_NAME, DEFAULT_TITLE
from popcorn.metadata.fetchers  import DetailState, SearchState
from popcorn.gui.controller     import AppController
from popcorn.gui.details_page   import MovieDetailsPage
from popcorn.gui.keys           import KeyBinder, KeyBinding
from popcorn.gui.movie_list     import MoviesList, WatchedList, WatchedSummaryView
from popcorn.gui.widgets        import Box, ErrorLabel, loader_label
from popcorn.gui.window_title   import TitleScope
from popcorn.gui.workers        import QtRunner


class MainWindow(QMainWindow):
    _LOADING, _ERROR, _LIST = range(3)
    _WATCHED, _DETAILS = range(2)

    def __init__(self, controller: AppController, keys: KeyBinder, runner: QtRunner | None = None):
        super().__init__()
        self.controller = controller
        self.keys = keys
        self.runner = runner
        self.setWindowTitle(DEFAULT_TITLE)
        self.resize(1000, 680)

        self.title_scope = TitleScope(self.setWindowTitle)
        self._escape: KeyBinding | None = None

        self._build_ui()
        self._connect()

        # initial paint
        self._render_watched()
        self._on_search_state(controller.search.state)
        self._enter_binding = self.keys.bind("Enter", self._focus_search)

    # ── layout ────────────────────────────────────────────────────────────
    def _build_ui(self) -> None:
        # nav bar
        logo = QLabel(f"🍿 {APP_NAME}")
        logo.setStyleSheet("font-size:22px; font-weight:bold;")
        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search movies...")
        self.search_box.setClearButtonEnabled(True)
        self.lbl_results = QLabel()

        nav = QHBoxLayout()
        nav.addWidget(logo)
        nav.addStretch()
        nav.addWidget(self.search_box, 2)
        nav.addStretch()
        nav.addWidget(self.lbl_results)

        # left box: loader / error / results
        self.movies_list = MoviesList()
        self.search_error = ErrorLabel()
        self.left_stack = QStackedWidget()
        self.left_stack.addWidget(loader_label())
        self.left_stack.addWidget(self.search_error)
        self.left_stack.addWidget(self.movies_list)
        self.left_box = Box(self.left_stack)

        # right box: watched summary + list, or the details page
        self.summary_view = WatchedSummaryView()
        self.watched_list = WatchedList()
        watched_page = QWidget()
        wl = QVBoxLayout(watched_page)
        wl.setContentsMargins(0, 0, 0, 0)
        wl.addWidget(self.summary_view)
        wl.addWidget(self.watched_list, 1)

        self.details_page = MovieDetailsPage()
        self.right_stack = QStackedWidget()
        self.right_stack.addWidget(watched_page)
        self.right_stack.addWidget(self.details_page)
        self.right_box = Box(self.right_stack)

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(self.left_box)
        splitter.addWidget(self.right_box)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 1)

        central = QWidget()
        root = QVBoxLayout(central)
        root.addLayout(nav)
        root.addWidget(splitter, 1)
        self.setCentralWidget(central)

    def _connect(self) -> None:
        c = self.controller
        c.on_search_change  = self._on_search_state
        c.on_detail_change  = self._on_detail_state
        c.on_watched_change = lambda _entries: self._render_watched()

        self.search_box.textChanged.connect(c.handle_query)
        self.movies_list.movieSelected.connect(c.handle_movie_select)
        self.watched_list.deleteRequested.connect(c.handle_delete_watched)
        self.details_page.closeRequested.connect(c.handle_movie_close)
        self.details_page.addRequested.connect(c.handle_add_watched)

    # ── controller → view ────────────────────────────────────────────────
    @Slot(object)
    def _on_search_state(self, state: SearchState) -> None:
        self.lbl_results.setText(f"Found <b>{len(state.results)}</b> results")
        if state.loading:
            self.left_stack.setCurrentIndex(self._LOADING)
        elif state.error:
            self.search_error.set_message(state.error)
            self.left_stack.setCurrentIndex(self._ERROR)
        else:
            self.movies_list.set_movies(state.results)
            self.left_stack.setCurrentIndex(self._LIST)

    @Slot(object)
    def _on_detail_state(self, state: DetailState) -> None:
        if state.imdb_id is None:
            self._close_details()
            return

        if self._escape is None:
            self._escape = self.keys.bind("Escape", self.controller.handle_movie_close)

        # title follows the committed detail only; a new selection drops it
        if state.detail is not None and state.detail.title:
            self.title_scope.enter(state.detail.title)
        else:
            self.title_scope.exit()

        self.details_page.show_state(state, self.controller.watched_entry(state.imdb_id))
        self.right_stack.setCurrentIndex(self._DETAILS)

    def _close_details(self) -> None:
        if self._escape is not None:
            self._escape.remove()
            self._escape = None
        self.title_scope.exit()
        self.right_stack.setCurrentIndex(self._WATCHED)

    def _render_watched(self) -> None:
        self.summary_view.set_summary(self.controller.summary())
        self.watched_list.set_entries(self.controller.watched.entries())

    # ── shortcuts ────────────────────────────────────────────────────────
    def _focus_search(self) -> None:
        if self.search_box.hasFocus():
            return
        self.search_box.clear()
        self.search_box.setFocus()

    # ── teardown ─────────────────────────────────────────────────────────
    def closeEvent(self, event):
        self._enter_binding.remove()
        self._close_details()
        self.controller.shutdown()
        if self.runner is not None:
            self.runner.shutdown()
        super().closeEvent(event)
