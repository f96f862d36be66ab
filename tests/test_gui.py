import threading
import time

import pytest
from PySide6.QtCore import QEvent, QEventLoop, QObject, Qt, QThread, QTimer
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import QLabel, QMainWindow

from popcorn.settings import DEFAULT_TITLE
from popcorn.metadata.core.repo import MemoryWatchedRepo
from popcorn.gui import (
    AppController, Box, KeyBinder, MainWindow, QtRunner, StarRating, TitleScope,
)


# ───────────────────────────── key binder ──────────────────────────────
def test_dispatch_calls_each_bound_action_once(qapp):
    keys = KeyBinder()
    calls = []
    keys.bind("Enter", lambda: calls.append("enter"))
    keys.bind("Escape", lambda: calls.append("esc"))

    assert keys.dispatch("Escape") is True
    assert keys.dispatch("F1") is False
    assert calls == ["esc"]


def test_removed_binding_stops_firing(qapp):
    keys = KeyBinder()
    calls = []
    binding = keys.bind("Escape", lambda: calls.append(1))

    binding.remove()
    binding.remove()

    assert keys.dispatch("Escape") is False
    assert not binding.active
    assert calls == []


def test_event_filter_translates_key_presses(qapp):
    keys = KeyBinder()
    calls = []
    keys.bind("Enter", lambda: calls.append("enter"))
    target = QObject()

    handled = keys.eventFilter(target, QKeyEvent(QEvent.KeyPress, Qt.Key_Return, Qt.NoModifier))
    ignored = keys.eventFilter(target, QKeyEvent(QEvent.KeyPress, Qt.Key_Escape, Qt.NoModifier))
    release = keys.eventFilter(target, QKeyEvent(QEvent.KeyRelease, Qt.Key_Return, Qt.NoModifier))

    assert (handled, ignored, release) == (True, False, False)
    assert calls == ["enter"]


# ───────────────────────────── title scope ─────────────────────────────
def test_title_scope_sets_and_reverts(qapp):
    win = QMainWindow()
    win.setWindowTitle(DEFAULT_TITLE)
    scope = TitleScope(win.setWindowTitle)

    scope.enter("Heat")
    assert win.windowTitle() == "Movie | Heat"
    scope.enter("Ronin")
    assert win.windowTitle() == "Movie | Ronin"

    scope.exit()
    assert win.windowTitle() == DEFAULT_TITLE
    win.setWindowTitle("something else")
    scope.exit()
    assert win.windowTitle() == "something else"


def test_title_scope_reverts_on_exception():
    titles = []
    scope = TitleScope(titles.append, default="home")

    with pytest.raises(RuntimeError):
        with scope.enter("Alien"):
            raise RuntimeError

    assert titles == ["Movie | Alien", "home"]


# ───────────────────────────── widgets ─────────────────────────────────
def test_star_rating_emits_choice(qapp):
    stars = StarRating()
    picked = []
    stars.ratingChanged.connect(picked.append)

    stars.stars[6].click()

    assert picked == [7]
    assert stars.rating() == 7
    assert len(stars.stars) == 10


def test_box_toggle(qapp):
    box = Box(QLabel("content"))

    assert box.is_open
    box.toggle()
    assert not box.is_open
    assert box.btn_toggle.text() == "+"
    box.toggle()
    assert box.is_open


# ───────────────────────────── runner ──────────────────────────────────
def test_qt_runner_delivers_on_gui_thread(qapp):
    runner = QtRunner()
    loop = QEventLoop()
    result = {}

    def job():
        result["job_thread"] = threading.current_thread()
        return 42

    def done(value):
        result["value"] = value
        result["done_thread"] = threading.current_thread()
        loop.quit()

    QTimer.singleShot(5000, loop.quit)
    runner.submit(job, done)
    loop.exec()

    assert result["value"] == 42
    assert result["done_thread"] is threading.main_thread()
    assert result["job_thread"] is not threading.main_thread()
    runner.shutdown()


def test_qt_runner_shutdown_outlasts_slow_job(qapp):
    runner = QtRunner()
    finished = threading.Event()

    def slow_job():
        time.sleep(0.5)
        finished.set()

    runner.submit(slow_job, lambda _result: None)
    runner.shutdown(wait_ms=10)

    assert finished.is_set()
    assert runner.pending == 0
    assert all(thr.isFinished() for thr in runner.findChildren(QThread))


# ───────────────────────────── main window ─────────────────────────────
@pytest.fixture
def window(qapp, fake_client, immediate_runner, sample_entries):
    controller = AppController(fake_client, MemoryWatchedRepo(sample_entries), immediate_runner)
    keys = KeyBinder()
    win = MainWindow(controller, keys)
    yield win
    win.close()


def test_window_search_and_results(window, batman_results):
    window.search_box.setText("batman")

    assert window.movies_list.count() == len(batman_results)
    assert window.left_stack.currentIndex() == window._LIST
    assert "2" in window.lbl_results.text()


def test_window_not_found_shows_error(window):
    window.search_box.setText("zz")

    assert window.left_stack.currentIndex() == window._ERROR
    assert "Movie not found!" in window.search_error.text()


def test_window_detail_title_and_escape(window):
    window.movies_list.movieSelected.emit("tt0111161")

    assert window.right_stack.currentIndex() == window._DETAILS
    assert window.windowTitle() == "Movie | Movie tt0111161"

    assert window.keys.dispatch("Escape")
    assert window.right_stack.currentIndex() == window._WATCHED
    assert window.windowTitle() == DEFAULT_TITLE
    assert window.keys.dispatch("Escape") is False


def test_window_add_to_list(window, shawshank_detail):
    window.movies_list.movieSelected.emit("tt0111161")

    window.details_page.addRequested.emit(shawshank_detail, 8)

    assert window.right_stack.currentIndex() == window._WATCHED
    assert len(window.watched_list.rows()) == 3
    assert "3 movies" in window.summary_view.lbl_count.text()


def test_window_delete_from_list(window, sample_entries):
    window.watched_list.rows()[0].btn_delete.click()

    assert [r.imdb_id for r in window.watched_list.rows()] == [sample_entries[1].imdb_id]


def test_enter_focuses_and_clears_search(window):
    window.search_box.setText("ba")
    window.search_box.clearFocus()

    assert window.keys.dispatch("Enter")
    assert window.search_box.text() == ""


@pytest.fixture
def slow_window(qapp, fake_client, deferred_runner, sample_entries):
    controller = AppController(fake_client, MemoryWatchedRepo(sample_entries), deferred_runner)
    win = MainWindow(controller, KeyBinder())
    yield win
    win.close()


def test_switching_movies_drops_title_until_next_loads(slow_window, deferred_runner):
    slow_window.movies_list.movieSelected.emit("tt0111161")
    deferred_runner.run_all()
    assert slow_window.windowTitle() == "Movie | Movie tt0111161"

    slow_window.movies_list.movieSelected.emit("tt0068646")
    assert slow_window.windowTitle() == DEFAULT_TITLE

    deferred_runner.run_all()
    assert slow_window.windowTitle() == "Movie | Movie tt0068646"


def test_close_window_with_detail_open_reverts_title(window):
    window.movies_list.movieSelected.emit("tt0111161")
    assert window.windowTitle() == "Movie | Movie tt0111161"

    window.close()

    assert window.windowTitle() == DEFAULT_TITLE
    assert window.keys.dispatch("Escape") is False


def test_back_button_removes_escape_binding(window):
    window.movies_list.movieSelected.emit("tt0111161")

    window.details_page.btn_back.click()

    assert window.right_stack.currentIndex() == window._WATCHED
    assert window.windowTitle() == DEFAULT_TITLE
    assert window.keys.dispatch("Escape") is False


def test_enter_leaves_focused_search_alone(window, monkeypatch):
    window.search_box.setText("batman")
    monkeypatch.setattr(window.search_box, "hasFocus", lambda: True)

    assert window.keys.dispatch("Enter")
    assert window.search_box.text() == "batman"
