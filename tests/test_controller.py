import pytest

from popcorn.metadata.core.repo import MemoryWatchedRepo
from popcorn.gui.controller import AppController


@pytest.fixture
def repo(sample_entries):
    return MemoryWatchedRepo(sample_entries)


@pytest.fixture
def controller(fake_client, repo, immediate_runner):
    return AppController(fake_client, repo, immediate_runner, dedup="allow")


def test_starts_from_stored_list(controller, sample_entries):
    assert controller.watched.entries() == sample_entries
    assert controller.summary().count == 2


def test_query_flows_to_search_hook(controller, batman_results):
    seen = []
    controller.on_search_change = seen.append

    controller.handle_query("batman")

    assert seen[-1].results == tuple(batman_results)


def test_select_toggles(controller, fake_client):
    controller.handle_movie_select("tt0111161")
    assert controller.details.selected_id == "tt0111161"

    controller.handle_movie_select("tt0111161")
    assert controller.details.selected_id is None
    assert fake_client.detail_calls == ["tt0111161"]


def test_add_watched_persists_and_closes(controller, repo, shawshank_detail):
    changes = []
    controller.on_watched_change = changes.append
    controller.handle_movie_select("tt0111161")

    entry = controller.handle_add_watched(shawshank_detail, 8)

    assert entry.user_rating == 8
    assert controller.details.selected_id is None
    assert repo.load()[-1] == entry
    assert controller.watched_entry("tt0111161") == entry
    assert len(changes) == 1


def test_ignore_policy_keeps_existing_rating(fake_client, immediate_runner, shawshank_detail):
    repo = MemoryWatchedRepo()
    controller = AppController(fake_client, repo, immediate_runner, dedup="ignore")

    controller.handle_add_watched(shawshank_detail, 8)
    controller.handle_add_watched(shawshank_detail, 3)

    assert [e.user_rating for e in repo.load()] == [8]


def test_delete_watched(controller, repo, sample_entries):
    assert controller.handle_delete_watched(sample_entries[0].imdb_id) == 1
    assert repo.load() == sample_entries[1:]


def test_watched_entry_for_no_selection(controller):
    assert controller.watched_entry(None) is None


def test_shutdown_closes_both_sessions(fake_client, repo, deferred_runner):
    controller = AppController(fake_client, repo, deferred_runner)
    controller.handle_query("batman")
    controller.handle_movie_select("tt0111161")
    search_token = controller.search._token
    detail_token = controller.details._token

    controller.shutdown()

    assert search_token.cancelled
    assert detail_token.cancelled
    assert controller.details.selected_id is None
