import json
import os
import tempfile

# must be set before popcorn.settings is imported
os.environ.setdefault("POPCORN_DATA_DIR", tempfile.mkdtemp(prefix="popcorn-tests-"))
os.environ["POPCORN_DEDUP"] = "allow"
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from popcorn.metadata.core.models import MovieDetail, MovieSummary, WatchedEntry
from popcorn.metadata.api_clients.errors import MovieNotFound, RequestCancelled


class ImmediateRunner:
    """Runs the job inline; ``done`` fires before ``submit`` returns."""

    def submit(self, job, done):
        done(job())


class DeferredRunner:
    """Queues jobs so a test decides when, and in which order, they finish."""

    def __init__(self):
        self.pending = []

    def submit(self, job, done):
        self.pending.append((job, done))

    def run(self, index):
        job, done = self.pending.pop(index)
        done(job())

    def run_all(self):
        while self.pending:
            self.run(0)


class FakeClient:
    """Stand-in for OMDBClient; honours cancel tokens like the real one."""

    def __init__(self, search_results=None, details=None, fail=None):
        self.search_results = search_results or {}
        self.detail_records = details or {}
        self.fail = fail or {}
        self.search_calls = []
        self.detail_calls = []

    def search(self, query, cancel=None):
        self.search_calls.append(query)
        if cancel is not None and cancel.cancelled:
            raise RequestCancelled("request cancelled")
        if query in self.fail:
            raise self.fail[query]
        if query not in self.search_results:
            raise MovieNotFound("Movie not found!")
        return list(self.search_results[query])

    def details(self, imdb_id, cancel=None):
        self.detail_calls.append(imdb_id)
        if cancel is not None and cancel.cancelled:
            raise RequestCancelled("request cancelled")
        if imdb_id in self.fail:
            raise self.fail[imdb_id]
        return self.detail_records.get(imdb_id) or MovieDetail(
            imdb_id=imdb_id, title=f"Movie {imdb_id}", runtime="100 min",
            runtime_minutes=100, imdb_rating=7.5,
        )


class FakeResponse:
    def __init__(self, payload=None, status=200, body=None):
        self.status_code = status
        self.ok = 200 <= status < 400
        self.body = body if body is not None else json.dumps(payload).encode()
        self.closed = False

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i:i + chunk_size]

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


@pytest.fixture
def immediate_runner():
    return ImmediateRunner()


@pytest.fixture
def deferred_runner():
    return DeferredRunner()


@pytest.fixture
def batman_results():
    return [
        MovieSummary("tt0372784", "Batman Begins", "2005", None),
        MovieSummary("tt0468569", "The Dark Knight", "2008", "https://img/dk.jpg"),
    ]


@pytest.fixture
def fake_client(batman_results):
    return FakeClient(search_results={"batman": batman_results})


@pytest.fixture
def shawshank_detail():
    return MovieDetail(
        imdb_id="tt0111161",
        title="The Shawshank Redemption",
        year="1994",
        runtime="142 min",
        runtime_minutes=142,
        imdb_rating=9.3,
        genre="Drama",
    )


@pytest.fixture
def sample_entries():
    return [
        WatchedEntry("tt1375666", "Inception", 9, year="2010", runtime_minutes=148, imdb_rating=8.8),
        WatchedEntry("tt0088763", "Back to the Future", 8, year="1985", runtime_minutes=116, imdb_rating=8.5),
    ]


@pytest.fixture
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
