"""
metadata.api_clients
~~~~~~~~~~~~~~~~~~~~
Thin wrapper around the OMDb REST API plus its error types and the
cooperative cancel token used by in-flight requests.
"""

from popcorn.metadata.api_clients.cancel      import CancelToken
from popcorn.metadata.api_clients.errors      import (
    OMDBError, FetchError, MovieNotFound, RequestCancelled,
)
from popcorn.metadata.api_clients.omdb_client import OMDBClient

__all__ = [
    "CancelToken",
    "OMDBClient",
    "OMDBError", "FetchError", "MovieNotFound", "RequestCancelled",
]
