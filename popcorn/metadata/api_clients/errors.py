"""Failures raised by the OMDb client."""


class OMDBError(Exception):
    """Base class for every OMDb client failure."""


class FetchError(OMDBError):
    """Transport failure, non-2xx status or an unreadable payload."""


class MovieNotFound(OMDBError):
    """OMDb answered ``Response: "False"``."""


class RequestCancelled(OMDBError):
    """The request's cancel token fired; not a user-facing error."""
