"""
window_title
~~~~~~~~~~~~
Scoped window-title change: ``enter`` shows the movie, ``exit`` puts the
default back. Works as a context manager as well.
"""

from __future__ import annotations
from typing import Callable

from popcorn.settings import DEFAULT_TITLE


class TitleScope:
    def __init__(
        self,
        set_title: Callable[[str], None],
        default: str = DEFAULT_TITLE,
        fmt: str = "Movie | {}",
    ) -> None:
        self._set_title = set_title
        self.default = default
        self.fmt = fmt
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enter(self, title: str) -> TitleScope:
        self._set_title(self.fmt.format(title))
        self._active = True
        return self

    def exit(self) -> None:
        if self._active:
            self._active = False
            self._set_title(self.default)

    def __enter__(self) -> TitleScope:
        return self

    def __exit__(self, *exc) -> None:
        self.exit()
