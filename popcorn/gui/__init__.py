"""
gui
~~~
All Qt widgets, pages and the glue that drives them.

•  No HTTP or file I/O here – the controller talks to `metadata`.
•  Re-export the high-level symbols so the app can simply:

    from popcorn.gui import MainWindow, AppController
"""

from popcorn.gui.controller    import AppController
from popcorn.gui.keys          import KeyBinder, KeyBinding
from popcorn.gui.window_title  import TitleScope
from popcorn.gui.workers       import QtRunner
from popcorn.gui.main_window   import MainWindow
from popcorn.gui.details_page  import MovieDetailsPage
from popcorn.gui.movie_list    import MoviesList, WatchedList, WatchedSummaryView
from popcorn.gui.widgets       import Box, StarRating

__all__ = [
    "AppController", "KeyBinder", "KeyBinding", "TitleScope", "QtRunner",
    "MainWindow", "MovieDetailsPage",
    "MoviesList", "WatchedList", "WatchedSummaryView",
    "Box", "StarRating",
]
