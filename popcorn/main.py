import sys
from PySide6.QtWidgets import QApplication, QMessageBox

from popcorn.settings                        import APP_NAME, STORE_PATH
from popcorn.utils                           import apply_dark_palette, log_debug
from popcorn.metadata.core.repo              import KeyValueStore, WatchedRepo
from popcorn.metadata.api_clients            import OMDBClient
from popcorn.gui.controller                  import AppController
from popcorn.gui.keys                        import KeyBinder
from popcorn.gui.main_window                 import MainWindow
from popcorn.gui.workers                     import QtRunner


def main() -> None:
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    apply_dark_palette(app)

    # -------- OMDb key is the one thing we cannot run without ---------
    try:
        client = OMDBClient()
    except RuntimeError as e:
        log_debug(f"startup aborted: {e}")
        QMessageBox.critical(None, APP_NAME, f"{e}.\nPut OMDB_API_KEY in secret.env or the environment.")
        sys.exit(1)

    repo   = WatchedRepo(KeyValueStore(STORE_PATH))
    runner = QtRunner()
    keys   = KeyBinder()
    keys.install(app)

    controller = AppController(client, repo, runner)
    log_debug(f"started with {len(controller.watched)} watched movies from {STORE_PATH}")

    window = MainWindow(controller, keys, runner)
    window.show()

    # -------- run the event-loop -------------------------------------
    code = app.exec()
    keys.uninstall()
    sys.exit(code)


# Python entry-point guard
if __name__ == "__main__":
    main()
