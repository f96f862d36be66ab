"""
keys
~~~~
Application-wide keyboard shortcuts.

``KeyBinder.install(app)`` puts one event filter on the QApplication, so a
binding fires no matter which widget has focus. Views call ``bind`` when
they appear and ``KeyBinding.remove`` when they go away.
"""

from __future__ import annotations
from typing import Callable, Dict, List

from PySide6.QtCore import QObject, QEvent, Qt

KEY_NAMES: Dict[int, str] = {
    Qt.Key.Key_Return.value: "Enter",
    Qt.Key.Key_Enter.value:  "Enter",
    Qt.Key.Key_Escape.value: "Escape",
}


class KeyBinding:
    def __init__(self, binder: KeyBinder, key: str, action: Callable[[], None]):
        self.binder = binder
        self.key = key
        self.action = action

    @property
    def active(self) -> bool:
        return self in self.binder._bindings

    def remove(self) -> None:
        """Unbind; safe to call twice."""
        if self.active:
            self.binder._bindings.remove(self)


class KeyBinder(QObject):
    """Registry of key name → actions plus the Qt filter feeding it."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._bindings: List[KeyBinding] = []
        self._target: QObject | None = None

    # ------------------------------------------------------------ registry
    def bind(self, key: str, action: Callable[[], None]) -> KeyBinding:
        binding = KeyBinding(self, key, action)
        self._bindings.append(binding)
        return binding

    def dispatch(self, key: str) -> bool:
        """Run every action bound to *key* once; True if any was bound."""
        matched = [b for b in self._bindings if b.key == key]
        for b in matched:
            b.action()
        return bool(matched)

    # ------------------------------------------------------------------ Qt
    def install(self, target: QObject) -> None:
        if self._target is not None:
            self.uninstall()
        target.installEventFilter(self)
        self._target = target

    def uninstall(self) -> None:
        if self._target is not None:
            self._target.removeEventFilter(self)
            self._target = None

    def eventFilter(self, obj, ev):
        if ev.type() == QEvent.Type.KeyPress and not ev.isAutoRepeat():
            name = KEY_NAMES.get(ev.key())
            # consume what we handled, otherwise the press reaches us again
            # on its way up the widget chain
            if name is not None and self.dispatch(name):
                return True
        return False
