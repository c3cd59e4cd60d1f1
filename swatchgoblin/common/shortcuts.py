from __future__ import annotations

import tkinter as tk


class ShortcutManager:
    """Tracks key bindings so a window can unbind them and list them as help."""

    def __init__(self):
        self._bindings: dict[object, list[tuple[str, str]]] = {}
        self._help_entries: list[tuple[str, str]] = []

    def bind(self, widget, sequence: str, callback, *, add: str = '+', description: str | None = None):
        funcid = widget.bind(sequence, callback, add=add)
        if funcid:
            self._bindings.setdefault(widget, []).append((sequence, funcid))
        if description:
            self.register_help(sequence, description)
        return funcid

    def bind_chord(self, widget, key: str, callback, *, description: str | None = None):
        # Tk reports the shifted keysym when caps lock is on, so bind both cases.
        lower = f'<Control-{key.lower()}>'
        upper = f'<Control-{key.upper()}>'
        self.bind(widget, lower, callback)
        if upper != lower:
            self.bind(widget, upper, callback)
        if description:
            self.register_help(f'Ctrl+{key.upper()}', description)

    def register_help(self, sequence: str, description: str):
        entry = (sequence, description)
        if entry not in self._help_entries:
            self._help_entries.append(entry)

    def unbind_widget(self, widget):
        for sequence, funcid in self._bindings.pop(widget, []):
            try:
                widget.unbind(sequence, funcid)
            except tk.TclError:
                pass

    def clear(self):
        for widget in list(self._bindings.keys()):
            self.unbind_widget(widget)

    def help_text(self) -> str:
        return '\n'.join(f'{sequence}: {description}' for sequence, description in self._help_entries)
