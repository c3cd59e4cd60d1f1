import tkinter as tk

BUTTON_HOVER_DELAY_MS = 96
TOAST_DURATION_MS = 2000
TOAST_SPACING = 42


class ToastNotifier:
    """Stacked transient messages in the window's top-right corner."""

    def __init__(self, root, bg, fg):
        self.root = root
        self.bg = bg
        self.fg = fg
        self._labels = []

    def show(self, text, duration_ms=TOAST_DURATION_MS):
        label = tk.Label(
            self.root,
            text=text,
            bg=self.bg,
            fg=self.fg,
            font=('Segoe UI', 9),
            padx=12,
            pady=8,
            relief=tk.FLAT,
            bd=0,
        )
        self._labels.append(label)
        self._reflow()
        self.root.after(duration_ms, lambda: self._dismiss(label))

    def _dismiss(self, label):
        if label in self._labels:
            self._labels.remove(label)
        try:
            label.destroy()
        except tk.TclError:
            pass
        self._reflow()

    def _reflow(self):
        for index, label in enumerate(self._labels):
            label.place(relx=1.0, x=-16, y=72 + index * TOAST_SPACING, anchor='ne')


def bind_button_feedback(root, button, variant='ghost'):
    if variant == 'primary':
        hover_style = 'PrimaryHover.TButton'
        base_style = 'Primary.TButton'
    else:
        hover_style = 'GhostHover.TButton'
        base_style = 'Ghost.TButton'
    state = {'job': None}

    def on_enter(_event):
        button.configure(cursor='hand2')
        if state['job'] is not None:
            root.after_cancel(state['job'])
        state['job'] = root.after(BUTTON_HOVER_DELAY_MS, lambda: button.configure(style=hover_style))

    def on_leave(_event):
        if state['job'] is not None:
            root.after_cancel(state['job'])
            state['job'] = None
        button.configure(style=base_style, cursor='')

    button.bind('<Enter>', on_enter, add='+')
    button.bind('<Leave>', on_leave, add='+')
