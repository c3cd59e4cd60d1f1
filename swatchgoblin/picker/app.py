import logging
import math
from pathlib import Path
import tkinter as tk
from tkinter import messagebox, ttk

from PIL import Image, ImageTk
from tkinterdnd2 import COPY, DND_FILES, TkinterDnD

from core.swatch_goblin import (
    MAX_COLORS,
    PaletteStore,
    PickerSession,
    Renderer,
    Sampler,
    UnsupportedFormatError,
    contrast_color,
    display_hex,
    get_extractor,
)
from core.swatch_goblin.decode import EXTENSION_MIME_TYPES, decode_image, guess_mime_type
from core.swatch_goblin.export import EXPORT_FILENAME
from core.swatch_goblin.session import MODE_IDLE
from core.swatch_goblin.viewport import image_to_canvas
from swatchgoblin.common import (
    SECTION_GAP,
    SPACE_8,
    SPACE_12,
    SPACE_16,
    SURFACE_PAD,
    SWATCH_COLUMNS,
    BackgroundJobRunner,
    ShortcutManager,
    ToastNotifier,
    ask_directory,
    ask_image_file,
    bind_button_feedback,
    extractor_name,
    get_theme_tokens,
    is_dnd_disabled,
    read_file_bytes,
    tool_title,
)


LOG = logging.getLogger(__name__)

SWATCH_HEIGHT = 54
OVERLAY_TAG = 'crop_overlay'
IMAGE_TAG = 'image'


def _load_image_job(path):
    return decode_image(read_file_bytes(path), guess_mime_type(path))


def build_sampler(name=None):
    try:
        extractor = get_extractor(name or extractor_name())
    except ValueError as exc:
        LOG.warning('%s Falling back to the default extractor.', exc)
        extractor = get_extractor()
    return Sampler(extractor)


class SwatchGoblinApp(Renderer):
    def __init__(self, root):
        self.root = root
        self.root.title(tool_title())
        self.root.geometry('1280x820')
        self.root.minsize(980, 640)
        self.colors = get_theme_tokens()

        self.image_path = None
        self.tk_image = None
        self.jobs = BackgroundJobRunner(self.root)
        self.shortcuts = ShortcutManager()
        self._busy = False
        self._image_controls = []
        self._palette_controls = []
        self._drop_ready = False

        self.session = PickerSession(renderer=self, store=PaletteStore(sampler=build_sampler()))

        self._build_ui()
        self._bind_shortcuts()
        self.root.protocol('WM_DELETE_WINDOW', self.on_close)
        self.show_palette([])
        self._refresh_controls()
        self.set_status('Open an image to start collecting colors')

    def _build_ui(self):
        body = ttk.Frame(self.root, style='Root.TFrame', padding=SPACE_12)
        body.pack(fill=tk.BOTH, expand=True)
        body.columnconfigure(0, weight=1)
        body.columnconfigure(1, weight=0, minsize=360)
        body.rowconfigure(0, weight=1)

        self.canvas = tk.Canvas(body, bg=self.colors['canvas_bg'], highlightthickness=0, relief=tk.FLAT, cursor='crosshair')
        self.canvas.grid(row=0, column=0, sticky='nsew', padx=(0, SPACE_12))
        self.canvas.bind('<ButtonPress-1>', self.on_pointer_down)
        self.canvas.bind('<B1-Motion>', self.on_pointer_move)
        self.canvas.bind('<ButtonRelease-1>', self.on_pointer_up)
        self.canvas.bind('<Leave>', self.on_pointer_leave)
        self.canvas.bind('<MouseWheel>', self.on_mouse_wheel)
        self.canvas.bind('<Button-4>', self.on_mouse_wheel)
        self.canvas.bind('<Button-5>', self.on_mouse_wheel)
        self.canvas.bind('<Configure>', self.on_canvas_resize)

        self.drop_hint = tk.Label(
            self.canvas,
            text='Click "Open Image" or drop a JPG, PNG or WEBP here',
            bg=self.colors['canvas_bg'],
            fg=self.colors['muted'],
            font=('Segoe UI', 11),
        )
        self.drop_hint.place(relx=0.5, rely=0.5, anchor='center')
        self._drop_ready = self._enable_image_drop()

        floating = tk.Frame(self.canvas, bg=self.colors['surface'], padx=SPACE_8, pady=SPACE_8, highlightthickness=0)
        floating.place(x=SPACE_16, y=SPACE_16, anchor='nw')
        self.zoom_out_btn = ttk.Button(floating, text='-', width=3, style='Ghost.TButton', command=lambda: self.session.wheel(-1))
        self.zoom_out_btn.pack(side=tk.LEFT)
        self.zoom_in_btn = ttk.Button(floating, text='+', width=3, style='Ghost.TButton', command=lambda: self.session.wheel(1))
        self.zoom_in_btn.pack(side=tk.LEFT, padx=(SPACE_8 // 2, 0))
        self.fit_btn = ttk.Button(floating, text='Fit', style='Ghost.TButton', command=self.session.fit)
        self.fit_btn.pack(side=tk.LEFT, padx=(SPACE_8, 0))
        self.zoom_label = tk.Label(floating, text='100%', bg=self.colors['surface'], fg=self.colors['muted'], font=('Segoe UI', 9), padx=SPACE_8)
        self.zoom_label.pack(side=tk.LEFT, padx=(SPACE_8, 0))

        inspector = ttk.Frame(body, style='Inspector.TFrame', padding=SURFACE_PAD)
        inspector.grid(row=0, column=1, sticky='nsew')
        inspector.columnconfigure(0, weight=1)
        inspector.rowconfigure(6, weight=1)

        ttk.Label(inspector, text=tool_title(), style='Title.TLabel').grid(row=0, column=0, sticky='w')
        self.status_label = ttk.Label(inspector, text='', style='Muted.TLabel', wraplength=320, justify=tk.LEFT)
        self.status_label.grid(row=1, column=0, sticky='ew', pady=(4, SECTION_GAP))

        self.open_btn = ttk.Button(inspector, text='Open Image', style='Primary.TButton', command=self.open_image)
        self.open_btn.grid(row=2, column=0, sticky='ew')
        bind_button_feedback(self.root, self.open_btn, variant='primary')

        ttk.Label(inspector, text='Prefill', style='Section.TLabel').grid(row=3, column=0, sticky='w', pady=(SECTION_GAP, 0))
        prefill = ttk.Frame(inspector, style='Surface.TFrame', padding=SPACE_8)
        prefill.grid(row=4, column=0, sticky='ew', pady=(SPACE_8, 0))
        prefill.columnconfigure(0, weight=1)
        prefill.columnconfigure(1, weight=1)
        self.prefill_btn = self._ghost_button(prefill, 'Prefill', self.session.prefill_basic, 0, 0)
        self.prefill_crop_btn = self._ghost_button(prefill, 'Prefill Area', lambda: self.start_crop('basic'), 0, 1)
        self.advanced_btn = self._ghost_button(prefill, 'Advanced', self.session.prefill_advanced, 1, 0)
        self.advanced_crop_btn = self._ghost_button(prefill, 'Advanced Area', lambda: self.start_crop('advanced'), 1, 1)

        header = ttk.Frame(inspector, style='Inspector.TFrame')
        header.grid(row=5, column=0, sticky='ew', pady=(SECTION_GAP, 0))
        header.columnconfigure(0, weight=1)
        ttk.Label(header, text='Palette', style='Section.TLabel').grid(row=0, column=0, sticky='w')
        self.count_label = ttk.Label(header, text=f'0 / {MAX_COLORS}', style='Muted.TLabel')
        self.count_label.grid(row=0, column=1, sticky='e')

        self.palette_frame = tk.Frame(inspector, bg=self.colors['inspector'], highlightthickness=0, bd=0)
        self.palette_frame.grid(row=6, column=0, sticky='nsew', pady=(SPACE_8, SPACE_8))
        for col in range(SWATCH_COLUMNS):
            self.palette_frame.columnconfigure(col, weight=1, uniform='swatch')

        actions = ttk.Frame(inspector, style='Surface.TFrame', padding=SPACE_8)
        actions.grid(row=7, column=0, sticky='ew')
        for col in range(2):
            actions.columnconfigure(col, weight=1)
        self.export_btn = self._ghost_button(actions, 'Copy HEX List', self.copy_export_text, 0, 0)
        self.export_image_btn = self._ghost_button(actions, 'Export Image', self.export_image, 0, 1)
        self.clear_btn = self._ghost_button(actions, 'Clear', self.session.clear, 1, 0)
        self.undo_btn = self._ghost_button(actions, 'Undo', self.session.undo, 1, 1)

        self.shortcut_hint = tk.Label(
            inspector,
            text='Shortcuts ?',
            bg=self.colors['inspector'],
            fg=self.colors['accent'],
            font=('Segoe UI', 8),
            cursor='hand2',
        )
        self.shortcut_hint.grid(row=8, column=0, sticky='e', pady=(SPACE_8, 0))
        self.shortcut_hint.bind('<Button-1>', lambda _e: messagebox.showinfo('Swatch Goblin Shortcuts', self.shortcuts.help_text()))

        self._image_controls = [
            self.prefill_btn,
            self.prefill_crop_btn,
            self.advanced_btn,
            self.advanced_crop_btn,
            self.zoom_out_btn,
            self.zoom_in_btn,
            self.fit_btn,
        ]
        self._palette_controls = [self.export_btn, self.export_image_btn, self.clear_btn]

        self.toast = ToastNotifier(self.root, bg=self.colors['toast'], fg=self.colors['text'])

    def _ghost_button(self, parent, text, command, row, column):
        def run():
            command()
            self._refresh_controls()

        btn = ttk.Button(parent, text=text, style='Ghost.TButton', command=run)
        btn.grid(row=row, column=column, sticky='ew', padx=2, pady=2)
        bind_button_feedback(self.root, btn)
        return btn

    def _bind_shortcuts(self):
        self.shortcuts.bind_chord(self.root, 'z', lambda _e: self._shortcut(self.session.undo), description='Undo')
        self.shortcuts.bind_chord(self.root, 'c', lambda _e: self._shortcut(self.copy_export_text), description='Copy HEX list')
        self.shortcuts.bind_chord(self.root, 'e', lambda _e: self._shortcut(self.export_image), description='Export palette image')
        self.shortcuts.bind_chord(self.root, 's', lambda _e: self._shortcut(lambda: self.start_crop('basic')), description='Prefill from area')
        self.shortcuts.bind_chord(self.root, 'd', lambda _e: self._shortcut(lambda: self.start_crop('advanced')), description='Advanced prefill from area')
        self.shortcuts.bind(self.root, '<Escape>', lambda _e: self._shortcut(self.session.cancel_crop), description='Cancel area selection')
        if not self._drop_ready:
            self.shortcuts.register_help('Drag-and-drop', 'Unavailable (tkdnd missing or disabled)')

    def _shortcut(self, action):
        if not self._busy:
            action()
            self._refresh_controls()
        return 'break'

    # Renderer

    def show_palette(self, colors):
        for child in self.palette_frame.winfo_children():
            child.destroy()

        total = len(self.session.store)
        self.count_label.configure(text=f'{total} / {MAX_COLORS}')
        if not colors:
            tk.Label(
                self.palette_frame,
                text='No colors selected yet',
                bg=self.colors['inspector'],
                fg=self.colors['muted'],
                font=('Segoe UI', 9),
            ).grid(row=0, column=0, columnspan=SWATCH_COLUMNS, sticky='w', pady=SPACE_8)
            self._refresh_controls()
            return

        for index, color in enumerate(colors):
            self._build_swatch(index, color)
        self._refresh_controls()

    def _build_swatch(self, index, color):
        label_hex = display_hex(color)
        fg = contrast_color(color)
        block = tk.Frame(self.palette_frame, bg=color, height=SWATCH_HEIGHT, highlightthickness=1, highlightbackground=self.colors['shadow'])
        block.grid(row=index // SWATCH_COLUMNS, column=index % SWATCH_COLUMNS, sticky='ew', padx=2, pady=2)
        block.grid_propagate(False)
        block.columnconfigure(0, weight=1)
        block.rowconfigure(0, weight=1)

        text = tk.Label(block, text=label_hex, bg=color, fg=fg, font=('Consolas', 9, 'bold'), cursor='hand2')
        text.grid(row=0, column=0, sticky='nsew')
        delete = tk.Label(block, text='x', bg=color, fg=fg, font=('Segoe UI', 8, 'bold'), cursor='hand2', padx=4)
        delete.place(relx=1.0, y=0, anchor='ne')

        def on_copy(_event, value=label_hex):
            self.copy_to_clipboard(value)
            self.show_toast(f'Copied {value}')

        def on_delete(_event, value=color, slot=index):
            self.session.remove(value, slot)
            return 'break'

        for widget in (block, text):
            widget.bind('<Button-1>', on_copy)
        delete.bind('<Button-1>', on_delete)

    def show_viewport(self, state):
        self.zoom_label.configure(text=f'{int(round(state.zoom * 100))}%')
        self.canvas.delete(IMAGE_TAG)
        image = self.session.image
        if image is None:
            return

        cw = max(1, self.canvas.winfo_width())
        ch = max(1, self.canvas.winfo_height())
        # Only the visible part of the image is scaled, so high zoom stays cheap.
        left = max(0, math.floor(-state.pan_x))
        top = max(0, math.floor(-state.pan_y))
        right = min(image.width, math.ceil(cw / state.zoom - state.pan_x))
        bottom = min(image.height, math.ceil(ch / state.zoom - state.pan_y))
        if right <= left or bottom <= top:
            self.tk_image = None
            return

        region = image.crop((left, top, right, bottom))
        size = (max(1, round((right - left) * state.zoom)), max(1, round((bottom - top) * state.zoom)))
        self.tk_image = ImageTk.PhotoImage(region.resize(size, Image.NEAREST))
        x, y = image_to_canvas(left, top, state)
        self.canvas.create_image(round(x), round(y), anchor=tk.NW, image=self.tk_image, tags=IMAGE_TAG)
        if self.canvas.find_withtag(OVERLAY_TAG):
            self.canvas.tag_raise(OVERLAY_TAG)

    def show_overlay(self, rect):
        self.canvas.delete(OVERLAY_TAG)
        if rect is None:
            return
        x1, y1, x2, y2 = rect
        cw = max(1, self.canvas.winfo_width())
        ch = max(1, self.canvas.winfo_height())
        shade = {'fill': self.colors['crop_shade'], 'stipple': 'gray50', 'width': 0, 'tags': OVERLAY_TAG}
        self.canvas.create_rectangle(0, 0, cw, y1, **shade)
        self.canvas.create_rectangle(0, y2, cw, ch, **shade)
        self.canvas.create_rectangle(0, y1, x1, y2, **shade)
        self.canvas.create_rectangle(x2, y1, cw, y2, **shade)
        self.canvas.create_rectangle(x1, y1, x2, y2, outline=self.colors['crop_outline'], width=2, dash=(5, 5), tags=OVERLAY_TAG)

    def notify(self, message):
        self.show_toast(message)
        self.set_status(message)

    # Canvas events

    def on_pointer_down(self, event):
        if self._busy:
            return
        if self.session.mode == MODE_IDLE:
            self.canvas.configure(cursor='fleur')
        self.session.pointer_down(event.x, event.y)

    def on_pointer_move(self, event):
        self.session.pointer_move(event.x, event.y)

    def on_pointer_up(self, event):
        self.session.pointer_up(event.x, event.y)
        self.canvas.configure(cursor='crosshair')
        self._refresh_controls()

    def on_pointer_leave(self, _event=None):
        self.session.pointer_leave()
        self.canvas.configure(cursor='crosshair')
        self._refresh_controls()

    def on_mouse_wheel(self, event):
        if event.num == 4:
            direction = 1
        elif event.num == 5:
            direction = -1
        else:
            direction = 1 if event.delta > 0 else -1
        self.session.wheel(direction)
        return 'break'

    def on_canvas_resize(self, event):
        self.session.resize_pane((event.width, event.height))

    # Actions

    def set_status(self, text):
        self.status_label.configure(text=text)

    def show_toast(self, text):
        self.toast.show(text)

    def copy_to_clipboard(self, text):
        self.root.clipboard_clear()
        self.root.clipboard_append(text)
        self.root.update_idletasks()

    def _set_busy(self, busy, status=None):
        self._busy = busy
        self.root.configure(cursor='watch' if busy else '')
        self._refresh_controls()
        if status:
            self.set_status(status)

    def _refresh_controls(self):
        has_image = self.session.has_image
        has_colors = len(self.session.store) > 0
        self._set_enabled(self.open_btn, not self._busy)
        for btn in self._image_controls:
            self._set_enabled(btn, has_image and not self._busy)
        for btn in self._palette_controls:
            self._set_enabled(btn, has_colors and not self._busy)
        self._set_enabled(self.undo_btn, self.session.store.can_undo and not self._busy)

    def _set_enabled(self, widget, enabled):
        widget.configure(state='normal' if enabled else 'disabled')

    def open_image(self):
        if self._busy:
            return
        file_path = ask_image_file(title='Open Image')
        if not file_path:
            return
        self._open_path(file_path)

    def _open_path(self, file_path):
        self._set_busy(True, status=f'Decoding {Path(file_path).name}...')
        self.jobs.submit(_load_image_job, lambda result: self._on_image_loaded(file_path, result), file_path)

    def _on_image_loaded(self, file_path, result):
        try:
            if not result.ok:
                if isinstance(result.error, UnsupportedFormatError):
                    messagebox.showerror('Unsupported Image', str(result.error))
                else:
                    LOG.error('image load failed:\n%s', result.tb)
                    messagebox.showerror('Open Error', f'Unable to open image:\n{result.error}')
                self.set_status('Image load failed')
                return

            image = result.value
            self.image_path = file_path
            self.drop_hint.place_forget()
            pane = (max(1, self.canvas.winfo_width()), max(1, self.canvas.winfo_height()))
            self.session.load_image(image, pane)
            self.set_status(f'Loaded {Path(file_path).name} ({image.width}x{image.height})')
        finally:
            self._set_busy(False)

    # Drag and drop

    def _enable_image_drop(self):
        if is_dnd_disabled() or not hasattr(self.canvas, 'drop_target_register'):
            return False
        try:
            self.canvas.drop_target_register(DND_FILES)
            self.canvas.dnd_bind('<<Drop>>', self._on_drop_event)
        except tk.TclError as exc:
            LOG.warning('drag-and-drop unavailable: %s', exc)
            return False
        return True

    def _parse_dropped_paths(self, raw_data):
        if not raw_data:
            return []
        out = []
        for item in self.root.tk.splitlist(raw_data):
            text = str(item).strip()
            if text.startswith('{') and text.endswith('}'):
                text = text[1:-1]
            if text:
                out.append(Path(text).expanduser())
        return out

    def _on_drop_event(self, event):
        if self._busy:
            return COPY
        dropped = self._parse_dropped_paths(str(getattr(event, 'data', '') or ''))
        images = [p for p in dropped if p.is_file() and p.suffix.lower() in EXTENSION_MIME_TYPES]
        if not images:
            self.notify('Please upload a JPG, PNG, or WEBP image.')
            return COPY
        self._open_path(str(images[0]))
        ignored = len(dropped) - 1
        if ignored:
            self.show_toast(f'Opened first image, ignored {ignored} extra item(s)')
        return COPY

    def on_close(self):
        self.shortcuts.clear()
        self.root.destroy()

    def start_crop(self, mode):
        if self.session.start_crop(mode):
            self.canvas.configure(cursor='crosshair')

    def copy_export_text(self):
        text = self.session.export_text()
        if not text:
            return
        self.copy_to_clipboard(text)
        self.notify('Palette exported to clipboard!')

    def export_image(self):
        if len(self.session.store) == 0:
            return
        export_dir = ask_directory(title='Select Export Folder')
        if not export_dir:
            return
        try:
            out_path = self.session.export_image(Path(export_dir) / EXPORT_FILENAME)
        except OSError as exc:
            messagebox.showerror('Export Error', f'Failed exporting palette image:\n{exc}')
            return
        if out_path is not None:
            self.set_status(f'Palette image saved to {out_path.name}')


def _create_root():
    if is_dnd_disabled():
        return tk.Tk()
    try:
        return TkinterDnD.Tk()
    except (RuntimeError, tk.TclError) as exc:
        LOG.warning('tkdnd failed to load, drag-and-drop disabled: %s', exc)
        return tk.Tk()


def run():
    from swatchgoblin.common import apply_suite_theme, configure_logging

    configure_logging()
    root = _create_root()
    apply_suite_theme(root)
    SwatchGoblinApp(root)
    root.mainloop()


if __name__ == '__main__':
    run()
