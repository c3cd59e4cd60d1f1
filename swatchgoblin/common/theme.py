import tkinter as tk
from tkinter import ttk

SPACE_8 = 8
SPACE_12 = 12
SPACE_16 = 16
SECTION_GAP = SPACE_12
SURFACE_PAD = SPACE_12
SWATCH_COLUMNS = 3


# Ink-well token set
INK_0 = '#0E0F13'
INK_1 = '#15171D'
SURFACE_1 = '#1B1E26'
SURFACE_2 = '#232734'
STROKE = '#323849'
TEXT = '#F1F3F8'
MUTED = '#9099AE'
ACCENT = '#4A9EFF'
ACCENT_DIM = '#2F7AD6'
DANGER = '#FF5A6E'


def get_theme_tokens():
    return {
        'bg': INK_0,
        'canvas_bg': INK_1,
        'inspector': SURFACE_1,
        'surface': SURFACE_2,
        'surface_alt': '#2B3142',
        'text': TEXT,
        'muted': MUTED,
        'accent': ACCENT,
        'accent_soft': ACCENT_DIM,
        'danger': DANGER,
        'stroke': STROKE,
        'shadow': '#08090C',
        'toast': '#1F2A40',
        'crop_outline': ACCENT,
        'crop_shade': '#000000',
    }


def apply_suite_theme(root):
    style = ttk.Style()
    style.theme_use('clam')
    colors = get_theme_tokens()

    root.configure(bg=colors['bg'])

    style.configure('Root.TFrame', background=colors['bg'])
    style.configure('Inspector.TFrame', background=colors['inspector'])
    style.configure('Surface.TFrame', background=colors['surface'])

    style.configure('TLabel', background=colors['inspector'], foreground=colors['text'], font=('Segoe UI', 10))
    style.configure('Muted.TLabel', background=colors['inspector'], foreground=colors['muted'], font=('Segoe UI', 9))
    style.configure('Title.TLabel', background=colors['inspector'], foreground=colors['text'], font=('Segoe UI Semibold', 15))
    style.configure('Section.TLabel', background=colors['inspector'], foreground=colors['text'], font=('Segoe UI Semibold', 12))

    ghost = {
        'borderwidth': 0,
        'focusthickness': 0,
        'focuscolor': colors['accent'],
        'font': ('Segoe UI Semibold', 9),
        'padding': (11, 8),
        'relief': tk.FLAT,
    }
    style.configure(
        'Ghost.TButton',
        background=colors['surface'],
        foreground=colors['text'],
        lightcolor=colors['surface'],
        darkcolor=colors['surface'],
        bordercolor=colors['surface'],
        **ghost,
    )
    style.map(
        'Ghost.TButton',
        background=[('disabled', colors['inspector']), ('active', colors['surface_alt'])],
        foreground=[('disabled', colors['stroke']), ('active', colors['text'])],
    )
    style.configure(
        'GhostHover.TButton',
        background=colors['surface_alt'],
        foreground=colors['accent'],
        lightcolor=colors['surface_alt'],
        darkcolor=colors['surface_alt'],
        bordercolor=colors['accent'],
        **ghost,
    )
    style.map(
        'GhostHover.TButton',
        background=[('disabled', colors['inspector']), ('active', colors['surface_alt'])],
        foreground=[('disabled', colors['stroke']), ('active', colors['accent'])],
    )

    style.configure(
        'Primary.TButton',
        background=colors['accent'],
        foreground='#06121F',
        borderwidth=0,
        focuscolor=colors['accent'],
        font=('Segoe UI Semibold', 10),
        padding=(15, 10),
    )
    style.map(
        'Primary.TButton',
        background=[('active', '#6AB1FF'), ('pressed', colors['accent_soft']), ('disabled', '#2A3A52')],
        foreground=[('disabled', '#5F6E86')],
    )
    style.configure(
        'PrimaryHover.TButton',
        background='#6AB1FF',
        foreground='#06121F',
        borderwidth=0,
        focuscolor=colors['accent'],
        font=('Segoe UI Semibold', 10),
        padding=(15, 10),
    )
    style.map(
        'PrimaryHover.TButton',
        background=[('pressed', colors['accent_soft']), ('disabled', '#2A3A52')],
        foreground=[('disabled', '#5F6E86')],
    )

    scroll = {
        'troughcolor': colors['canvas_bg'],
        'background': colors['stroke'],
        'bordercolor': colors['canvas_bg'],
        'lightcolor': colors['canvas_bg'],
        'darkcolor': colors['canvas_bg'],
        'arrowcolor': colors['muted'],
        'gripcount': 0,
        'relief': tk.FLAT,
        'width': 10,
    }
    style.configure('Vertical.TScrollbar', **scroll)
    style.map('Vertical.TScrollbar', background=[('active', colors['accent'])])

    return style, colors
