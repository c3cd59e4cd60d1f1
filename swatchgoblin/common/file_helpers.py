from pathlib import Path
from tkinter import filedialog


IMAGE_FILETYPES = [('Image Files', '*.png;*.jpg;*.jpeg;*.webp'), ('All Files', '*.*')]


def ask_image_file(title='Open Image'):
    return filedialog.askopenfilename(title=title, filetypes=IMAGE_FILETYPES)


def ask_directory(title='Select Export Folder'):
    return filedialog.askdirectory(title=title)


def read_file_bytes(path):
    return Path(path).read_bytes()
