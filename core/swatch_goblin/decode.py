from __future__ import annotations

import io
import mimetypes
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .errors import UnsupportedFormatError


SUPPORTED_MIME_TYPES = {'image/jpeg', 'image/jpg', 'image/png', 'image/webp'}
EXTENSION_MIME_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.webp': 'image/webp',
}


def guess_mime_type(path) -> str:
    suffix = Path(path).suffix.lower()
    if suffix in EXTENSION_MIME_TYPES:
        return EXTENSION_MIME_TYPES[suffix]
    guessed, _encoding = mimetypes.guess_type(str(path))
    return guessed or 'application/octet-stream'


def decode_image(data: bytes, mime_type: str):
    mime = (mime_type or '').strip().lower()
    if mime not in SUPPORTED_MIME_TYPES:
        raise UnsupportedFormatError('Please upload a JPG, PNG, or WEBP image.')
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            return image.convert('RGB')
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise UnsupportedFormatError(f'Unable to decode image: {exc}') from exc


def load_image_file(path):
    path = Path(path)
    return decode_image(path.read_bytes(), guess_mime_type(path))
