from __future__ import annotations

import io
from pathlib import Path
import shutil
import sys
import uuid

from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.swatch_goblin.color_math import hex_to_rgb  # noqa: E402
from core.swatch_goblin.decode import decode_image, guess_mime_type, load_image_file  # noqa: E402
from core.swatch_goblin.errors import UnsupportedFormatError  # noqa: E402
from core.swatch_goblin.export import export_text, render_palette_image, save_palette_image  # noqa: E402


def assert_true(condition, message):
    if not condition:
        raise AssertionError(message)


def with_temp_workspace(fn):
    temp_root = ROOT / 'tests' / f'.tmp_export_{uuid.uuid4().hex}'
    temp_root.mkdir(parents=True, exist_ok=False)
    try:
        return fn(temp_root)
    finally:
        shutil.rmtree(temp_root, ignore_errors=True)


def png_bytes(image):
    buf = io.BytesIO()
    image.save(buf, format='PNG')
    return buf.getvalue()


PALETTE = ['#aabbcc', '#112233', '#ff0000', '#00ff00', '#0000ff', '#ffff00', '#00ffff', '#ff00ff']


def test_export_text():
    assert_true(export_text(['#aabbcc', '#112233']) == '#AABBCC, #112233', 'text export should be uppercase csv')
    assert_true(export_text([]) == '', 'empty palette exports empty text')


def test_render_grid():
    image = render_palette_image(PALETTE)
    assert_true(image.size == (700, 200), f'8 colors need two rows of seven, got {image.size}')
    assert_true(image.getpixel((10, 10)) == hex_to_rgb('#aabbcc'), 'first cell should be filled with its color')
    assert_true(image.getpixel((10, 110)) == hex_to_rgb('#ff00ff'), 'eighth color wraps to the second row')
    assert_true(image.getpixel((0, 0)) == (51, 51, 51), 'cells should carry a dark border')
    assert_true(image.getpixel((650, 150)) == (255, 255, 255), 'unused cells stay white')


def test_render_rejects_empty():
    try:
        render_palette_image([])
    except ValueError:
        return
    raise AssertionError('empty palette should not render')


def test_save_palette_image():
    def run(root: Path):
        target = root / 'swatches.png'
        out_path = save_palette_image(['#123456'], target)
        assert_true(out_path == target and target.exists(), 'explicit file path should be used as is')
        with Image.open(target) as image:
            assert_true(image.size == (700, 100), f'single color renders one row, got {image.size}')

    with_temp_workspace(run)


def test_decode_supported_formats():
    rgba = Image.new('RGBA', (6, 4), (10, 20, 30, 255))
    image = decode_image(png_bytes(rgba), 'image/png')
    assert_true(image.size == (6, 4) and image.mode == 'RGB', 'decoded images should be RGB')
    assert_true(image.getpixel((0, 0)) == (10, 20, 30), 'decode should keep pixel values')
    assert_true(decode_image(png_bytes(rgba), ' IMAGE/PNG ').size == (6, 4), 'mime type should be normalized')


def test_decode_rejects_bad_input():
    for data, mime in ((png_bytes(Image.new('RGB', (2, 2))), 'image/gif'), (b'not an image', 'image/png')):
        try:
            decode_image(data, mime)
        except UnsupportedFormatError:
            continue
        raise AssertionError(f'{mime} input should be rejected')


def test_load_image_file():
    def run(root: Path):
        path = root / 'photo.PNG'
        path.write_bytes(png_bytes(Image.new('RGB', (3, 5), (1, 2, 3))))
        image = load_image_file(path)
        assert_true(image.size == (3, 5), 'file load should decode the image')
        text_path = root / 'notes.txt'
        text_path.write_text('hello')
        try:
            load_image_file(text_path)
        except UnsupportedFormatError:
            return
        raise AssertionError('text file should be rejected')

    with_temp_workspace(run)
    assert_true(guess_mime_type('shot.JPG') == 'image/jpeg', 'extension lookup should ignore case')


def main() -> int:
    tests = [
        test_export_text,
        test_render_grid,
        test_render_rejects_empty,
        test_save_palette_image,
        test_decode_supported_formats,
        test_decode_rejects_bad_input,
        test_load_image_file,
    ]
    passed = 0
    failed = 0
    for fn in tests:
        try:
            fn()
            print(f'PASS {fn.__name__}')
            passed += 1
        except Exception as exc:
            print(f'FAIL {fn.__name__}: {exc}')
            failed += 1
    total = passed + failed
    print(f'\nExport regression: {passed}/{total} passed, {failed} failed')
    return 1 if failed else 0


if __name__ == '__main__':
    raise SystemExit(main())
