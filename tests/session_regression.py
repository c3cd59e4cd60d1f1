from __future__ import annotations

from pathlib import Path
import shutil
import sys
import uuid

from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.swatch_goblin.crop_session import CropState  # noqa: E402
from core.swatch_goblin.export import EXPORT_FILENAME  # noqa: E402
from core.swatch_goblin.sampler import Sampler  # noqa: E402
from core.swatch_goblin.session import MODE_IDLE, MODE_SELECTING, InteractionMode, PickerSession, Renderer  # noqa: E402


def assert_true(condition, message):
    if not condition:
        raise AssertionError(message)


def with_temp_workspace(fn):
    temp_root = ROOT / 'tests' / f'.tmp_session_{uuid.uuid4().hex}'
    temp_root.mkdir(parents=True, exist_ok=False)
    try:
        return fn(temp_root)
    finally:
        shutil.rmtree(temp_root, ignore_errors=True)


class RecordingRenderer(Renderer):
    def __init__(self):
        self.palettes = []
        self.viewports = []
        self.overlays = []
        self.messages = []

    def show_palette(self, colors):
        self.palettes.append(list(colors))

    def show_viewport(self, state):
        self.viewports.append(state)

    def show_overlay(self, rect):
        self.overlays.append(rect)

    def notify(self, message):
        self.messages.append(message)


class FixedExtractor:
    def __init__(self, colors):
        self.colors = colors

    def extract(self, image, count):
        return list(self.colors)


class BrokenExtractor:
    def extract(self, image, count):
        raise RuntimeError('decoder gave up')


def make_session(extractor=None, image_color=(0, 128, 255)):
    renderer = RecordingRenderer()
    extractor = extractor or FixedExtractor([(170, 187, 204), (17, 34, 51)])
    session = PickerSession(renderer=renderer, sampler=Sampler(extractor))
    session.load_image(Image.new('RGB', (100, 100), image_color), pane_size=(100, 100))
    return session, renderer


def click(session, x, y):
    session.pointer_down(x, y)
    session.pointer_up(x, y)


def test_load_image_fits_pane():
    renderer = RecordingRenderer()
    session = PickerSession(renderer=renderer)
    session.load_image(Image.new('RGB', (100, 100)), pane_size=(200, 100))
    view = session.viewport
    assert_true((view.zoom, view.pan_x, view.pan_y) == (2.0, 0.0, -25.0), f'unexpected fit {view}')
    assert_true(renderer.viewports[-1] == view, 'load should render the fitted viewport')
    assert_true(renderer.palettes[-1] == [], 'load should publish the current palette')


def test_click_picks_color():
    session, renderer = make_session()
    click(session, 10, 10)
    assert_true(session.store.colors == ['#0080ff'], f'click should pick, got {session.store.colors}')
    assert_true(renderer.palettes[-1] == ['#0080ff'], 'pick should publish the palette')
    assert_true(session.mode == MODE_IDLE, 'gesture should end idle')


def test_small_jitter_still_picks():
    session, _renderer = make_session()
    session.pointer_down(10, 10)
    session.pointer_move(12, 11)
    session.pointer_up(12, 11)
    assert_true(len(session.store) == 1, 'movement within the drag threshold is still a click')


def test_drag_pans_without_picking():
    session, renderer = make_session()
    session.pointer_down(10, 10)
    session.pointer_move(30, 10)
    session.pointer_up(30, 10)
    assert_true(len(session.store) == 0, 'drag must not pick')
    assert_true(session.viewport.pan_x == 20.0, f'drag should pan by the screen delta, got {session.viewport}')
    assert_true(renderer.viewports[-1] == session.viewport, 'pan should re-render the viewport')


def test_wheel_and_fit():
    session, _renderer = make_session()
    session.wheel(1)
    assert_true(abs(session.viewport.zoom - 1.1) < 1e-9, 'wheel up should zoom in')
    session.fit()
    assert_true(session.viewport.zoom == 1.0, 'fit should restore the fill zoom')


def test_resize_pane_refits_image():
    session, renderer = make_session()
    session.wheel(1)
    session.pointer_down(10, 10)
    session.pointer_move(40, 10)
    session.pointer_up(40, 10)
    session.resize_pane((200, 100))
    view = session.viewport
    assert_true((view.zoom, view.pan_x, view.pan_y) == (2.0, 0.0, -25.0), f'resize should refit the image, got {view}')
    assert_true(renderer.viewports[-1] == view, 'resize should render the refitted viewport')


def test_resize_pane_without_image():
    renderer = RecordingRenderer()
    session = PickerSession(renderer=renderer)
    session.resize_pane((300, 200))
    assert_true(session.pane_size == (300, 200), 'pane size should be stored for the next load')
    assert_true(renderer.viewports == [], 'nothing to render without an image')


def test_modes_are_enum_members():
    session, _renderer = make_session()
    assert_true(isinstance(session.mode, InteractionMode), 'session mode should be an InteractionMode')
    session.start_crop('basic')
    assert_true(session.mode is InteractionMode.SELECTING, 'armed crop should be SELECTING')
    assert_true(session.crop.state is CropState.SELECTING, 'crop state should be a CropState')
    session.cancel_crop()
    assert_true(session.mode is InteractionMode.IDLE and session.crop.state is CropState.IDLE, 'cancel returns both to idle')
    assert_true(len(InteractionMode) == 3, 'only idle, panning and selecting exist')


def test_crop_flow_prefills():
    session, renderer = make_session()
    assert_true(session.start_crop('basic'), 'crop should arm with an image loaded')
    assert_true(session.mode == MODE_SELECTING, 'armed crop switches mode')
    assert_true(renderer.messages[-1] == 'Draw a rectangle to select the area for color extraction',
                'arming should prompt the user')
    session.pointer_down(10, 10)
    session.pointer_move(40, 40)
    assert_true(renderer.overlays[-1] == (10, 10, 40, 40), 'drag should draw the selection overlay')
    session.pointer_up(60, 60)
    assert_true(session.store.colors == ['#aabbcc', '#112233'], f'crop should prefill, got {session.store.colors}')
    assert_true(session.mode == MODE_IDLE and renderer.overlays[-1] is None, 'crop should end idle with no overlay')


def test_crop_too_small_notifies():
    session, renderer = make_session()
    session.start_crop('advanced')
    session.pointer_down(10, 10)
    session.pointer_up(15, 60)
    assert_true(renderer.messages[-1] == 'Selection too small. Please try again.', 'small crop should notify')
    assert_true(session.store.colors == [], 'small crop must not change the palette')
    assert_true(session.mode == MODE_IDLE, 'small crop should return to idle')


def test_pointer_leave_cancels_crop():
    session, renderer = make_session()
    session.start_crop('basic')
    session.pointer_down(10, 10)
    session.pointer_move(50, 50)
    session.pointer_leave()
    assert_true(renderer.messages[-1] == 'Selection cancelled', 'leaving mid-crop should notify')
    assert_true(session.mode == MODE_IDLE and not session.crop.is_selecting, 'leaving mid-crop cancels it')
    assert_true(session.store.colors == [], 'cancelled crop must not prefill')


def test_escape_cancels_armed_crop():
    session, renderer = make_session()
    session.start_crop('basic')
    assert_true(session.cancel_crop(), 'cancel should succeed while selecting')
    assert_true(session.mode == MODE_IDLE and renderer.overlays[-1] is None, 'cancel should clear the overlay')
    assert_true(not session.cancel_crop(), 'second cancel is a no-op')


def test_prefill_failure_notifies():
    session, renderer = make_session(extractor=BrokenExtractor())
    click(session, 10, 10)
    assert_true(not session.prefill_basic(), 'failed prefill reports False')
    assert_true(renderer.messages[-1] == 'Failed to extract colors. Make sure the image is loaded correctly.',
                'failed prefill should notify')
    assert_true(session.store.colors == ['#0080ff'], 'failed prefill must not change the palette')


def test_undo_and_export_text():
    session, renderer = make_session()
    assert_true(session.prefill_basic(), 'prefill should succeed')
    assert_true(session.export_text() == '#AABBCC, #112233', f'unexpected export text {session.export_text()!r}')
    assert_true(session.remove('#aabbcc'), 'remove should succeed')
    assert_true(session.undo(), 'undo should restore the removal')
    assert_true(renderer.messages[-1] == 'Undo successful', 'undo should notify')
    assert_true(session.store.colors == ['#aabbcc', '#112233'], 'undo should restore manual order')
    assert_true(session.clear() and session.export_text() == '', 'cleared palette exports empty text')


def test_no_image_is_inert():
    renderer = RecordingRenderer()
    session = PickerSession(renderer=renderer, sampler=Sampler(FixedExtractor([(1, 2, 3)])))
    session.pointer_down(5, 5)
    session.pointer_up(5, 5)
    session.wheel(1)
    assert_true(not session.pick(5, 5), 'pick without an image does nothing')
    assert_true(not session.prefill_basic(), 'prefill without an image does nothing')
    assert_true(not session.start_crop('basic'), 'crop without an image does nothing')
    assert_true(renderer.viewports == [] and renderer.palettes == [], 'nothing should render')


def test_export_image():
    def run(root: Path):
        session, renderer = make_session()
        assert_true(session.export_image(root) is None, 'empty palette should not export')
        session.prefill_basic()
        out_path = session.export_image(root)
        assert_true(out_path == root / EXPORT_FILENAME, f'directory export should use default name, got {out_path}')
        assert_true(out_path.exists(), 'export should write the file')
        with Image.open(out_path) as image:
            assert_true(image.size == (700, 100), f'two colors fit one row, got {image.size}')
        assert_true(renderer.messages[-1] == 'Palette image saved!', 'export should notify')

    with_temp_workspace(run)


def main() -> int:
    tests = [
        test_load_image_fits_pane,
        test_click_picks_color,
        test_small_jitter_still_picks,
        test_drag_pans_without_picking,
        test_wheel_and_fit,
        test_resize_pane_refits_image,
        test_resize_pane_without_image,
        test_modes_are_enum_members,
        test_crop_flow_prefills,
        test_crop_too_small_notifies,
        test_pointer_leave_cancels_crop,
        test_escape_cancels_armed_crop,
        test_prefill_failure_notifies,
        test_undo_and_export_text,
        test_no_image_is_inert,
        test_export_image,
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
    print(f'\nSession regression: {passed}/{total} passed, {failed} failed')
    return 1 if failed else 0


if __name__ == '__main__':
    raise SystemExit(main())
