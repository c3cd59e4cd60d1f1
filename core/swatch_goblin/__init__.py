from .color_math import (
    contrast_color,
    derive_variations,
    display_hex,
    hex_to_rgb,
    hsl_to_rgb,
    normalize_hex,
    rgb_to_hex,
    rgb_to_hsl,
)
from .crop_session import MIN_CROP_SIZE, CropSession, CropState
from .decode import SUPPORTED_MIME_TYPES, decode_image, load_image_file
from .errors import (
    ExtractionFailedError,
    InvalidChannelError,
    InvalidFormatError,
    OutOfBoundsError,
    SelectionTooSmallError,
    SwatchGoblinError,
    UnsupportedFormatError,
)
from .export import export_text, render_palette_image, save_palette_image
from .extractors import ColorThiefExtractor, KMeansExtractor, get_extractor
from .palette_store import HISTORY_LIMIT, MAX_COLORS, HistoryStack, PaletteStore
from .sampler import Sampler, sample_neighborhood
from .session import InteractionMode, NullRenderer, PickerSession, Renderer
from .viewport import ViewportState, apply_pan, apply_zoom_delta, canvas_to_image, fit_to_pane

__all__ = [
    'rgb_to_hex',
    'hex_to_rgb',
    'normalize_hex',
    'display_hex',
    'rgb_to_hsl',
    'hsl_to_rgb',
    'contrast_color',
    'derive_variations',
    'sample_neighborhood',
    'Sampler',
    'KMeansExtractor',
    'ColorThiefExtractor',
    'get_extractor',
    'ViewportState',
    'canvas_to_image',
    'fit_to_pane',
    'apply_zoom_delta',
    'apply_pan',
    'MAX_COLORS',
    'HISTORY_LIMIT',
    'HistoryStack',
    'PaletteStore',
    'MIN_CROP_SIZE',
    'CropSession',
    'CropState',
    'SUPPORTED_MIME_TYPES',
    'decode_image',
    'load_image_file',
    'export_text',
    'render_palette_image',
    'save_palette_image',
    'Renderer',
    'NullRenderer',
    'PickerSession',
    'InteractionMode',
    'SwatchGoblinError',
    'InvalidFormatError',
    'InvalidChannelError',
    'OutOfBoundsError',
    'UnsupportedFormatError',
    'SelectionTooSmallError',
    'ExtractionFailedError',
]
