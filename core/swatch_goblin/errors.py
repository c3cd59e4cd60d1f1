from __future__ import annotations


class SwatchGoblinError(RuntimeError):
    pass


class InvalidFormatError(SwatchGoblinError, ValueError):
    pass


class InvalidChannelError(SwatchGoblinError, ValueError):
    pass


class OutOfBoundsError(SwatchGoblinError):
    pass


class UnsupportedFormatError(SwatchGoblinError):
    pass


class SelectionTooSmallError(SwatchGoblinError):
    pass


class ExtractionFailedError(SwatchGoblinError):
    pass
