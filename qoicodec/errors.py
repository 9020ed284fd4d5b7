class QOIError(ValueError):
    """Base class for every failure raised while decoding a QOI stream."""


class HeaderTooShortError(QOIError):
    pass


# Older name used by the header reader
MalformedHeaderError = HeaderTooShortError


class InvalidMagicError(QOIError):
    pass


class TruncatedStreamError(QOIError):
    """A multi-byte opcode runs past the end of the opcode stream."""


class UnrecognizedOpcodeError(QOIError):
    pass


class PaddingMismatchError(QOIError):
    """The trailing 8 bytes are not the QOI end marker."""


class PixelCountMismatchError(QOIError):
    """The opcode stream produced a different number of pixels than the header declares."""
