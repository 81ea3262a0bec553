class LyricsParseError(ValueError):
    pass


class StructuralError(LyricsParseError):
    """A document-level precondition (e.g. a mandatory header) is missing."""


class TimeFormatError(LyricsParseError):
    pass
