"""
winfon.errors - exceptions raised while reading FON files

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""


class FileFormatError(Exception):
    """Incorrect file format."""


class HeaderTooShortError(FileFormatError):
    """Fewer bytes available than a fixed-size header requires."""


class NotAnExecutableError(FileFormatError):
    """No MZ signature at the start of the file."""


class UnsupportedContainerFormatError(FileFormatError):
    """Executable container is not in NE format."""


class InvalidOffsetError(FileFormatError):
    """Resource table offset or size out of range."""


class UnexpectedEOFError(FileFormatError):
    """Stream ended before a terminator or bitmap data was found."""


class StreamError(FileFormatError, OSError):
    """Seek or read on the underlying stream failed."""
