"""
winfon - read bitmap fonts from Windows NE .FON files

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .constants import VERSION as __version__
from .errors import (
    FileFormatError, HeaderTooShortError, NotAnExecutableError,
    UnsupportedContainerFormatError, InvalidOffsetError,
    UnexpectedEOFError, StreamError,
)
from .mz import ExecutableFormat
from .ne import read_container, Container, ResourceDescriptor, RT_FONT, RT_FONTDIR
from .fnt import decode_font
from .font import FontInfo, Metrics, RuneRange, GlyphAtlas, DecodedFont
from .fon import read_fonts, open_fonts
