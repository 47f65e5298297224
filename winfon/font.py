"""
winfon.font - decoded bitmap font face

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from dataclasses import dataclass


# https://web.archive.org/web/20120215123301/http://support.microsoft.com/kb/65123
# charset ids as defined in freetype's ftwinfnt.h
CHARSET_MAP = {
    0x00: 'windows-1252',
    # no codepage
    0x01: '',
    0x02: 'windows-symbol',
    0x4d: 'mac-roman',
    0x80: 'windows-932',
    0x81: 'windows-949',
    0x82: 'windows-1361',
    0x86: 'windows-936',
    0x88: 'windows-950',
    0xa1: 'windows-1253',
    0xa2: 'windows-1254',
    0xa3: 'windows-1258',
    0xb1: 'windows-1255',
    0xb2: 'windows-1256',
    0xba: 'windows-1257',
    0xcc: 'windows-1251',
    0xde: 'windows-874',
    0xee: 'windows-1250',
    # could be any OEM codepage
    0xff: '',
}

# dfWeight is on a scale of 1 to 1000, 400 is regular
WEIGHT_MAP = {
    0: '', # undefined/unknown
    100: 'thin',
    200: 'extra-light',
    300: 'light',
    400: 'regular',
    500: 'medium',
    600: 'semi-bold',
    700: 'bold',
    800: 'extra-bold',
    900: 'heavy',
}

# pitch and family
# low bit: 1 - proportional 0 - monospace
# upper nybble: family
FAMILY_STYLE_MAP = {
    0<<4: '',
    1<<4: 'serif',
    2<<4: 'sans serif',
    3<<4: 'modern',
    4<<4: 'script',
    5<<4: 'decorative',
}


@dataclass(frozen=True)
class FontInfo:
    """Font resource header fields."""
    version: int
    size: int
    copyright: str
    type: int
    points: int
    vert_res: int
    horiz_res: int
    ascent: int
    internal_leading: int
    external_leading: int
    italic: bool
    underline: bool
    strike_out: bool
    weight: int
    charset: int
    pix_width: int
    pix_height: int
    pitch_and_family: int
    avg_width: int
    max_width: int
    first_char: int
    last_char: int
    default_char: int
    break_char: int
    width_bytes: int
    device: int
    face_data: int
    bits_pointer: int
    bits_offset: int
    reserved: int
    name: str = None

    @property
    def charset_name(self):
        """Codepage name for the charset id, or empty if undefined."""
        return CHARSET_MAP.get(self.charset, '')

    @property
    def weight_name(self):
        """Weight name, rounded to the nearest defined weight."""
        if not self.weight:
            return ''
        return WEIGHT_MAP[round(max(100, min(900, self.weight)), -2)]

    @property
    def family_style(self):
        return FAMILY_STYLE_MAP.get(self.pitch_and_family & 0xf0, '')

    @property
    def proportional(self):
        return not self.pix_width


@dataclass(frozen=True)
class Metrics:
    """Face metrics in pixels."""
    # glyph advance
    advance: int
    width: int
    # inter-line height
    height: int
    ascent: int
    descent: int = 0
    # left side bearing; positive means glyphs start right of the dot
    left: int = 0


@dataclass(frozen=True)
class RuneRange:
    """Contiguous range of character codes, inclusive on both ends."""
    low: int
    high: int
    # index of the sub-image for `low` in the atlas
    offset: int = 0

    def __contains__(self, code):
        return self.low <= code <= self.high

    def __len__(self):
        return max(0, self.high - self.low + 1)

    def index_of(self, code):
        """Atlas sub-image index for a character code."""
        if code not in self:
            raise KeyError(code)
        return self.offset + code - self.low


class GlyphAtlas:
    """
    Alpha mask holding all glyphs, stacked vertically.

    Each pixel is one byte, 0xff for ink and 0 for paper.
    The buffer is allocated once at full size.
    """

    def __init__(self, width, cell_height, count):
        self.width = width
        self.cell_height = cell_height
        self.count = count
        self.height = count * cell_height
        self.pixels = bytearray(self.width * self.height)

    def __repr__(self):
        return (
            f'<{type(self).__name__} {self.width}x{self.height} '
            f'cells={self.count}>'
        )

    def offset(self, x, row, index):
        """Buffer offset of pixel (x, row) in the glyph at atlas index."""
        return (index * self.cell_height + row) * self.width + x

    def cell(self, index):
        """Rows of the glyph at atlas index, as bytes per row."""
        if not 0 <= index < self.count:
            raise IndexError(index)
        return tuple(
            bytes(self.pixels[self.offset(0, _row, index):self.offset(0, _row+1, index)])
            for _row in range(self.cell_height)
        )

    def as_image(self):
        """Convert to a greyscale PIL image."""
        from .image import atlas_to_image
        return atlas_to_image(self)


@dataclass
class DecodedFont:
    """Font face decoded from one FNT resource."""
    info: FontInfo
    metrics: Metrics
    atlas: GlyphAtlas
    ranges: tuple
    glyph_widths: tuple = ()

    @property
    def name(self):
        return self.info.name

    @property
    def copyright(self):
        return self.info.copyright

    def _index(self, code):
        for rune_range in self.ranges:
            if code in rune_range:
                return rune_range.index_of(code)
        raise KeyError(f'No glyph for character code 0x{code:02x}.')

    def glyph(self, code):
        """Rows of the glyph for a character code (int or single char)."""
        if isinstance(code, (str, bytes)):
            code = ord(code)
        return self.atlas.cell(self._index(code))

    def glyph_text(self, code, *, ink='@', paper='.'):
        """Render a glyph as text."""
        return ''.join(
            ''.join(ink if _px else paper for _px in _row) + '\n'
            for _row in self.glyph(code)
        )
