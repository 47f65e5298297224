"""
winfon.fnt - Windows FNT font resource

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from .binary import ceildiv
from .struct import little_endian as le
from .streams import Cursor
from .font import FontInfo, Metrics, RuneRange, GlyphAtlas, DecodedFont


##############################################################################
# windows .FNT format definitions
#
# https://web.archive.org/web/20120215123301/http://support.microsoft.com/kb/65123
# https://ffenc.blogspot.com/2008/04/fnt-font-file-format.html

FNT_HEADER_SIZE = 0x76

# FNT resource header
# the pointer fields are read as words, so that 69 bits_pointer
# holds the low word of the face name offset
FNT_HEADER = le.Struct(
    # 00
    version='word',
    # 02
    size='dword',
    # 06
    copyright='60s',
    # 42
    type='word',
    # 44
    points='word',
    # 46
    vert_res='word',
    # 48
    horiz_res='word',
    # 4A
    ascent='word',
    # 4C
    internal_leading='word',
    # 4E
    external_leading='word',
    # 50
    italic='byte',
    # 51
    underline='byte',
    # 52
    strike_out='byte',
    # 53
    weight='word',
    # 55
    charset='byte',
    # 56
    pix_width='word',
    # 58
    pix_height='word',
    # 5A
    pitch_and_family='byte',
    # 5B
    avg_width='word',
    # 5D
    max_width='word',
    # 5F
    first_char='byte',
    # 60
    last_char='byte',
    # 61
    default_char='byte',
    # 62
    break_char='byte',
    # 63
    width_bytes='word',
    # 65
    device='word',
    # 67
    face_data='word',
    # 69
    bits_pointer='word',
    # 6B
    bits_offset='word',
    # 6D
    reserved='byte',
    # 6E
    _padding='8s',
)

# known versions: 1.0, 2.0, 3.0
_FNT_VERSIONS = (0x100, 0x200, 0x300)

# character table location and entry size per version
# v2 GlyphEntry is geWidth, geOffset (word); v3 has a dword geOffset
_CHAR_TABLE_V2 = (0x76, 4)
_CHAR_TABLE_V3 = (0x94, 6)


def char_table_layout(version):
    """Start offset and entry size of the character table."""
    if version == 0x200:
        return _CHAR_TABLE_V2
    return _CHAR_TABLE_V3


def bytes_to_str(s, encoding='latin-1'):
    """Extract null-terminated string from bytes."""
    s, _, _ = s.partition(b'\0')
    return s.decode(encoding, errors='replace')


##############################################################################
# windows .FNT reader

def decode_font(stream, resource_start, encoding='latin-1', cell_width=None):
    """
    Decode the FNT resource at an absolute offset in the stream.

    encoding: encoding of face name and copyright strings (default: latin-1)
    cell_width: atlas cell width in pixels (default: dfPixWidth, which is 0 for proportional fonts)
    """
    cursor = Cursor(stream)
    header = cursor.read_struct(FNT_HEADER, 'font header', offset=resource_start)
    logging.debug(header)
    name = None
    if header.bits_pointer:
        cursor.seek(resource_start + header.bits_pointer)
        name = cursor.read_cstring().decode(encoding, errors='replace')
    info = _convert_header(header, name, encoding)
    _check_header(info)
    widths, atlas = _extract_glyphs(cursor, resource_start, info, cell_width)
    logging.info(
        'Decoded font `%s` v%d.%d: %dx%d, chars 0x%02x--0x%02x',
        info.name, *divmod(info.version, 256),
        atlas.width, info.pix_height, info.first_char, info.last_char
    )
    return DecodedFont(
        info=info,
        metrics=Metrics(
            advance=info.avg_width,
            width=info.pix_width,
            height=info.pix_height,
            ascent=info.pix_height,
            descent=0,
            left=0,
        ),
        atlas=atlas,
        ranges=(RuneRange(low=info.first_char, high=info.last_char, offset=0),),
        glyph_widths=widths,
    )


def _convert_header(header, name, encoding):
    """Convert the header structure to a FontInfo record."""
    props = vars(header)
    props.update(
        # ctypes cuts the char array at the first null
        copyright=bytes_to_str(header.copyright, encoding).strip(' '),
        italic=bool(header.italic),
        underline=bool(header.underline),
        strike_out=bool(header.strike_out),
        name=name,
    )
    return FontInfo(**props)


def _check_header(info):
    """Log inconsistencies in the header; they do not affect decoding."""
    if info.version not in _FNT_VERSIONS:
        logging.warning('Unknown FNT version 0x%04x', info.version)
    # check prop/fixed flag
    if bool(info.pitch_and_family & 1) == bool(info.pix_width):
        logging.warning(
            'Inconsistent spacing properties: dfPixWidth==%d dfPitchAndFamily==%02x',
            info.pix_width, info.pitch_and_family
        )
    if info.last_char < info.first_char:
        logging.warning(
            'Empty character range 0x%02x--0x%02x', info.first_char, info.last_char
        )


def _extract_glyphs(cursor, resource_start, info, cell_width=None):
    """Read the character table and unpack all glyphs into one atlas."""
    table_start, entry_size = char_table_layout(info.version)
    count = max(0, info.last_char - info.first_char + 1)
    height = info.pix_height
    if cell_width is None:
        cell_width = info.pix_width
    atlas = GlyphAtlas(cell_width, height, count)
    widths = []
    for index in range(count):
        cursor.seek(resource_start + table_start + entry_size * index)
        width = cursor.read_uint16()
        if entry_size == 4:
            offset = cursor.read_uint16()
        else:
            offset = cursor.read_uint32()
        widths.append(width)
        if not width:
            continue
        cursor.seek(resource_start + offset)
        bytewidth = ceildiv(width, 8)
        data = cursor.read(bytewidth * height, f'glyph {index}')
        _unpack_glyph(atlas, index, data, bytewidth)
    return tuple(widths), atlas


def _unpack_glyph(atlas, index, data, bytewidth):
    """Write column-major glyph bytes into the atlas, msb leftmost."""
    height = atlas.cell_height
    pixels = atlas.pixels
    for column in range(bytewidth):
        for row in range(height):
            byte = data[column * height + row]
            for bit in range(8):
                x = column * 8 + bit
                # don't put filler bits into the mask
                if x >= atlas.width:
                    break
                if byte & (0x80 >> bit):
                    pixels[atlas.offset(x, row, index)] = 0xff
                else:
                    pixels[atlas.offset(x, row, index)] = 0
