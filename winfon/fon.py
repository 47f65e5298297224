"""
winfon.fon - Windows .FON font library reader

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from .ne import read_container, RT_FONT
from .fnt import decode_font
from .errors import StreamError


def read_fonts(stream, *, encoding='latin-1', cell_width=None):
    """
    Read all fonts from a Windows NE .FON file.

    stream: seekable binary stream; it is not closed
    encoding: encoding of face name and copyright strings (default: latin-1)
    cell_width: atlas cell width in pixels (default: the font's dfPixWidth)
    """
    container = read_container(stream)
    resources = container.resources_of_type(RT_FONT)
    logging.debug('Found %d font resources', len(resources))
    return [
        decode_font(
            stream, _resource.offset, encoding=encoding, cell_width=cell_width
        )
        for _resource in resources
    ]


def open_fonts(path, *, encoding='latin-1', cell_width=None):
    """Open a .FON file and read all fonts from it."""
    try:
        stream = open(path, 'rb')
    except OSError as e:
        raise StreamError(f'Failed to open font file {path}: {e}') from e
    with stream:
        return read_fonts(stream, encoding=encoding, cell_width=cell_width)
