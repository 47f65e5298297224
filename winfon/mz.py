"""
winfon.mz - DOS MZ executable header

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from enum import Enum

from .struct import little_endian as le
from .errors import NotAnExecutableError


# MZ header:
#   http://www.delorie.com/djgpp/doc/exe/
#   https://wiki.osdev.org/MZ

MZ_MAGIC = b'MZ'

# DOS executable (MZ) header
# 40h size of structure
MZ_HEADER = le.Struct(
    # 00 Magic number
    e_magic='2s',
    # 02 Bytes on last page of file
    e_cblp='uint16',
    # 04 Pages in file
    e_cp='uint16',
    # 06 Relocations
    e_crlc='uint16',
    # 08 Size of header in paragraphs
    e_cparhdr='uint16',
    # 0A Minimum extra paragraphs needed
    e_minalloc='uint16',
    # 0C Maximum extra paragraphs needed
    e_maxalloc='uint16',
    # 0E Initial (relative) SS value
    e_ss='uint16',
    # 10 Initial SP value
    e_sp='uint16',
    # 12 Checksum
    e_csum='uint16',
    # 14 Initial IP value
    e_ip='uint16',
    # 16 Initial (relative) CS value
    e_cs='uint16',
    # 18 File address of relocation table
    e_lfarlc='uint16',
    # 1A Overlay number
    e_ovno='uint16',
    # 1C Reserved, OEM id and info
    e_res='32s',
    # 3C File address of new exe header
    e_lfanew='uint32',
)


class ExecutableFormat(Enum):
    """Format of the header that follows the MZ stub."""
    OTHER = 'other'
    PE = 'PE'
    NE = 'NE'


def read_mz_header(cursor):
    """Read and check the MZ header at the start of the stream."""
    header = cursor.read_struct(MZ_HEADER, 'MZ header', offset=0)
    # e_magic is a char array, so ctypes drops any trailing nulls
    if header.e_magic != MZ_MAGIC:
        raise NotAnExecutableError(
            f'Not an MZ executable: found signature {header.e_magic!r}.'
        )
    logging.debug(header)
    return header


def identify_format(cursor, offset):
    """Identify the executable format from the signature at offset."""
    cursor.seek(offset)
    preamble = cursor.read(4, 'executable signature')
    if preamble[:2] == b'NE':
        return ExecutableFormat.NE
    if preamble == b'PE\0\0':
        return ExecutableFormat.PE
    logging.debug('Unrecognised executable signature %r', preamble)
    return ExecutableFormat.OTHER
