"""
winfon.ne - Windows 16-bit NE executable resource table

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from dataclasses import dataclass

from .streams import Cursor
from .mz import read_mz_header, identify_format, ExecutableFormat
from .errors import UnsupportedContainerFormatError, InvalidOffsetError


# NE format:
#   http://www.csn.ul.ie/~caolan/pub/winresdump/winresdump/doc/winexe.txt
#   http://www.fileformat.info/format/exe/corion-ne.htm
#   https://wiki.osdev.org/NE

# 24 Offset of Resource Table, relative to the NE header
NE_RSRCTAB = 0x24

# type ID values that matter to us
# https://docs.microsoft.com/en-us/windows/desktop/menurc/resource-types
RT_FONTDIR = 0x8007
RT_FONT = 0x8008

# offsets and sizes are stored as u16 but must fit in u32 once shifted
_MAX_OFFSET = 0xffffffff


@dataclass(frozen=True)
class ResourceDescriptor:
    """Location of one resource in the file."""
    # absolute offset from start of file
    offset: int
    size: int
    type: int
    flags: int = 0
    resource_id: int = 0


@dataclass(frozen=True)
class Container:
    """Parsed MZ/NE container metadata."""
    format: ExecutableFormat
    # absolute offset of the NE header
    header_offset: int
    # absolute offset of the resource table
    resource_table_offset: int
    align_shift: int
    resources: tuple = ()

    def resources_of_type(self, type_id):
        """Resources of the given type, in table order."""
        return [_res for _res in self.resources if _res.type == type_id]


def read_container(stream):
    """Read the MZ stub and the NE resource table from a seekable stream."""
    cursor = Cursor(stream)
    mz_header = read_mz_header(cursor)
    header_offset = mz_header.e_lfanew
    format = identify_format(cursor, header_offset)
    if format != ExecutableFormat.NE:
        raise UnsupportedContainerFormatError(
            f'Executable format {format.value} not supported; '
            'only NE font files can be read.'
        )
    logging.debug('NE header at offset 0x%x', header_offset)
    cursor.seek(header_offset + NE_RSRCTAB)
    table_offset = header_offset + cursor.read_uint16()
    cursor.seek(table_offset)
    shift = cursor.read_uint16()
    logging.debug(
        'Resource table at offset 0x%x, alignment shift %d', table_offset, shift
    )
    resources = tuple(_read_resource_table(cursor, shift))
    return Container(
        format=format,
        header_offset=header_offset,
        resource_table_offset=table_offset,
        align_shift=shift,
        resources=resources,
    )


def _read_resource_table(cursor, shift):
    """Iterate over the TYPEINFO blocks following the alignment shift."""
    while True:
        # TYPEINFO: rtTypeID, rtResourceCount, rtReserved
        type_id = cursor.read_uint16()
        if type_id == 0:
            # end of resource table
            break
        count = cursor.read_uint16()
        cursor.skip(4)
        logging.debug('Resource type 0x%04x: %d entries', type_id, count)
        for _ in range(count):
            # NAMEINFO: rnOffset, rnLength, rnFlags, rnID, rnHandle, rnUsage
            raw_offset = cursor.read_uint16()
            raw_length = cursor.read_uint16()
            flags = cursor.read_uint16()
            resource_id = cursor.read_uint16()
            cursor.skip(4)
            # these are offsets w.r.t. the file start, not the NE header
            start = raw_offset << shift
            size = raw_length << shift
            if start > _MAX_OFFSET or size > _MAX_OFFSET:
                raise InvalidOffsetError(
                    f'Resource offset 0x{raw_offset:x} or size 0x{raw_length:x} '
                    f'out of range with alignment shift {shift}.'
                )
            logging.debug(
                'Resource of type 0x%04x at offset 0x%x [0x%x] size 0x%x',
                type_id, start, raw_offset, size
            )
            yield ResourceDescriptor(
                offset=start, size=size, type=type_id,
                flags=flags, resource_id=resource_id,
            )
