"""
winfon.struct - binary structures

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import ctypes
from types import SimpleNamespace
from functools import partial


class StructError(ValueError):
    """Structure could not be defined or unpacked."""


##############################################################################
# binary structs


# type strings
TYPES = {
    'byte': ctypes.c_uint8,
    'uint8': ctypes.c_uint8,
    'B': ctypes.c_uint8,

    'word': ctypes.c_uint16,
    'uint16': ctypes.c_uint16,
    'H': ctypes.c_uint16,

    'dword': ctypes.c_uint32,
    'uint32': ctypes.c_uint32,
    'I': ctypes.c_uint32,

    'char': ctypes.c_char,
    's': ctypes.c_char,
}


def _parse_type(atype):
    """Convert struct member type specification to ctypes base type or array."""
    try:
        return TYPES[atype]
    except KeyError:
        pass
    if isinstance(atype, str) and atype.endswith('s'):
        return ctypes.c_char * int(atype[:-1])
    raise StructError('Field type `{}` not understood'.format(atype))


class _WrappedCType:
    """Wrapper for ctypes type."""

    def from_bytes(self, data, offset=0):
        """Unpack from a buffer, starting at offset."""
        try:
            cvalue = self._ctype.from_buffer_copy(data, offset)
        except ValueError as e:
            raise StructError(e) from e
        return self._wrap(cvalue)

    def _wrap(self, cvalue):
        raise NotImplementedError()

    @property
    def size(self):
        return ctypes.sizeof(self._ctype)


class ScalarType(_WrappedCType):
    """Wrapper for scalar types; unpacks to plain int."""

    def __init__(self, endian, ctype):
        if endian[:1].lower() in ('b', '>'):
            self._ctype = ctype.__ctype_be__
        elif endian[:1].lower() in ('l', '<'):
            self._ctype = ctype.__ctype_le__
        else:
            raise ValueError(f"Endianness '{endian}' not recognised.")

    def _wrap(self, cvalue):
        return cvalue.value

    def to_bytes(self, value):
        return bytes(self._ctype(value))


class StructValue:
    """Unpacked structure: attribute access to fields, bytes() to repack."""

    def __init__(self, cvalue):
        self._cvalue = cvalue

    def __getattr__(self, attr):
        if attr.startswith('_'):
            raise AttributeError(attr)
        return getattr(self._cvalue, attr)

    def __setattr__(self, attr, value):
        if attr.startswith('_'):
            return super().__setattr__(attr, value)
        return setattr(self._cvalue, attr, value)

    def __bytes__(self):
        return bytes(self._cvalue)

    @property
    def __dict__(self):
        return {
            _field: getattr(self, _field)
            for _field, *_ in self._cvalue._fields_
            if not _field.startswith('_')
        }

    def __repr__(self):
        return type(self).__name__ + '({})'.format(
            ', '.join(
                '{}={!r}'.format(_fld, _val)
                for _fld, _val in vars(self).items()
            )
        )


class StructType(_WrappedCType):
    """
    Represent a structured type.

    mystruct = StructType('little', first='uint8', second='uint16')
    s = mystruct(first=1, second=2)

    assert bytes(s) == b'\1\2\0'
    assert mystruct.from_bytes(b'\1\2\0').second == 2
    """

    def __init__(self, endian, /, **description):
        """Create a structured type."""
        if endian[:1].lower() in ('b', '>'):
            parent = ctypes.BigEndianStructure
        elif endian[:1].lower() in ('l', '<'):
            parent = ctypes.LittleEndianStructure
        else:
            raise ValueError(f"Endianness '{endian}' not recognised.")

        class _CStruct(parent):
            _fields_ = tuple(
                (_field, _parse_type(_type))
                for _field, _type in description.items()
            )
            _pack_ = True
            _layout_ = 'ms'

        self._ctype = _CStruct
        self.element_types = description

    def __call__(self, **kwargs):
        """Instantiate a struct variable."""
        return StructValue(self._ctype(**kwargs))

    def _wrap(self, cvalue):
        return StructValue(cvalue)

    def offset_of(self, field):
        """Byte offset of a field from the start of the structure."""
        try:
            return getattr(self._ctype, field).offset
        except AttributeError:
            raise StructError(f'No field `{field}` in structure.') from None


little_endian = SimpleNamespace(
    Struct=partial(StructType, '<'),
    uint8=ScalarType('<', ctypes.c_uint8),
    uint16=ScalarType('<', ctypes.c_uint16),
    uint32=ScalarType('<', ctypes.c_uint32),
)
