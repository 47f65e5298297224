"""
winfon.streams - positioned binary reads on seekable streams

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .struct import little_endian as le
from .errors import StreamError, UnexpectedEOFError, HeaderTooShortError


# chunk size for scanning null-terminated strings
_SCAN_CHUNK = 64


class Cursor:
    """
    Binary cursor over a seekable byte stream.

    All positions are absolute byte offsets from the start of the stream.
    Errors from the stream itself are raised as StreamError; reads that
    run into the end of the stream raise UnexpectedEOFError.
    """

    def __init__(self, stream):
        self._stream = stream

    def __repr__(self):
        return f'<{type(self).__name__} stream={self._stream!r}>'

    def tell(self):
        try:
            return self._stream.tell()
        except OSError as e:
            raise StreamError(f'Could not get stream position: {e}') from e

    def seek(self, offset):
        """Move to absolute position."""
        try:
            self._stream.seek(offset)
        except (OSError, ValueError) as e:
            raise StreamError(f'Could not seek to offset 0x{offset:x}: {e}') from e

    def skip(self, count):
        """Move forward by count bytes."""
        try:
            self._stream.seek(count, 1)
        except (OSError, ValueError) as e:
            raise StreamError(f'Could not skip {count} bytes: {e}') from e

    def read(self, size, what='data', error=UnexpectedEOFError):
        """Read exactly size bytes or raise `error`."""
        try:
            data = self._stream.read(size)
        except OSError as e:
            raise StreamError(f'Could not read {what}: {e}') from e
        if len(data) < size:
            raise error(
                f'Expected {size} bytes of {what}, found {len(data)}.'
            )
        return data

    def read_struct(self, struct, what='header', offset=None):
        """Read a fixed-size structure; raise HeaderTooShortError on short read."""
        if offset is not None:
            self.seek(offset)
        data = self.read(struct.size, what, error=HeaderTooShortError)
        return struct.from_bytes(data)

    def read_uint8(self):
        return le.uint8.from_bytes(self.read(1, 'byte'))

    def read_uint16(self):
        return le.uint16.from_bytes(self.read(2, 'word'))

    def read_uint32(self):
        return le.uint32.from_bytes(self.read(4, 'dword'))

    def read_cstring(self):
        """Read bytes up to a null terminator; the terminator is consumed."""
        start = self.tell()
        chunks = []
        while True:
            try:
                chunk = self._stream.read(_SCAN_CHUNK)
            except OSError as e:
                raise StreamError(f'Could not read string: {e}') from e
            if not chunk:
                raise UnexpectedEOFError(
                    f'No string terminator found after offset 0x{start:x}.'
                )
            head, nul, _ = chunk.partition(b'\0')
            chunks.append(head)
            if nul:
                string = b''.join(chunks)
                self.seek(start + len(string) + 1)
                return string
