"""
winfon test suite
FNT resource decoding tests
"""

import io
import unittest

import winfon
from winfon.mz import MZ_HEADER
from winfon.struct import StructError
from winfon.fnt import FNT_HEADER, FNT_HEADER_SIZE, char_table_layout, decode_font
from winfon.font import RuneRange
from .base import BaseTester, BrokenStream, create_fnt, expected_rows


class TestHeader(BaseTester):
    """Test the fixed-layout structures."""

    def test_mz_header_layout(self):
        """Test MZ header size and field offsets."""
        self.assertEqual(MZ_HEADER.size, 64)
        self.assertEqual(MZ_HEADER.offset_of('e_magic'), 0)
        self.assertEqual(MZ_HEADER.offset_of('e_lfanew'), 0x3c)

    def test_fnt_header_layout(self):
        """Test FNT header size and field offsets."""
        self.assertEqual(FNT_HEADER.size, FNT_HEADER_SIZE)
        self.assertEqual(FNT_HEADER_SIZE, 0x76)
        offsets = {
            'version': 0x00, 'size': 0x02, 'copyright': 0x06, 'type': 0x42,
            'points': 0x44, 'vert_res': 0x46, 'horiz_res': 0x48,
            'ascent': 0x4a, 'internal_leading': 0x4c,
            'external_leading': 0x4e, 'italic': 0x50, 'underline': 0x51,
            'strike_out': 0x52, 'weight': 0x53, 'charset': 0x55,
            'pix_width': 0x56, 'pix_height': 0x58, 'pitch_and_family': 0x5a,
            'avg_width': 0x5b, 'max_width': 0x5d, 'first_char': 0x5f,
            'last_char': 0x60, 'default_char': 0x61, 'break_char': 0x62,
            'width_bytes': 0x63, 'device': 0x65, 'face_data': 0x67,
            'bits_pointer': 0x69, 'bits_offset': 0x6b, 'reserved': 0x6d,
        }
        for field, offset in offsets.items():
            self.assertEqual(FNT_HEADER.offset_of(field), offset, field)

    def test_unknown_field(self):
        """Test asking for the offset of a field that isn't there."""
        with self.assertRaises(StructError):
            FNT_HEADER.offset_of('dfFoo')

    def test_char_table_layout(self):
        """Test character table location by version."""
        self.assertEqual(char_table_layout(0x200), (0x76, 4))
        self.assertEqual(char_table_layout(0x300), (0x94, 6))
        self.assertEqual(char_table_layout(0x100), (0x94, 6))

    def test_header_too_short(self):
        """Test a resource shorter than the header."""
        data = self.make_fnt()[:0x50]
        with self.assertRaises(winfon.HeaderTooShortError):
            decode_font(io.BytesIO(data), 0)

    def test_header_fields(self):
        """Test header fields copied to font info."""
        data = self.make_fnt(
            italic=1, underline=0, strike_out=1, weight=700, charset=0xcc,
            points=12, default_char=0x01, break_char=0x00,
        )
        info = decode_font(io.BytesIO(data), 0).info
        self.assertEqual(info.version, 0x200)
        self.assertEqual(info.points, 12)
        self.assertIs(info.italic, True)
        self.assertIs(info.underline, False)
        self.assertIs(info.strike_out, True)
        self.assertEqual(info.weight_name, 'bold')
        self.assertEqual(info.charset_name, 'windows-1251')
        self.assertEqual(info.family_style, 'modern')
        self.assertFalse(info.proportional)
        self.assertEqual((info.first_char, info.last_char), (0x20, 0x22))
        self.assertEqual(info.pix_width, 8)
        self.assertEqual(info.pix_height, 8)
        self.assertEqual(info.default_char, 0x01)

    def test_copyright_trimmed(self):
        """Test stripping spaces around the copyright string."""
        for copyright in (b'   (c) 1991 Nobody   ', b'(c) 1991 Nobody'.ljust(60)):
            data = self.make_fnt(copyright=copyright)
            font = decode_font(io.BytesIO(data), 0)
            self.assertEqual(font.copyright, '(c) 1991 Nobody')
        data = self.make_fnt(copyright=b' ' * 60)
        self.assertEqual(decode_font(io.BytesIO(data), 0).copyright, '')

    def test_name(self):
        """Test reading the face name."""
        font = decode_font(io.BytesIO(self.make_fnt(name=b'Fixedsys')), 0)
        self.assertEqual(font.name, 'Fixedsys')
        self.assertEqual(font.info.bits_pointer, 0x76 + 3*4)

    def test_no_name(self):
        """Test a resource with a zero name pointer."""
        font = decode_font(io.BytesIO(self.make_fnt(name=None)), 0)
        self.assertIsNone(font.name)

    def test_name_encoding(self):
        """Test decoding the face name."""
        data = self.make_fnt(name='Schrift\xfc'.encode('latin-1'))
        self.assertEqual(decode_font(io.BytesIO(data), 0).name, 'Schrift\xfc')
        data = self.make_fnt(name='Шрифт'.encode('cp1251'))
        font = decode_font(io.BytesIO(data), 0, encoding='cp1251')
        self.assertEqual(font.name, 'Шрифт')

    def test_name_unterminated(self):
        """Test a face name running into the end of the file."""
        data = create_fnt([], name=b'Unterminated')[:-1]
        with self.assertRaises(winfon.UnexpectedEOFError):
            decode_font(io.BytesIO(data), 0)

    def test_resource_offset(self):
        """Test that pointers are relative to the resource start."""
        data = bytes(0x123) + self.make_fnt(name=b'Offset')
        font = decode_font(io.BytesIO(data), 0x123)
        self.assertEqual(font.name, 'Offset')
        self.assertEqual(font.glyph(0x20), expected_rows(self.glyph_box))

    def test_unknown_version(self):
        """Test that an unknown version is decoded as 3.0 with a warning."""
        data = self.make_fnt(version=0x0500)
        with self.assertLogs(level='WARNING'):
            font = decode_font(io.BytesIO(data), 0)
        self.assertEqual(font.glyph(0x21), expected_rows(self.glyph_bang))


class TestGlyphs(BaseTester):
    """Test unpacking glyph bitmaps."""

    def _check_font(self, font):
        self.assertEqual(font.atlas.width, 8)
        self.assertEqual(font.atlas.height, 24)
        self.assertEqual(len(font.atlas.pixels), 8*24)
        self.assertEqual(font.glyph(0x20), expected_rows(self.glyph_box))
        self.assertEqual(font.glyph(0x21), expected_rows(self.glyph_bang))
        self.assertEqual(font.glyph(0x22), expected_rows(self.glyph_quote))
        self.assertTrue(set(font.atlas.pixels) <= {0, 0xff})

    def test_v2(self):
        """Test decoding a 2.0 font with 4-byte character table entries."""
        font = decode_font(io.BytesIO(self.make_fnt(version=0x200)), 0)
        self._check_font(font)

    def test_v3(self):
        """Test decoding a 3.0 font with 6-byte character table entries."""
        font = decode_font(io.BytesIO(self.make_fnt(version=0x300)), 0)
        self._check_font(font)

    def test_atlas_layout(self):
        """Test that glyphs are stacked vertically in the atlas."""
        font = decode_font(io.BytesIO(self.make_fnt()), 0)
        atlas = font.atlas
        self.assertEqual(atlas.offset(0, 0, 1), 64)
        self.assertEqual(atlas.offset(3, 2, 2), 2*64 + 2*8 + 3)
        self.assertEqual(
            bytes(atlas.pixels[64:128]),
            b''.join(expected_rows(self.glyph_bang))
        )

    def test_metrics(self):
        """Test face metrics."""
        data = self.make_fnt(avg_width=7)
        metrics = decode_font(io.BytesIO(data), 0).metrics
        self.assertEqual(metrics.advance, 7)
        self.assertEqual(metrics.width, 8)
        self.assertEqual(metrics.height, 8)
        self.assertEqual(metrics.ascent, 8)
        self.assertEqual(metrics.descent, 0)
        self.assertEqual(metrics.left, 0)

    def test_ranges(self):
        """Test mapping character codes to atlas cells."""
        font = decode_font(io.BytesIO(self.make_fnt(first_char=0x41)), 0)
        self.assertEqual(font.ranges, (RuneRange(0x41, 0x43, 0),))
        rune_range, = font.ranges
        self.assertEqual(len(rune_range), 3)
        self.assertIn(0x43, rune_range)
        self.assertNotIn(0x44, rune_range)
        self.assertEqual(rune_range.index_of(0x42), 1)
        self.assertEqual(font.glyph('B'), expected_rows(self.glyph_bang))
        self.assertEqual(font.glyph(b'C'), expected_rows(self.glyph_quote))
        with self.assertRaises(KeyError):
            font.glyph(0x40)
        with self.assertRaises(KeyError):
            font.glyph(0x44)

    def test_glyph_text(self):
        """Test rendering a glyph as text."""
        font = decode_font(io.BytesIO(self.make_fnt()), 0)
        self.assertEqual(font.glyph_text(0x21), (
            '...@@...\n' * 5 + '........\n' + '...@@...\n' + '........\n'
        ))

    def test_zero_width(self):
        """Test that a zero-width glyph reads no data and stays blank."""
        # the empty glyph's offset points to the end of the resource
        data = create_fnt([(8, self.glyph_box), (0, b'')])
        font = decode_font(io.BytesIO(data), 0)
        self.assertEqual(font.glyph_widths, (8, 0))
        self.assertEqual(font.atlas.height, 16)
        self.assertEqual(font.glyph(0x21), (bytes(8),) * 8)
        self.assertEqual(font.glyph(0x20), expected_rows(self.glyph_box))

    def test_narrow_cell(self):
        """Test that filler bits beyond the cell width are not written."""
        data = create_fnt([(5, b'\xff' * 8), (5, b'\x88' * 8)], pix_width=5)
        font = decode_font(io.BytesIO(data), 0)
        self.assertEqual(font.atlas.width, 5)
        self.assertEqual(len(font.atlas.pixels), 5 * 16)
        self.assertEqual(font.glyph(0x20), (b'\xff' * 5,) * 8)
        self.assertEqual(font.glyph(0x21), (b'\xff\0\0\0\xff',) * 8)

    def test_wide_glyph(self):
        """Test column-major byte order for glyphs wider than 8 pixels."""
        # two byte-columns of two rows each
        data = create_fnt(
            [(12, bytes((0xf0, 0x0f, 0xaa, 0x55)))],
            pix_width=12, pix_height=2,
        )
        font = decode_font(io.BytesIO(data), 0)
        self.assertEqual(font.atlas.width, 12)
        self.assertEqual(font.glyph_text(0x20), (
            '@@@@....@.@.\n'
            '....@@@@.@.@\n'
        ))

    def test_proportional(self):
        """Test that a proportional font has an empty atlas by default."""
        data = create_fnt(
            [(3, b'\xe0' * 4), (6, b'\xfc' * 4)], pix_width=0, pix_height=4
        )
        font = decode_font(io.BytesIO(data), 0)
        self.assertTrue(font.info.proportional)
        self.assertEqual(font.metrics.width, 0)
        self.assertEqual(font.atlas.width, font.metrics.width)
        self.assertEqual(font.atlas.height, 8)
        self.assertEqual(len(font.atlas.pixels), 0)
        self.assertEqual(font.glyph_widths, (3, 6))
        self.assertEqual(font.glyph(0x21), (b'',) * 4)

    def test_proportional_cell_width(self):
        """Test decoding a proportional font into cells of a given width."""
        data = create_fnt(
            [(3, b'\xe0' * 4), (6, b'\xfc' * 4)], pix_width=0, pix_height=4
        )
        font = decode_font(io.BytesIO(data), 0, cell_width=6)
        self.assertEqual(font.metrics.width, 0)
        self.assertEqual(font.atlas.width, 6)
        self.assertEqual(font.glyph_text(0x20), '@@@...\n' * 4)
        self.assertEqual(font.glyph_text(0x21), '@@@@@@\n' * 4)

    def test_glyph_wider_than_cell(self):
        """Test that a glyph wider than the cell is clipped to the cell."""
        data = create_fnt(
            [(16, b'\xff' * 16), (8, self.glyph_box)], pix_width=8
        )
        font = decode_font(io.BytesIO(data), 0)
        self.assertEqual(font.atlas.width, 8)
        self.assertEqual(len(font.atlas.pixels), 8 * 16)
        self.assertEqual(font.glyph(0x20), (b'\xff' * 8,) * 8)
        # the next cell is not overwritten by the clipped columns
        self.assertEqual(font.glyph(0x21), expected_rows(self.glyph_box))

    def test_stream_error(self):
        """Test that a failing read while decoding glyphs is reported."""
        data = self.make_fnt()
        # fail once the glyph bitmaps are reached
        stream = BrokenStream(data, len(data) - 8)
        with self.assertRaises(winfon.StreamError) as cm:
            decode_font(stream, 0)
        self.assertIsInstance(cm.exception.__cause__, OSError)

    def test_empty_range(self):
        """Test a font without glyphs."""
        data = create_fnt([], name=None)
        font = decode_font(io.BytesIO(data), 0)
        self.assertEqual(font.atlas.count, 0)
        self.assertEqual(font.atlas.height, 0)
        self.assertEqual(len(font.ranges[0]), 0)

    def test_truncated_bitmap(self):
        """Test glyph data running into the end of the file."""
        data = self.make_fnt()[:-3]
        with self.assertRaises(winfon.UnexpectedEOFError):
            decode_font(io.BytesIO(data), 0)


if __name__ == '__main__':
    unittest.main()
