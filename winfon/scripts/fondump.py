"""
Show the fonts in a Windows .FON file
(c) 2019--2023 Rob Hagemans, licence: https://opensource.org/licenses/MIT
"""

import sys
import logging
import argparse
from contextlib import contextmanager

import winfon


@contextmanager
def wrap_main(debug=False):
    """Configure logging; report errors reading the font file and exit."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(levelname)s: %(message)s', force=True
    )
    try:
        yield
    except winfon.FileFormatError as exc:
        if debug:
            raise
        logging.error(exc)
        sys.exit(1)


def summary(index, font):
    """One-line description of a decoded font."""
    info = font.info
    return (
        f'{index}: {info.name or "(no name)"} '
        f'{info.points}pt {font.atlas.width}x{info.pix_height} '
        f'[0x{info.first_char:02x}--0x{info.last_char:02x}] '
        f'{info.weight_name or "-"} {info.charset_name or "-"} '
        f'"{info.copyright}"'
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument('infile', help='.FON file to read')
    parser.add_argument(
        '--glyphs', default='',
        help='characters to show as text for each font'
    )
    parser.add_argument(
        '--image', default=None, metavar='PREFIX',
        help='save each glyph atlas as PREFIX-N.png'
    )
    parser.add_argument(
        '--cell-width', default=None, type=int,
        help='atlas cell width in pixels (default: the font\'s pixel width; set for proportional fonts)'
    )
    parser.add_argument(
        '--encoding', default='latin-1',
        help='encoding of font names and copyright strings (default: latin-1)'
    )
    parser.add_argument(
        '--debug', action='store_true', default=False,
        help='enable debugging output'
    )
    args = parser.parse_args(argv)
    with wrap_main(args.debug):
        fonts = winfon.open_fonts(
            args.infile, encoding=args.encoding, cell_width=args.cell_width
        )
        for index, font in enumerate(fonts):
            print(summary(index, font))
            for char in args.glyphs:
                try:
                    print(font.glyph_text(char))
                except KeyError as e:
                    logging.warning(e)
            if args.image and not font.atlas.pixels:
                logging.warning(
                    'Font %d has an empty atlas; not saving an image. Try --cell-width.', index
                )
            elif args.image:
                filename = f'{args.image}-{index}.png'
                font.atlas.as_image().save(filename)
                logging.info('Saved glyph atlas to %s', filename)


if __name__ == '__main__':
    main()
