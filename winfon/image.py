"""
winfon.image - glyph atlas as PIL image

(c) 2019--2023 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

try:
    from PIL import Image
except ImportError:
    Image = None


def atlas_to_image(atlas):
    """Convert a glyph atlas to a greyscale (mode L) PIL image."""
    if not Image:
        raise ImportError('Converting a glyph atlas to an image requires Pillow.')
    return Image.frombytes('L', (atlas.width, atlas.height), bytes(atlas.pixels))
