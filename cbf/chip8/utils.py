'''
Helpers to convert the cover image from/to Pillow images.

Each pixel is the index of a colour: the plane p contributes the bit p of it.
'''
import logging

from bitstring import Bits
from PIL import Image as PILImage

from ..exceptions import InvalidValueException
from ..utils import fits
from .types import Image


logger = logging.getLogger(__name__)

DEFAULT_COLOURS = [
    (0x00, 0x00, 0x00),
    (0xff, 0xff, 0xff),
    (0xaa, 0xaa, 0xaa),
    (0x55, 0x55, 0x55),
]


def iter_plane_rows(image, plane):
    '''Yield the rows of a single plane as lists of bits.'''
    offset = plane * image.width * image.height
    for row in range(image.height):
        start = offset + row * image.width
        yield [int(_) for _ in Bits(image.data[start:start + image.width])]


def iter_image_rows(image):
    '''Yield the rows of the image as lists of colour indexes.'''
    planes = [iter_plane_rows(image, _) for _ in range(image.planes)]

    for _ in range(image.height):
        row = [0] * (image.width * 8)
        for plane, rows in enumerate(planes):
            for x, bit in enumerate(next(rows)):
                row[x] |= bit << plane
        yield row


def image_to_pil(image, colours=None):
    '''Render the image as a palette based Pillow image.'''
    colours = list(colours or DEFAULT_COLOURS)
    if len(colours) < (1 << image.planes):
        logger.warning('%d colours for an image with %d planes', len(colours), image.planes)

    pixels = bytes(index for row in iter_image_rows(image) for index in row)

    picture = PILImage.frombytes('P', (image.width * 8, image.height), pixels)
    picture.putpalette([component for colour in colours for component in colour])

    return picture


def image_from_pil(picture, planes=1):
    '''Convert a Pillow image into an Image with the given number of planes.

    Palette based images keep their indexes, the others are thresholded
    to black (0) and white (1).'''
    width, height = picture.size

    if width % 8:
        raise InvalidValueException(f'the width of the image ({width} pixels) must be a multiple of 8')

    if not fits(width // 8, 1) or not fits(height, 1) or not fits(planes, 1):
        raise InvalidValueException(f'an image of {width}x{height} pixels with {planes} planes is too big')

    if picture.mode == 'P':
        indexes = picture.tobytes()
    else:
        indexes = bytes(1 if _ >= 0x80 else 0 for _ in picture.convert('L').tobytes())

    if max(indexes, default=0) >= (1 << planes):
        raise InvalidValueException(f'the image uses more colours than {planes} plane(s) can represent')

    data = b''
    for plane in range(planes):
        bits = Bits([(_ >> plane) & 1 for _ in indexes])
        data += bits.bytes

    return Image(planes, width // 8, height, data)
