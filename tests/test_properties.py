from datetime import datetime, timezone

import pytest

from cbf import (
    Image,
    FontData,
    Key,
    PropertyKind,
    ScreenOrientation,
    encode_property,
    decode_property,
)
from cbf.exceptions import (
    FormatException,
    InvalidValueException,
    OverflowException,
    UnknownKindException,
)


RELEASE_DATE = datetime(2022, 7, 9, 14, 43, tzinfo=timezone.utc)

# a smiley, 16 pixels wide
IMAGE = Image(1, 2, 16, bytes([
    0x00, 0x00, 0x07, 0xe0, 0x18, 0x18, 0x20, 0x04,
    0x44, 0x22, 0x44, 0x22, 0x80, 0x01, 0x80, 0x01,
    0x80, 0x01, 0x88, 0x11, 0x47, 0xe2, 0x40, 0x02,
    0x20, 0x04, 0x18, 0x18, 0x07, 0xe0, 0x00, 0x00,
]))

KEYS = {
    Key.UP: 5,
    Key.DOWN: 8,
    Key.LEFT: 7,
    Key.RIGHT: 9,
    Key.A: 6,
    Key.B: 4,
}


@pytest.mark.parametrize('kind,value,encoded', [
    ('name', 'Test', b'Test\x00'),
    ('description', 'A description', b'A description\x00'),
    ('authors', 'Timendus', b'Timendus\x00'),
    ('urls', 'https://example.com', b'https://example.com\x00'),
    ('tool_vanity', 'File created by AwesomeChip2000', b'File created by AwesomeChip2000\x00'),
    ('license_information', 'CC0', b'CC0\x00'),
    ('cycles_per_frame', 200000, b'\x03\x0d\x40'),
    ('release_date', RELEASE_DATE, b'\x62\xc9\x93\xf4'),
    ('image', IMAGE, b'\x01\x02\x10' + IMAGE.data),
    ('keys', KEYS, b'\x06\x00\x05\x01\x08\x02\x07\x03\x09\x04\x06\x05\x04'),
    ('colours', [(0x15, 0x64, 0x11), (0x9a, 0xf6, 0x95)], b'\x02\x15\x64\x11\x9a\xf6\x95'),
    ('screen_orientation', ScreenOrientation.LEFT_SIDE_UP, b'\x01'),
    ('font_data', FontData(0x100, b'\x01\x02\x03\x04\x05'), b'\x01\x00\x05\x01\x02\x03\x04\x05'),
])
def test_property(kind, value, encoded):
    assert encode_property(kind, value) == encoded

    # the data of a property is never at the start of a file
    assert decode_property(kind, b'\xff\xff' + encoded + b'\xff', 2) == value


def test_kind_lookup():
    encoded = encode_property(PropertyKind.CYCLES_PER_FRAME, 30)

    assert encode_property(0x01, 30) == encoded
    assert encode_property('cyclesPerFrame', 30) == encoded
    assert encode_property('CYCLES_PER_FRAME', 30) == encoded

    with pytest.raises(UnknownKindException):
        encode_property('favouriteColour', 'red')

    with pytest.raises(UnknownKindException):
        decode_property(0x0a, b'\x00', 0)


def test_release_date():
    encoded = encode_property('release_date', RELEASE_DATE)

    assert encode_property('release_date', 1657377780) == encoded
    # naive datetimes are UTC
    assert encode_property('release_date', datetime(2022, 7, 9, 14, 43)) == encoded

    decoded = decode_property('release_date', encoded, 0)

    assert decoded.tzinfo is not None
    assert decoded == RELEASE_DATE

    with pytest.raises(OverflowException):
        encode_property('release_date', 1 << 32)


def test_image_accepts_mapping():
    assert encode_property('image', IMAGE._asdict()) == encode_property('image', IMAGE)


def test_image_wrong_size():
    with pytest.raises(InvalidValueException):
        encode_property('image', Image(2, 2, 16, IMAGE.data))

    with pytest.raises(InvalidValueException):
        encode_property('image', {'planes': 1, 'width': 1})

    with pytest.raises(FormatException):
        decode_property('image', b'\x01\x02\x10' + IMAGE.data[:-1], 0)


def test_keys():
    assert encode_property('keys', {'up': 5, 'a': 6}) == b'\x02\x00\x05\x04\x06'
    assert decode_property('keys', b'\x00', 0) == {}

    with pytest.raises(UnknownKindException):
        encode_property('keys', {'start': 1})

    with pytest.raises(InvalidValueException):
        encode_property('keys', {Key.UP: 5, 'up': 6})

    with pytest.raises(InvalidValueException):
        encode_property('keys', [(Key.UP, 5)])

    with pytest.raises(OverflowException):
        encode_property('keys', {Key.UP: 0x100})


def test_colours():
    with pytest.raises(OverflowException):
        encode_property('colours', [(0x100, 0, 0)])

    with pytest.raises(InvalidValueException):
        encode_property('colours', [(0, 0)])

    with pytest.raises(InvalidValueException):
        encode_property('colours', 'red')


def test_screen_orientation():
    assert encode_property('screenOrientation', 'left side up') == b'\x01'
    assert encode_property('screenOrientation', 'UPSIDE_DOWN') == b'\x03'
    assert encode_property('screenOrientation', 2) == b'\x02'

    with pytest.raises(UnknownKindException):
        encode_property('screenOrientation', 'sideways')

    with pytest.raises(UnknownKindException):
        decode_property('screenOrientation', b'\x07', 0)


def test_font_data():
    assert encode_property('font_data', {'address': 0x50, 'data': b'\xf0'}) == b'\x00\x50\x01\xf0'

    with pytest.raises(OverflowException):
        encode_property('font_data', FontData(0x50, b'\x00' * 0x100))

    with pytest.raises(OverflowException):
        encode_property('font_data', FontData(0x10000, b'\x00'))


def test_strings():
    with pytest.raises(InvalidValueException):
        encode_property('name', 5)

    with pytest.raises(InvalidValueException):
        encode_property('name', 'caffè')

    with pytest.raises(InvalidValueException):
        encode_property('name', 'nul\x00inside')

    with pytest.raises(FormatException):
        decode_property('name', b'unterminated', 0)


def test_cycles_per_frame_overflow():
    with pytest.raises(OverflowException):
        encode_property('cycles_per_frame', 1 << 24)


def test_decode_outside_of_the_data():
    with pytest.raises(FormatException):
        decode_property('cycles_per_frame', b'\x00\x00\x00', 1)

    with pytest.raises(FormatException):
        decode_property('name', b'Test\x00', 10)


def test_data_as_list_of_integers():
    assert encode_property('image', {'planes': 1, 'width': 1, 'height': 2, 'data': [0x80, 0x01]}) == \
        b'\x01\x01\x02\x80\x01'
    assert encode_property('font_data', FontData(0x50, [0xf0, 0x90])) == b'\x00\x50\x02\xf0\x90'

    with pytest.raises(InvalidValueException):
        encode_property('font_data', FontData(0x50, [0xf0, -1]))

    with pytest.raises(InvalidValueException):
        encode_property('image', Image(1, 1, 1, ['a']))
