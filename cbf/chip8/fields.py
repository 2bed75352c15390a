'''
# Properties

Every property kind has its own binary representation, each one is a field
(or a chunk) that knows how to convert from/to the python value:

 - strings: ASCII terminated by a NUL byte
 - cycles per frame: 3 bytes big-endian
 - release date: Unix timestamp, 4 bytes big-endian
 - image: planes, width (in bytes), height (in pixels) and the bitmaps
 - keys: count and then couples (logical key, physical key)
 - colours: count and then RGB triples
 - screen orientation: 1 byte
 - font data: load address (2 bytes), length (1 byte) and the data
'''
import logging
from collections.abc import Mapping
from datetime import datetime, timezone

from .. import fields
from ..core import Chunk
from ..properties import Dependency, ProductDependency
from ..streams import Stream
from ..exceptions import InvalidValueException
from .enum import PropertyKind, Key, ScreenOrientation
from .types import Image, FontData


logger = logging.getLogger(__name__)


def get_attribute(value, name):
    '''Read an attribute from a named tuple or an item from a mapping.'''
    try:
        return value[name] if isinstance(value, Mapping) else getattr(value, name)
    except (KeyError, AttributeError):
        raise InvalidValueException(f"'{name}' is missing from {value!r}")


def get_data(value):
    '''The attribute "data" as bytes: the lists of integers found in the JSON
    files are converted.'''
    data = get_attribute(value, 'data')

    if isinstance(data, (list, tuple)):
        try:
            return bytes(data)
        except (TypeError, ValueError):
            raise InvalidValueException(f'data should be a list of integers between 0 and 255: {data!r}')

    return data


class ReleaseDateField(fields.IntegerField):
    '''The value is a timezone aware datetime, a naive one is considered UTC;
    the seconds since the epoch are accepted as well.'''

    def __init__(self, **kw):
        super().__init__(4, **kw)

    def value_from_default(self):
        return datetime.fromtimestamp(0, tz=timezone.utc)

    def _set_value(self, value):
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            value = int(value.timestamp())

        self.check(value)

        self._value = datetime.fromtimestamp(value, tz=timezone.utc)

    def resolve(self, layout=None) -> int:
        return int(self.value.timestamp())

    def unpack(self, stream, errors=None):
        super().unpack(stream, errors)
        self._value = datetime.fromtimestamp(self._value, tz=timezone.utc)


class ImageField(Chunk):
    '''The bitmaps are stored one plane after the other.'''
    planes = fields.StructField('B')
    width  = fields.StructField('B')
    height = fields.StructField('B')
    data   = fields.StringField(ProductDependency('.planes', '.width', '.height'))

    def _get_value(self):
        return Image(self.planes.value, self.width.value, self.height.value, self.data.value)

    def _set_value(self, value):
        self.planes = get_attribute(value, 'planes')
        self.width  = get_attribute(value, 'width')
        self.height = get_attribute(value, 'height')
        self.data   = get_data(value)

        expected = self.planes.value * self.width.value * self.height.value
        if len(self.data.value) != expected:
            raise InvalidValueException(
                f'image data should be {expected} bytes (planes x width x height) instead of {len(self.data.value)}')


class KeyEntry(Chunk):
    key      = fields.StructField('B', enum=Key, default=Key.UP)
    physical = fields.StructField('B')


class KeysField(Chunk):
    count   = fields.StructField('B')
    entries = fields.ArrayField(KeyEntry(), n=Dependency('.count'))

    def _get_value(self):
        return {entry.key.value: entry.physical.value for entry in self.entries}

    def _set_value(self, value):
        if not isinstance(value, Mapping):
            raise InvalidValueException(f'keys should be a mapping: {value!r}')

        self.entries.clear()
        for key, physical in value.items():
            entry = self.entries.instance_element()
            entry.key = key
            entry.physical = physical

            if entry.key.value in self.value:
                raise InvalidValueException(f'key {entry.key.value.label} is mapped more than once')

            self.entries.append(entry)

        self.count = len(self.entries)


class ColourEntry(Chunk):
    red   = fields.StructField('B')
    green = fields.StructField('B')
    blue  = fields.StructField('B')

    @property
    def pixel(self):
        return (self.red.value, self.green.value, self.blue.value)


class ColoursField(Chunk):
    count   = fields.StructField('B')
    colours = fields.ArrayField(ColourEntry(), n=Dependency('.count'))

    def _get_value(self):
        return [colour.pixel for colour in self.colours]

    def _set_value(self, value):
        if isinstance(value, (str, bytes, Mapping)) or not hasattr(value, '__iter__'):
            raise InvalidValueException(f'colours should be a list of RGB triples: {value!r}')

        self.colours.clear()
        for colour in value:
            if not hasattr(colour, '__len__') or len(colour) != 3:
                raise InvalidValueException(f'a colour should be an RGB triple: {colour!r}')

            entry = self.colours.instance_element()
            entry.red, entry.green, entry.blue = colour
            self.colours.append(entry)

        self.count = len(self.colours)


class FontDataField(Chunk):
    address = fields.StructField('H')
    length  = fields.StructField('B')
    data    = fields.StringField(Dependency('.length'))

    def _get_value(self):
        return FontData(self.address.value, self.data.value)

    def _set_value(self, value):
        self.address = get_attribute(value, 'address')
        self.data    = get_data(value)
        self.length  = len(self.data.value)


kind2field = {
    PropertyKind.CYCLES_PER_FRAME:    (fields.IntegerField, (3,), {}),
    PropertyKind.NAME:                (fields.CStringField, (), {}),
    PropertyKind.DESCRIPTION:         (fields.CStringField, (), {}),
    PropertyKind.AUTHORS:             (fields.CStringField, (), {}),
    PropertyKind.URLS:                (fields.CStringField, (), {}),
    PropertyKind.RELEASE_DATE:        (ReleaseDateField, (), {}),
    PropertyKind.IMAGE:               (ImageField, (), {}),
    PropertyKind.KEYS:                (KeysField, (), {}),
    PropertyKind.COLOURS:             (ColoursField, (), {}),
    PropertyKind.SCREEN_ORIENTATION:  (fields.StructField, ('B',), {
        'enum': ScreenOrientation,
        'default': ScreenOrientation.NORMAL,
    }),
    PropertyKind.FONT_DATA:           (FontDataField, (), {}),
    PropertyKind.TOOL_VANITY:         (fields.CStringField, (), {}),
    PropertyKind.LICENSE_INFORMATION: (fields.CStringField, (), {}),
}


def field_for_kind(kind, value=None):
    '''Instance the field for the kind of property, set to value if not None.'''
    kind = PropertyKind.lookup(kind)

    field_class, args, kwargs = kind2field[kind]
    field = field_class(*args, name=kind.key, **kwargs)

    if value is not None:
        field.value = value

    return field


def encode_property(kind, value) -> bytes:
    return field_for_kind(kind, value).pack()


def decode_property(kind, data, pointer):
    '''Decode the property of the given kind found at the offset "pointer" of data.'''
    stream = data if isinstance(data, Stream) else Stream(data)
    stream.seek(pointer)

    field = field_for_kind(kind)
    logger.debug('decoding %s at offset %d', field.name, pointer)
    field.unpack(stream)

    return field.value
