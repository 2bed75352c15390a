'''
# CHIP-8 binary format

Container bundling the bytecode of a CHIP-8 program (possibly different blobs
for different platforms) with its metadata.

  .--------------------------------------.
  | header (6 bytes)                     |
  | tables, sorted by size               |
  | data segments, sorted by size        |
  '--------------------------------------'

The header is the magic "CBF", the version and two 1-byte pointers to the
tables (zero if a table is absent).

The bytecode table has entries of 5 bytes: platform, address and size of the
bytecode (2 bytes each, big-endian); a platform sharing the bytecode with
another points to the same data. The properties table has entries of 3 bytes:
kind of property and address of its data. Both tables end with a zero byte.

Reference to <https://github.com/Timendus/chip8-binary-format>.
'''
import logging
from collections.abc import Mapping

from ..fields import StringField, StructField, TableField
from ..core import Chunk
from ..layout import Layout, Segment, SegmentGroup
from ..properties import AddressOf, SizeOf
from ..streams import Stream
from ..exceptions import (
    CBFException,
    ErrorCollector,
    FormatException,
    InvalidValueException,
    MultiplicityException,
    PackException,
    UnknownKindException,
    UnpackException,
)
from .enum import Platform, PropertyKind, Multiplicity
from .fields import field_for_kind, decode_property
from .types import BytecodeVariant


logger = logging.getLogger(__name__)

MAGIC_NUMBER = b'CBF'
VERSION_NUMBER = 0


class CBFHeader(Chunk):
    magic            = StringField(3, default=MAGIC_NUMBER, is_magic=True)
    version          = StructField('B', default=VERSION_NUMBER, is_magic=True)
    bytecode_table   = StructField('B')
    properties_table = StructField('B')


class BytecodeEntry(Chunk):
    platform = StructField('B', enum=Platform, default=Platform.CHIP_8)
    address  = StructField('H')
    length   = StructField('H')


class PropertyEntry(Chunk):
    kind    = StructField('B', enum=PropertyKind, default=PropertyKind.NAME)
    address = StructField('H')


def as_variant(value):
    '''Convert what the caller passed as bytecode into a BytecodeVariant
    with the platforms resolved.'''
    if isinstance(value, Mapping):
        value = (value.get('bytecode'), value.get('platforms'))

    try:
        bytecode, platforms = value
    except (TypeError, ValueError):
        raise InvalidValueException(f'{value!r} is not a bytecode variant')

    if not isinstance(bytecode, (bytes, bytearray, memoryview)):
        raise InvalidValueException(f'bytecode should be binary data: {bytecode!r}')

    if len(bytecode) == 0:
        raise InvalidValueException('bytecode cannot be empty')

    if isinstance(platforms, (str, int, Platform)) or not platforms:
        raise InvalidValueException(f'bytecode needs a list of platforms: {platforms!r}')

    return BytecodeVariant(bytes(bytecode), [Platform.lookup(_) for _ in platforms])


def normalize_properties(properties, errors):
    '''Returns a list of couples (kind, values), dropping the unknown properties.

    Multiple values are allowed only for the kinds with multiplicity MULTI: a
    list of values for another kind is accepted only if it has one element.
    The colours are a list by themselves so they are never unwrapped.'''
    if not isinstance(properties, Mapping):
        errors.add(InvalidValueException(f'properties should be a mapping: {properties!r}'))
        return []

    normalized = {}

    for key, value in properties.items():
        try:
            kind = PropertyKind.lookup(key)
        except UnknownKindException:
            logger.warning('dropping unknown property \'%s\'', key)
            continue

        if value is None:
            continue

        if kind.multiplicity == Multiplicity.MULTI:
            values = list(value) if isinstance(value, (list, tuple)) else [value]
        elif isinstance(value, list) and kind != PropertyKind.COLOURS:
            values = value
        else:
            values = [value]

        normalized.setdefault(kind, []).extend(values)

    result = []
    for kind, values in normalized.items():
        if kind.multiplicity == Multiplicity.SINGLE and len(values) > 1:
            errors.add(MultiplicityException(
                f'having more than one value for {kind.key} is not valid in CBF'), kind.key)
            continue

        result.append((kind, values))

    return result


def build_bytecode(layout, bytecode, errors):
    if not isinstance(bytecode, (list, tuple)):
        errors.add(InvalidValueException(f'bytecode should be a list of variants: {bytecode!r}'))
        return

    table = TableField(BytecodeEntry(), name='bytecode_table')

    for index, value in enumerate(bytecode):
        name = f'bytecode{index}'

        try:
            variant = as_variant(value)
        except CBFException as e:
            errors.add(e, str(index))
            continue

        for platform in variant.platforms:
            entry = table.instance_element()
            entry.platform = platform
            entry.address = AddressOf(name)
            entry.length = SizeOf(name)
            table.append(entry)

        layout.add(Segment(name, StringField(len(variant.bytecode), default=variant.bytecode)))

    if len(table):
        layout.add(Segment('bytecode_table', table, SegmentGroup.TABLE))


def build_properties(layout, properties, errors):
    table = TableField(PropertyEntry(), name='properties_table')

    for kind, values in normalize_properties(properties, errors):
        for index, value in enumerate(values):
            name = f'{kind.key}{index}'

            try:
                field = field_for_kind(kind, value)
            except CBFException as e:
                if kind.multiplicity == Multiplicity.MULTI:
                    errors.add(e, str(index), kind.key)
                else:
                    errors.add(e, kind.key)
                continue

            entry = table.instance_element()
            entry.kind = kind
            entry.address = AddressOf(name)
            table.append(entry)

            layout.add(Segment(name, field))

    if len(table):
        layout.add(Segment('properties_table', table, SegmentGroup.TABLE))


def pack(properties=None, bytecode=None) -> bytes:
    '''Encode the properties and the bytecode variants into a CBF file.

    All the problems found are raised together as a PackException.'''
    errors = ErrorCollector()
    layout = Layout()

    header = CBFHeader()
    header.bytecode_table = AddressOf('bytecode_table', optional=True)
    header.properties_table = AddressOf('properties_table', optional=True)
    layout.add(Segment('header', header, SegmentGroup.HEADER))

    build_bytecode(layout, bytecode or [], errors.child('bytecode'))
    build_properties(layout, properties or {}, errors.child('properties'))

    size = layout.relayout()
    logger.debug('layout of %d bytes: %s', size, layout.layout)

    data = layout.pack(errors)

    errors.raise_for(PackException)

    return data


def unpack_bytecode(stream, pointer, errors):
    stream.seek(pointer)

    table = TableField(BytecodeEntry(), name='bytecode_table')
    table.unpack(stream, errors.child('bytecode_table'))

    # entries pointing to the same data share the bytecode
    variants = {}
    for index, entry in enumerate(table):
        where = (entry.address.value, entry.length.value)

        if where not in variants:
            address, length = where
            if length == 0:
                errors.add(FormatException(
                    f'bytecode at {address} is empty'), str(index), 'bytecode_table')
                continue

            if address + length > len(stream):
                errors.add(FormatException(
                    f'bytecode at {address} of {length} bytes is outside of the data'), str(index), 'bytecode_table')
                continue

            stream.seek(address)
            variants[where] = BytecodeVariant(stream.read(length), [])

        variants[where].platforms.append(entry.platform.value)

    return list(variants.values())


def unpack_properties(stream, pointer, errors):
    stream.seek(pointer)

    table = TableField(PropertyEntry(), name='properties_table')
    table.unpack(stream, errors.child('properties_table'))

    properties = {}
    for entry in table:
        kind = entry.kind.value

        try:
            value = decode_property(kind, stream, entry.address.value)
        except CBFException as e:
            errors.add(e, kind.key)
            continue

        if kind.multiplicity == Multiplicity.MULTI:
            properties.setdefault(kind.key, []).append(value)
            continue

        # the last entry wins
        if kind.key in properties:
            logger.warning('%s is present more than once, keeping the last value', kind.key)

        properties[kind.key] = value

    return properties


def unpack(data):
    '''Decode a CBF file returning the couple (properties, bytecode variants).

    All the problems found are raised together as an UnpackException.'''
    errors = ErrorCollector()
    stream = Stream(data)

    header = CBFHeader()
    if len(stream) < header.size:
        raise UnpackException([FormatException(f'a CBF file is at least {header.size} bytes long')])

    header.unpack(stream, errors.child('header'))
    errors.raise_for(UnpackException)

    bytecode = []
    if header.bytecode_table.value:
        try:
            bytecode = unpack_bytecode(stream, header.bytecode_table.value, errors.child('bytecode'))
        except CBFException as e:
            errors.add(e, 'bytecode')

    properties = {}
    if header.properties_table.value:
        try:
            properties = unpack_properties(stream, header.properties_table.value, errors.child('properties'))
        except CBFException as e:
            errors.add(e, 'properties')

    errors.raise_for(UnpackException)

    return properties, bytecode
