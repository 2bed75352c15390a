from enum import Enum, auto

import pytest

from cbf.core import Chunk
from cbf.exceptions import (
    ErrorCollector,
    FormatException,
    InvalidValueException,
    OverflowException,
    UnknownKindException,
)
from cbf.fields import StructField, IntegerField, StringField, CStringField, ArrayField, TableField
from cbf.streams import Stream


class DummyEnum(Enum):
    NONE = 0
    FIRST = auto()
    SECOND = auto()


def test_structfield_conversion_raw_value():
    """Check that the attributes "value" and "raw" are the analogous
    of the integers and bytes representation for a field."""
    field = StructField('I')

    assert field.size == 4
    assert field.raw == b'\x00\x00\x00\x00'
    assert field.value == 0

    field.value = 0xcafe

    assert field.value == 0xcafe
    assert field.raw == b'\x00\x00\xca\xfe'


def test_structfield_checks_the_value():
    field = StructField('B')

    with pytest.raises(OverflowException):
        field.value = 0x100

    with pytest.raises(OverflowException):
        field.value = -1

    with pytest.raises(InvalidValueException):
        field.value = 'a'

    assert field.value == 0


def test_structfield_enum():
    field = StructField('I', enum=DummyEnum, default=DummyEnum.NONE)

    assert field.value == DummyEnum.NONE

    field.value = DummyEnum.SECOND

    assert field.value == DummyEnum.SECOND
    assert field.raw == b'\x00\x00\x00\x02'

    field.unpack(Stream(b'\x00\x00\x00\x01'))
    assert field.value == DummyEnum.FIRST

    with pytest.raises(UnknownKindException):
        field.unpack(Stream(b'\x00\x00\x00\x04'))


def test_structfield_magic():
    field = StructField('B', default=0x2a, is_magic=True)

    field.unpack(Stream(b'\x2a'))

    with pytest.raises(FormatException):
        field.unpack(Stream(b'\x2b'))


def test_integerfield():
    field = IntegerField(3)

    assert field.size == 3
    assert field.raw == b'\x00\x00\x00'

    field.value = 200000
    assert field.raw == b'\x03\x0d\x40'

    with pytest.raises(OverflowException):
        field.value = 1 << 24

    field.unpack(Stream(b'\x00\x01\x00'))
    assert field.value == 0x100

    with pytest.raises(FormatException):
        field.unpack(Stream(b'\x00\x01'))


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field.raw) == field.size
    assert field.raw == b'\x00' * field.size

    with pytest.raises(ValueError):
        field.value = b'kebab'

    data = b''.join([bytes([_]) for _ in range(0x10)])

    field.value = data

    assert field.value == data
    assert field.raw == data

    with pytest.raises(InvalidValueException):
        field.value = 'not bytes'


def test_cstringfield():
    field = CStringField(default='Test')

    assert field.size == 5
    assert field.raw == b'Test\x00'

    with pytest.raises(InvalidValueException):
        field.value = 'caffè'

    with pytest.raises(InvalidValueException):
        field.value = 'a\x00b'

    with pytest.raises(InvalidValueException):
        field.value = b'Test'

    assert field.value == 'Test'


def test_cstringfield_unpack():
    stream = Stream(b'abc\x00def')

    field = CStringField()
    field.unpack(stream)

    assert field.value == 'abc'
    assert stream.tell() == 4

    with pytest.raises(FormatException):
        field.unpack(stream)


def test_arrayfield():
    length = 10
    array = ArrayField(StructField('I'), n=length)
    array.relayout()

    # check some basic property
    assert isinstance(array.value, list)
    assert len(array.value) == length
    assert len(array) == length

    # check that the elements are not duplicated
    assert array[0] is not array[1]

    # check the offsets make sense
    assert array[0].offset == 0
    assert array[1].offset == 4
    assert array[9].offset == 36

    for field in array:
        assert field.value == 0

    # set one and check is actually changed
    array[3].value = 0xcafebabe
    assert [_.value for _ in array] == [
        0, 0, 0, 0xcafebabe, 0, 0, 0, 0, 0, 0,
    ]

    array.clear()

    assert len(array) == 0
    assert array.size == 0


class Entry(Chunk):
    tag    = StructField('B', enum=DummyEnum, default=DummyEnum.FIRST)
    amount = StructField('H')


def test_tablefield_pack():
    table = TableField(Entry())

    for tag, amount in ((DummyEnum.FIRST, 2), (DummyEnum.SECOND, 3)):
        entry = table.instance_element()
        entry.tag = tag
        entry.amount = amount
        table.append(entry)

    assert table.size == 7
    assert table.pack() == b'\x01\x00\x02\x02\x00\x03\x00'


def test_tablefield_unpack():
    stream = Stream(b'\x01\x00\x02\x02\x00\x03\x00garbage')

    table = TableField(Entry())
    table.unpack(stream)

    assert [(_.tag.value, _.amount.value) for _ in table] == [
        (DummyEnum.FIRST, 2),
        (DummyEnum.SECOND, 3),
    ]
    assert stream.tell() == 7


def test_tablefield_without_terminator():
    table = TableField(Entry())

    with pytest.raises(FormatException):
        table.unpack(Stream(b'\x01\x00\x02'))


def test_tablefield_skips_unknown_entries():
    errors = ErrorCollector(['table'])

    table = TableField(Entry())
    table.unpack(Stream(b'\x07\x00\x01\x02\x00\x03\x00'), errors)

    assert [_.tag.value for _ in table] == [DummyEnum.SECOND]

    assert len(errors) == 1
    error, = errors
    assert isinstance(error, UnknownKindException)
    assert str(error).startswith('table.0.tag: ')

    with pytest.raises(UnknownKindException):
        TableField(Entry()).unpack(Stream(b'\x07\x00\x01\x00'))
