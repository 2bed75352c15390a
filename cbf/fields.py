"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.

Packing a field that holds a Reference (see cbf.properties) needs the Layout
the reference is resolved against.
"""
import logging
import struct

from .meta import FieldBase
from .properties import Dependency, Reference
from .exceptions import (
    CBFException,
    FormatException,
    InvalidValueException,
    OverflowException,
    UnknownKindException,
)
from .utils import fits, int_to_bytes, bytes_to_int, str_to_bytes, bytes_to_str


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, offset=None, is_magic=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    raw = property(
        fget=lambda self: self.pack(),
    )

    def relayout(self, offset=0):
        self.offset = offset

        return self.size

    def pack(self, layout=None, errors=None) -> bytes:
        '''Encode the value of the field, the errors collector is used by the
        subclasses that contain other fields.'''
        raise NotImplementedError(f'method {self.__class__.__name__}.pack() not implemented')

    def unpack(self, stream, errors=None):
        raise NotImplementedError(f'method {self.__class__.__name__}.unpack() not implemented')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.

    The "enum" argument takes a subclass of enum.Enum so to have directly a
    representation of the integer value of the field itself.

    The value can be a Reference: in that case it's resolved at packing time.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def __str__(self):
        if self.enum and not isinstance(self.value, Reference):
            return str(self.value)
        width = self.size * 2
        formatter = '0x%%0%dx' % width
        return formatter % self.resolve() if not isinstance(self.value, Reference) else repr(self.value)

    def get_format(self):
        return '>%s' % self.format

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _to_enum(self, value):
        if hasattr(self.enum, 'lookup'):
            return self.enum.lookup(value)

        try:
            return self.enum(value)
        except ValueError:
            raise UnknownKindException(f'{value!r} is not a valid {self.enum.__name__}')

    def _set_value(self, value) -> None:
        if isinstance(value, Reference):
            pass
        elif self.enum:
            value = self._to_enum(value)
        else:
            self.check(value)

        super()._set_value(value)

    def check(self, value, what=None):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidValueException(f'value should be an integer: {value!r}')

        if not fits(value, self.size):
            raise OverflowException(f"can't fit {what or value} in {self.size} byte(s)")

    def resolve(self, layout=None) -> int:
        '''Returns the integer to be stored.'''
        value = self.value

        if isinstance(value, Reference):
            if layout is None:
                raise AttributeError(f'{value!r} cannot be resolved without a layout')

            resolved = value.resolve(layout)
            self.check(resolved, what=value.describe())

            return resolved

        return value.value if self.enum else value

    def pack(self, layout=None, errors=None) -> bytes:
        return struct.pack(self.get_format(), self.resolve(layout))

    def unpack(self, stream, errors=None):
        raw = stream.read(self.size)
        value = struct.unpack(self.get_format(), raw)[0]

        if self.is_magic and value != self.default:
            self.logger.warning('the magic doesn\'t correspond')
            raise FormatException(f'expected {self.default!r} found {value!r}')

        if self.enum:
            value = self._to_enum(value)

        self._value = value


class IntegerField(StructField):
    '''Big-endian unsigned integer of arbitrary width (struct knows only 1, 2, 4 and 8 bytes).'''

    def __init__(self, n, **kw):
        self.n = n
        super().__init__(None, **kw)

    def get_format(self):
        return None

    def _get_size(self):
        return self.n

    def pack(self, layout=None, errors=None) -> bytes:
        return int_to_bytes(self.resolve(layout), self.n)

    def unpack(self, stream, errors=None):
        self._value = bytes_to_int(stream.read(self.n))


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length can be a Dependency: in that case it's resolved while unpacking
    and every length is accepted while setting the value."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        if self.default is not None:
            return self.default

        return b'' if isinstance(self.length, Dependency) else b'\x00' * self.length

    def _get_size(self):
        return len(self.value)

    def _set_value(self, value) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise InvalidValueException(f'value should be binary data: {value!r}')

        value = bytes(value)

        if not isinstance(self.length, Dependency) and len(value) != self.length:
            raise InvalidValueException(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        super()._set_value(value)

    def pack(self, layout=None, errors=None) -> bytes:
        return self.value

    def unpack(self, stream, errors=None):
        length = self.length.resolve(self) if isinstance(self.length, Dependency) else self.length

        value = stream.read(length)

        if self.is_magic and value != self.default:
            self.logger.warning('the magic doesn\'t correspond')
            raise FormatException(f'expected {self.default!r} found {value!r}')

        self._value = value


class CStringField(Field):
    '''ASCII string terminated by a NUL byte.'''

    TERMINATOR = b'\x00'

    def __init__(self, default='', **kw):
        super().__init__(default=default, **kw)

    def _get_size(self):
        return len(self.value) + len(self.TERMINATOR)

    def _set_value(self, value) -> None:
        if not isinstance(value, str):
            raise InvalidValueException(f'value should be a string: {value!r}')

        if self.TERMINATOR.decode() in value:
            raise InvalidValueException(f'{value!r} cannot contain the NUL character')

        str_to_bytes(value)

        super()._set_value(value)

    def pack(self, layout=None, errors=None) -> bytes:
        return str_to_bytes(self.value) + self.TERMINATOR

    def unpack(self, stream, errors=None):
        self._value = bytes_to_str(stream.read_until(self.TERMINATOR))


class ArrayField(Field):
    '''Un/Pack an array of Chunks.

    You can indicate an explicit number of elements via the parameter named "n",
    it can be a Dependency resolved while unpacking.

    This class must behave like a list in python.
    '''

    def __init__(self, field_cls, n=0, **kw):
        self.field_cls = field_cls
        if not isinstance(n, (Dependency, int)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self._n = n

        super().__init__(default=[], **kw)

    def value_from_default(self):
        n = self._n if isinstance(self._n, int) else 0
        return [self.instance_element() for _ in range(n)]

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def clear(self):
        self.value.clear()

    def _get_size(self):
        return sum(element.size for element in self.value)

    def relayout(self, offset=0):
        super().relayout(offset=offset)
        size = 0
        for field in self.value:
            size += field.relayout(offset=offset + size)

        return size

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def append(self, element):
        element.father = self
        self.value.append(element)

    def pack(self, layout=None, errors=None) -> bytes:
        value = b''
        for index, element in enumerate(self.value):
            try:
                value += element.pack(layout, errors.child(str(index)) if errors is not None else None)
            except CBFException as e:
                if errors is None:
                    e.chain.append(str(index))
                    raise
                errors.add(e, str(index))
                value += b'\x00' * element.size

        return value

    def unpack_element(self, index, stream, errors=None):
        element = self.instance_element()
        try:
            element.unpack(stream, errors)
        except CBFException as e:
            e.chain.append(str(index))
            raise

        return element

    def unpack(self, stream, errors=None):
        n = self._n.resolve(self) if isinstance(self._n, Dependency) else self._n

        self.clear()
        for index in range(n):
            self.append(self.unpack_element(index, stream))


class TableField(ArrayField):
    '''An array of fixed size entries closed by a terminator byte.

    While unpacking the entries with an unknown code can be skipped: if an
    errors collector is passed, they are recorded and the walk goes on.'''

    TERMINATOR = b'\x00'

    def __init__(self, field_cls, **kw):
        super().__init__(field_cls, **kw)

    def _get_size(self):
        return super()._get_size() + len(self.TERMINATOR)

    def pack(self, layout=None, errors=None) -> bytes:
        return super().pack(layout, errors) + self.TERMINATOR

    def unpack(self, stream, errors=None):
        self.clear()

        index = 0
        while True:
            tag = stream.peek()
            if not tag:
                raise FormatException(f'ran out of the data trying to load the {self.name or "table"}')

            if tag == self.TERMINATOR:
                stream.read(len(self.TERMINATOR))
                break

            start = stream.tell()
            try:
                self.append(self.unpack_element(index, stream))
            except UnknownKindException as e:
                if errors is None:
                    raise
                self.logger.warning('skipping entry %d of %s: %s', index, self.name, e)
                errors.add(e)
                stream.seek(start + self.field_cls.size)

            index += 1
