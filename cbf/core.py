"""
Core module for the abstraction of a record of a binary format

"""
from typing import Tuple, List

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import CBFException


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks, laid out one after the other in order of
    declaration.
    """

    def __init__(self, data=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if data is not None:
            stream = data if isinstance(data, Stream) else Stream(data)
            self.logger.debug('unpacking \'%s\' from %s', self.__class__.__name__, stream)
            self.unpack(stream)
        else:
            self.relayout()

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, field)
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self):
        return {name: field.value for name, field in self.get_fields()}

    def _set_value(self, value):
        for name, field_value in value.items():
            setattr(self, name, field_value)

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets.'''
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            self.logger.debug('relayouting %s.%s', self.__class__.__name__, field_name)
            size += field_instance.relayout(offset=offset + size)

        return size

    def pack(self, layout=None, errors=None) -> bytes:
        '''Encode the fields one after the other.

        If an errors collector is passed the failing fields are recorded in it
        (and replaced by zeros) so that all of them can be reported, otherwise
        the first failure is raised.'''
        value = b''
        for field_name, field_instance in self.get_fields():
            self.logger.debug('packing %s.%s', self.__class__.__name__, field_name)
            try:
                value += field_instance.pack(layout, errors.child(field_name) if errors is not None else None)
            except CBFException as e:
                if errors is None:
                    e.chain.append(field_name)
                    raise
                errors.add(e, field_name)
                value += b'\x00' * field_instance.size

        return value

    def unpack(self, stream, errors=None):
        '''Read the fields from the stream, starting from its actual offset.

        With an errors collector the failures are recorded and the unpacking goes
        on with the next field: this makes sense only for fixed size fields.'''
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %d', self.__class__.__name__, field_name, stream.tell())

            field.offset = stream.tell()
            try:
                field.unpack(stream, errors.child(field_name) if errors is not None else None)
            except CBFException as e:
                if errors is None:
                    e.chain.append(field_name)
                    raise
                errors.add(e, field_name)
