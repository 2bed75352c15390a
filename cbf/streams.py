import io

from .exceptions import FormatException


class Stream(object):
    '''This is a simple wrapper around the raw data to be unpacked:
    reads never go silently short, running out of data is a FormatException.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of data to use' % self.obj.__class__.__name__)

        init_method()

        self.length = len(self.obj.getbuffer())

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __len__(self):
        return self.length

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        if not 0 <= offset <= self.length:
            raise FormatException(f'offset {offset} is outside of the data ({self.length} bytes)')

        self.obj.seek(offset)

        return self

    def read(self, n):
        offset = self.obj.tell()
        data = self.obj.read(n)

        if len(data) != n:
            raise FormatException(f'ran out of data reading {n} byte(s) at offset {offset}')

        return data

    def peek(self):
        '''Return the next byte without consuming it (b'' at the end of the data).'''
        self.save()
        data = self.obj.read(1)
        self.restore()

        return data

    def read_until(self, terminator=b'\x00'):
        '''Read up to the terminator, that is consumed but not returned.'''
        offset = self.obj.tell()
        data = self.obj.getbuffer()[offset:].tobytes()
        index = data.find(terminator)

        if index < 0:
            raise FormatException(f'no terminator found after offset {offset}')

        self.obj.seek(offset + index + len(terminator))

        return data[:index]

    def save(self):
        self.history.append(self.obj.tell())

    def restore(self):
        old_seek = self.history.pop()
        self.obj.seek(old_seek)
