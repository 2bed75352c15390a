'''
# Layout planner

A file is built from named segments (the header, the tables, the data blobs)
whose size is known before knowing where they are going to be placed.
The fields of a segment can refer to the address or to the size of another
segment by name (see AddressOf and SizeOf in cbf.properties).

Building a file has three phases

 1. the segments are collected, nothing is resolved;
 2. relayout(): the segments are sorted and each one gets as offset the
    cumulative size of the segments preceding it;
 3. pack(): each segment is encoded, the references are resolved against
    the final offsets.

The order is not configurable: the segments are sorted by group (the header
first, then the tables, then the data) and inside a group by size, ties
keeping the order of insertion. Identical inputs give identical outputs.
'''
import logging
from enum import IntEnum
from typing import Dict, List, Tuple

from .exceptions import CBFException


logger = logging.getLogger(__name__)


class SegmentGroup(IntEnum):
    HEADER = 0
    TABLE  = 1
    DATA   = 2


class Segment(object):
    '''A named, sized piece of the final file.'''

    def __init__(self, name, field, group=SegmentGroup.DATA):
        self.name = name
        self.field = field
        self.group = group
        self.offset = None

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name}, offset={self.offset}, size={self.size})>'

    @property
    def size(self):
        return self.field.size

    def pack(self, layout, errors=None) -> bytes:
        return self.field.pack(layout, errors)


class Layout(object):

    def __init__(self, segments=None):
        self.segments: List[Segment] = []
        self._segments_by_name: Dict[str, Segment] = {}

        for segment in segments or []:
            self.add(segment)

    def __contains__(self, name):
        return name in self._segments_by_name

    def __iter__(self):
        return iter(self.segments)

    def __len__(self):
        return len(self.segments)

    def add(self, segment):
        if segment.name in self:
            raise ValueError(f"a segment named '{segment.name}' is already present")

        self.segments.append(segment)
        self._segments_by_name[segment.name] = segment

        return segment

    def get(self, name) -> Segment:
        try:
            return self._segments_by_name[name]
        except KeyError:
            raise LookupError(f"Could not find '{name}' in the file")

    @property
    def size(self):
        return sum(segment.size for segment in self.segments)

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        return {segment.name: (segment.offset, segment.size) for segment in self.segments}

    def relayout(self):
        '''Sort the segments and assign them their offset; returns the total size.'''
        self.segments.sort(key=lambda _: (_.group, _.size))

        offset = 0
        for segment in self.segments:
            logger.debug('segment %s at offset %d (size %d)', segment.name, offset, segment.size)
            segment.offset = offset
            segment.field.relayout(offset=offset)
            offset += segment.size

        return offset

    def address_of(self, name) -> int:
        segment = self.get(name)

        if segment.offset is None:
            raise LookupError(f"segment '{name}' has not been layouted yet")

        return segment.offset

    def size_of(self, name) -> int:
        return self.get(name).size

    def pack(self, errors=None) -> bytes:
        '''Encode all the segments in their final order.'''
        value = b''
        for segment in self.segments:
            logger.debug('packing segment %s', segment.name)
            try:
                value += segment.pack(self, errors.child(segment.name) if errors is not None else None)
            except CBFException as e:
                if errors is None:
                    e.chain.append(segment.name)
                    raise
                errors.add(e, segment.name)
                value += b'\x00' * segment.size

        return value
