'''
The values exchanged with the callers of pack() and unpack().
'''
from typing import List, NamedTuple

from .enum import Platform


class BytecodeVariant(NamedTuple):
    '''One blob of bytecode together with all the platforms it runs on.'''
    bytecode: bytes
    platforms: List[Platform]


class Image(NamedTuple):
    '''Cover art: "planes" bitmaps, each "height" rows of "width" bytes
    (8 pixels per byte, most significant bit on the left).'''
    planes: int
    width: int
    height: int
    data: bytes


class FontData(NamedTuple):
    address: int
    data: bytes
