"""
# CHIP-8 binary format

A CBF file bundles the bytecode of a CHIP-8 program with its metadata
(name, authors, release date, key mapping, colours, cover image and so on).

Two operations are defined:

 1. pack(): encode the properties and the bytecode variants into a file;
    the layout of the file (where each table and each blob of data is placed)
    is decided by the packing itself, see cbf.layout.

 2. unpack(): the inverse, read a file and return the couple
    (properties, bytecode variants).

unpack(pack(properties, bytecode)) gives back the same values, independently
of the order chosen for the segments of the file.

Both the operations report all the problems found at once, raising a
PackException/UnpackException whose attribute "errors" lists them.
"""
from .chip8 import pack, unpack, MAGIC_NUMBER, VERSION_NUMBER
from .chip8.enum import Platform, PropertyKind, Key, ScreenOrientation, Multiplicity
from .chip8.types import BytecodeVariant, Image, FontData
from .chip8.fields import encode_property, decode_property
from .exceptions import (
    CBFException,
    FormatException,
    UnknownKindException,
    InvalidValueException,
    OverflowException,
    MultiplicityException,
    PackException,
    UnpackException,
)
