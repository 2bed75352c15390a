'''
Primitive byte codecs: fixed width big-endian integers and ASCII strings.
'''
import logging

from bitstring import Bits

from .exceptions import OverflowException, InvalidValueException, FormatException


logger = logging.getLogger(__name__)


def fits(value, n):
    return 0 <= value < (1 << (8 * n))


def int_to_bytes(value, n):
    '''Encode the integer as n bytes in big-endian order.

    The value is never truncated: if it doesn't fit an OverflowException is raised.'''
    if not fits(value, n):
        raise OverflowException(f"can't fit {value} in {n} byte(s)")

    return Bits(uint=value, length=8 * n).bytes


def bytes_to_int(data):
    if not data:
        return 0

    return Bits(data).uint


def str_to_bytes(string):
    try:
        return string.encode('ascii')
    except UnicodeEncodeError as e:
        logger.debug(e)
        raise InvalidValueException(f"'{string}' contains characters that are not ASCII")


def bytes_to_str(data):
    try:
        return data.decode('ascii')
    except UnicodeDecodeError as e:
        logger.debug(e)
        raise FormatException(f'{data!r} is not an ASCII string')
