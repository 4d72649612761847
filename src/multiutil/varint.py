'''
leb128 varint encoding and decoding as used in multiformats.
'''

from typing import IO, Iterable, Iterator

from .errors import IntegerOverflow, NotMinimal, Truncated

__all__ = (
    'WIDTHS', 'max_bytes',
    'encode_iter', 'decode_iter',
    'decode_stream', 'decode_bytes',
    'encode', 'decode'
)

WIDTHS = (8, 16, 32, 64, 128)
'''Supported integer widths in bits.'''

def max_bytes(width: int) -> int:
    """Longest varint encoding of a `width`-bit integer."""
    if width not in WIDTHS:
        raise ValueError(f"Unsupported varint width {width}")
    return (width + 6) // 7

def encode_iter(number: int, width: int=64) -> Iterable[int]:
    """Pack `number` into varint bytes as an iterable of integers"""
    if number < 0 or number >> width:
        raise IntegerOverflow(width, number)
    while True:
        towrite = number & 0x7f
        number >>= 7
        if number:
            yield towrite | 0x80
        else:
            yield towrite
            break

def decode_iter(it: Iterable[int], width: int=64) -> int:
    """Read a varint from `it` as an iterable of bytes"""
    limit = max_bytes(width)
    shift = 0
    result = 0
    read = 0
    for i in it:
        read += 1
        if read > limit:
            raise IntegerOverflow(width)
        result |= (i & 0x7f) << shift
        shift += 7
        if not (i & 0x80):
            if result >> width:
                raise IntegerOverflow(width)
            if read > 1 and not i:
                raise NotMinimal(read)
            return result

    raise Truncated(read)

def _stream_bytes(stream: IO[bytes]) -> Iterator[int]:
    """Read bytes from `stream` as an iterable of integers"""
    while b := stream.read(1):
        yield b[0]

def decode_stream(stream: IO[bytes], width: int=64) -> int:
    """Read a varint from `stream`, consuming only its bytes"""
    return decode_iter(_stream_bytes(stream), width)

def decode_bytes(buf: bytes, width: int=64) -> int:
    """Read a varint from `buf` bytes, ignoring whatever follows it"""
    return decode(buf, width)[0]

def encode(number: int, width: int=64) -> bytes:
    """Pack `number` into varint bytes"""
    return bytes(encode_iter(number, width))

def decode(buf: bytes, width: int=64) -> tuple[int, bytes]:
    """Read a varint from `buf`, returning it with the remaining bytes"""
    number = decode_iter(buf, width)
    # Encodings are minimal, so re-encoding gives the length read
    return number, bytes(buf[len(encode(number, width)):])
