'''
Binary serialization. Base encoded values become a two element array of
their sigil and the payload's byte form, other byte-form values become CBOR
byte strings.
'''

import cbor2
from pydantic import BaseModel, TypeAdapter

import struct
import math
from typing import Any, Iterable

from ._common import decodec, Structured
from .encoded import BaseEncoded
from .primitives import Varbytes, Varuint
from .tagged import Tagged

__all__ = ('marshal', 'unmarshal', 'load')

# We can't use cbor2 for encoding because its canonical mode emits the
# smallest representation for floats instead of the required 64-bit
# representation. This also lets us skip pre-validation and transformation.

def _encode_item(obj: Any) -> Iterable[bytes]:
    match obj:
        case None: yield b'\xf6'
        case True: yield b'\xf5'
        case False: yield b'\xf4'
        case int(): yield from _encode_int(obj)
        case float(): yield from _encode_float(obj)
        case str(): yield from _encode_string(obj)
        case bytes() | bytearray(): yield from _encode_bytes(bytes(obj))
        case list() | tuple(): yield from _encode_array(obj)
        case dict(): yield from _encode_map(obj)
        case BaseEncoded(): yield from _encode_encoded(obj)
        case Tagged() | Varuint() | Varbytes():
            yield from _encode_bytes(bytes(obj))
        case BaseModel(): yield from _encode_map(obj.model_dump())

        case _:
            raise ValueError(f"Unsupported type: {type(obj)}")

def _encode_length(major: int, value: int) -> Iterable[bytes]:
    if value < 24:
        yield bytes([major << 5 | value])
    else:
        idx = (value.bit_length() - 1).bit_length() - 3
        if idx > 3:
            raise ValueError(f"Length {value} too large for CBOR")
        yield bytes([major << 5 | (24 + idx)])
        yield struct.pack(f'>{"BHIQ"[idx]}', value)

def _encode_int(value: int) -> Iterable[bytes]:
    sign = value < 0
    yield from _encode_length(sign, abs(value) - sign)

def _encode_bytes(value: bytes) -> Iterable[bytes]:
    yield from _encode_length(2, len(value))
    yield value

def _encode_string(value: str) -> Iterable[bytes]:
    utf8 = value.encode('utf-8')
    yield from _encode_length(3, len(utf8))
    yield utf8

def _encode_array(value: list|tuple) -> Iterable[bytes]:
    yield from _encode_length(4, len(value))
    for item in value:
        yield from _encode_item(item)

def _encode_map(value: dict) -> Iterable[bytes]:
    if not all(isinstance(k, str) for k in value.keys()):
        raise ValueError("All map keys must be strings")

    yield from _encode_length(5, len(value))
    # Length-first then bytewise, for deterministic encoding
    for key in sorted(value.keys(), key=lambda k: (len(k.encode('utf-8')), k.encode('utf-8'))):
        yield from _encode_string(key)
        yield from _encode_item(value[key])

def _encode_encoded(value: BaseEncoded) -> Iterable[bytes]:
    yield from _encode_length(4, 2)
    yield from _encode_string(value.base.sigil)
    yield from _encode_bytes(bytes(value))

def _encode_float(value: float) -> Iterable[bytes]:
    if not math.isfinite(value):
        raise ValueError("NaN, Infinity, and -Infinity are not allowed")

    yield b'\xfb' # major 7, minor 27 (64-bit float always)
    yield struct.pack('>d', value)

@decodec("DAG-CBOR")
def _dagcbor_decode(data) -> Structured:
    match data:
        case cbor2.CBORTag():
            raise ValueError(f'Tags are not supported, got {data.tag}')

def marshal(data: Any) -> bytes:
    """Marshal data, including encoded values, to CBOR."""
    return b''.join(_encode_item(data))

def unmarshal(data: bytes) -> Structured:
    """Unmarshal data from CBOR."""
    return _dagcbor_decode(cbor2.loads(data))

def load[T](tp: type[T], data: bytes) -> T:
    """Unmarshal CBOR and validate it as `tp`."""
    return TypeAdapter(tp).validate_python(unmarshal(data))
