'''
Protocols describing what a payload type must provide to be base encoded
or codec tagged.
'''

from typing import Protocol, Self, runtime_checkable

from .multibase import Base

__all__ = ('EncodingInfo', 'CodecInfo', 'Decodable', 'Payload', 'TaggablePayload')

@runtime_checkable
class EncodingInfo(Protocol):
    '''Exposes the preferred and actual base encoding of a value.'''

    @classmethod
    def preferred_encoding(cls) -> Base: ...

    def encoding(self) -> Base: ...

@runtime_checkable
class CodecInfo(Protocol):
    '''Exposes the preferred and actual codec of a value.'''

    @classmethod
    def preferred_codec(cls) -> int: ...

    @property
    def codec(self) -> int: ...

class Decodable(Protocol):
    '''A value with a byte form which can be read back from a prefix of bytes.'''

    def __bytes__(self) -> bytes: ...

    @classmethod
    def decode_from(cls, data: bytes, /) -> tuple[Self, bytes]:
        """Decode a value from the head of `data`, returning the rest."""
        ...

    @classmethod
    def from_bytes(cls, data: bytes, /) -> Self:
        """Decode a value from all of `data`."""
        ...

class Payload(EncodingInfo, Decodable, Protocol):
    '''Anything that can live inside `BaseEncoded`.'''

class TaggablePayload(Payload, CodecInfo, Protocol):
    '''Anything that can live inside `Tagged`.'''
