from typing import Self

from multiutil import multibase
from multiutil.errors import Custom
from multiutil.multicodec import CODECS

class Unit:
    '''Two byte payload which prefers base16 and the raw codec.'''

    def __init__(self, data: bytes = b'\x42\xaa'):
        self.data = bytes(data)

    @classmethod
    def preferred_encoding(cls):
        return multibase.base16

    def encoding(self):
        return multibase.base16

    @classmethod
    def preferred_codec(cls) -> int:
        return CODECS['raw']

    @property
    def codec(self) -> int:
        return CODECS['raw']

    def __bytes__(self):
        return self.data

    @classmethod
    def decode_from(cls, data: bytes) -> tuple[Self, bytes]:
        if len(data) < 2:
            raise Custom("too few items in the vec")
        return cls(data[:2]), data[2:]

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls.decode_from(data)[0]

    def __eq__(self, other):
        if not isinstance(other, Unit):
            return NotImplemented
        return self.data == other.data

    def __lt__(self, other):
        return self.data < other.data

    def __hash__(self):
        return hash(self.data)

    def __repr__(self):
        return f"{type(self).__name__}({self.data!r})"

class Sized(Unit):
    '''Payload which only accepts exactly `SIZE` bytes.'''
    SIZE = 2

    @classmethod
    def decode_from(cls, data: bytes) -> tuple[Self, bytes]:
        if len(data) < cls.SIZE:
            raise Custom(f"expected {cls.SIZE} bytes, got {len(data)}")
        return cls(data[:cls.SIZE]), data[cls.SIZE:]

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        if len(data) != cls.SIZE:
            raise Custom(f"expected {cls.SIZE} bytes, got {len(data)}")
        return cls(data)

class Pair(Sized):
    SIZE = 2

class Byte(Sized):
    SIZE = 1
