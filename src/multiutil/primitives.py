'''
Payload types for bare integers and byte buffers, so they can be base
encoded and tagged like any other value.
'''

from functools import total_ordering
from typing import Any, ClassVar, Optional, Self

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from . import multibase, varint
from ._common import Immutable, payload_schema
from .encoded import BaseEncoded
from .errors import Custom
from .multibase import Base

__all__ = (
    'Varuint', 'Varbytes',
    'EncodedVaruint', 'EncodedVarbytes'
)

@total_ordering
class Varuint(Immutable):
    '''An unsigned integer whose byte form is its varint encoding.'''
    WIDTH: ClassVar[int] = 64

    value: int
    width: int

    __slots__ = ('value', 'width')
    __match_args__ = ('value',)

    def __init__(self, value: int=0, width: Optional[int]=None):
        width = self.WIDTH if width is None else width
        varint.max_bytes(width)
        # Raises IntegerOverflow if it doesn't fit
        varint.encode(value, width)
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'width', width)

    @classmethod
    def encoded(cls, value: int, base: multibase.Encoding|Base|None=None) -> 'BaseEncoded[Varuint]':
        """Create a base encoded varuint."""
        return EncodedVaruint(cls(value), base)

    @classmethod
    def preferred_encoding(cls) -> Base:
        return multibase.base16

    def encoding(self) -> Base:
        return multibase.base16

    def to_inner(self) -> int:
        return self.value

    def __bytes__(self) -> bytes:
        return varint.encode(self.value, self.width)

    @classmethod
    def decode_from(cls, data: bytes, width: Optional[int]=None) -> tuple[Self, bytes]:
        width = cls.WIDTH if width is None else width
        value, rest = varint.decode(data, width)
        return cls(value, width), rest

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls.decode_from(data)[0]

    def __int__(self): return self.value
    def __index__(self): return self.value

    def __eq__(self, other):
        if isinstance(other, Varuint):
            return self.value == other.value
        elif isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, Varuint):
            return self.value < other.value
        elif isinstance(other, int):
            return self.value < other
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"Varuint({self.value})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        def validate(value: Any) -> 'Varuint':
            match value:
                case Varuint(): return value
                case bool(): raise ValueError("Varuint does not accept bool")
                case int(): return cls(value)
                case bytes(): return cls.from_bytes(value)
                case str(): return cls.from_bytes(multibase.decode(value)[1])
                case _: raise ValueError(
                    f"Cannot convert {type(value).__name__} to Varuint"
                )
        return payload_schema(validate, lambda v: multibase.encode(v.encoding(), bytes(v)))

@total_ordering
class Varbytes(Immutable):
    '''A byte buffer whose byte form is prefixed with its varint length.'''

    data: bytes

    __slots__ = ('data',)
    __match_args__ = ('data',)

    def __init__(self, data: bytes=b''):
        object.__setattr__(self, 'data', bytes(data))

    @classmethod
    def encoded(cls, data: bytes, base: multibase.Encoding|Base|None=None) -> 'BaseEncoded[Varbytes]':
        """Create a base encoded varbytes."""
        return EncodedVarbytes(cls(data), base)

    @classmethod
    def preferred_encoding(cls) -> Base:
        return multibase.base16

    def encoding(self) -> Base:
        return multibase.base16

    def to_inner(self) -> bytes:
        return self.data

    def __bytes__(self) -> bytes:
        return varint.encode(len(self.data)) + self.data

    @classmethod
    def decode_from(cls, data: bytes) -> tuple[Self, bytes]:
        length, rest = varint.decode(data)
        if len(rest) < length:
            raise Custom(f"Varbytes needs {length} bytes, only {len(rest)} left")
        return cls(rest[:length]), rest[length:]

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls.decode_from(data)[0]

    def __len__(self):
        return len(self.data)

    def __eq__(self, other):
        if isinstance(other, Varbytes):
            return self.data == other.data
        elif isinstance(other, bytes):
            return self.data == other
        return NotImplemented

    def __lt__(self, other):
        if not isinstance(other, Varbytes):
            return NotImplemented
        return self.data < other.data

    def __hash__(self):
        return hash(self.data)

    def __repr__(self):
        return f"Varbytes({self.data!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        def validate(value: Any) -> 'Varbytes':
            match value:
                case Varbytes(): return value
                case bytes(): return cls.from_bytes(value)
                case str(): return cls.from_bytes(multibase.decode(value)[1])
                case _: raise ValueError(
                    f"Cannot convert {type(value).__name__} to Varbytes"
                )
        return payload_schema(validate, lambda v: multibase.encode(v.encoding(), bytes(v)))

class EncodedVaruint(BaseEncoded[Varuint], inner=Varuint):
    '''A varuint base encoded to and from text.'''
    __slots__ = ()

class EncodedVarbytes(BaseEncoded[Varbytes], inner=Varbytes):
    '''A varbytes base encoded to and from text.'''
    __slots__ = ()
