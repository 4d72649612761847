'''
Multicodec tagged values. The byte form of a tagged value is the varint
codec followed by the byte form of the value, and decoding checks the codec
against the one the target type expects.
'''

from typing import Any, ClassVar, Optional, Self

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from . import multibase
from ._common import Immutable, payload_schema
from .errors import IncorrectSigil, ValueFailed
from .info import TaggablePayload
from .multibase import Base
from .multicodec import add_prefix, codec_code, codec_name, split_codec

__all__ = ('Tagged',)

_BOUND: dict[tuple[type, type, Optional[int]], type] = {}
'''Bound classes by (unbound class, payload type, expected codec).'''

class Tagged[T: TaggablePayload](Immutable):
    '''
    Smart pointer pairing a value with its multicodec codec.

    Bind the payload type with `Tagged.of(T)` or by subclassing with
    `class TaggedT(Tagged[T], inner=T)`. Constructing an unbound `Tagged`
    binds it to the type of the value.
    '''
    inner: ClassVar[type]
    expected: ClassVar[Optional[int]] = None

    codec: int
    value: T

    __slots__ = ('codec', 'value')
    __match_args__ = ('codec', 'value')

    def __init_subclass__(cls, inner: Optional[type]=None, codec: Optional[str|int]=None, **kwargs):
        super().__init_subclass__(**kwargs)
        if codec is not None:
            cls.expected = codec_code(codec)
        if inner is not None:
            cls.inner = inner
            for base in cls.__bases__:
                if issubclass(base, Tagged):
                    _BOUND.setdefault((base, cls.inner, cls.expected), cls)

    @classmethod
    def of(cls, inner: type, codec: Optional[str|int]=None) -> type['Tagged']:
        """Tagged class for payload type `inner`, optionally expecting `codec`."""
        expected = None if codec is None else codec_code(codec)
        if bound := _BOUND.get((cls, inner, expected)):
            return bound
        return type(f"Tagged{inner.__name__}", (cls,), {'__slots__': ()}, inner=inner, codec=expected)

    def __new__(cls, value: Any, codec: Optional[str|int]=None):
        if not hasattr(cls, 'inner'):
            cls = cls.of(type(value))
        return super().__new__(cls)

    def __init__(self, value: T, codec: Optional[str|int]=None):
        if not isinstance(value, self.inner):
            raise TypeError(
                f"{type(self).__name__} requires {self.inner.__name__}, got {type(value).__name__}"
            )
        code = self.expected_codec() if codec is None else codec_code(codec)
        object.__setattr__(self, 'codec', code)
        object.__setattr__(self, 'value', value)

    @classmethod
    def expected_codec(cls) -> int:
        """Codec decoding requires, the bound codec or the payload's preferred one."""
        if cls.expected is not None:
            return cls.expected
        return cls.inner.preferred_codec()

    @classmethod
    def preferred_codec(cls) -> int:
        return cls.expected_codec()

    @classmethod
    def preferred_encoding(cls) -> Base:
        return cls.inner.preferred_encoding()

    def encoding(self) -> Base:
        return self.value.encoding()

    def to_inner(self) -> T:
        return self.value

    def __bytes__(self) -> bytes:
        return add_prefix(self.codec, bytes(self.value))

    @classmethod
    def decode_from(cls, data: bytes) -> tuple[Self, bytes]:
        """Decode a tagged value from the head of `data`, returning the rest."""
        codec, rest = split_codec(data)
        expected = cls.expected_codec()
        if codec != expected:
            raise IncorrectSigil(expected, codec)
        try:
            value, rest = cls.inner.decode_from(rest)
        except ValueError as e:
            raise ValueFailed(
                f"Failed to decode {cls.inner.__name__} tagged {codec_name(codec)}"
            ) from e
        return cls(value, codec), rest

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls.decode_from(data)[0]

    def __eq__(self, other):
        if not isinstance(other, Tagged):
            return NotImplemented
        return self.codec == other.codec and self.value == other.value

    def __hash__(self):
        return hash((self.codec, self.value))

    def __repr__(self):
        return f"{codec_name(self.codec)} (0x{self.codec:x}) - {self.value!r}"

    @classmethod
    def _validate(cls, value: Any) -> Self:
        match value:
            case cls(): return value
            case bytes() | bytearray(): return cls.from_bytes(bytes(value))
            case str(): return cls.from_bytes(multibase.decode(value)[1])
            case _ if isinstance(value, cls.inner): return cls(value)
            case _: raise ValueError(
                f"Cannot convert {type(value).__name__} to {cls.__name__}"
            )

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Accepts tagged values, their byte form, or their byte form as
        multibase text. Serializes to multibase text in JSON mode.
        """
        return payload_schema(
            cls._validate,
            lambda v: multibase.encode(v.encoding(), bytes(v))
        )

    @classmethod
    def __get_pydantic_json_schema__(
            cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
        ) -> JsonSchemaValue:
        return {
            'type': 'string',
            'format': 'multibase',
            'description': 'Multicodec tagged value as multibase text',
            'title': cls.__name__
        }
