'''
Base encoded values: a payload together with the base its text form uses.
'''

from typing import Any, ClassVar, Optional, Self
import logging

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from . import multibase
from ._common import Immutable, payload_schema
from .encoder import MULTIBASE, BaseEncoder
from .errors import ValueFailed
from .info import Payload
from .multibase import Base

__all__ = ('BaseEncoded',)

logger = logging.getLogger(__name__)

_BOUND: dict[tuple[type, type, BaseEncoder], type] = {}
'''Bound classes by (unbound class, payload type, encoder).'''

class BaseEncoded[T: Payload](Immutable):
    '''
    Smart pointer for base encoded data. `str()` renders it with the bound
    encoder and `from_string` parses it back.

    Two encoded values are equal only when both their bases and their
    values are equal. Ordering only considers the values.

    Bind the payload type and encoder with `BaseEncoded.of(T, encoder)` or
    by subclassing with `class EncodedT(BaseEncoded[T], inner=T)`.
    Constructing an unbound `BaseEncoded` binds it to the type of the value
    and the multibase encoder.
    '''
    inner: ClassVar[type]
    encoder: ClassVar[BaseEncoder] = MULTIBASE

    base: Base
    value: T

    __slots__ = ('base', 'value')
    __match_args__ = ('base', 'value')

    def __init_subclass__(cls, inner: Optional[type]=None, encoder: Optional[BaseEncoder]=None, **kwargs):
        super().__init_subclass__(**kwargs)
        if encoder is not None:
            cls.encoder = encoder
        if inner is not None:
            cls.inner = inner
            # First class bound to (inner, encoder) is the one `of` returns
            for base in cls.__bases__:
                if issubclass(base, BaseEncoded):
                    _BOUND.setdefault((base, cls.inner, cls.encoder), cls)

    @classmethod
    def of(cls, inner: type, encoder: BaseEncoder=MULTIBASE) -> type['BaseEncoded']:
        """BaseEncoded class for payload type `inner` using `encoder`."""
        if bound := _BOUND.get((cls, inner, encoder)):
            return bound
        return type(f"Encoded{inner.__name__}", (cls,), {'__slots__': ()}, inner=inner, encoder=encoder)

    def __new__(cls, value: Any, base: Optional[str|Base]=None):
        if not hasattr(cls, 'inner'):
            cls = cls.of(type(value), cls.encoder)
        return super().__new__(cls)

    def __init__(self, value: T, base: Optional[multibase.Encoding|Base]=None):
        if not isinstance(value, self.inner):
            raise TypeError(
                f"{type(self).__name__} requires {self.inner.__name__}, got {type(value).__name__}"
            )
        base = self.preferred_encoding() if base is None else multibase.get(base)
        object.__setattr__(self, 'base', base)
        object.__setattr__(self, 'value', value)

    @classmethod
    def preferred_encoding(cls) -> Base:
        """The payload's preferred base, as the encoder would use it."""
        return cls.encoder.preferred(cls.inner.preferred_encoding())

    def encoding(self) -> Base:
        return self.base

    def to_inner(self) -> T:
        return self.value

    def to_string(self) -> str:
        return self.encoder.render(self.base, bytes(self.value))

    @classmethod
    def from_string(cls, text: str) -> Self:
        """
        Parse text with the bound encoder. Candidates are tried in the order
        the encoder returns them and the first one the payload type accepts
        wins.
        """
        error: Optional[Exception] = None
        for base, data in cls.encoder.parse(text):
            try: value = cls.inner.from_bytes(data)
            except ValueError as e:
                logger.debug(
                    f"{base.name} candidate for {text!r} is not a valid {cls.inner.__name__}: {e}"
                )
                error = e
                continue
            return cls(value, base)

        raise ValueFailed(
            f"No candidate for {text!r} is a valid {cls.inner.__name__}"
        ) from error

    def __bytes__(self) -> bytes:
        return bytes(self.value)

    @classmethod
    def decode_from(cls, data: bytes) -> tuple[Self, bytes]:
        """
        Decode the payload's byte form directly. The base isn't part of the
        byte form, so the result uses the preferred base.
        """
        value, rest = cls.inner.decode_from(data)
        return cls(value), rest

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls(cls.inner.from_bytes(data))

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"{self.encoder.debug_string(self.base)} - {self.value!r}"

    def __eq__(self, other):
        if not isinstance(other, BaseEncoded):
            return NotImplemented
        return self.base == other.base and self.value == other.value

    def __lt__(self, other):
        if not isinstance(other, BaseEncoded):
            return NotImplemented
        return self.value < other.value

    # Only the payload's __lt__ is needed, and the base never takes part
    def __le__(self, other):
        if not isinstance(other, BaseEncoded):
            return NotImplemented
        return not other.value < self.value

    def __gt__(self, other):
        if not isinstance(other, BaseEncoded):
            return NotImplemented
        return other.value < self.value

    def __ge__(self, other):
        if not isinstance(other, BaseEncoded):
            return NotImplemented
        return not self.value < other.value

    def __hash__(self):
        # Not the rendered text, equal values can have different encoders
        return hash((self.base.sigil, bytes(self.value)))

    @classmethod
    def _validate(cls, value: Any) -> Self:
        match value:
            case cls(): return value
            case BaseEncoded(base, inner) if isinstance(inner, cls.inner):
                return cls(inner, base)
            case str(): return cls.from_string(value)
            case bytes() | bytearray(): return cls.from_bytes(bytes(value))
            case [str() as sigil, bytes() as data]:
                return cls(cls.inner.from_bytes(data), multibase.from_sigil(sigil))
            case _ if isinstance(value, cls.inner): return cls(value)
            case _: raise ValueError(
                f"Cannot convert {type(value).__name__} to {cls.__name__}"
            )

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Accepts encoded values, their text form, the payload's byte form,
        or a [sigil, payload bytes] pair. Serializes to text in JSON mode.
        """
        return payload_schema(cls._validate, str)

    @classmethod
    def __get_pydantic_json_schema__(
            cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
        ) -> JsonSchemaValue:
        return {
            'type': 'string',
            'format': 'multibase',
            'description': f'{cls.inner.__name__} as self-describing base encoded text',
            'title': cls.__name__
        }

