'''
Strategies for turning bytes into text and back.

`MultibaseEncoder` is the default: text carries a sigil naming its base so
decoding is unambiguous. `Base58Encoder` handles legacy bare base58btc text.
`DetectedEncoder` decodes text which may or may not carry a sigil, returning
every base which could have produced it. It always encodes with a sigil, so
text it renders decodes back unambiguously but arbitrary text does not
necessarily re-render to itself.
'''

from abc import ABC, abstractmethod
from typing import Optional
import logging

from . import multibase
from .config import DetectConfig
from .errors import Base58DecodeFailed, DecodeFailed, ValueFailed
from .multibase import Base

__all__ = (
    'Candidate', 'BaseEncoder',
    'MultibaseEncoder', 'Base58Encoder', 'DetectedEncoder',
    'MULTIBASE', 'BASE58', 'DETECTED'
)

logger = logging.getLogger(__name__)

type Candidate = tuple[Base, bytes]
'''A base and the bytes the text decodes to under it.'''

class BaseEncoder(ABC):
    '''A policy for rendering bytes to text and parsing text to bytes.'''

    @abstractmethod
    def render(self, base: Base, data: bytes) -> str:
        """Encode `data` as text using `base`."""

    @abstractmethod
    def parse(self, text: str) -> list[Candidate]:
        """Decode `text`, returning every plausible (base, bytes) pair."""

    def preferred(self, base: Base) -> Base:
        """The base this strategy encodes with when `base` is requested."""
        return base

    def debug_string(self, base: Base) -> str:
        return f"{base.name} ({base.sigil!r})"

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __eq__(self, other):
        if not isinstance(other, BaseEncoder):
            return NotImplemented
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash(type(self))

class MultibaseEncoder(BaseEncoder):
    '''Sigil-prefixed text, decoded strictly.'''

    def render(self, base: Base, data: bytes) -> str:
        return multibase.encode(base, data)

    def parse(self, text: str) -> list[Candidate]:
        return [multibase.decode(text, strict=True)]

class Base58Encoder(BaseEncoder):
    '''Bare base58btc text without a sigil, used by legacy identifiers.'''

    def render(self, base: Base, data: bytes) -> str:
        return multibase.base58btc.encode(data)

    def parse(self, text: str) -> list[Candidate]:
        try:
            data = multibase.base58btc.decode(text, strict=True)
        except DecodeFailed as e:
            raise Base58DecodeFailed(e.message) from e
        return [(multibase.base58btc, data)]

    def preferred(self, base: Base) -> Base:
        return multibase.base58btc

    def debug_string(self, base: Base) -> str:
        return super().debug_string(multibase.base58btc)

class DetectedEncoder(BaseEncoder):
    '''
    Speculative decoder. Sigil-prefixed text short-circuits to a single
    candidate, otherwise the whole text is strictly decoded against each
    base in precedence order and every success is returned.
    '''

    def __init__(self, config: Optional[DetectConfig]=None):
        self.config = config or DetectConfig()

    def __repr__(self):
        return f"DetectedEncoder({self.config!r})"

    def render(self, base: Base, data: bytes) -> str:
        return multibase.encode(base, data)

    def parse(self, text: str) -> list[Candidate]:
        try:
            return [multibase.decode(text, strict=True)]
        except DecodeFailed as e:
            logger.debug(f"{text!r} is not multibase encoded: {e}")

        candidates: list[Candidate] = []
        for base in self.config.candidates():
            try:
                data = base.decode(text, strict=True)
            except DecodeFailed as e:
                logger.debug(f"Rejected {base.name} for {text!r}: {e.message}")
                continue

            logger.debug(f"Detected {base.name} for {text!r}")
            candidates.append((base, data))
            if self.config.first_match:
                break

        if not candidates:
            raise ValueFailed(f"No base could decode {text!r}")
        return candidates

MULTIBASE = MultibaseEncoder()
BASE58 = Base58Encoder()
DETECTED = DetectedEncoder()
