'''
Multibase codecs for encoding and decoding data in various formats.

Every base is identified by a one-character sigil which prefixes the
encoded text, and `BASES` lists them in the precedence order used when
guessing the encoding of text which has no sigil: identity first, then
by increasing alphabet size, lowercase and unpadded variants before their
uppercase and padded counterparts.
'''

from abc import ABC, abstractmethod
from typing import Callable, Iterator, Literal, Optional, overload
import math

from .errors import DecodeFailed, UnknownSigil

__all__ = (
    'Base', 'IdBase', 'BitpackBase', 'SimpleBase', 'EmojiBase',
    'Encoding', 'BASES', 'ENCODINGS', 'SIGILS', 'CODES', 'RESERVED',
    'get', 'from_sigil', 'from_code', 'base_of', 'is_encoded', 'iter_bases',
    'encode', 'decode',
    'identity', 'base2', 'base8', 'base10', 'base16', 'base16upper',
    'base32', 'base32upper', 'base32pad', 'base32padupper',
    'base32hex', 'base32hexupper', 'base32hexpad', 'base32hexpadupper',
    'base32z', 'base36', 'base36upper', 'base58', 'base58btc', 'base58flickr',
    'base64', 'base64pad', 'base64url', 'base64urlpad', 'base256emoji'
)

class Base(ABC):
    """Abstract base class for multibase codecs."""
    name: str
    sigil: str

    def __init__(self, sigil: str):
        assert len(sigil) == 1, 'sigil must be a single character'
        self.sigil = sigil
        self.name = ''

    @property
    def code(self) -> int:
        """Numeric multibase code, the code point of the sigil."""
        return ord(self.sigil)

    def __call__(self, x: bytes, /) -> str:
        """Encodes the given bytes into a string representation."""
        return self.encode(x)

    @abstractmethod
    def encode(self, x: bytes, /) -> str:
        """Encodes the given bytes into a string representation."""

    @abstractmethod
    def decode(self, x: str, /, strict: bool=True) -> bytes:
        """Decodes the given string representation back into bytes."""

    def __repr__(self):
        return f"multibase.{self.name}"

class IdBase(Base):
    """
    Identity codec. Bytes map to text one-to-one, with bytes that aren't
    valid UTF-8 carried as surrogate escapes.
    """

    def encode(self, x: bytes) -> str:
        return x.decode('utf-8', 'surrogateescape')

    def decode(self, x: str, strict: bool=True) -> bytes:
        try: return x.encode('utf-8', 'surrogateescape')
        except UnicodeEncodeError as e:
            raise DecodeFailed(str(e), self) from None

class DigitBase(Base):
    digits: str
    padding: str

    def __init__(self, sigil: str, digits: str, padding: str=''):
        super().__init__(sigil)
        assert len(set(digits)) == len(digits), 'digits must be unique'
        self.digits = digits
        self.padding = padding
        self._index = {d: i for i, d in enumerate(digits)}
        # Single-case alphabets may be decoded case-insensitively
        self._fold: Optional[Callable[[str], str]]
        if digits == digits.lower():
            self._fold = str.lower
        elif digits == digits.upper():
            self._fold = str.upper
        else:
            self._fold = None

    def _digit(self, digit: str, strict: bool) -> int:
        try: return self._index[digit]
        except KeyError:
            if not strict and self._fold is not None:
                if (d := self._index.get(self._fold(digit))) is not None:
                    return d
            raise DecodeFailed(f'invalid digit "{digit}"', self) from None

class BitpackBase(DigitBase):
    """Codec for encoding bytes into a bit-packed string."""

    def __init__(self, sigil: str, bits: int, digits: str, padding: str=''):
        assert len(digits) == 1 << bits, 'digits must cover every bit pattern'
        super().__init__(sigil, digits, padding)
        self.bits = bits
        self.group = math.lcm(8, bits) // bits

    def encode(self, bs: bytes) -> str:
        """Encodes bytes into a bit-packed string."""
        mask = (1 << self.bits) - 1
        bits = 0
        value = 0
        res = []
        for byte in bs:
            value = (value << 8) | byte
            bits += 8
            while bits >= self.bits:
                bits -= self.bits
                res.append(self.digits[(value >> bits) & mask])
            value &= (1 << bits) - 1

        # Get the last bits
        if bits > 0:
            res.append(self.digits[(value << (self.bits - bits)) & mask])

        if self.padding:
            res.append(self.padding * (-len(res) % self.group))
        return ''.join(res)

    def decode(self, s: str, strict: bool=True) -> bytes:
        """Decodes a bit-packed string back into bytes."""
        pad = self.padding or '='
        body = s.rstrip(pad)
        if strict:
            if not self.padding:
                body = s
            elif (n := len(s) - len(body)) != -len(body) % self.group:
                raise DecodeFailed(f'invalid padding length {n}', self)
            if len(body) * self.bits % 8 >= self.bits:
                raise DecodeFailed(f'invalid length {len(body)}', self)

        out = bytearray()
        value = 0
        bits = 0
        for digit in body:
            value = (value << self.bits) | self._digit(digit, strict)
            bits += self.bits
            if bits >= 8:
                bits -= 8
                out.append(value >> bits)
                value &= (1 << bits) - 1

        if strict and value:
            raise DecodeFailed('non-zero trailing bits', self)
        return bytes(out)

class SimpleBase(DigitBase):
    """
    Big-number base codec. Leading zero bytes are kept as leading zero
    digits so that the encoding is reversible.
    """

    def encode(self, bs: bytes) -> str:
        zeros = len(bs) - len(bs.lstrip(b'\0'))
        x = int.from_bytes(bs, byteorder='big', signed=False)
        res = []
        while x > 0:
            x, d = divmod(x, len(self.digits))
            res.append(self.digits[d])
        res.append(self.digits[0] * zeros)
        return ''.join(reversed(res))

    def decode(self, s: str, strict: bool=True) -> bytes:
        x = 0
        zeros = 0
        leading = True
        for digit in s:
            d = self._digit(digit, strict)
            if leading:
                if d == 0:
                    zeros += 1
                    continue
                leading = False
            x = x * len(self.digits) + d

        # Convert the integer back to bytes
        return b'\0' * zeros + x.to_bytes((x.bit_length() + 7) // 8, byteorder='big')

class EmojiBase(Base):
    """One emoji per byte."""

    def __init__(self, sigil: str, digits: str):
        super().__init__(sigil)
        assert len(digits) == 256, 'emoji alphabet must have 256 symbols'
        self.digits = digits
        self._index = {d: i for i, d in enumerate(digits)}

    def encode(self, bs: bytes) -> str:
        return ''.join(self.digits[b] for b in bs)

    def decode(self, s: str, strict: bool=True) -> bytes:
        try: return bytes(self._index[d] for d in s)
        except KeyError as e:
            raise DecodeFailed(f'invalid digit "{e.args[0]}"', self) from None

def _upper[T: DigitBase](codec: T) -> T:
    """Returns a new codec with uppercase sigil and digits."""
    match codec:
        case BitpackBase():
            return BitpackBase(
                codec.sigil.upper(), codec.bits,
                codec.digits.upper(), codec.padding
            ) # type: ignore
        case _:
            return type(codec)(
                codec.sigil.upper(), codec.digits.upper(), codec.padding
            )

def _pad(sigil: str, codec: BitpackBase, padding: str) -> BitpackBase:
    """Returns a new codec with specified padding."""
    return BitpackBase(sigil, codec.bits, codec.digits, padding)

_b16 = '0123456789abcdef'
_b10 = _b16[:10]
_abc = 'abcdefghijklmnopqrstuvwxyz'
_ABC = _abc.upper()
_b58 = 'abcdefghijkmnopqrstuvwxyz'
_B58 = 'ABCDEFGHJKLMNPQRSTUVWXYZ'
_b64 = _ABC + _abc + _b10
_emoji = (
    '🚀🪐☄🛰🌌🌑🌒🌓🌔🌕🌖🌗🌘🌍🌏🌎🐉☀💻🖥💾💿😂❤😍🤣😊🙏💕😭😘👍'
    '😅👏😁🔥🥰💔💖💙😢🤔😆🙄💪😉☺👌🤗💜😔😎😇🌹🤦🎉💞✌✨🤷😱😌🌸🙌'
    '😋💗💚😏💛🙂💓🤩😄😀🖤😃💯🙈👇🎶😒🤭❣😜💋👀😪😑💥🙋😞😩😡🤪👊🥳'
    '😥🤤👉💃😳✋😚😝😴🌟😬🙃🍀🌷😻😓⭐✅🥺🌈😈🤘💦✔😣🏃💐☹🎊💘😠☝'
    '😕🌺🎂🌻😐🖕💝🙊😹🗣💫💀👑🎵🤞😛🔴😤🌼😫⚽🤙☕🏆🤫👈😮🙆🍻🍃🐶💁'
    '😲🌿🧡🎁⚡🌞🎈❌✊👋😰🤨😶🤝🚶💰🍓💢🤟🙁🚨💨🤬✈🎀🍺🤓😙💟🌱😖👶'
    '🥴▶➡❓💎💸⬇😨🌚🦋😷🕺⚠🙅😟😵👎🤲🤠🤧📌🔵💅🧐🐾🍒😗🤑🌊🤯🐷☎'
    '💧😯💆👆🎤🙇🍑❄🌴💣🐸💌📍🥀🤢👅💡💩👐📸👻🤐🤮🎼🥵🚩🍎🍊👼💍📣🥂'
)

identity = IdBase('\0')
base2 = BitpackBase('0', 1, '01')
base8 = BitpackBase('7', 3, _b10[:8])
base10 = SimpleBase('9', _b10)
base16 = BitpackBase('f', 4, _b16)
base16upper = _upper(base16)
base32 = BitpackBase('b', 5, _abc + _b10[2:8])
base32upper = _upper(base32)
base32pad = _pad('c', base32, '=')
base32padupper = _upper(base32pad)
base32hex = BitpackBase('v', 5, _b10 + _abc[:22])
base32hexupper = _upper(base32hex)
base32hexpad = _pad('t', base32hex, '=')
base32hexpadupper = _upper(base32hexpad)
base32z = BitpackBase('h', 5, 'ybndrfg8ejkmcpqxot1uwisza345h769')
base36 = SimpleBase('k', _b10 + _abc)
base36upper = _upper(base36)
base58flickr = SimpleBase('Z', _b10[1:] + _b58 + _B58)
base58btc = SimpleBase('z', _b10[1:] + _B58 + _b58)
base64 = BitpackBase('m', 6, f'{_b64}+/')
base64pad = _pad('M', base64, '=')
base64url = BitpackBase('u', 6, f'{_b64}-_')
base64urlpad = _pad('U', base64url, '=')
base256emoji = EmojiBase('🚀', _emoji)

# Aliases
base58 = base58btc

ENCODINGS: dict[str, Base] = {
    'identity': identity,
    'base2': base2,
    'base8': base8,
    'base10': base10,

    'base16': base16,
    'base16upper': base16upper,

    'base32': base32,
    'base32upper': base32upper,
    'base32pad': base32pad,
    'base32padupper': base32padupper,
    'base32hex': base32hex,
    'base32hexupper': base32hexupper,
    'base32hexpad': base32hexpad,
    'base32hexpadupper': base32hexpadupper,
    'base32z': base32z,

    'base36': base36,
    'base36upper': base36upper,

    'base58flickr': base58flickr,
    'base58btc': base58btc,

    'base64': base64,
    'base64pad': base64pad,
    'base64url': base64url,
    'base64urlpad': base64urlpad,

    'base256emoji': base256emoji,
}
'''Multibase encodings by name, in detection precedence order.'''

RESERVED: frozenset[str] = frozenset({
    # libp2p peer ids, which are bare base58btc
    '1',
    # CIDv0, which begins with Qm and is bare base58btc
    'Q',
    # Conflicts with URIs
    '/',
})
'''Sigils which are reserved and never name a base.'''

BASES: tuple[Base, ...] = tuple(ENCODINGS.values())
SIGILS: dict[str, Base] = {}
CODES: dict[int, Base] = {}
for _n, _c in ENCODINGS.items():
    _c.name = _n
    SIGILS[_c.sigil] = _c
    CODES[_c.code] = _c
del _n, _c

assert len(SIGILS) == len(CODES) == len(BASES), 'sigils must be unique'

type Encoding = Literal[
    'identity', 'base2', 'base8', 'base10', 'base16', 'base16upper',
    'base32', 'base32upper', 'base32pad', 'base32padupper',
    'base32hex', 'base32hexupper', 'base32hexpad', 'base32hexpadupper',
    'base32z', 'base36', 'base36upper', 'base58flickr', 'base58btc',
    'base64', 'base64pad', 'base64url', 'base64urlpad', 'base256emoji'
]
'''Valid multibase encodings.'''

@overload
def get(name: Literal['identity']) -> IdBase: ...
@overload
def get(name: Encoding|Base) -> Base: ...

def get(name: str|Base) -> Base:
    """Returns the base with the given name."""
    if isinstance(name, Base):
        return name
    if name == 'base58':
        return base58
    if enc := ENCODINGS.get(name):
        return enc
    raise ValueError(f'Unknown multibase encoding {name!r}')

def from_sigil(sigil: str) -> Base:
    """Returns the base identified by a sigil character."""
    if base := SIGILS.get(sigil):
        return base
    raise UnknownSigil(sigil, sigil in RESERVED)

def from_code(code: int) -> Base:
    """Returns the base identified by its numeric multibase code."""
    if base := CODES.get(code):
        return base
    raise UnknownSigil(chr(code) if 0 <= code < 0x110000 else str(code))

def base_of(data: str) -> Base:
    """Returns the base used to encode the given multibase text."""
    if not data:
        raise UnknownSigil('')
    return from_sigil(data[0])

def is_encoded(data: str) -> bool:
    """Checks if the given data starts with a known sigil."""
    return bool(data) and data[0] in SIGILS

def iter_bases(after: Optional[Base]=None) -> Iterator[Base]:
    """Iterate over the bases in precedence order, optionally after `after`."""
    start = 0 if after is None else BASES.index(after) + 1
    yield from BASES[start:]

def encode(encoding: Encoding|Base, data: bytes) -> str:
    """Encodes the given data with the sigil of its encoding."""
    enc = get(encoding)
    return enc.sigil + enc.encode(data)

def decode(data: str, strict: bool=True) -> tuple[Base, bytes]:
    """Decode multibase-encoded text, returning the base and the bytes."""
    base = base_of(data)
    return base, base.decode(data[1:], strict)
