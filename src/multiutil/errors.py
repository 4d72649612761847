'''
Exceptions raised while encoding and decoding self-describing values.
'''

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .multibase import Base

__all__ = (
    'MultiutilError', 'VarintError', 'Truncated', 'IntegerOverflow', 'NotMinimal',
    'DecodeFailed', 'UnknownSigil', 'Base58DecodeFailed',
    'ValueFailed', 'IncorrectSigil', 'Custom'
)

class MultiutilError(ValueError):
    pass

class VarintError(MultiutilError):
    pass

class Truncated(VarintError):
    """Input ended before a varint terminating byte was found."""

    def __init__(self, read: int):
        super().__init__(f"Incomplete varint data after {read} bytes")
        self.read = read

class IntegerOverflow(VarintError):
    """Varint value does not fit in the target integer width."""

    def __init__(self, width: int, value: Optional[int]=None):
        if value is None:
            msg = f"Varint exceeds {width}-bit integer"
        else:
            msg = f"Value {value} does not fit in a {width}-bit varint"
        super().__init__(msg)
        self.width = width
        self.value = value

class NotMinimal(VarintError):
    """Varint has trailing zero groups, so it is not the shortest encoding."""

    def __init__(self, read: int):
        super().__init__(f"Varint of {read} bytes is not minimally encoded")
        self.read = read

class DecodeFailed(MultiutilError):
    """Strict alphabet decoding rejected the input."""

    def __init__(self, message: str, base: 'Optional[Base]'=None):
        if base is None:
            super().__init__(message)
        else:
            super().__init__(f"Invalid {base.name} data: {message}")
        self.message = message
        self.base = base

class UnknownSigil(DecodeFailed):
    """Leading multibase character is not a known base."""

    def __init__(self, sigil: str, reserved: bool=False):
        what = "Reserved" if reserved else "Unknown"
        super().__init__(f"{what} multibase sigil {sigil!r}")
        self.sigil = sigil
        self.reserved = reserved

class Base58DecodeFailed(DecodeFailed):
    """Bare base58btc decoding failed."""

    def __init__(self, detail: str):
        super().__init__(f"Base58 decode failed: {detail}")
        self.detail = detail

class ValueFailed(MultiutilError):
    """No candidate decoding produced a value of the target type."""

    def __init__(self, message: str="Failed to decode the tagged value"):
        super().__init__(message)

class IncorrectSigil(MultiutilError):
    """A tagged value carries a different codec than the one expected."""

    def __init__(self, expected: int, received: int):
        from .multicodec import codec_name
        super().__init__(
            f"Expected codec {codec_name(expected)} (0x{expected:x}),"
            f" got {codec_name(received)} (0x{received:x})"
        )
        self.expected = expected
        self.received = received

class Custom(MultiutilError):
    """Payload-specific construction failure."""

    def __init__(self, message: str):
        super().__init__(f"Custom error: {message}")
        self.message = message
