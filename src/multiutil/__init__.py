from .errors import (
    MultiutilError, Truncated, IntegerOverflow, NotMinimal,
    DecodeFailed, UnknownSigil, Base58DecodeFailed,
    ValueFailed, IncorrectSigil, Custom
)
from .multibase import Base
from .config import DetectConfig
from .encoder import (
    BaseEncoder, MultibaseEncoder, Base58Encoder, DetectedEncoder,
    MULTIBASE, BASE58, DETECTED
)
from .info import EncodingInfo, CodecInfo
from .tagged import Tagged
from .encoded import BaseEncoded
from .primitives import Varuint, Varbytes, EncodedVaruint, EncodedVarbytes
# These contain lots of stuff which we don't want to import directly
from . import (
    varint, multibase, multicodec, dagjson, dagcbor
)

__all__ = (
    'MultiutilError', 'Truncated', 'IntegerOverflow', 'NotMinimal',
    'DecodeFailed', 'UnknownSigil', 'Base58DecodeFailed',
    'ValueFailed', 'IncorrectSigil', 'Custom',
    'Base', 'DetectConfig',
    'BaseEncoder', 'MultibaseEncoder', 'Base58Encoder', 'DetectedEncoder',
    'MULTIBASE', 'BASE58', 'DETECTED',
    'EncodingInfo', 'CodecInfo',
    'Tagged', 'BaseEncoded',
    'Varuint', 'Varbytes', 'EncodedVaruint', 'EncodedVarbytes',
    'varint', 'multibase', 'multicodec', 'dagjson', 'dagcbor'
)
