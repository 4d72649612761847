'''
Multicodec is a protocol for identifying data formats and protocols.
This module maps codec names to their numeric codes and provides utilities
to add, extract and split varint codec prefixes. Codes which are not in the
table are still valid codecs, they just have no name.
'''

from . import varint

__all__ = (
    'CODECS', 'NAMES',
    'codec_code', 'codec_name', 'is_codec',
    'extract_prefix', 'get_prefix', 'add_prefix', 'remove_prefix',
    'split_codec'
)

CODECS: dict[str, int] = {
    'identity': 0x00,

    # multiformat
    'multicodec': 0x30,
    'multihash': 0x31,
    'multiaddr': 0x32,
    'multibase': 0x33,
    'varsig': 0x34,

    # multihash
    'sha1': 0x11,
    'sha2-256': 0x12,
    'sha2-512': 0x13,
    'sha3-512': 0x14,
    'sha3-384': 0x15,
    'sha3-256': 0x16,
    'sha3-224': 0x17,
    'blake3': 0x1e,
    'sha2-384': 0x20,
    'md5': 0xd5,
    'blake2b-256': 0xb220,
    'blake2b-512': 0xb240,
    'blake2s-256': 0xb260,

    # ipld
    'cidv1': 0x01,
    'cidv2': 0x02,
    'cidv3': 0x03,
    'raw': 0x55,
    'dag-pb': 0x70,
    'dag-cbor': 0x71,
    'libp2p-key': 0x72,
    'git-raw': 0x78,
    'dag-jose': 0x85,
    'dag-cose': 0x86,
    'dag-json': 0x0129,
    'cbor': 0x51,
    'json': 0x0200,

    # namespace
    'path': 0x2f,
    'ipld': 0xe2,
    'ipfs': 0xe3,
    'ipns': 0xe5,

    # key
    'secp256k1-pub': 0xe7,
    'bls12_381-g1-pub': 0xea,
    'bls12_381-g2-pub': 0xeb,
    'x25519-pub': 0xec,
    'ed25519-pub': 0xed,
    'p256-pub': 0x1200,
    'ed25519-priv': 0x1300,
    'secp256k1-priv': 0x1301,
    'x25519-priv': 0x1302,

    # signatures
    'ed25519-sig': 0x1300ed,
    'es256k-sig': 0x1300e7,

    # holochain
    'holochain-adr-v0': 0x807124,
    'holochain-adr-v1': 0x817124,
    'holochain-key-v0': 0x947124,
    'holochain-key-v1': 0x957124,
    'holochain-sig-v0': 0xa27124,
    'holochain-sig-v1': 0xa37124,
}
NAMES: dict[int, str] = {v: n for n, v in CODECS.items()}

def codec_code(codec: str|int) -> int:
    """Returns the numeric code for a codec name or code."""
    if isinstance(codec, int):
        if codec < 0:
            raise ValueError(f'Codec {codec} must be non-negative')
        return codec
    try: return CODECS[codec]
    except KeyError:
        raise ValueError(f'{codec} multicodec is not supported.') from None

def codec_name(code: int) -> str:
    """Returns the name of a codec, or its hex code if it has none."""
    return NAMES.get(code, f'<0x{code:x}>')

def is_codec(name: str) -> bool:
    """Check if the codec is a valid codec or not"""
    return name in CODECS

def extract_prefix(bs: bytes) -> int:
    """Extracts the prefix from multicodec prefixed data."""
    return varint.decode(bs)[0]

def get_prefix(multicodec: str|int) -> bytes:
    """Returns prefix for a given multicodec."""
    return varint.encode(codec_code(multicodec))

def add_prefix(multicodec: str|int, bs: bytes) -> bytes:
    """Adds multicodec prefix to the given bytes input."""
    return b''.join([get_prefix(multicodec), bs])

def remove_prefix(bs: bytes) -> bytes:
    """Removes prefix from a prefixed data."""
    return varint.decode(bs)[1]

def split_codec(bs: bytes) -> tuple[int, bytes]:
    """Splits the multicodec prefixed data into codec and data."""
    return varint.decode(bs)
