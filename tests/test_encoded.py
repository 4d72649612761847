import pytest
from pydantic import TypeAdapter

from multiutil import multibase
from multiutil.config import DetectConfig
from multiutil.encoded import BaseEncoded
from multiutil.encoder import BASE58, DETECTED, DetectedEncoder
from multiutil.errors import Custom, UnknownSigil, ValueFailed

from tests.utils import Byte, Pair, Unit

EncodedUnit = BaseEncoded.of(Unit)


def test_to_string():
    encoded = EncodedUnit(Unit())
    assert encoded.base is multibase.base16
    assert str(encoded) == 'f42aa'
    assert encoded.to_string() == 'f42aa'


def test_from_string():
    encoded = EncodedUnit.from_string('f42aa')
    assert encoded == EncodedUnit(Unit())
    assert encoded.to_inner() == Unit()


def test_keeps_decoded_base():
    text = multibase.encode('base32', b'\x42\xaa')
    encoded = EncodedUnit.from_string(text)
    assert encoded.base is multibase.base32
    assert str(encoded) == text


def test_explicit_base():
    encoded = EncodedUnit(Unit(), 'base58btc')
    assert encoded.encoding() is multibase.base58btc
    assert str(encoded) == 'z65F'


def test_base58_encoder():
    EncodedUnit58 = BaseEncoded.of(Unit, BASE58)
    encoded = EncodedUnit58(Unit())
    assert encoded.base is multibase.base58btc
    assert str(encoded) == '65F'
    assert EncodedUnit58.from_string('65F') == encoded


def test_equal_across_encoders():
    a = EncodedUnit(Unit(), 'base58btc')
    b = BaseEncoded.of(Unit, BASE58)(Unit())
    assert a == b
    assert hash(a) == hash(b)
    assert str(a) != str(b)


def test_base_is_part_of_equality():
    assert EncodedUnit(Unit(), 'base16') != EncodedUnit(Unit(), 'base32')


def test_ordering_ignores_base():
    low = EncodedUnit(Unit(b'\x00\x01'), 'base64')
    high = EncodedUnit(Unit(b'\x00\x02'), 'base2')
    assert low < high
    assert sorted([high, low]) == [low, high]


def test_detected_picks_first_valid_candidate():
    # 'ff' as base16 is one byte, as base36 it's two
    assert BaseEncoded.of(Byte, DETECTED).from_string('ff') == \
        BaseEncoded.of(Byte, DETECTED)(Byte(b'\xff'), 'base16')

    encoded = BaseEncoded.of(Pair, DETECTED).from_string('ff')
    assert encoded.base is multibase.base36
    assert encoded.value == Pair(b'\x02\x2b')
    assert str(encoded) == 'k' + 'ff'


def test_detected_first_match_only():
    encoder = DetectedEncoder(DetectConfig(first_match=True))
    with pytest.raises(ValueFailed) as exc:
        BaseEncoded.of(Pair, encoder).from_string('ff')
    assert isinstance(exc.value.__cause__, Custom)


def test_no_valid_candidate():
    with pytest.raises(ValueFailed) as exc:
        BaseEncoded.of(Pair).from_string('f42aa42')
    assert isinstance(exc.value.__cause__, Custom)


def test_decode_error_propagates():
    with pytest.raises(UnknownSigil):
        EncodedUnit.from_string('x42aa')


def test_bytes():
    encoded = EncodedUnit(Unit(), 'base32')
    assert bytes(encoded) == b'\x42\xaa'

    decoded, rest = EncodedUnit.decode_from(b'\x42\xaa\x01')
    assert decoded == EncodedUnit(Unit())
    assert decoded.base is multibase.base16
    assert rest == b'\x01'
    assert EncodedUnit.from_bytes(b'\x42\xaa') == EncodedUnit(Unit())


def test_immutable():
    encoded = EncodedUnit(Unit())
    with pytest.raises(TypeError):
        encoded.base = multibase.base32
    with pytest.raises(TypeError):
        del encoded.value


def test_repr():
    assert repr(EncodedUnit(Unit())) == "base16 ('f') - Unit(b'B\\xaa')"
    assert repr(BaseEncoded.of(Unit, BASE58)(Unit())) == \
        "base58btc ('z') - Unit(b'B\\xaa')"


def test_unbound_binds_to_value_type():
    encoded = BaseEncoded(Unit())
    assert type(encoded) is EncodedUnit
    assert str(encoded) == 'f42aa'


def test_subclass_binding():
    class Encoded58(BaseEncoded[Unit], inner=Unit, encoder=BASE58):
        __slots__ = ()

    assert str(Encoded58(Unit())) == '65F'
    assert Encoded58.from_string('65F').value == Unit()


def test_wrong_value_type():
    with pytest.raises(TypeError):
        EncodedUnit(b'\x42\xaa')


def test_unknown_base_name():
    with pytest.raises(ValueError):
        EncodedUnit(Unit(), 'base99')


def test_full_ordering_ignores_base():
    low = EncodedUnit(Unit(b'\x00\x01'), 'base64')
    high = EncodedUnit(Unit(b'\x00\x02'), 'base2')
    assert low <= high
    assert high > low
    assert high >= low
    assert not low >= high

    same = EncodedUnit(Unit(b'\x00\x01'), 'base2')
    assert low != same
    assert low <= same
    assert low >= same
    assert not low < same
    assert not low > same


def test_json_schema():
    schema = TypeAdapter(EncodedUnit).json_schema()
    assert schema['type'] == 'string'
    assert schema['format'] == 'multibase'
    assert schema['title'] == 'EncodedUnit'


def test_named_subclass_is_the_bound_class():
    class EncodedPair(BaseEncoded[Pair], inner=Pair, encoder=BASE58):
        __slots__ = ()

    assert BaseEncoded.of(Pair, BASE58) is EncodedPair
    assert BaseEncoded.of(Pair) is not EncodedPair
