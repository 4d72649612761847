import pytest
from pydantic import TypeAdapter, ValidationError

from multiutil import multibase, multicodec
from multiutil.encoded import BaseEncoded
from multiutil.errors import Custom, IncorrectSigil, Truncated, ValueFailed
from multiutil.multicodec import CODECS
from multiutil.tagged import Tagged

from tests.utils import Pair, Unit

TaggedUnit = Tagged.of(Unit)


def test_encode():
    assert bytes(TaggedUnit(Unit())) == b'\x55\x42\xaa'


def test_round_trip():
    tagged = TaggedUnit(Unit())
    assert TaggedUnit.decode_from(bytes(tagged)) == (tagged, b'')


def test_decode_leaves_rest():
    tagged, rest = TaggedUnit.decode_from(b'\x55\x42\xaa\x01\x02')
    assert tagged.value == Unit()
    assert tagged.codec == CODECS['raw']
    assert rest == b'\x01\x02'


def test_from_bytes():
    assert TaggedUnit.from_bytes(b'\x55\x01\x02') == TaggedUnit(Unit(b'\x01\x02'))


def test_incorrect_sigil():
    with pytest.raises(IncorrectSigil) as exc:
        TaggedUnit.decode_from(b'\x71\x42\xaa')
    assert exc.value.expected == 0x55
    assert exc.value.received == 0x71
    assert 'dag-cbor' in str(exc.value)


def test_value_failed():
    with pytest.raises(ValueFailed) as exc:
        TaggedUnit.decode_from(b'\x55\x42')
    assert isinstance(exc.value.__cause__, Custom)


def test_truncated_codec():
    with pytest.raises(Truncated):
        TaggedUnit.decode_from(b'\x80')


def test_codec_override():
    tagged = Tagged(Unit(), codec='dag-cbor')
    assert tagged.codec == 0x71
    assert bytes(tagged) == b'\x71\x42\xaa'
    with pytest.raises(IncorrectSigil):
        TaggedUnit.from_bytes(bytes(tagged))

    TaggedCbor = Tagged.of(Unit, codec='dag-cbor')
    assert TaggedCbor.preferred_codec() == 0x71
    assert TaggedCbor.from_bytes(bytes(tagged)) == tagged


def test_numeric_codec():
    tagged = Tagged(Unit(), codec=0x300001)
    assert bytes(tagged)[:4] == b'\x81\x80\xc0\x01'
    assert Tagged.of(Unit, codec=0x300001).from_bytes(bytes(tagged)) == tagged


def test_unbound_binds_to_value_type():
    tagged = Tagged(Unit())
    assert type(tagged) is TaggedUnit
    assert tagged == TaggedUnit(Unit())


def test_subclass_binding():
    class TaggedPayload(Tagged[Unit], inner=Unit, codec='identity'):
        __slots__ = ()

    tagged = TaggedPayload(Unit())
    assert bytes(tagged) == b'\x00\x42\xaa'
    assert TaggedPayload.from_bytes(b'\x00\x42\xaa') == tagged


def test_wrong_value_type():
    with pytest.raises(TypeError):
        TaggedUnit(b'\x42\xaa')


def test_immutable():
    tagged = TaggedUnit(Unit())
    with pytest.raises(TypeError):
        tagged.codec = 0x71


def test_forwards_encoding_info():
    tagged = TaggedUnit(Unit())
    assert TaggedUnit.preferred_encoding() is multibase.base16
    assert tagged.encoding() is multibase.base16
    assert tagged.to_inner() == Unit()


def test_repr():
    assert repr(TaggedUnit(Unit())) == "raw (0x55) - Unit(b'B\\xaa')"


def test_base_encoded_tagged():
    EncodedTaggedUnit = BaseEncoded.of(TaggedUnit)
    encoded = EncodedTaggedUnit(TaggedUnit(Unit()))
    assert str(encoded) == 'f5542aa'
    assert EncodedTaggedUnit.from_string('f5542aa') == encoded

    with pytest.raises(ValueFailed) as exc:
        EncodedTaggedUnit.from_string('f7142aa')
    assert isinstance(exc.value.__cause__, IncorrectSigil)


def test_byte_form_is_codec_prefixed():
    tagged = Tagged(Unit(), codec='dag-json')
    assert bytes(tagged) == multicodec.add_prefix('dag-json', b'\x42\xaa')
    assert multicodec.split_codec(bytes(tagged)) == (0x0129, b'\x42\xaa')


@pytest.mark.parametrize('value', [
    'f5542aa',
    b'\x55\x42\xaa',
    Unit(),
    TaggedUnit(Unit()),
])
def test_validate(value):
    assert TypeAdapter(TaggedUnit).validate_python(value) == TaggedUnit(Unit())


def test_validate_rejects():
    with pytest.raises(ValidationError):
        TypeAdapter(TaggedUnit).validate_python('f7142aa')
    with pytest.raises(ValidationError):
        TypeAdapter(TaggedUnit).validate_python(42)


def test_serializes_to_multibase():
    assert TypeAdapter(TaggedUnit).dump_json(TaggedUnit(Unit())) == b'"f5542aa"'


def test_json_schema():
    schema = TypeAdapter(TaggedUnit).json_schema()
    assert schema['type'] == 'string'
    assert schema['format'] == 'multibase'
    assert schema['title'] == 'TaggedUnit'


def test_named_subclass_is_the_bound_class():
    class TaggedPair(Tagged[Pair], inner=Pair, codec='dag-pb'):
        __slots__ = ()

    assert Tagged.of(Pair, codec='dag-pb') is TaggedPair
    assert Tagged.of(Pair, codec=0x70) is TaggedPair
