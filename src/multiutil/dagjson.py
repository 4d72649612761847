'''
Human-readable serialization. Base encoded values become their multibase
text, other byte-form values and raw bytes become {"/": {"bytes": ...}}.
'''

from typing import Any
import json

from pydantic import BaseModel, TypeAdapter

from . import multibase
from ._common import encodec, decodec, Structured
from .encoded import BaseEncoded
from .primitives import Varbytes, Varuint
from .tagged import Tagged

__all__ = ('marshal', 'unmarshal', 'load')

@encodec("DAG-JSON")
def _dagjson_encode(data):
    match data:
        case BaseEncoded():
            return str(data)
        case Tagged() | Varuint() | Varbytes():
            return {"/": {"bytes": multibase.base64.encode(bytes(data))}}
        case bytes():
            return {"/": {"bytes": multibase.base64.encode(data)}}
        case BaseModel():
            return _dagjson_encode(data.model_dump())
        case {"/": _}:
            raise TypeError("DAG-JSON doesn't support '/' keys")

@decodec("DAG-JSON")
def _dagjson_decode(data: Any) -> Structured:
    match data:
        case {"/": {"bytes": bs}}:
            if isinstance(bs, str):
                return multibase.base64.decode(bs)
            raise TypeError(
                '{"/": {"bytes": ...}} Expected string, got ' + type(bs).__name__
            )

        case {"/": _}:
            raise TypeError("DAG-JSON doesn't support '/' keys")

def marshal(data: Any) -> str:
    """Marshal data, including encoded values, to a JSON string."""
    return json.dumps(_dagjson_encode(data), sort_keys=True)

def unmarshal(data: str|bytes) -> Structured:
    """Unmarshal data from a JSON formatted string."""
    if isinstance(data, bytes):
        data = data.decode('utf-8')
    return _dagjson_decode(json.loads(data))

def load[T](tp: type[T], data: str|bytes) -> T:
    """Unmarshal JSON and validate it as `tp`."""
    return TypeAdapter(tp).validate_python(unmarshal(data))
