from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, Self

from pydantic_core import core_schema

if TYPE_CHECKING:
    from typing import Mapping, Iterable

type Structured = Mapping[str, Structured]|Iterable[Structured]|bytes|str|int|float|bool|None
'''A type alias for data a structured serialization format can hold.'''

class Immutable:
    '''A base class for immutable objects. Raises on any attempt to modify.'''
    def __setattr__(self, name, value, /) -> None:
        raise TypeError(type(self).__name__ + " objects are immutable.")

    def __delattr__(self, name, /) -> None:
        raise TypeError(type(self).__name__ + " objects are immutable.")

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo) -> Self:
        return self

def payload_schema(
        validate: Callable[[Any], Any],
        render: Callable[[Any], str]
    ) -> core_schema.CoreSchema:
    '''
    Pydantic schema for self-describing values. Anything `validate` accepts
    is converted, and the value serializes to its text form in JSON mode.
    '''
    def validator(value: Any) -> Any:
        try: return validate(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    return core_schema.no_info_plain_validator_function(
        validator,
        serialization=core_schema.plain_serializer_function_ser_schema(
            render, return_schema=core_schema.str_schema(), when_used='json'
        )
    )

def encodec(name: str):
    '''Wrap common logic for structured encoding functions.'''
    def staged(pre_encode: Callable[[Any], Any]):
        @wraps(pre_encode)
        def transform(data: Any) -> Structured:
            INF = float('inf')
            if (d := pre_encode(data)) is not None:
                return d

            match data:
                case float() if data != data:
                    raise ValueError(f'{name} does not support NaN')
                case float() if data == INF:
                    raise ValueError(f'{name} does not support Infinity')
                case float() if data == -INF:
                    raise ValueError(f'{name} does not support -Infinity')

                case None | bool() | int() | float() | str() | bytes():
                    return data

                case list() | tuple(): return list(map(transform, data))
                case dict():
                    return {str(k): transform(v) for k, v in data.items()}

                case _: raise TypeError(
                    f'{name} Unsupported type: {type(data)}'
                )
        return transform
    return staged

def decodec(name: str):
    '''Wrap common logic for structured decoding functions.'''
    def staged(pre_decode: Callable[[Any], Structured]):
        @wraps(pre_decode)
        def transform(data: Any) -> Structured:
            if (d := pre_decode(data)) is not None:
                return d

            match data:
                case None | bool() | int() | float() | str() | bytes():
                    return data

                case list(): return list(map(transform, data))
                case dict():
                    return {str(k): transform(v) for k, v in data.items()}

                case _: raise TypeError(
                    f'{name} Unsupported type: {type(data)}'
                 )
        return transform
    return staged
