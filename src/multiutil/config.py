'''
Configuration for encoding detection.
'''

from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from . import multibase

class DetectConfig(BaseModel):
    '''Configuration for guessing the encoding of text without a sigil.'''

    first_match: Annotated[
        bool,
        Field(description="Stop at the first base which decodes the text instead of collecting every candidate.")
    ] = False
    bases: Annotated[
        list[str] | None,
        Field(description="Names of the bases to try, always in precedence order. If `null`, tries every base.")
    ] = None
    skip_identity: Annotated[
        bool,
        Field(description="Never treat sigil-less text as identity encoded.")
    ] = True

    @field_validator('bases')
    @classmethod
    def _known_bases(cls, value: list[str] | None) -> list[str] | None:
        if value is not None:
            for name in value:
                multibase.get(name)
        return value

    def candidates(self) -> list[multibase.Base]:
        """Bases to try, in precedence order."""
        allowed = None
        if self.bases is not None:
            allowed = {multibase.get(name) for name in self.bases}
        return [
            base for base in multibase.iter_bases()
                if (allowed is None or base in allowed)
                and not (self.skip_identity and base is multibase.identity)
        ]
