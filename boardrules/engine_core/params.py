"""
Game Parameters - Validated configuration for game descriptors.

Each game declares a pydantic model of the options it accepts. Raw option
mappings (from code, or parsed from a game string where every value is a
string) are validated in lax mode, so "3" becomes 3. Validation failures
surface as InvalidParametersError before any descriptor is built.
"""

from __future__ import annotations
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import InvalidParametersError


class GameParameters(BaseModel):
    """Base model for game options. Unknown options are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_mapping(
        cls,
        game_name: str,
        values: Mapping[str, Any] | None = None,
    ) -> GameParameters:
        """
        Validate a raw option mapping.

        Raises InvalidParametersError listing every problem found.
        """
        try:
            return cls.model_validate(dict(values or {}))
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(loc) for loc in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            raise InvalidParametersError(game_name, errors) from e


def parse_game_string(game_string: str) -> tuple[str, dict[str, str]]:
    """
    Split "name(key=value,...)" into the name and a raw option dict.

    A bare name yields an empty dict. Values stay strings; the game's
    parameter model does the coercion.
    """
    text = game_string.strip()
    if "(" not in text:
        if ")" in text:
            raise InvalidParametersError(text, ["unbalanced parentheses"])
        return text, {}

    if not text.endswith(")"):
        raise InvalidParametersError(text, ["unbalanced parentheses"])

    name, _, body = text[:-1].partition("(")
    name = name.strip()
    options: dict[str, str] = {}
    for chunk in body.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        key, sep, value = chunk.partition("=")
        if not sep or not key.strip():
            raise InvalidParametersError(name, [f"malformed option '{chunk}'"])
        options[key.strip()] = value.strip()
    return name, options
