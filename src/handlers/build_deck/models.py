"""Pydantic models for the build-deck request."""

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from core.models.deck import DeckOptions


class BuildDeckRequest(DeckOptions):
    """Validation model for a build request.

    Accepts the snake_case option names as well as the camelCase names used
    on the wire to the conversion service.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_options(self) -> DeckOptions:
        return DeckOptions(**self.model_dump())
