import pytest
from pydantic import ValidationError

from core.models.deck import DeckOptions
from handlers.build_deck.models import BuildDeckRequest


def test_defaults() -> None:
    assert BuildDeckRequest.model_validate({}).to_options() == DeckOptions()


def test_accepts_snake_case_names() -> None:
    request = BuildDeckRequest.model_validate(
        {"ratio": "4:3", "layout": "fit", "title_slide": False, "title_text": "Trip", "split_every": 20}
    )

    options = request.to_options()
    assert isinstance(options, DeckOptions)
    assert options.ratio == "4:3"
    assert options.layout == "fit"
    assert options.title_slide is False
    assert options.title_text == "Trip"
    assert options.split_every == 20


def test_accepts_camel_case_names() -> None:
    request = BuildDeckRequest.model_validate(
        {"titleSlide": False, "titleText": "Trip", "splitEvery": 10}
    )

    assert request.title_slide is False
    assert request.title_text == "Trip"
    assert request.split_every == 10


@pytest.mark.parametrize(
    "payload",
    [
        {"ratio": "21:9"},
        {"layout": "tile"},
        {"split_every": -5},
        {"split_every": "20"},
        {"unknown": True},
    ],
)
def test_rejects_invalid_options(payload) -> None:
    with pytest.raises(ValidationError):
        BuildDeckRequest.model_validate(payload)
