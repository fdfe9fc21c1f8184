import pytest
from pydantic import ValidationError as PydanticValidationError

from core.models.deck import (
    BuildRequest,
    BuildResult,
    BuildState,
    ConversionResult,
    DeckOptions,
    DownloadArtifact,
    TransformedImage,
)


def transformed(name: str = "a.png") -> TransformedImage:
    return TransformedImage(
        name=name,
        data_url="data:image/png;base64,AAAA",
        width=1920,
        height=1280,
        mime_type="image/png",
    )


def test_deck_option_defaults() -> None:
    options = DeckOptions()

    assert options.ratio == "16:9"
    assert options.layout == "cover"
    assert options.title_slide is True
    assert options.title_text == "Photo Slides"
    assert options.split_every == 0


@pytest.mark.parametrize(
    "field,value",
    [("ratio", "1:1"), ("layout", "stretch"), ("split_every", -1), ("title_slide", "yes")],
)
def test_deck_options_reject_invalid_values(field, value) -> None:
    with pytest.raises(PydanticValidationError):
        DeckOptions(**{field: value})


def test_build_request_payload_shape() -> None:
    request = BuildRequest(
        images=[transformed("a.png"), transformed("b.png")],
        options=DeckOptions(ratio="4:3", layout="fit", title_slide=False, title_text="", split_every=10),
    )

    assert request.to_payload() == {
        "images": [
            {"name": "a.png", "dataUrl": "data:image/png;base64,AAAA", "width": 1920, "height": 1280},
            {"name": "b.png", "dataUrl": "data:image/png;base64,AAAA", "width": 1920, "height": 1280},
        ],
        "ratio": "4:3",
        "layout": "fit",
        "titleSlide": False,
        "titleText": "",
        "splitEvery": 10,
    }


@pytest.mark.parametrize(
    "content_type,filename",
    [
        ("application/zip", "photos.zip"),
        ("application/x-zip-compressed", "photos.zip"),
        ("Application/ZIP", "photos.zip"),
        ("application/vnd.openxmlformats-officedocument.presentationml.presentation", "photos.pptx"),
        ("application/octet-stream", "photos.pptx"),
        ("", "photos.pptx"),
    ],
)
def test_download_artifact_name_follows_content_type(content_type, filename) -> None:
    artifact = DownloadArtifact.from_conversion(
        ConversionResult(content=b"PK", content_type=content_type)
    )

    assert artifact.filename == filename
    assert artifact.is_archive is (filename == "photos.zip")
    assert artifact.content == b"PK"


def test_build_result_succeeded() -> None:
    assert BuildResult(state=BuildState.COMPLETED).succeeded
    assert not BuildResult(state=BuildState.FAILED, message="An error occurred").succeeded
