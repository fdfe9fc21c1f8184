"""Photo Deck Builder Package."""

__version__ = "1.0.0"
__description__ = (
    "Stage, order and downscale photos, then build a slide deck through a conversion service"
)

__all__ = ["handlers", "core"]
