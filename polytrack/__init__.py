"""Image viewport, tracking overlays, colour projection maps, camera follow control and colour sampling."""

__version__ = "0.1.0"

__all__ = [
    "imageview",
    "drawing",
    "topomap",
    "follow",
    "sampling",
]