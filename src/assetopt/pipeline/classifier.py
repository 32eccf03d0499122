"""Extension-based asset classification."""
from enum import Enum
from pathlib import PurePath
from typing import Union

from assetopt.utils import (
    AUDIO_EXTENSIONS,
    FONT_TTF_EXTENSIONS,
    FONT_WOFF2_EXTENSIONS,
    RASTER_IMAGE_EXTENSIONS,
    VECTOR_EXTENSIONS,
    VIDEO_EXTENSIONS,
)


class Category(Enum):
    RASTER_IMAGE = "raster-image"
    VECTOR_SVG = "vector-svg"
    AUDIO = "audio"
    VIDEO = "video"
    FONT_TTF = "font-ttf"
    FONT_WOFF2 = "font-woff2"
    IGNORED = "ignored"


_EXTENSION_SETS = (
    (Category.RASTER_IMAGE, RASTER_IMAGE_EXTENSIONS),
    (Category.VECTOR_SVG, VECTOR_EXTENSIONS),
    (Category.AUDIO, AUDIO_EXTENSIONS),
    (Category.VIDEO, VIDEO_EXTENSIONS),
    (Category.FONT_TTF, FONT_TTF_EXTENSIONS),
    (Category.FONT_WOFF2, FONT_WOFF2_EXTENSIONS),
)

_CATEGORY_BY_EXTENSION = {ext: category for category, exts in _EXTENSION_SETS for ext in exts}


def extension_of(path: Union[str, PurePath]) -> str:
    """Lowercased final extension including the dot, or '' when there is none."""
    return PurePath(path).suffix.lower()


def classify(path: Union[str, PurePath]) -> Category:
    """Map a path to its asset category. Never raises."""
    return _CATEGORY_BY_EXTENSION.get(extension_of(path), Category.IGNORED)


def is_watched(path: Union[str, PurePath]) -> bool:
    """Filter applied at the watch boundary: only known asset extensions pass."""
    return classify(path) is not Category.IGNORED
