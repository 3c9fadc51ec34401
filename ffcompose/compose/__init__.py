"""Video composition operations built on ffmpeg filter graphs."""

from .concat import concat
from .overlay import chromakey, overlay
from .stack import hstack, vstack

__all__ = [
    "chromakey",
    "concat",
    "hstack",
    "overlay",
    "vstack",
]
