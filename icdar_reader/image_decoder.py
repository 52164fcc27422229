"""
Image Decoder

Decodes a compressed image file (JPEG, PNG, ...) into a flat, row-major
buffer of RGB pixels.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Union

import cv2
import numpy as np
from PIL import Image as PILImage

from .errors import ImageDecodeFailed, ImageOpenFailed

logger = logging.getLogger("icdar_reader.decoder")


class PixelRGB(NamedTuple):
    r: int
    g: int
    b: int


@dataclass(frozen=True, eq=False)
class Image:
    """
    An immutable RGB image.

    Pixels are stored as a read-only ``(width * height, 3)`` uint8 array,
    addressed as ``row * width + column``.
    """
    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self):
        expected = (self.width * self.height, 3)
        if self.pixels.shape != expected:
            raise ValueError(
                f"Pixel buffer has shape {self.pixels.shape}, expected {expected}"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Pixel buffer must be uint8, got {self.pixels.dtype}")
        if self.pixels.base is not None:
            # Views share memory with a writable base
            object.__setattr__(self, "pixels", self.pixels.copy())
        self.pixels.setflags(write=False)

    def __len__(self) -> int:
        return self.pixels.shape[0]

    def __getitem__(self, index: int) -> PixelRGB:
        r, g, b = self.pixels[index]
        return PixelRGB(int(r), int(g), int(b))

    def pixel(self, row: int, column: int) -> PixelRGB:
        """Pixel at (row, column)."""
        if not (0 <= row < self.height and 0 <= column < self.width):
            raise IndexError(f"Pixel ({row}, {column}) outside {self.width}x{self.height} image")
        return self[row * self.width + column]

    def as_array(self) -> np.ndarray:
        """Read-only (height, width, 3) view of the pixels."""
        return self.pixels.reshape(self.height, self.width, 3)


def _to_rgb_opencv(decoded: np.ndarray) -> np.ndarray:
    if decoded.ndim == 2:
        return cv2.cvtColor(decoded, cv2.COLOR_GRAY2RGB)
    if decoded.shape[2] == 1:
        return cv2.cvtColor(decoded[:, :, 0], cv2.COLOR_GRAY2RGB)
    if decoded.shape[2] == 3:
        return cv2.cvtColor(decoded, cv2.COLOR_BGR2RGB)
    # BGRA: reorder then drop alpha
    return cv2.cvtColor(decoded[:, :, :4], cv2.COLOR_BGRA2RGBA)[:, :, :3]


def _to_rgb_pillow(img: PILImage.Image) -> np.ndarray:
    if img.mode in ("RGB", "RGBA"):
        return np.asarray(img)[:, :, :3]
    if img.mode in ("I;16", "I;16B", "I;16L", "I"):
        # High byte of 16-bit gray, replicated across channels
        gray = (np.asarray(img).astype(np.uint32) >> 8).astype(np.uint8)
        return np.repeat(gray[:, :, None], 3, axis=2)
    return np.asarray(img.convert("RGB"))


class ImageDecoder:
    """Decodes image files into :class:`Image` values."""

    BACKENDS = ("opencv", "pillow")

    def __init__(self, backend: str = "opencv"):
        """
        Initialize decoder.

        Args:
            backend: Decoding library, "opencv" (default) or "pillow"
        """
        if backend not in self.BACKENDS:
            raise ValueError(f"Unknown backend: {backend}. Available: {list(self.BACKENDS)}")
        self.backend = backend

    def decode(self, path: Union[str, Path]) -> Image:
        """
        Decode one image file.

        Args:
            path: Path to a compressed image file

        Returns:
            Fully populated Image

        Raises:
            ImageOpenFailed: The file cannot be opened
            ImageDecodeFailed: The file is not a decodable image
        """
        path = Path(path)

        try:
            f = open(path, "rb")
        except OSError as e:
            logger.debug(f"Cannot open {path}: {e}")
            raise ImageOpenFailed(path) from e

        with f:
            if self.backend == "opencv":
                rgb = self._decode_opencv(f, path)
            else:
                rgb = self._decode_pillow(f, path)

        return self._build_image(rgb)

    def _decode_opencv(self, f, path: Path) -> np.ndarray:
        data = np.frombuffer(f.read(), dtype=np.uint8)
        decoded = cv2.imdecode(data, cv2.IMREAD_UNCHANGED) if data.size else None
        if decoded is None:
            raise ImageDecodeFailed(path)

        if decoded.dtype == np.uint16:
            decoded = (decoded >> 8).astype(np.uint8)
        elif decoded.dtype != np.uint8:
            raise ImageDecodeFailed(path, f"unsupported sample type {decoded.dtype}")

        return _to_rgb_opencv(decoded)

    def _decode_pillow(self, f, path: Path) -> np.ndarray:
        try:
            with PILImage.open(f) as img:
                img.load()
                return _to_rgb_pillow(img)
        except (PILImage.UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise ImageDecodeFailed(path, str(e)) from e

    @staticmethod
    def _build_image(rgb: np.ndarray) -> Image:
        height, width = rgb.shape[:2]
        pixels = np.empty((width * height, 3), dtype=np.uint8)

        for row in range(height):
            pixels[row * width:(row + 1) * width] = rgb[row]

        return Image(width=width, height=height, pixels=pixels)


def decode_image(path: Union[str, Path], backend: str = "opencv") -> Image:
    """Decode one image file with a throwaway decoder."""
    return ImageDecoder(backend=backend).decode(path)
