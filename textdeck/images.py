"""
Image metadata and placement math.

The instruction builder only needs an image's natural size and whether it
has finished loading. Anything with ``width``, ``height`` and ``ready``
attributes qualifies; :class:`ImageInfo` is the plain implementation and
:class:`ImageDimensionCache` fills it in from files on disk with Pillow.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from PIL import Image

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_FORMATS = ("JPEG", "PNG", "WEBP", "GIF")
AVATAR_SIZE = 300


class ImageMetadata(Protocol):
    width: int
    height: int
    ready: bool


@dataclass(frozen=True)
class ImageInfo:
    width: int
    height: int
    ready: bool = True


@dataclass(frozen=True)
class ImageDrawParams:
    """Source crop (s*) and destination rectangle (d*), canvas ``drawImage`` style."""
    sx: float
    sy: float
    sw: float
    sh: float
    dx: float
    dy: float
    dw: float
    dh: float


def compute_fit(image: ImageMetadata, target_w: float, target_h: float, mode: str) -> ImageDrawParams:
    """
    Place an image of natural size ``image.width × image.height`` into a
    ``target_w × target_h`` box.

    * ``cover-top`` / ``cover-center`` / ``cover-bottom`` – scale to cover,
      crop horizontally centered and vertically at top / center / bottom
    * ``contain`` – scale to fit, letterbox centered
    * ``stretch`` – map the whole image onto the whole box
    """
    src_w, src_h = image.width, image.height

    if mode in ("cover-top", "cover-center", "cover-bottom"):
        scale = max(target_w / src_w, target_h / src_h)
        sw = target_w / scale
        sh = target_h / scale
        sx = (src_w - sw) / 2
        if mode == "cover-top":
            sy = 0.0
        elif mode == "cover-center":
            sy = (src_h - sh) / 2
        else:
            sy = src_h - sh
        return ImageDrawParams(sx, sy, sw, sh, 0.0, 0.0, target_w, target_h)

    if mode == "contain":
        scale = min(target_w / src_w, target_h / src_h)
        dw = src_w * scale
        dh = src_h * scale
        return ImageDrawParams(0.0, 0.0, src_w, src_h, (target_w - dw) / 2, (target_h - dh) / 2, dw, dh)

    if mode == "stretch":
        return ImageDrawParams(0.0, 0.0, src_w, src_h, 0.0, 0.0, target_w, target_h)

    raise ValueError(f"Unknown image fit mode: {mode}")


def square_crop(image: ImageMetadata) -> ImageDrawParams:
    """Centered square crop of *image*, with the crop as the destination size."""
    if image.width > image.height:
        side = image.height
        sx, sy = (image.width - side) / 2, 0.0
    else:
        side = image.width
        sx, sy = 0.0, (image.height - side) / 2
    return ImageDrawParams(sx, sy, side, side, 0.0, 0.0, side, side)


class ImageDimensionCache:
    """Cache for image dimensions to avoid repeated PIL Image.open calls."""

    def __init__(self, debug: bool = False):
        self.cache: Dict[str, ImageInfo] = {}
        self.debug = debug

    def get_info(self, image_path: str) -> Optional[ImageInfo]:
        """
        Get image dimensions, using cache if available.

        Args:
            image_path: Path to the image file

        Returns:
            :class:`ImageInfo`, or None if the file can't be read or its
            format is not supported
        """
        if image_path in self.cache:
            if self.debug:
                logger.debug(f"📦 Using cached dimensions for {image_path}: {self.cache[image_path]}")
            return self.cache[image_path]

        try:
            with Image.open(image_path) as img:
                if img.format not in SUPPORTED_IMAGE_FORMATS:
                    logger.warning(f"⚠️ Unsupported image format {img.format} for {image_path}")
                    return None
                info = ImageInfo(width=img.size[0], height=img.size[1])
        except OSError as e:
            logger.warning(f"⚠️ Could not read image dimensions for {image_path}: {e}")
            return None

        self.cache[image_path] = info
        if self.debug:
            logger.debug(f"📷 Cached new image dimensions for {image_path}: {info.width}x{info.height}")
        return info
