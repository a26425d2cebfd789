"""
Image processing for avatars and post images.

Clients send images as base64 data URLs. They are decoded, resized with
Pillow, re-encoded as JPEG and written under the upload directory; the
stored value is the public ``/uploads/...`` path.
"""

import asyncio
import base64
import binascii
import uuid
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from app.config import settings
from app.errors import ValidationError
from app.utils.logger import setup_logger

logger = setup_logger("images")

UPLOADS_URL_PREFIX = "/uploads"


@dataclass(frozen=True)
class ImagePreset:
    prefix: str
    width: int
    height: int | None  # None keeps the aspect ratio
    quality: int


AVATAR = ImagePreset(prefix="user", width=256, height=256, quality=70)
IDEA_IMAGE = ImagePreset(prefix="ideia", width=600, height=600, quality=70)
COMMUNITY_IMAGE = ImagePreset(prefix="post", width=800, height=None, quality=65)


def decode_data_url(data_url: str, max_bytes: int) -> bytes:
    """Decode ``data:image/...;base64,...`` (or bare base64) into bytes."""
    header, sep, payload = data_url.partition(",")
    if sep:
        if not header.startswith("data:image/") or not header.endswith(";base64"):
            raise ValidationError("Imagem deve ser um data URL base64")
    else:
        payload = header

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Imagem com codificação base64 inválida") from e

    if not raw:
        raise ValidationError("Imagem vazia")
    if len(raw) > max_bytes:
        raise ValidationError("Imagem excede o tamanho máximo permitido")
    return raw


def render_jpeg(raw: bytes, preset: ImagePreset) -> bytes:
    try:
        with Image.open(BytesIO(raw)) as img:
            img = ImageOps.exif_transpose(img).convert("RGB")
            if preset.height is None:
                ratio = preset.width / img.width
                size = (preset.width, max(1, round(img.height * ratio)))
                img = img.resize(size, Image.Resampling.LANCZOS)
            else:
                img = ImageOps.fit(
                    img, (preset.width, preset.height), Image.Resampling.LANCZOS
                )
            out = BytesIO()
            img.save(out, format="JPEG", quality=preset.quality, optimize=True)
            return out.getvalue()
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError("Arquivo de imagem inválido") from e


class ImageStore:
    """Writes processed images to ``upload_dir``."""

    def __init__(self, upload_dir: str | Path = settings.upload_dir):
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _write(self, data_url: str, preset: ImagePreset) -> str:
        jpeg = render_jpeg(decode_data_url(data_url, settings.max_image_bytes), preset)
        filename = f"{preset.prefix}_{uuid.uuid4().hex}.jpg"
        (self.upload_dir / filename).write_bytes(jpeg)
        logger.debug(f"Stored {preset.prefix} image {filename} ({len(jpeg)} bytes)")
        return f"{UPLOADS_URL_PREFIX}/{filename}"

    async def save(self, data_url: str | None, preset: ImagePreset) -> str | None:
        """Process and store an image, returning its public path (None if absent)."""
        if not data_url:
            return None
        return await asyncio.to_thread(self._write, data_url, preset)

    def discard(self, public_path: str | None) -> None:
        """Remove an image stored by ``save`` whose owning record was never created."""
        if not public_path:
            return
        filename = public_path.removeprefix(f"{UPLOADS_URL_PREFIX}/")
        try:
            (self.upload_dir / filename).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove orphaned image {filename}: {e}")
