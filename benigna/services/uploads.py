# benigna-api/benigna/services/uploads.py
import logging
import time
from pathlib import Path
from typing import List, Sequence, Tuple

from benigna.core.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

UPLOAD_FOLDERS = ("profiles", "institutions", "donations")
MAX_IMAGE_BYTES = 5 * 1024 * 1024

# (filename, content type, bytes)
Image = Tuple[str, str, bytes]


def check_image(filename: str, content_type: str, data: bytes) -> None:
    if not (content_type or "").startswith("image/"):
        raise ValidationError("O arquivo deve ser uma imagem")
    if len(data) > MAX_IMAGE_BYTES:
        raise ValidationError(f"A imagem {filename} é muito grande. Máximo 5MB por imagem.")


def save_images(upload_dir: str, folder: str, images: Sequence[Image]) -> List[str]:
    """Store a batch of images and return their paths relative to ``upload_dir``.

    The whole batch is checked before anything is written, so a rejected
    request leaves no files behind.
    """
    if folder not in UPLOAD_FOLDERS:
        raise NotFoundError("Pasta de upload inválida")
    for filename, content_type, data in images:
        check_image(filename, content_type, data)

    target_dir = Path(upload_dir) / folder
    target_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    try:
        for filename, _, data in images:
            safe_name = Path(filename or "image").name.replace(" ", "_")
            target = target_dir / f"{int(time.time() * 1000)}_{safe_name}"
            target.write_bytes(data)
            written.append(target)
            logger.info("Stored upload %s/%s (%d bytes)", folder, target.name, len(data))
    except OSError:
        for path in written:
            path.unlink(missing_ok=True)
        raise
    return [f"{folder}/{path.name}" for path in written]
