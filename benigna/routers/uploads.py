# benigna-api/benigna/routers/uploads.py
import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from benigna import config
from benigna.auth.dependencies import get_current_user
from benigna.core.errors import BenignaError, ValidationError
from benigna.models.donation import MAX_DONATION_IMAGES
from benigna.services.uploads import save_images

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["Uploads"], dependencies=[Depends(get_current_user)])


class UploadResult(BaseModel):
    paths: List[str]


@router.post("/{folder}", response_model=UploadResult, status_code=status.HTTP_201_CREATED)
async def upload_images(folder: str, files: List[UploadFile] = File(...)):
    if len(files) > MAX_DONATION_IMAGES:
        raise ValidationError(f"Máximo de {MAX_DONATION_IMAGES} imagens por envio")
    try:
        images = [(file.filename, file.content_type, await file.read()) for file in files]
        return UploadResult(paths=save_images(config.UPLOAD_DIR, folder, images))
    except BenignaError:
        raise
    except Exception as e:
        logger.exception("Upload to %s failed", folder)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to upload images: {e}")
