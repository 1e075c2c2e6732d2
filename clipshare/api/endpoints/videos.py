"""
Video listing and upload endpoints
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from clipshare.api.deps import get_catalog, get_upload_service
from clipshare.services.catalog import VideoCatalog
from clipshare.services.uploader import VideoUploadService

logger = logging.getLogger(__name__)

router = APIRouter()


class UploadResponse(BaseModel):
    message: str
    videoPath: str


@router.get("/api/videos")
async def list_videos(catalog: VideoCatalog = Depends(get_catalog)):
    """Return the catalog as loaded at startup plus every upload since"""
    try:
        return JSONResponse([record.to_dict() for record in catalog.list_all()])
    except (TypeError, ValueError) as e:
        logger.error(f"Error serializing data: {e}")
        return JSONResponse(status_code=500, content={"message": "Error serializing data."})


@router.post("/upload-video", response_model=UploadResponse)
async def upload_video(
    video_file: Optional[UploadFile] = File(None, alias="videoFile"),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    service: VideoUploadService = Depends(get_upload_service),
):
    """
    Upload a single video with its metadata

    Returns:
        Confirmation message and the public path of the stored file
    """
    record = await service.accept_upload(
        video_file,
        video_file.filename if video_file is not None else None,
        video_file.content_type if video_file is not None else None,
        title,
        description,
        tags,
        size=video_file.size if video_file is not None else None,
    )
    return UploadResponse(message="Video uploaded successfully!", videoPath=record.video_path)
