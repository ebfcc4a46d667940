"""POST /, /files and /multiple-fields: multipart uploads to local storage."""
from typing import Dict, List
from fastapi import APIRouter, Depends, Request

from api.auth import require_token
from api.config import Settings
from api.dependencies import current_settings, get_store
from api.errors import BadRequest
from api.models.schemas import (
    FieldFile, MultiFieldUploadResponse, MultiUploadResponse, UploadResponse,
)
from api.multipart import collect_files, store_uploads
from storage.local import LocalFileStore
from storage.naming import extract_prefix

router = APIRouter(tags=["uploads"], dependencies=[Depends(require_token)])


@router.post("/", response_model=UploadResponse)
async def upload_file(
    request: Request,
    store: LocalFileStore = Depends(get_store),
    settings: Settings = Depends(current_settings),
):
    async with request.form() as form:
        files = collect_files(form, field="file", max_count=1)
        if not files:
            raise BadRequest("No file uploaded")
        stored = await store_uploads(store, files, settings.allowed_types)
    return UploadResponse(link=stored[0].url)


@router.post("/files", response_model=MultiUploadResponse)
async def upload_files(
    request: Request,
    store: LocalFileStore = Depends(get_store),
    settings: Settings = Depends(current_settings),
):
    async with request.form() as form:
        files = collect_files(form, field="files", max_count=settings.max_files)
        if not files:
            raise BadRequest("No files uploaded")
        stored = await store_uploads(store, files, settings.allowed_types)
    return MultiUploadResponse(links=[s.url for s in stored])


@router.post("/multiple-fields", response_model=MultiFieldUploadResponse)
async def upload_multiple_fields(
    request: Request,
    store: LocalFileStore = Depends(get_store),
    settings: Settings = Depends(current_settings),
):
    async with request.form() as form:
        files = collect_files(form)
        if not files:
            raise BadRequest("No files uploaded")
        stored = await store_uploads(store, files, settings.allowed_types)

    grouped: Dict[str, List[FieldFile]] = {}
    for item in stored:
        document = extract_prefix(item.name)
        grouped.setdefault(document, []).append(FieldFile.from_stored(document, item))
    return MultiFieldUploadResponse(message="Files uploaded successfully", files=grouped)
