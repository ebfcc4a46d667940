"""Pydantic schemas for stored files and gateway responses."""
from __future__ import annotations
from pathlib import Path
from typing import Dict, List
from pydantic import BaseModel


# ── Stored file ───────────────────────────────────────────────────────────────

class StoredFile(BaseModel):
    name: str
    original_name: str
    content_type: str
    size: int
    path: Path
    url: str


# ── Uploads ───────────────────────────────────────────────────────────────────

class UploadResponse(BaseModel):
    link: str


class MultiUploadResponse(BaseModel):
    links: List[str]


class FieldFile(BaseModel):
    document: str
    originalName: str
    fileName: str
    link: str

    @classmethod
    def from_stored(cls, document: str, stored: StoredFile) -> "FieldFile":
        return cls(
            document=document,
            originalName=stored.original_name,
            fileName=stored.name,
            link=stored.url,
        )


class MultiFieldUploadResponse(BaseModel):
    message: str
    files: Dict[str, List[FieldFile]]


# ── Deletes ───────────────────────────────────────────────────────────────────

class DeleteResponse(BaseModel):
    status: str  # success | error
    message: str


class DeleteResult(BaseModel):
    fileName: str
    status: str
    message: str


class BatchDeleteResponse(BaseModel):
    message: str
    results: List[DeleteResult]
