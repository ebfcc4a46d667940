"""Collect uploaded files from a parsed multipart form and hand them to the store."""
import logging
from typing import Iterable, List, Optional, Tuple

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile

from api.errors import MultipartError, UnsupportedFileType
from api.models.schemas import StoredFile
from storage.local import LocalFileStore
from storage.naming import is_allowed_type

logger = logging.getLogger(__name__)


def collect_files(form: FormData, field: Optional[str] = None,
                  max_count: Optional[int] = None) -> List[Tuple[str, UploadFile]]:
    """Return ``(field, upload)`` pairs in the order they were received.

    With ``field`` set, a file under any other name is rejected, as is the
    file past ``max_count``. Plain text fields and empty file inputs are ignored.
    """
    files = []
    for name, value in form.multi_items():
        if not isinstance(value, UploadFile) or not value.filename:
            continue
        if field is not None and name != field:
            raise MultipartError("Unexpected field", field=name)
        files.append((name, value))
        if max_count is not None and len(files) > max_count:
            raise MultipartError("Unexpected field", field=name)
    return files


async def store_uploads(store: LocalFileStore, files: List[Tuple[str, UploadFile]],
                        allowed_types: Iterable[str]) -> List[StoredFile]:
    """Type-check every file, then write them all; nothing is kept on failure."""
    allowed_types = list(allowed_types)
    for _, upload in files:
        if not is_allowed_type(upload.content_type, allowed_types):
            logger.warning("Rejected %s: unsupported type %s",
                           upload.filename, upload.content_type)
            raise UnsupportedFileType(upload.content_type)

    stored = []
    try:
        for field, upload in files:
            await upload.seek(0)
            stored.append(await run_in_threadpool(
                store.save, upload.file, field, upload.filename, upload.content_type,
            ))
    except Exception:
        store.discard(stored)
        raise
    return stored
