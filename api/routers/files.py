"""DELETE /{fileName} and DELETE /multiple-files"""
import logging
from fastapi import APIRouter, Depends, Request

from api.auth import require_token
from api.dependencies import get_store
from api.errors import BadRequest, NotFound, StorageFailure
from api.models.schemas import BatchDeleteResponse, DeleteResponse, DeleteResult
from storage.local import InvalidFileName, LocalFileStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"], dependencies=[Depends(require_token)])


def _delete_one(store: LocalFileStore, name) -> DeleteResult:
    if not isinstance(name, str):
        return DeleteResult(fileName=str(name), status="error", message="Invalid file name")
    try:
        store.delete(name)
    except InvalidFileName:
        message = "Invalid file name"
    except FileNotFoundError:
        message = "File not found"
    except OSError as exc:
        logger.error("Failed to delete %s: %s", name, exc)
        message = str(exc)
    else:
        return DeleteResult(fileName=name, status="success", message="File deleted successfully")
    return DeleteResult(fileName=name, status="error", message=message)


# Registered before /{file_name} so the literal path wins
@router.delete("/multiple-files", response_model=BatchDeleteResponse)
async def delete_files(request: Request, store: LocalFileStore = Depends(get_store)):
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    names = payload.get("files") if isinstance(payload, dict) else None
    if not isinstance(names, list) or not names:
        raise BadRequest("No files provided")

    results = [_delete_one(store, name) for name in names]
    return BatchDeleteResponse(message="Batch delete completed", results=results)


@router.delete("/", response_model=DeleteResponse)
def delete_without_name():
    raise BadRequest("File name is missing", status="error")


@router.delete("/{file_name}", response_model=DeleteResponse)
def delete_file(file_name: str, store: LocalFileStore = Depends(get_store)):
    try:
        store.delete(file_name)
    except InvalidFileName:
        raise BadRequest("Invalid file name", status="error")
    except FileNotFoundError:
        raise NotFound("File not found", status="error")
    except OSError as exc:
        logger.error("Failed to delete %s: %s", file_name, exc)
        raise StorageFailure(str(exc), status="error")
    return DeleteResponse(status="success", message="File deleted successfully")
