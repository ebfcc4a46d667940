"""Local filesystem storage for uploaded files."""
import logging
import shutil
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional
from urllib.parse import quote

from api.models.schemas import StoredFile
from storage.naming import UniqueClock, generate_name, original_extension

logger = logging.getLogger(__name__)


class InvalidFileName(ValueError):
    pass


class LocalFileStore:
    """Flat directory of uploads served under ``<base_url>/upload/``."""

    def __init__(self, root: Path, base_url: str,
                 clock: Optional[Callable[[], int]] = None):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.clock = clock or UniqueClock()

    def ensure_dir(self):
        self.root.mkdir(parents=True, exist_ok=True)

    def public_url(self, name: str) -> str:
        return f"{self.base_url}/upload/{quote(name)}"

    def path_for(self, name: str) -> Path:
        if not name or name in (".", "..") or Path(name).name != name or "\\" in name:
            raise InvalidFileName(name)
        return self.root / name

    def save(self, src: BinaryIO, field_name: str, original_name: str,
             content_type: str) -> StoredFile:
        """Copy ``src`` into the store under a freshly generated name."""
        name = generate_name(field_name, original_extension(original_name), self.clock())
        dest = self.root / name
        self.ensure_dir()
        try:
            with open(dest, "wb") as f:
                shutil.copyfileobj(src, f)
        except OSError:
            dest.unlink(missing_ok=True)
            raise
        stored = StoredFile(
            name=name,
            original_name=original_name,
            content_type=content_type,
            size=dest.stat().st_size,
            path=dest,
            url=self.public_url(name),
        )
        logger.info("Stored %s (%s, %d bytes) as %s",
                    original_name, content_type, stored.size, name)
        return stored

    def delete(self, name: str):
        """Unlink ``name``. Raises InvalidFileName, FileNotFoundError or OSError."""
        path = self.path_for(name)
        path.unlink()
        logger.info("Deleted %s", name)

    def discard(self, stored: Iterable[StoredFile]):
        """Remove files written earlier in a request that failed part-way."""
        for item in stored:
            try:
                item.path.unlink()
            except FileNotFoundError:
                continue
            except OSError:
                logger.exception("Could not remove partial upload %s", item.name)
