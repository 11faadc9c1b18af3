"""Document store: rendered document text saved by title.

Each document is one file in the storage directory. The file name is the
storage key ``taskigt.storage.<title>``, percent-encoded so any title maps to
exactly one file. Writes go through a temp file and an atomic rename, so a
failed save never leaves a half-written document behind.
"""

import os
from pathlib import Path
from urllib.parse import quote, unquote

import structlog

from taskigt.services.exceptions import DocumentNotFoundError, StorageError

logger = structlog.get_logger()

BASE_KEY = "taskigt.storage"


def storage_key(title: str) -> str:
    """Storage key for a document title."""
    return f"{BASE_KEY}.{title}"


def atomic_write(path: Path, content: str) -> None:
    """
    Atomically write content to file with temp-file-rename pattern.

    1. Write to temporary file in the same directory
    2. fsync to ensure data is on disk
    3. Atomic rename to replace original file

    Args:
        path: Target file path
        content: Content to write

    Raises:
        OSError: On file I/O errors
    """
    # Same directory keeps the rename on one filesystem
    temp_path = path.parent / f".{path.name}.tmp.{os.getpid()}"

    try:
        temp_path.write_text(content, encoding="utf-8")

        with open(temp_path, "r+", encoding="utf-8") as f:
            f.flush()
            os.fsync(f.fileno())

        temp_path.replace(path)

        logger.debug("atomic_write_success", path=str(path), size=len(content))

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        logger.error("atomic_write_failed", path=str(path), error=str(e))
        raise


class DocumentStorage:
    """Key-value store of document text by title.

    Attributes:
        directory: Directory holding one file per saved document
    """

    def __init__(self, directory: Path):
        """Initialize with storage directory.

        The directory is created on first save.

        Args:
            directory: Storage directory

        Raises:
            ValueError: If directory exists but is not a directory
        """
        directory = Path(directory).expanduser()
        if directory.exists() and not directory.is_dir():
            raise ValueError(f"Storage path is not a directory: {directory}")
        self.directory = directory

    def path_for(self, title: str) -> Path:
        """File path holding the document with the given title."""
        return self.directory / quote(storage_key(title), safe="")

    def save(self, title: str, content: str) -> Path:
        """Save document text under its title, replacing any previous version.

        Args:
            title: Document title
            content: Rendered document text

        Returns:
            Path of the written file

        Raises:
            StorageError: If the document could not be written
        """
        path = self.path_for(title)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            atomic_write(path, content)
        except OSError as e:
            raise StorageError(title, f"Could not save document ({e})") from e

        logger.info("document_saved", title=title, path=str(path), size=len(content))
        return path

    def restore(self, title: str) -> str:
        """Read back the text saved under a title.

        Args:
            title: Document title

        Returns:
            Saved document text

        Raises:
            DocumentNotFoundError: If nothing was saved under this title
            StorageError: If the saved file cannot be read
        """
        path = self.path_for(title)
        if not path.is_file():
            logger.info("document_not_found", title=title, path=str(path))
            raise DocumentNotFoundError(title)

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(title, f"Could not read document ({e})") from e

        logger.debug("document_restored", title=title, size=len(content))
        return content

    def exists(self, title: str) -> bool:
        """Check whether a document with this title was saved."""
        return self.path_for(title).is_file()

    def list_titles(self) -> list[str]:
        """List titles of all saved documents, sorted alphabetically."""
        if not self.directory.exists():
            return []

        prefix = f"{BASE_KEY}."
        titles = []
        for path in self.directory.iterdir():
            key = unquote(path.name)
            if path.is_file() and key.startswith(prefix):
                titles.append(key[len(prefix):])
        return sorted(titles)
