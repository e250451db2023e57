"""Filesystem blob store for uploaded files."""
import os
import re
import secrets
import shutil
import tempfile
import time
from pathlib import Path
from typing import BinaryIO

import structlog

logger = structlog.get_logger()

_EXTENSION_PATTERN = re.compile(r"^\.[A-Za-z0-9]{1,16}$")


def unique_name(original_filename: str) -> str:
    """Generate a collision-resistant storage name for an upload.

    Combines the current epoch milliseconds with a random nonce so uploads
    landing in the same millisecond still get distinct names. The original
    extension is kept only if it is a short alphanumeric suffix.

    Args:
        original_filename: Filename supplied by the client.

    Returns:
        Name of the form ``<epoch-ms>-<hex nonce><ext>``.
    """
    suffix = Path(original_filename).suffix
    ext = suffix.lower() if _EXTENSION_PATTERN.match(suffix) else ""
    return f"{time.time_ns() // 1_000_000}-{secrets.token_hex(8)}{ext}"


class BlobStore:
    """Stores uploaded byte streams under generated unique names.

    Each save writes to a temporary file in the store directory and
    renames it into place, so a stored path never refers to a partial file.
    """

    def __init__(self, root: str | Path) -> None:
        """Initialize blob store (call initialize() before use).

        Args:
            root: Directory uploaded files are written to.
        """
        self._root = Path(root)

    @property
    def root(self) -> Path:
        """Directory holding stored files."""
        return self._root

    def initialize(self) -> None:
        """Create the storage directory if missing."""
        self._root.mkdir(parents=True, exist_ok=True)
        logger.info("blob_store_initialized", root=str(self._root))

    def save(self, filename: str, stream: BinaryIO) -> str:
        """Persist a byte stream under a fresh unique name.

        Args:
            filename: Original filename, used for its extension.
            stream: Readable binary stream positioned at the start.

        Returns:
            Storage path of the written file.

        Raises:
            OSError: If the file cannot be written.
        """
        target = self._root / unique_name(filename)
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=".upload-")
        try:
            with os.fdopen(fd, "wb") as tmp:
                shutil.copyfileobj(stream, tmp)
            os.replace(tmp_name, target)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info("blob_stored", filename=filename, path=str(target))
        return str(target)

    def check(self) -> None:
        """Verify the storage directory is usable.

        Raises:
            OSError: If the directory is missing or not writable.
        """
        if not self._root.is_dir():
            raise FileNotFoundError(f"Upload directory not found: {self._root}")
        if not os.access(self._root, os.W_OK):
            raise PermissionError(f"Upload directory not writable: {self._root}")
