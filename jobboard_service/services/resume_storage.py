"""
Résumé Storage

Stores uploaded résumé files on local disk under generated names and serves
them back by name. Uploads are fully read (up to the size ceiling) before
anything touches the disk, so an oversized upload leaves no trace.
"""

import logging
import re
import time
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from ..errors import NotFoundError, PayloadTooLargeError, ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
DEFAULT_MAX_BYTES = 5 * 1024 * 1024

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.]")


def sanitize_filename(filename: str) -> str:
    """Replace every character outside ``[a-zA-Z0-9.]`` with ``_``."""
    return _UNSAFE_CHARS.sub("_", filename)


def _millis() -> int:
    return time.time_ns() // 1_000_000


class ResumeStorage:
    """
    Directory-backed résumé store.

    Names look like ``1718000000000_my_cv.pdf``: a millisecond timestamp,
    bumped until unused, followed by the sanitized original filename.
    """

    def __init__(
        self,
        upload_dir: str,
        max_bytes: int = DEFAULT_MAX_BYTES,
        clock: Callable[[], int] = _millis,
    ):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.clock = clock

    def _ensure_dir(self) -> Path:
        if not self.upload_dir.exists():
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created upload directory: {self.upload_dir}")
        return self.upload_dir

    def read_limited(self, stream: BinaryIO) -> bytes:
        """
        Read the whole stream, refusing anything larger than ``max_bytes``.

        Raises:
            PayloadTooLargeError: as soon as the ceiling is crossed
        """
        chunks = []
        total = 0
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            total += len(chunk)
            if total > self.max_bytes:
                raise PayloadTooLargeError(
                    f"File exceeds the {self.max_bytes // (1024 * 1024)} MiB upload limit"
                )
            chunks.append(chunk)
        return b"".join(chunks)

    def save(self, filename: Optional[str], stream: BinaryIO) -> str:
        """
        Persist an upload and return its generated storage name.

        Raises:
            ValidationError: if no filename was supplied
            PayloadTooLargeError: if the upload exceeds ``max_bytes``
        """
        if not filename:
            raise ValidationError("No file uploaded")

        content = self.read_limited(stream)
        directory = self._ensure_dir()
        safe_name = sanitize_filename(Path(filename).name) or "resume"

        prefix = self.clock()
        while True:
            name = f"{prefix}_{safe_name}"
            try:
                # "x" mode fails if another upload claimed the name first
                with open(directory / name, "xb") as fh:
                    fh.write(content)
                break
            except FileExistsError:
                prefix += 1

        logger.info(f"Stored resume {name} ({len(content)} bytes)")
        return name

    def resolve(self, name: str) -> Path:
        """
        Locate a stored file by the name ``save`` returned.

        Raises:
            NotFoundError: for unknown names or names escaping the upload dir
        """
        if not name or name != Path(name).name or name.startswith("."):
            raise NotFoundError("Resume file not found on server.")

        directory = self.upload_dir.resolve()
        candidate = (directory / name).resolve()
        try:
            candidate.relative_to(directory)
        except ValueError:
            raise NotFoundError("Resume file not found on server.")

        if not candidate.is_file():
            raise NotFoundError("Resume file not found on server.")
        return candidate

    def read(self, name: str) -> bytes:
        """Return the stored bytes for ``name``."""
        return self.resolve(name).read_bytes()
