from __future__ import annotations

import logging
import zipfile
import zlib
from io import BytesIO
from typing import Mapping

from figma_export_api.core.errors import ArchiveIOError

logger = logging.getLogger("figma_export_api.packager")

CHUNK_SIZE = 64 * 1024
FIXED_TIMESTAMP = (1980, 1, 1, 0, 0, 0)
COMPRESS_LEVEL = 9


def _member(path: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(path, date_time=FIXED_TIMESTAMP)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = 0o644 << 16
    return info


def _write_member(archive: zipfile.ZipFile, path: str, content: str | bytes) -> None:
    payload = content.encode("utf-8") if isinstance(content, str) else content
    view = memoryview(payload)
    with archive.open(_member(path), "w") as handle:
        for start in range(0, len(view), CHUNK_SIZE):
            handle.write(view[start : start + CHUNK_SIZE])


def build_archive(files: Mapping[str, str | bytes]) -> bytes:
    """Zip ``files`` with members in mapping order and fixed timestamps."""
    buffer = BytesIO()
    path = None
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=COMPRESS_LEVEL) as archive:
            for path, content in files.items():
                if not path or path.startswith("/") or ".." in path.split("/"):
                    raise ValueError(f"Invalid archive member path: {path!r}")
                _write_member(archive, path, content)
    except (OSError, ValueError, zlib.error, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
        raise ArchiveIOError(
            "Failed to build archive",
            details={"member": path, "reason": str(exc)},
        ) from exc
    payload = buffer.getvalue()
    logger.info("archive built members=%s bytes=%s", len(files), len(payload))
    return payload


def read_archive(payload: bytes) -> dict[str, str]:
    try:
        with zipfile.ZipFile(BytesIO(payload)) as archive:
            return {name: archive.read(name).decode("utf-8") for name in archive.namelist()}
    except (OSError, zipfile.BadZipFile, UnicodeDecodeError) as exc:
        raise ArchiveIOError("Failed to read archive", details={"reason": str(exc)}) from exc
