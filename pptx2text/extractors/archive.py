"""
Archive reader for OOXML presentation packages.

Opens the ZIP container once and exposes its entries as decoded text. The
archive is read from an in-memory buffer and lives only for the duration of
one parse call.
"""

import codecs
import io
import logging
import zipfile
import zlib
from typing import Union

from pptx2text.exceptions import (
    CorruptArchiveError,
    EntryDecodeError,
    ExtractionError,
    ExtractionFileEncryptedError,
    MissingEntryError,
)
from pptx2text.extractors.util.encryption import is_ooxml_encrypted
from pptx2text.extractors.util.zip_bomb import (
    DEFAULT_ZIP_BOMB_LIMITS,
    ZipBombLimits,
    open_zipfile,
)

logger = logging.getLogger(__name__)

_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def decode_part_bytes(name: str, data: bytes) -> str:
    """
    Decode the bytes of a part to text.

    A UTF-8 or UTF-16 byte order mark selects the codec, otherwise the part
    must be valid UTF-8.

    Raises:
        EntryDecodeError: If the bytes are not valid text.
    """
    encoding = "utf-8"
    for bom, bom_encoding in _BOMS:
        if data.startswith(bom):
            encoding = bom_encoding
            break
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise EntryDecodeError(
            name, f"Part {name} is not valid {encoding} text", cause=exc
        ) from exc


class PptxArchive:
    """Read-only view over the entries of a presentation container."""

    def __init__(self, zf: zipfile.ZipFile):
        self._zip = zf
        self._entries = [
            info.filename for info in zf.infolist() if not info.is_dir()
        ]
        self._namelist = set(self._entries)

    @property
    def namelist(self) -> set[str]:
        return self._namelist

    def list_entries(self) -> list[str]:
        """Entry names in archive enumeration order."""
        return list(self._entries)

    def exists(self, name: str) -> bool:
        return name in self._namelist

    def read_bytes(self, name: str) -> bytes:
        if name not in self._namelist:
            raise MissingEntryError(name)
        try:
            return self._zip.read(name)
        except (
            zipfile.BadZipFile,
            zlib.error,
            EOFError,
            NotImplementedError,
            RuntimeError,
        ) as exc:
            # CRC mismatch, truncated data, unsupported compression or a
            # per-entry password
            raise EntryDecodeError(
                name, f"Part {name} could not be decompressed: {exc}", cause=exc
            ) from exc

    def read_text(self, name: str) -> str:
        return decode_part_bytes(name, self.read_bytes(name))

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "PptxArchive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_archive(
    data: Union[bytes, bytearray, io.BytesIO],
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
) -> PptxArchive:
    """
    Open a presentation container from an in-memory buffer.

    Args:
        data: The complete container, as bytes or a seekable binary stream.
        limits: ZIP-bomb heuristics to validate the container against.

    Returns:
        PptxArchive: Caller owns the archive and must close it.

    Raises:
        ExtractionFileEncryptedError: If the package is password-protected.
        ExtractionZipBombError: If the container exceeds ``limits``.
        CorruptArchiveError: If the buffer is not a ZIP container.
    """
    file_like = io.BytesIO(bytes(data)) if isinstance(data, (bytes, bytearray)) else data
    file_like.seek(0)

    try:
        encrypted = is_ooxml_encrypted(file_like)
    except OSError as exc:
        raise CorruptArchiveError(
            f"Not a valid presentation container: {exc}", cause=exc
        ) from exc
    if encrypted:
        raise ExtractionFileEncryptedError("PPTX is encrypted or password-protected")

    try:
        zf = open_zipfile(file_like, limits=limits, source="pptx")
    except ExtractionError:
        raise
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError, EOFError) as exc:
        raise CorruptArchiveError(
            f"Not a valid presentation container: {exc}", cause=exc
        ) from exc

    archive = PptxArchive(zf)
    logger.debug(f"Opened archive with {len(archive.namelist)} entries")
    return archive
