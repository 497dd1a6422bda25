from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass

from pptx2text.exceptions import ExtractionZipBombError


@dataclass(frozen=True)
class ZipBombLimits:
    """
    Heuristics for rejecting probable ZIP bombs disguised as presentations.

    A large deck with embedded media stays well below these values; the
    ratios catch highly repetitive payloads long before they are inflated.
    """

    max_entries: int = 20_000
    max_total_uncompressed_bytes: int = 2 * 1024 * 1024 * 1024  # 2 GiB
    max_single_uncompressed_bytes: int = 512 * 1024 * 1024  # 512 MiB
    max_total_compression_ratio: float = 200.0
    max_entry_compression_ratio: float = 500.0


DEFAULT_ZIP_BOMB_LIMITS = ZipBombLimits()


def _reject(message: str, source: str | None) -> ExtractionZipBombError:
    if source:
        message = f"{message} [{source}]"
    return ExtractionZipBombError(message)


def validate_zipfile(
    zf: zipfile.ZipFile,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> None:
    """
    Check the central directory of an open container against ``limits``.

    Only the declared sizes are inspected, nothing is decompressed.

    Raises:
        ExtractionZipBombError: If any limit is exceeded.
    """
    try:
        infos = [info for info in zf.infolist() if not info.is_dir()]
    except Exception as exc:
        raise ExtractionZipBombError(
            "Failed to inspect ZIP container", cause=exc
        ) from exc

    if len(infos) > limits.max_entries:
        raise _reject(
            f"ZIP container has too many entries ({len(infos)} > {limits.max_entries})",
            source,
        )

    total_uncompressed = 0
    total_compressed = 0
    for info in infos:
        file_size = info.file_size or 0
        compressed_size = info.compress_size or 0

        if file_size > limits.max_single_uncompressed_bytes:
            raise _reject(
                f"ZIP entry {info.filename} too large ({file_size} bytes > {limits.max_single_uncompressed_bytes})",
                source,
            )
        if file_size > 0:
            if compressed_size <= 0:
                raise _reject(
                    f"ZIP entry {info.filename} has zero compressed size but non-zero uncompressed size",
                    source,
                )
            ratio = file_size / compressed_size
            if ratio > limits.max_entry_compression_ratio:
                raise _reject(
                    f"ZIP entry {info.filename} compression ratio too high ({ratio:.1f} > {limits.max_entry_compression_ratio})",
                    source,
                )

        total_uncompressed += file_size
        total_compressed += compressed_size
        if total_uncompressed > limits.max_total_uncompressed_bytes:
            raise _reject(
                f"ZIP total uncompressed size too large ({total_uncompressed} bytes > {limits.max_total_uncompressed_bytes})",
                source,
            )

    if total_uncompressed and total_compressed:
        total_ratio = total_uncompressed / total_compressed
        if total_ratio > limits.max_total_compression_ratio:
            raise _reject(
                f"ZIP total compression ratio too high ({total_ratio:.1f} > {limits.max_total_compression_ratio})",
                source,
            )


def open_zipfile(
    file_like: io.BytesIO,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> zipfile.ZipFile:
    """
    Open a ZIP container and validate it against ``limits``.

    Caller owns the returned ZipFile and must close it.
    """
    file_like.seek(0)
    zf = zipfile.ZipFile(file_like, "r")
    try:
        validate_zipfile(zf, limits=limits, source=source)
    except Exception:
        zf.close()
        raise
    return zf
