import io
import zipfile

import pytest

from pptx2text.exceptions import CorruptArchiveError, ExtractionZipBombError
from pptx2text.extractors.util.zip_bomb import (
    ZipBombLimits,
    open_zipfile,
    validate_zipfile,
)


def _make_zip_bytesio(files: dict[str, bytes]) -> io.BytesIO:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    buffer.seek(0)
    return buffer


def test_zip_bomb_detection_can_use_low_thresholds__compression_ratio() -> None:
    buffer = _make_zip_bytesio({"ppt/slides/slide1.xml": b"A" * 10_000})

    with pytest.raises(ExtractionZipBombError):
        open_zipfile(
            buffer,
            limits=ZipBombLimits(
                max_entry_compression_ratio=10.0,
                max_total_compression_ratio=10.0,
            ),
            source="test",
        )

    with open_zipfile(
        buffer,
        limits=ZipBombLimits(
            max_entry_compression_ratio=10_000.0,
            max_total_compression_ratio=10_000.0,
        ),
        source="test",
    ) as zf:
        assert zf.namelist() == ["ppt/slides/slide1.xml"]


def test_zip_bomb_detection_can_use_low_thresholds__entry_count() -> None:
    buffer = _make_zip_bytesio(
        {
            "a.xml": b"a",
            "b.xml": b"b",
            "c.xml": b"c",
        }
    )

    with zipfile.ZipFile(buffer) as zf:
        with pytest.raises(ExtractionZipBombError):
            validate_zipfile(zf, limits=ZipBombLimits(max_entries=2), source="test")
        validate_zipfile(zf, limits=ZipBombLimits(max_entries=3), source="test")


def test_zip_bomb_detection_can_use_low_thresholds__sizes() -> None:
    buffer = _make_zip_bytesio({"a.xml": bytes(range(256)) * 4, "b.xml": b"b" * 10})

    with zipfile.ZipFile(buffer) as zf:
        with pytest.raises(ExtractionZipBombError):
            validate_zipfile(zf, limits=ZipBombLimits(max_single_uncompressed_bytes=512))
        with pytest.raises(ExtractionZipBombError):
            validate_zipfile(
                zf, limits=ZipBombLimits(max_total_uncompressed_bytes=1_030)
            )
        validate_zipfile(zf, limits=ZipBombLimits(max_total_uncompressed_bytes=1_034))


def test_zip_bomb_error_is_a_corrupt_archive() -> None:
    buffer = _make_zip_bytesio({"a.xml": b"a", "b.xml": b"b"})

    with pytest.raises(CorruptArchiveError) as excinfo:
        open_zipfile(buffer, limits=ZipBombLimits(max_entries=1), source="deck.pptx")
    assert "deck.pptx" in str(excinfo.value)
