import io
import logging
from typing import Any, Callable, Generator

from pptx2text.exceptions import ExtractionFileFormatNotSupportedError
from pptx2text.extractors.data_types import ExtractionInterface
from pptx2text.mime_types import (
    MIME_TYPE_MAPPING,
    guess_mime_type,
    is_supported_mime_type,
)

logger = logging.getLogger(__name__)


def _get_extractor(
    file_type: str,
) -> Callable[[io.BytesIO, str | None], Generator[ExtractionInterface, Any, None]]:
    """Return the extractor function for a file type (lazy import)."""
    if file_type in ("pptx", "pptm", "ppsx", "ppsm", "potx", "potm"):
        from pptx2text.extractors.pptx_extractor import read_pptx

        return read_pptx
    raise ExtractionFileFormatNotSupportedError(
        file_type, f"No extractor for file type: {file_type}"
    )


def is_supported_file(path: str) -> bool:
    """Checks if the path is a supported file"""
    return is_supported_mime_type(guess_mime_type(path))


def get_extractor(
    path: str,
) -> Callable[[io.BytesIO, str | None], Generator[ExtractionInterface, Any, None]]:
    """Analyses the path of a file and returns a suited extractor.
       The file MUST not exist (yet). The path or filename alone suffices to return an
       extractor.

    :returns a function of an extractor. All extractors take a file-like object as parameter
    :raises ExtractionFileFormatNotSupportedError: File is not covered by any extractor
    """
    mime_type = guess_mime_type(path)

    if is_supported_mime_type(mime_type):
        file_type = MIME_TYPE_MAPPING[mime_type]
        logger.debug(
            f"Detected file type: {file_type} (MIME: {mime_type}) for file: {path}"
        )
        return _get_extractor(file_type)

    logger.debug(f"File [{path}] with mime type [{mime_type}] is not supported")
    raise ExtractionFileFormatNotSupportedError(path)
