"""
pptx2text: Text extraction library for PowerPoint presentations.

A Python library for extracting slides, speaker notes, tables and document
properties from Office Open XML presentations (.pptx and its macro-enabled,
slideshow and template variants) into an ordered document model, with a
plain text and a JSON-ready rendering.
"""

import io
from pathlib import Path
from typing import Any, Generator

from pptx2text.extractors.data_types import ExtractionInterface, PptxContent
from pptx2text.extractors.options import ParseOptions
from pptx2text.extractors.render import to_plain_text, to_structured
from pptx2text.router import get_extractor, is_supported_file

__version__ = "0.1.0"


def read_pptx(
    file_like: io.BytesIO,
    path: str | None = None,
    options: ParseOptions | None = None,
) -> Generator[PptxContent, Any, None]:
    """Extract content from a PPTX file."""
    from pptx2text.extractors.pptx_extractor import read_pptx as _read_pptx

    return _read_pptx(file_like, path, options)


def parse_pptx(
    data: bytes | bytearray | io.BytesIO, options: ParseOptions | None = None
) -> PptxContent:
    """Parse an in-memory presentation into a PptxContent."""
    from pptx2text.extractors.pptx_extractor import parse_pptx as _parse_pptx

    return _parse_pptx(data, options)


def read_file(
    path: str | Path,
) -> Generator[ExtractionInterface, Any, None]:
    """
    Read and extract content from a file.

    Automatically detects the file type based on extension and uses
    the appropriate extractor.

    Args:
        path: Path to the file to read.

    Yields:
        A PptxContent for .pptx, .pptm, .ppsx, .ppsm, .potx and .potm files.

    Raises:
        ExtractionFileFormatNotSupportedError: If the file type is not supported.
        FileNotFoundError: If the file does not exist.

    Example:
        >>> import pptx2text
        >>> for result in pptx2text.read_file("slides.pptx"):
        ...     print(result.get_full_text())
    """
    path = Path(path)
    extractor = get_extractor(str(path))
    with open(path, "rb") as f:
        yield from extractor(io.BytesIO(f.read()), str(path))


__all__ = [
    # Version
    "__version__",
    # Main functions
    "read_file",
    "is_supported_file",
    "get_extractor",
    # Extraction
    "read_pptx",
    "parse_pptx",
    "ParseOptions",
    # Renderings
    "to_plain_text",
    "to_structured",
]
