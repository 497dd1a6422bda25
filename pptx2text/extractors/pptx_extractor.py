"""
PPTX Presentation Extractor
===========================

Extracts slides, speaker notes, tables and document properties from
Microsoft PowerPoint .pptx files (Office Open XML format, PowerPoint 2007 and
later) held in memory.

File Format Background
----------------------
The .pptx format is a ZIP archive containing XML parts following the Office
Open XML (OOXML) standard. The parts used here:

    ppt/slides/slide1.xml, slide2.xml, ...: Individual slide content
    ppt/slides/_rels/slide1.xml.rels: Per-slide relationships (notes link)
    ppt/notesSlides/notesSlide1.xml, ...: Speaker notes
    docProps/core.xml: Metadata (title, author, dates)

Slide Ordering
--------------
Slides are numbered by the numeric suffix of their part name and returned in
ascending order of that number. The order in which the ZIP enumerates its
entries is unspecified and never used for ordering. Gaps are allowed; when
two parts map to the same number the configured duplicate policy decides
which one is kept (by default the one enumerated last).

Failure Isolation
-----------------
Only a buffer that cannot be opened as a container is fatal
(CorruptArchiveError). A slide part that cannot be read or decoded is
skipped and listed in ``PptxContent.omitted_parts``; unreadable notes or core
properties leave the corresponding fields empty. Markup defects inside a part
never raise, fields simply stay empty.

Usage
-----
    >>> import io
    >>> from pptx2text.extractors.pptx_extractor import read_pptx
    >>>
    >>> with open("slides.pptx", "rb") as f:
    ...     for ppt in read_pptx(io.BytesIO(f.read()), path="slides.pptx"):
    ...         print(f"Title: {ppt.metadata.title}")
    ...         for slide in ppt.slides:
    ...             print(f"Slide {slide.slide_number}: {slide.title}")

See Also
--------
- slide_decoder: Title/subtitle resolution policy
- render: Plain text and structured renderings
"""

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Generator, List, Optional, Tuple, Union

from pptx2text.exceptions import (
    ExtractionError,
    ExtractionFailedError,
    PartReadError,
)
from pptx2text.extractors.archive import PptxArchive, open_archive
from pptx2text.extractors.data_types import PptxContent, PptxSlide
from pptx2text.extractors.metadata_decoder import (
    CORE_PROPERTIES_PART,
    decode_metadata,
)
from pptx2text.extractors.options import DEFAULT_PARSE_OPTIONS, ParseOptions
from pptx2text.extractors.part_locator import (
    SlidePartRef,
    locate_notes_part,
    locate_slide_parts,
)
from pptx2text.extractors.slide_decoder import SlideDecoder, decode_notes

logger = logging.getLogger(__name__)

# (slide part, slide markup, notes text) ready for decoding
_SlideJob = Tuple[SlidePartRef, str, str]


def _read_notes_text(archive: PptxArchive, ref: SlidePartRef) -> str:
    notes_part = locate_notes_part(archive, ref.slide_number, ref.part_name)
    if notes_part is None:
        return ""
    try:
        return decode_notes(archive.read_text(notes_part))
    except PartReadError as e:
        logger.warning(f"Ignoring unreadable notes of slide {ref.slide_number}: {e}")
        return ""


def _read_core_properties(archive: PptxArchive) -> Optional[str]:
    if not archive.exists(CORE_PROPERTIES_PART):
        logger.debug("No core properties part")
        return None
    try:
        return archive.read_text(CORE_PROPERTIES_PART)
    except PartReadError as e:
        logger.warning(f"Ignoring unreadable core properties: {e}")
        return None


def _load_slide_jobs(
    archive: PptxArchive,
    parts: List[SlidePartRef],
    options: ParseOptions,
) -> Tuple[List[_SlideJob], List[str]]:
    """
    Read every slide part and resolve duplicate slide numbers.

    Unreadable parts are skipped before duplicates are resolved, so a
    readable duplicate survives an unreadable one.

    Returns:
        Jobs ascending by slide number, and the names of unreadable parts.
    """
    omitted: List[str] = []
    selected: dict[int, Tuple[SlidePartRef, str]] = {}

    for ref in parts:
        try:
            markup = archive.read_text(ref.part_name)
        except PartReadError as e:
            logger.warning(f"Skipping slide part {ref.part_name}: {e}")
            omitted.append(ref.part_name)
            continue

        if (previous := selected.get(ref.slide_number)) is not None:
            if options.duplicate_policy == "first_wins":
                logger.warning(
                    f"Duplicate slide number {ref.slide_number}: "
                    f"ignoring {ref.part_name}"
                )
                continue
            logger.warning(
                f"Duplicate slide number {ref.slide_number}: {ref.part_name} "
                f"replaces {previous[0].part_name}"
            )
        selected[ref.slide_number] = (ref, markup)

    jobs = [
        (ref, markup, _read_notes_text(archive, ref))
        for ref, markup in (selected[number] for number in sorted(selected))
    ]
    return jobs, omitted


def _decode_job(decoder: SlideDecoder, job: _SlideJob) -> Optional[PptxSlide]:
    ref, markup, notes = job
    logger.debug(f"Processing slide [{ref.slide_number}]: {ref.part_name}")
    try:
        return decoder.decode(ref.slide_number, markup, notes)
    except Exception:
        logger.exception(f"Failed to decode slide part {ref.part_name}")
        return None


def _decode_slides(
    jobs: List[_SlideJob], options: ParseOptions
) -> List[Optional[PptxSlide]]:
    decoder = SlideDecoder()
    if options.parallel and len(jobs) > 1:
        with ThreadPoolExecutor(
            max_workers=options.max_workers, thread_name_prefix="pptx2text"
        ) as executor:
            # map() yields results in submission order
            return list(executor.map(lambda job: _decode_job(decoder, job), jobs))
    return [_decode_job(decoder, job) for job in jobs]


def parse_pptx(
    data: Union[bytes, bytearray, io.BytesIO],
    options: Optional[ParseOptions] = None,
) -> PptxContent:
    """
    Parse a presentation held in memory into a :class:`PptxContent`.

    Args:
        data: The complete .pptx container as bytes or a binary stream.
        options: Parse policies; ``DEFAULT_PARSE_OPTIONS`` when omitted.

    Returns:
        PptxContent with slides ascending by slide number and
        ``metadata.slide_count`` equal to the number of decoded slides.

    Raises:
        CorruptArchiveError: If the buffer is not a readable container
            (including encrypted packages and ZIP bombs).
    """
    options = options or DEFAULT_PARSE_OPTIONS

    with open_archive(data, limits=options.zip_limits) as archive:
        parts = locate_slide_parts(archive, options)
        logger.debug(f"Found {len(parts)} slide parts")

        jobs, omitted = _load_slide_jobs(archive, parts, options)
        metadata = decode_metadata(_read_core_properties(archive))

    slides: List[PptxSlide] = []
    for job, slide in zip(jobs, _decode_slides(jobs, options)):
        if slide is None:
            omitted.append(job[0].part_name)
            continue
        slides.append(slide)

    metadata.slide_count = len(slides)
    raw_parts = (
        {ref.part_name: markup for ref, markup, _ in jobs}
        if options.keep_raw_markup
        else {}
    )

    logger.info(
        "Extracted PPTX: %d slides, %d tables",
        len(slides),
        sum(len(slide.tables) for slide in slides),
    )
    return PptxContent(
        metadata=metadata,
        slides=slides,
        raw_parts=raw_parts,
        omitted_parts=omitted,
    )


def read_pptx(
    file_like: io.BytesIO,
    path: str | None = None,
    options: Optional[ParseOptions] = None,
) -> Generator[PptxContent, Any, None]:
    """
    Extract all relevant content from a PowerPoint .pptx file.

    This function uses a generator pattern for API consistency with
    ``read_file``, even though a .pptx file contains exactly one
    presentation.

    Args:
        file_like: BytesIO object containing the complete PPTX file data.
            The stream position is reset to the beginning before reading.
        path: Optional filesystem path to the source file. If provided,
            populates file metadata (filename, extension, folder) in the
            returned PptxContent.metadata.
        options: Parse policies; ``DEFAULT_PARSE_OPTIONS`` when omitted.

    Yields:
        PptxContent: Single PptxContent object containing:
            - metadata: PptxMetadata with title, author, dates, slide count
            - slides: List of PptxSlide objects, each containing:
                - slide_number: Number parsed from the part name
                - title / subtitle: Resolved placeholder text
                - body_text: Paragraph-level body lines
                - notes: Speaker notes text
                - shapes: Text-bearing shapes with their role
                - tables: Tables as rows of cell text

    Raises:
        CorruptArchiveError: If the file is not a readable container.
        ExtractionFailedError: If extraction fails for any other reason.
    """
    try:
        logger.debug("Reading pptx")
        file_like.seek(0)
        content = parse_pptx(file_like, options)
        content.metadata.populate_from_path(path)
    except ExtractionError:
        raise
    except Exception as exc:
        raise ExtractionFailedError("Failed to extract PPTX file", cause=exc) from exc

    yield content
