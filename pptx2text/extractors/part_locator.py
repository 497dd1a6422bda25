"""
Locates slide and notes parts inside a presentation archive.

Slides are identified by the numeric suffix of their part name
(``ppt/slides/slide12.xml`` is slide 12), never by the order in which the
archive enumerates its entries.
"""

import logging
import posixpath
import re
from typing import List, NamedTuple, Optional

from pptx2text.exceptions import PartReadError
from pptx2text.extractors.archive import PptxArchive
from pptx2text.extractors.markup import find_all_nodes_of_kind
from pptx2text.extractors.options import DEFAULT_PARSE_OPTIONS, ParseOptions

logger = logging.getLogger(__name__)

SLIDE_PART_RE = re.compile(r"^ppt/slides/slide(?P<suffix>[^/]*)\.xml$")
NOTES_PART_TEMPLATE = "ppt/notesSlides/notesSlide{number}.xml"
NOTES_REL_TYPE_SUFFIX = "/notesSlide"

_SLIDE_NUMBER_RE = re.compile(r"\d+")


class SlidePartRef(NamedTuple):
    slide_number: int
    part_name: str


def parse_slide_number(suffix: str) -> int:
    """Decimal value of ``suffix``, 0 when it is not made of digits only."""
    match = _SLIDE_NUMBER_RE.fullmatch(suffix)
    return int(match.group()) if match else 0


def locate_slide_parts(
    archive: PptxArchive, options: ParseOptions = DEFAULT_PARSE_OPTIONS
) -> List[SlidePartRef]:
    """
    Return the slide parts of ``archive`` sorted ascending by slide number.

    The sort is stable: parts sharing a number keep their archive enumeration
    order. Duplicates are not removed here.
    """
    parts: List[SlidePartRef] = []
    for name in archive.list_entries():
        match = SLIDE_PART_RE.match(name)
        if match is None:
            continue
        number = parse_slide_number(match.group("suffix"))
        if number == 0 and options.invalid_index_policy == "drop":
            logger.debug(f"Ignoring slide part without numeric suffix: {name}")
            continue
        parts.append(SlidePartRef(number, name))

    parts.sort(key=lambda ref: ref.slide_number)
    return parts


def _rels_path(part_name: str) -> str:
    directory, filename = posixpath.split(part_name)
    return f"{directory}/_rels/{filename}.rels"


def _notes_part_from_relationships(
    archive: PptxArchive, slide_part: str
) -> Optional[str]:
    rels_path = _rels_path(slide_part)
    if not archive.exists(rels_path):
        return None
    try:
        rels_xml = archive.read_text(rels_path)
    except PartReadError as e:
        logger.debug(f"Failed to read relationships of {slide_part}: {e}")
        return None

    for rel in find_all_nodes_of_kind(rels_xml, "Relationship"):
        if not rel.get("Type").endswith(NOTES_REL_TYPE_SUFFIX):
            continue
        if rel.get("TargetMode") == "External":
            continue
        target = rel.get("Target")
        if not target:
            continue
        if target.startswith("/"):
            part = posixpath.normpath(target.lstrip("/"))
        else:
            part = posixpath.normpath(
                posixpath.join(posixpath.dirname(slide_part), target)
            )
        if archive.exists(part):
            return part
    return None


def locate_notes_part(
    archive: PptxArchive, slide_number: int, slide_part: Optional[str] = None
) -> Optional[str]:
    """
    Return the notes part linked to a slide, or None.

    The slide's relationships part is consulted first when ``slide_part`` is
    given; otherwise, or when it declares no notes, the notes part with the
    same number (``ppt/notesSlides/notesSlideN.xml``) is used.
    """
    if slide_part is not None:
        if (part := _notes_part_from_relationships(archive, slide_part)) is not None:
            return part

    part = NOTES_PART_TEMPLATE.format(number=slide_number)
    if archive.exists(part):
        return part
    return None
