"""
Renderers from the document model to consumer formats.

Both renderers are pure: they read a :class:`PptxContent` and return a new
value. ``to_plain_text`` is meant for text-only consumers such as a
summarization prompt, ``to_structured`` for consumers that need slide-level
fields as JSON. Raw slide markup is never rendered.
"""

from dataclasses import asdict
from typing import Any, List

from pptx2text.extractors.data_types import PptxContent, PptxSlide

# Absolute paths on the machine that read the file
_LOCAL_PATH_FIELDS = ("file_path", "folder_path")


def render_slide(slide: PptxSlide) -> List[str]:
    """Plain text lines of one slide section, including its trailing blank line."""
    lines = [f"--- Slide {slide.slide_number} ---"]

    if slide.title:
        lines.append(f"Title: {slide.title}")
    if slide.subtitle:
        lines.append(f"Subtitle: {slide.subtitle}")

    if slide.body_text:
        lines.append("")
        lines.append("Content:")
        for text in slide.body_text:
            lines.append(f"  • {text}")

    for table in slide.tables:
        lines.append("")
        lines.append("Table:")
        for row in table.rows:
            lines.append(f"  | {' | '.join(row)} |")

    if slide.notes:
        lines.append("")
        lines.append(f"Notes: {slide.notes}")

    lines.append("")
    return lines


def to_plain_text(doc: PptxContent) -> str:
    """Human-readable rendering, one section per slide in document order."""
    lines: List[str] = []
    if doc.metadata.title:
        lines.append(f"Presentation: {doc.metadata.title}")
        lines.append("")

    for slide in doc.slides:
        lines.extend(render_slide(slide))

    return "\n".join(lines)


def slide_to_dict(slide: PptxSlide) -> dict[str, Any]:
    return asdict(slide)


def to_structured(doc: PptxContent) -> dict[str, Any]:
    """
    JSON-ready rendering: document metadata plus one record per slide.

    The record carries every slide field; ``raw_parts`` and
    ``omitted_parts`` are diagnostics and are left out, as are the resolved
    ``file_path`` and ``folder_path`` of the metadata.
    """
    metadata = doc.metadata.to_dict()
    for name in _LOCAL_PATH_FIELDS:
        metadata.pop(name, None)
    return {
        "metadata": metadata,
        "slides": [slide_to_dict(slide) for slide in doc.slides],
    }
