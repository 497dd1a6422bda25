import logging
from typing import Optional

from pptx2text.extractors.data_types import PptxMetadata
from pptx2text.extractors.markup import find_element_text

logger = logging.getLogger(__name__)

CORE_PROPERTIES_PART = "docProps/core.xml"

# PptxMetadata field -> core properties element
_TEXT_FIELDS = (
    ("title", "dc:title"),
    ("author", "dc:creator"),
    ("created", "dcterms:created"),
    ("modified", "dcterms:modified"),
    ("subject", "dc:subject"),
    ("keywords", "cp:keywords"),
    ("last_modified_by", "cp:lastModifiedBy"),
    ("category", "cp:category"),
    ("comments", "dc:description"),
)


def decode_metadata(core_xml: Optional[str]) -> PptxMetadata:
    """
    Extract document properties from the core properties part.

    Every field is an independent first-match scan; a missing element leaves
    the field empty. Timestamps are kept as their literal text.

    Args:
        core_xml: Markup of ``docProps/core.xml``, or None when the part is
            absent.

    Returns:
        PptxMetadata with ``slide_count`` left at 0 for the assembler to set.
    """
    metadata = PptxMetadata()
    if not core_xml:
        return metadata

    for field_name, element in _TEXT_FIELDS:
        if text := find_element_text(core_xml, element):
            setattr(metadata, field_name, text)

    if revision := find_element_text(core_xml, "cp:revision"):
        try:
            metadata.revision = int(revision.strip())
        except ValueError:
            logger.debug(f"Ignoring non-numeric revision: {revision!r}")

    return metadata
