import pytest

from pptx2text.tests.pptx_factory import (
    build_deck,
    core_xml,
    notes_xml,
    slide_name,
    slide_xml,
    table_frame,
    text_shape,
)


@pytest.fixture
def sample_deck() -> bytes:
    """Three slides with a table, speaker notes and core properties."""
    return build_deck(
        {
            slide_name(1): slide_xml(
                text_shape("Quarterly Review", ph_type="ctrTitle"),
                text_shape("Q3 2024", ph_type="subTitle"),
            ),
            slide_name(2): slide_xml(
                text_shape("Welcome", ph_type="title"),
                text_shape("Agenda items"),
                table_frame([["Name", "Role"], ["", ""], ["Alex", "Lead"]]),
            ),
            slide_name(3): slide_xml(
                text_shape("Next steps", ph_type="title"),
                text_shape("Ship it", "Measure", ph_type="body"),
            ),
        },
        extra_parts={"ppt/notesSlides/notesSlide2.xml": notes_xml("Say", "hello")},
        core=core_xml(
            dc_title="Quarterly Review",
            dc_creator="Jordan",
            dcterms_created="2024-01-02T03:04:05Z",
            dcterms_modified="2024-02-03T04:05:06Z",
        ),
    )
