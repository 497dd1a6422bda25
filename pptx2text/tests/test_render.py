import json
import unittest

from pptx2text.extractors.data_types import (
    PptxContent,
    PptxMetadata,
    PptxShape,
    PptxSlide,
    PptxTable,
)
from pptx2text.extractors.render import render_slide, to_plain_text, to_structured

tc = unittest.TestCase()


def _content() -> PptxContent:
    return PptxContent(
        metadata=PptxMetadata(title="Quarterly Review", author="Jordan", slide_count=2),
        slides=[
            PptxSlide(
                slide_number=1,
                title="Welcome",
                subtitle="Q3",
                body_text=["Agenda items", "Numbers"],
                notes="Say hi",
                shapes=[PptxShape(role="title", text="Welcome")],
                tables=[PptxTable(rows=[["Name", "Role"], ["Alex", "Lead"]])],
            ),
            PptxSlide(slide_number=4),
        ],
        raw_parts={"ppt/slides/slide1.xml": "<p:sld/>"},
    )


def test_plain_text_rendering():
    expected = (
        "Presentation: Quarterly Review\n"
        "\n"
        "--- Slide 1 ---\n"
        "Title: Welcome\n"
        "Subtitle: Q3\n"
        "\n"
        "Content:\n"
        "  • Agenda items\n"
        "  • Numbers\n"
        "\n"
        "Table:\n"
        "  | Name | Role |\n"
        "  | Alex | Lead |\n"
        "\n"
        "Notes: Say hi\n"
        "\n"
        "--- Slide 4 ---\n"
    )
    tc.assertEqual(expected, to_plain_text(_content()))
    tc.assertEqual(expected, _content().get_full_text())


def test_plain_text_without_title_or_slides():
    content = PptxContent(slides=[PptxSlide(slide_number=1)])
    tc.assertEqual("--- Slide 1 ---\n", to_plain_text(content))
    tc.assertEqual("", to_plain_text(PptxContent()))


def test_empty_slide_still_has_a_section():
    tc.assertListEqual(["--- Slide 2 ---", ""], render_slide(PptxSlide(slide_number=2)))


def test_iterator_yields_one_unit_per_slide():
    units = list(_content().iterator())
    tc.assertEqual(2, len(units))
    tc.assertTrue(units[0].startswith("--- Slide 1 ---\nTitle: Welcome"))
    tc.assertEqual("--- Slide 4 ---", units[1])


def test_structured_rendering():
    structured = to_structured(_content())

    tc.assertListEqual(["metadata", "slides"], list(structured))
    tc.assertEqual("Quarterly Review", structured["metadata"]["title"])
    tc.assertEqual(2, structured["metadata"]["slide_count"])
    tc.assertNotIn("raw_parts", structured)
    tc.assertNotIn("ppt/slides/slide1.xml", json.dumps(structured))

    first = structured["slides"][0]
    tc.assertEqual(
        {
            "slide_number",
            "title",
            "subtitle",
            "body_text",
            "notes",
            "shapes",
            "tables",
        },
        set(first),
    )
    tc.assertListEqual([{"rows": [["Name", "Role"], ["Alex", "Lead"]]}], first["tables"])
    tc.assertListEqual(
        [{"role": "title", "text": "Welcome", "position": None}], first["shapes"]
    )
    tc.assertEqual(4, structured["slides"][1]["slide_number"])

    # JSON-ready as is
    tc.assertEqual(structured, json.loads(json.dumps(structured)))


def test_renderers_do_not_modify_the_document():
    content = _content()
    before = to_structured(content)
    to_plain_text(content)
    to_structured(content)
    tc.assertEqual(before, to_structured(content))
    tc.assertEqual({"ppt/slides/slide1.xml": "<p:sld/>"}, content.raw_parts)


def test_structured_rendering_leaves_out_local_paths(tmp_path):
    content = _content()
    content.metadata.populate_from_path(tmp_path / "review.pptx")

    metadata = to_structured(content)["metadata"]

    tc.assertNotIn("file_path", metadata)
    tc.assertNotIn("folder_path", metadata)
    tc.assertEqual("review.pptx", metadata["filename"])
    tc.assertEqual(".pptx", metadata["file_extension"])
    tc.assertNotIn(str(tmp_path), json.dumps(metadata))
    # the document itself keeps them
    tc.assertEqual(str(tmp_path.resolve()), content.metadata.folder_path)
