import logging
import unittest

import pytest

from pptx2text.exceptions import ExtractionFileFormatNotSupportedError
from pptx2text.extractors.pptx_extractor import read_pptx
from pptx2text.mime_types import guess_mime_type
from pptx2text.router import get_extractor, is_supported_file

logger = logging.getLogger(__name__)

tc = unittest.TestCase()


def test_is_supported():
    tc.assertTrue(is_supported_file("myfile.pptx"))
    tc.assertTrue(is_supported_file("myfile.pptm"))
    tc.assertTrue(is_supported_file("myfile.ppsx"))
    tc.assertTrue(is_supported_file("myfile.ppsm"))
    tc.assertTrue(is_supported_file("myfile.potx"))
    tc.assertTrue(is_supported_file("myfile.potm"))
    tc.assertTrue(is_supported_file("/some/folder/MYFILE.PPTX"))

    tc.assertFalse(is_supported_file("myfile.ppt"))
    tc.assertFalse(is_supported_file("myfile.docx"))
    tc.assertFalse(is_supported_file("myfile.txt"))
    tc.assertFalse(is_supported_file("pptx"))


def test_router():
    for path in ("myfile.pptx", "myfile.ppsx", "template.potm", "DECK.PPTM"):
        tc.assertEqual(read_pptx, get_extractor(path))

    with pytest.raises(ExtractionFileFormatNotSupportedError) as excinfo:
        get_extractor("myfile.xlsx")
    tc.assertEqual("myfile.xlsx", excinfo.value.file_path)


def test_guess_mime_type():
    tc.assertEqual(
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        guess_mime_type("a.pptx"),
    )
    tc.assertIsNone(guess_mime_type("a.pdf"))
