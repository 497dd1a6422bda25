import typing
from abc import abstractmethod
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Protocol


@dataclass
class FileMetadataInterface:
    filename: str | None = None
    file_extension: str | None = None
    file_path: str | None = None
    folder_path: str | None = None

    def populate_from_path(self, path: str | Path | None) -> None:
        """Populate file metadata fields from a path."""
        if path is None:
            return
        p = Path(path)
        self.filename = p.name
        self.file_extension = p.suffix
        self.file_path = str(p.resolve()) if p.exists() else str(p)
        self.folder_path = (
            str(p.parent.resolve()) if p.parent.exists() else str(p.parent)
        )

    def to_dict(self) -> dict:
        return asdict(self)


class TableInterface(Protocol):
    @abstractmethod
    def get_table(self) -> list[list[str]]:
        """Return the table data as a list of rows.

        The outer list contains rows, and each inner list contains the
        string values for a single row. This format is compatible with
        pandas and polars DataFrame constructors.
        """
        pass


class ExtractionInterface(Protocol):
    @abstractmethod
    def iterator(self) -> typing.Iterator[str]:
        """
        Returns an iterator over the extracted text, one unit per slide.
        """
        ...

    @abstractmethod
    def get_full_text(self) -> str:
        """Full text of the slide deck as one single block of text"""
        ...

    @abstractmethod
    def get_metadata(self) -> FileMetadataInterface:
        """Returns the metadata of the extracted file"""
        ...


##############
# Modern PPTX
##############

SHAPE_ROLES = ("title", "subtitle", "body", "text")


@dataclass
class PptxMetadata(FileMetadataInterface):
    title: str = ""
    author: str = ""
    created: str = ""  # literal dcterms:created text
    modified: str = ""  # literal dcterms:modified text
    slide_count: int = 0
    subject: str = ""
    keywords: str = ""
    last_modified_by: str = ""
    category: str = ""
    comments: str = ""
    revision: Optional[int] = None


@dataclass
class PptxShapePosition:
    x: int = 0
    y: int = 0


@dataclass
class PptxShape:
    role: str = "text"  # one of SHAPE_ROLES
    text: str = ""
    position: Optional[PptxShapePosition] = None


@dataclass
class PptxTable(TableInterface):
    rows: List[List[str]] = field(default_factory=list)

    def get_table(self) -> list[list[str]]:
        return [list(row) for row in self.rows]


@dataclass
class PptxSlide:
    slide_number: int = 0
    title: str = ""
    subtitle: str = ""
    body_text: List[str] = field(default_factory=list)
    notes: str = ""
    shapes: List[PptxShape] = field(default_factory=list)
    tables: List[PptxTable] = field(default_factory=list)


@dataclass
class PptxContent(ExtractionInterface):
    metadata: PptxMetadata = field(default_factory=PptxMetadata)
    slides: List[PptxSlide] = field(default_factory=list)
    # part name -> raw slide markup, only with ParseOptions.keep_raw_markup
    raw_parts: Dict[str, str] = field(default_factory=dict)
    # slide parts that were found but could not be read or decoded
    omitted_parts: List[str] = field(default_factory=list)

    def iterator(self) -> typing.Iterator[str]:
        from pptx2text.extractors.render import render_slide

        for slide in self.slides:
            yield "\n".join(render_slide(slide)).strip()

    def get_full_text(self) -> str:
        """Plain text rendering of the whole deck."""
        from pptx2text.extractors.render import to_plain_text

        return to_plain_text(self)

    def get_metadata(self) -> PptxMetadata:
        """Returns the metadata of the extracted file."""
        return self.metadata

    def to_json(self, include_raw: bool = False) -> dict:
        from pptx2text.extractors.serialization import serialize_extraction

        return serialize_extraction(self, include_raw=include_raw)
