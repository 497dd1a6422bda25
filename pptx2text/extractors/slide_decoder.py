"""
Slide Decoder
=============

Turns the markup of one slide (plus the text of its notes part) into a
:class:`PptxSlide`.

Placeholder roles
-----------------
Shapes declare their structural purpose with a ``p:ph`` placeholder element:

    - title, ctrTitle: slide title (ctrTitle is the centered title of a
      title slide)
    - subTitle: subtitle of a title slide
    - body: main content area
    - anything else, or no placeholder: plain text box

Placeholders are optional and frequently missing in generated decks, so the
title and subtitle are resolved by ordered lists of strategies. The first
strategy that yields a non-empty string wins:

    Title:    placeholder "title" -> placeholder "ctrTitle"
              -> shape tagged title -> first text run of the slide
    Subtitle: placeholder "subTitle" -> shape tagged subtitle

Decoding never raises: a strategy that finds nothing leaves the field empty.
The decoder holds no state, one instance can decode slides concurrently.
"""

import logging
from typing import Callable, List, NamedTuple, Optional, Sequence, Set

from pptx2text.extractors.data_types import (
    PptxShape,
    PptxShapePosition,
    PptxSlide,
    PptxTable,
)
from pptx2text.extractors.markup import (
    PARAGRAPH,
    RUN_SEPARATOR,
    MarkupNode,
    extract_text_runs,
    find_first_match,
    parse_markup,
    placeholder_type,
)

logger = logging.getLogger(__name__)

P_SP = "p:sp"
A_TBL = "a:tbl"
A_TR = "a:tr"
A_TC = "a:tc"
A_OFF = "a:off"

# Placeholder type (lower case) -> shape role
PLACEHOLDER_ROLES = {
    "title": "title",
    "ctrtitle": "title",
    "subtitle": "subtitle",
    "body": "body",
}

# Shapes whose paragraphs are already attributed and not repeated as body lines
ATTRIBUTED_ROLES = frozenset({"title", "subtitle", "body"})

PARAGRAPH_SEPARATOR = " "
CELL_SEPARATOR = " "


class _SlideView(NamedTuple):
    markup: str
    root: MarkupNode
    shapes: List[PptxShape]


class ResolutionStrategy(NamedTuple):
    name: str
    resolve: Callable[[_SlideView], Optional[str]]


def placeholder_strategy(role: str) -> ResolutionStrategy:
    """Text of the first shape whose placeholder type is ``role``."""
    return ResolutionStrategy(
        f"placeholder:{role}", lambda view: find_first_match(view.markup, role)
    )


def shape_role_strategy(role: str) -> ResolutionStrategy:
    """Text of the first decoded shape tagged with ``role``."""

    def resolve(view: _SlideView) -> Optional[str]:
        return next((s.text for s in view.shapes if s.role == role), None)

    return ResolutionStrategy(f"shape:{role}", resolve)


def first_run_strategy() -> ResolutionStrategy:
    """First text run anywhere in the slide, in document order."""

    def resolve(view: _SlideView) -> Optional[str]:
        runs = extract_text_runs(view.root)
        return runs[0] if runs else None

    return ResolutionStrategy("first_run", resolve)


TITLE_STRATEGIES = (
    placeholder_strategy("title"),
    placeholder_strategy("ctrTitle"),
    shape_role_strategy("title"),
    first_run_strategy(),
)

SUBTITLE_STRATEGIES = (
    placeholder_strategy("subTitle"),
    shape_role_strategy("subtitle"),
)


def resolve_first(
    view: _SlideView, strategies: Sequence[ResolutionStrategy]
) -> str:
    for strategy in strategies:
        try:
            value = strategy.resolve(view)
        except Exception as e:
            logger.debug(f"Resolution strategy {strategy.name} failed: {e}")
            continue
        if value:
            return value
    return ""


def shape_role(shape: MarkupNode) -> str:
    ph_type = placeholder_type(shape)
    return PLACEHOLDER_ROLES.get((ph_type or "").lower(), "text")


def _shape_position(shape: MarkupNode) -> Optional[PptxShapePosition]:
    off = shape.find(A_OFF)
    if off is None:
        return None
    try:
        return PptxShapePosition(x=int(off.get("x", "0")), y=int(off.get("y", "0")))
    except ValueError:
        return None


def decode_table(tbl: MarkupNode) -> Optional[PptxTable]:
    """Rows of cell text; all-empty rows are dropped, an empty table is None."""
    rows: List[List[str]] = []
    for tr in tbl.find_all(A_TR):
        cells = [
            CELL_SEPARATOR.join(tc.text_runs()) for tc in tr.find_all(A_TC)
        ]
        if any(cells):
            rows.append(cells)
    if not rows:
        return None
    return PptxTable(rows=rows)


def decode_notes(markup: Optional[str]) -> str:
    """Text runs of a notes part joined with single spaces."""
    if not markup:
        return ""
    return " ".join(extract_text_runs(markup))


class SlideDecoder:
    """Stateless decoder applying the title/subtitle resolution policy."""

    title_strategies: Sequence[ResolutionStrategy] = TITLE_STRATEGIES
    subtitle_strategies: Sequence[ResolutionStrategy] = SUBTITLE_STRATEGIES

    def decode(
        self, slide_number: int, markup: str, notes_text: str = ""
    ) -> PptxSlide:
        root = parse_markup(markup)
        shape_nodes = root.find_all(P_SP)
        shapes = self._decode_shapes(shape_nodes)
        view = _SlideView(markup=markup, root=root, shapes=shapes)

        title = resolve_first(view, self.title_strategies)
        subtitle = resolve_first(view, self.subtitle_strategies)

        return PptxSlide(
            slide_number=slide_number,
            title=title,
            subtitle=subtitle,
            body_text=self._decode_body(root, shape_nodes, title, subtitle),
            notes=notes_text or "",
            shapes=shapes,
            tables=self._decode_tables(root),
        )

    @staticmethod
    def _decode_shapes(shape_nodes: List[MarkupNode]) -> List[PptxShape]:
        shapes: List[PptxShape] = []
        for node in shape_nodes:
            runs = node.text_runs()
            if not runs:
                continue
            shapes.append(
                PptxShape(
                    role=shape_role(node),
                    text=RUN_SEPARATOR.join(runs),
                    position=_shape_position(node),
                )
            )
        return shapes

    @staticmethod
    def _decode_body(
        root: MarkupNode,
        shape_nodes: List[MarkupNode],
        title: str,
        subtitle: str,
    ) -> List[str]:
        lines: List[str] = []
        seen: Set[str] = {text for text in (title, subtitle) if text}

        def emit(line: str) -> None:
            if line and line not in seen:
                seen.add(line)
                lines.append(line)

        attributed: Set[int] = set()
        for node in shape_nodes:
            role = shape_role(node)
            if role in ATTRIBUTED_ROLES:
                attributed.add(id(node))
            if role == "body":
                for run in node.text_runs():
                    emit(run)

        for paragraph in root.find_all(PARAGRAPH):
            if any(id(ancestor) in attributed for ancestor in paragraph.ancestors()):
                continue
            emit(PARAGRAPH_SEPARATOR.join(paragraph.text_runs()))

        return lines

    @staticmethod
    def _decode_tables(root: MarkupNode) -> List[PptxTable]:
        tables: List[PptxTable] = []
        for tbl in root.find_all(A_TBL):
            if (table := decode_table(tbl)) is not None:
                tables.append(table)
        return tables


_DEFAULT_DECODER = SlideDecoder()


def decode_slide(slide_number: int, markup: str, notes_text: str = "") -> PptxSlide:
    """Decode one slide with the default resolution policy."""
    return _DEFAULT_DECODER.decode(slide_number, markup, notes_text)
