"""
Markup Text Extractor
=====================

Small, tolerant grammar primitives over OOXML markup fragments.

Presentation markup in the wild is frequently non-canonical: stray end tags,
unclosed elements, unescaped ampersands. A strict XML parser rejects the whole
part on the first such defect, so this module never builds a validated DOM.
Instead the fragment is split into tokens by a bounded regular grammar
(start tag, end tag, empty tag, text) and, where structure is needed, folded
into a forgiving tree:

    - end tags without a matching open element are ignored
    - end tags close every element opened after their match
    - elements still open at the end of input are closed implicitly
    - comments, processing instructions and doctype declarations are skipped
    - CDATA sections are literal text, entities are unescaped

Only leaf text is of interest, so the primitives degrade to empty results
instead of raising. The same primitives serve slide, notes and core
properties parts even though they use unrelated vocabularies.

Primitives
----------
    tokenize(fragment)                  -> iterator of Token
    parse_markup(fragment)              -> MarkupNode tree
    extract_text_runs(fragment)         -> every non-empty a:t run, trimmed
    find_first_match(fragment, role)    -> text of first shape with that
                                           placeholder role
    find_all_nodes_of_kind(fragment, kind) -> every node named ``kind``
    find_element_text(fragment, name)   -> literal text of the first ``name``
"""

import html
import re
from collections import Counter
from typing import Iterator, List, NamedTuple, Optional, Union

# Text run element of DrawingML
TEXT_RUN = "a:t"
PARAGRAPH = "a:p"
PLACEHOLDER = "p:ph"

# Content-bearing nodes on a slide that may carry a placeholder
SHAPE_KINDS = frozenset({"p:sp", "p:graphicFrame", "p:pic", "p:cxnSp"})

# Runs of one shape are joined line by line
RUN_SEPARATOR = "\n"

_TOKEN_RE = re.compile(
    r"<!--.*?(?:-->|\Z)"
    r"|<!\[CDATA\[(?P<cdata>.*?)(?:\]\]>|\Z)"
    r"|<\?.*?(?:\?>|\Z)"
    r"|<![^<>]*>"
    r"|<(?P<close>/)?(?P<name>[A-Za-z_][\w.\-]*(?::[A-Za-z_][\w.\-]*)?)"
    r"(?P<attrs>(?:[^<>\"']|\"[^\"<]*\"|'[^'<]*')*?)(?P<empty>/)?>"
    r"|(?P<text>[^<]+)",
    re.DOTALL,
)

_ATTR_RE = re.compile(r"([A-Za-z_][\w.:\-]*)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")


class Token(NamedTuple):
    kind: str  # "start", "end", "empty" or "text"
    name: str = ""
    attrs: str = ""
    text: str = ""

    def attributes(self) -> dict[str, str]:
        return parse_attributes(self.attrs)


def parse_attributes(raw: str) -> dict[str, str]:
    """Parse the attribute section of a tag, unescaping values."""
    attributes = {}
    for match in _ATTR_RE.finditer(raw):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attributes[match.group(1)] = html.unescape(value)
    return attributes


def tokenize(fragment: str) -> Iterator[Token]:
    """
    Split a markup fragment into tokens in document order.

    Characters that fit no token (e.g. a lone ``<``) are skipped.
    """
    for match in _TOKEN_RE.finditer(fragment or ""):
        if match.group("text") is not None:
            yield Token("text", text=html.unescape(match.group("text")))
        elif match.group("cdata") is not None:
            yield Token("text", text=match.group("cdata"))
        elif match.group("name") is not None:
            name = match.group("name")
            if match.group("close"):
                yield Token("end", name=name)
            elif match.group("empty"):
                yield Token("empty", name=name, attrs=match.group("attrs"))
            else:
                yield Token("start", name=name, attrs=match.group("attrs"))
        # comments, processing instructions and declarations carry no text


class MarkupNode:
    """One element of the forgiving tree built by :func:`parse_markup`."""

    __slots__ = ("name", "attrs", "children", "parent")

    def __init__(
        self,
        name: str,
        attrs: Optional[dict[str, str]] = None,
        parent: Optional["MarkupNode"] = None,
    ):
        self.name = name
        self.attrs = attrs or {}
        self.children: List[Union["MarkupNode", str]] = []
        self.parent = parent

    def __repr__(self) -> str:
        return f"MarkupNode({self.name!r}, children={len(self.children)})"

    @property
    def local_name(self) -> str:
        return self.name.rsplit(":", 1)[-1]

    def get(self, attr: str, default: str = "") -> str:
        return self.attrs.get(attr, default)

    def iter(self, name: Optional[str] = None) -> Iterator["MarkupNode"]:
        """Depth-first, document-order walk over this node and its descendants."""
        stack: List[MarkupNode] = [self]
        while stack:
            node = stack.pop()
            if name is None or node.name == name:
                yield node
            stack.extend(
                child
                for child in reversed(node.children)
                if isinstance(child, MarkupNode)
            )

    def find_all(self, name: str) -> List["MarkupNode"]:
        return [node for node in self.iter(name) if node is not self]

    def find(self, name: str) -> Optional["MarkupNode"]:
        return next((node for node in self.iter(name) if node is not self), None)

    def ancestors(self) -> Iterator["MarkupNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def text_content(self) -> str:
        parts: List[str] = []
        stack: List[Union[MarkupNode, str]] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            else:
                stack.extend(reversed(item.children))
        return "".join(parts)

    def text_runs(self) -> List[str]:
        """Non-empty, trimmed ``a:t`` runs below this node in document order."""
        runs = []
        for run in self.iter(TEXT_RUN):
            text = run.text_content().strip()
            if text:
                runs.append(text)
        return runs


def parse_markup(fragment: str) -> MarkupNode:
    """
    Fold the tokens of ``fragment`` into a tree rooted at a ``#document`` node.

    Never raises on malformed input.
    """
    root = MarkupNode("#document")
    stack = [root]
    # open element name -> number of open elements with that name
    open_names: Counter = Counter()
    for token in tokenize(fragment):
        parent = stack[-1]
        if token.kind == "text":
            parent.children.append(token.text)
        elif token.kind == "start":
            node = MarkupNode(token.name, token.attributes(), parent)
            parent.children.append(node)
            stack.append(node)
            open_names[token.name] += 1
        elif token.kind == "empty":
            parent.children.append(MarkupNode(token.name, token.attributes(), parent))
        elif open_names[token.name]:
            while True:
                closed = stack.pop()
                open_names[closed.name] -= 1
                if closed.name == token.name:
                    break
    return root


def _as_node(fragment: Union[str, MarkupNode]) -> MarkupNode:
    if isinstance(fragment, MarkupNode):
        return fragment
    return parse_markup(fragment)


def extract_text_runs(fragment: Union[str, MarkupNode]) -> List[str]:
    """
    Return the literal content of every text-run node, in document order.

    Each run is trimmed and runs left empty are dropped.
    """
    return _as_node(fragment).text_runs()


def find_all_nodes_of_kind(
    fragment: Union[str, MarkupNode], kind: str
) -> List[MarkupNode]:
    """Return every node with the qualified name ``kind`` in document order."""
    return _as_node(fragment).find_all(kind)


def placeholder_type(node: MarkupNode) -> Optional[str]:
    """Placeholder ``type`` of a shape node, ``""`` for an untyped placeholder."""
    ph = node.find(PLACEHOLDER)
    if ph is None:
        return None
    return ph.get("type")


class _ShapeFrame:
    __slots__ = ("matched", "runs")

    def __init__(self):
        self.matched = False
        self.runs: List[str] = []


def find_first_match(fragment: str, role: str) -> Optional[str]:
    """
    Return the text of the first shape carrying a placeholder of type ``role``.

    A single pass over the token stream: shapes are tracked as they open and
    close, a ``p:ph`` whose ``type`` equals ``role`` (case-insensitive) marks
    the innermost open shape, and the first marked shape that closes with at
    least one non-empty text run wins. Its runs are joined line by line.

    Returns:
        The joined text, or None when no shape with that role has text.
    """
    role = role.lower()
    frames: List[_ShapeFrame] = []
    run_depth = 0
    run_parts: List[str] = []

    def close_frame() -> Optional[str]:
        frame = frames.pop()
        if frame.matched and frame.runs:
            return RUN_SEPARATOR.join(frame.runs)
        return None

    for token in tokenize(fragment):
        if token.kind == "text":
            if run_depth:
                run_parts.append(token.text)
        elif token.name == TEXT_RUN:
            if token.kind == "start":
                run_depth += 1
            elif token.kind == "end" and run_depth:
                run_depth -= 1
                if not run_depth:
                    text = "".join(run_parts).strip()
                    run_parts = []
                    if text:
                        for frame in frames:
                            frame.runs.append(text)
        elif token.name == PLACEHOLDER and token.kind != "end":
            if frames and token.attributes().get("type", "").lower() == role:
                frames[-1].matched = True
        elif token.name in SHAPE_KINDS:
            if token.kind == "start":
                frames.append(_ShapeFrame())
            elif token.kind == "end" and frames:
                if (text := close_frame()) is not None:
                    return text

    # runs and shapes left open by truncated markup
    if run_depth and (text := "".join(run_parts).strip()):
        for frame in frames:
            frame.runs.append(text)
    while frames:
        if (text := close_frame()) is not None:
            return text
    return None


def find_element_text(fragment: str, name: str) -> Optional[str]:
    """
    Return the literal text of the first element named ``name``.

    An empty element yields ``""``; None means the element does not occur.
    """
    depth = 0
    parts: List[str] = []
    for token in tokenize(fragment):
        if depth:
            if token.kind == "text":
                parts.append(token.text)
            elif token.name == name and token.kind == "start":
                depth += 1
            elif token.name == name and token.kind == "end":
                depth -= 1
                if not depth:
                    return "".join(parts)
        elif token.name == name:
            if token.kind == "empty":
                return ""
            if token.kind == "start":
                depth = 1
    if depth:
        return "".join(parts)
    return None
