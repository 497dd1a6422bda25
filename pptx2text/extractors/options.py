from dataclasses import dataclass, field
from typing import Optional

from pptx2text.extractors.util.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits

INDEX_POLICIES = frozenset({"keep", "drop"})
DUPLICATE_POLICIES = frozenset({"last_wins", "first_wins"})


@dataclass(frozen=True)
class ParseOptions:
    """
    Configuration for a single presentation parse.

    Attributes:
        invalid_index_policy: What to do with a slide part whose name has no
            numeric suffix. ``"keep"`` includes it as slide 0, ``"drop"``
            ignores it.
        duplicate_policy: Which part wins when two parts parse to the same
            slide number. ``"last_wins"`` keeps the part enumerated last in
            the archive, ``"first_wins"`` the one enumerated first.
        keep_raw_markup: Keep the raw slide markup on the returned document
            (``PptxContent.raw_parts``) for diagnostics.
        max_workers: Decode slides on a thread pool of this size. ``None`` or
            ``1`` decodes sequentially.
        zip_limits: ZIP-bomb heuristics applied when the archive is opened.
    """

    invalid_index_policy: str = "keep"
    duplicate_policy: str = "last_wins"
    keep_raw_markup: bool = False
    max_workers: Optional[int] = None
    zip_limits: ZipBombLimits = field(default=DEFAULT_ZIP_BOMB_LIMITS)

    def __post_init__(self):
        if self.invalid_index_policy not in INDEX_POLICIES:
            raise ValueError(
                f"invalid_index_policy must be one of {sorted(INDEX_POLICIES)}, "
                f"got {self.invalid_index_policy!r}"
            )
        if self.duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(
                f"duplicate_policy must be one of {sorted(DUPLICATE_POLICIES)}, "
                f"got {self.duplicate_policy!r}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")

    @property
    def parallel(self) -> bool:
        return self.max_workers is not None and self.max_workers > 1


DEFAULT_PARSE_OPTIONS = ParseOptions()
