"""
Declaration buffer and boundary locator.

The generated declarations are treated as opaque text. A declaration's
region starts at its header and ends where the delimiter nesting opened on
the header line balances again. Delimiters inside string literals or
comments are not distinguished, so the input must be machine-generated and
delimiter-balanced; this holds for generated client declarations but not
for arbitrary hand-written TypeScript.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple, Union

from ....logging_config import get_logger

logger = get_logger(__name__)

OPENERS = {"{": "}", "(": ")", "[": "]"}
CLOSERS = {"}", ")", "]"}

# Any type alias or interface header, at any nesting depth
DECLARATION_HEADER_RE = re.compile(
    r"^[ \t]*(?:export[ \t]+)?(?:declare[ \t]+)?(?:type|interface)[ \t]+"
    r"(?P<name>\$?[A-Za-z_][\w$]*)",
    re.MULTILINE,
)

HeaderPattern = Union[str, Pattern[str]]

# Returns the rewritten text and the number of substitutions made
Rewrite = Callable[[str], Tuple[str, int]]


@dataclass(frozen=True)
class Region:
    """A located declaration: [start, end) with balanced nesting."""

    start: int
    end: int
    opener: int  # Offset of the opening delimiter
    name: Optional[str] = None

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        return source[self.start:self.end]


def _compile(header_pattern: HeaderPattern) -> Pattern[str]:
    if isinstance(header_pattern, str):
        return re.compile(re.escape(header_pattern))
    return header_pattern


def find_balanced_end(text: str, opener: int) -> Optional[int]:
    """
    Scan forward from an opening delimiter until nesting balances.

    Returns:
        Offset just past the matching closer, or None when the delimiters
        never balance or close out of order
    """
    stack = []
    for index in range(opener, len(text)):
        char = text[index]
        if char in OPENERS:
            stack.append(OPENERS[char])
        elif char in CLOSERS:
            if not stack or stack.pop() != char:
                return None
            if not stack:
                return index + 1
    return None


def region_from_header(text: str, match: "re.Match[str]") -> Optional[Region]:
    """Build the region for a header match, or None if it has no balanced body."""
    line_end = text.find("\n", match.end())
    if line_end == -1:
        line_end = len(text)

    # The body must open on the header line; a bodiless alias such as
    # ``export type User = $Result...`` must not capture the next declaration.
    opener = next(
        (i for i in range(match.start(), line_end) if text[i] in OPENERS), None
    )
    if opener is None:
        return None

    end = find_balanced_end(text, opener)
    if end is None:
        logger.warning(
            "Unbalanced delimiters after declaration header at offset %d", match.start()
        )
        return None

    name = match.groupdict().get("name")
    return Region(start=match.start(), end=end, opener=opener, name=name)


def locate(text: str, header_pattern: HeaderPattern, start: int = 0) -> Optional[Region]:
    """
    Locate the first declaration matching a header pattern.

    Args:
        text: Declarations text
        header_pattern: Literal header text or compiled regex
        start: Offset to search from

    Returns:
        Region of the declaration, or None if not found or unbalanced
    """
    match = _compile(header_pattern).search(text, start)
    if match is None:
        return None
    return region_from_header(text, match)


def declaration_header(name: str) -> Pattern[str]:
    """Header pattern for one declaration by exact name."""
    return re.compile(
        r"^[ \t]*(?:export[ \t]+)?(?:declare[ \t]+)?(?:type|interface)[ \t]+"
        r"(?P<name>" + re.escape(name) + r")(?![\w$])",
        re.MULTILINE,
    )


class DeclarationBuffer:
    """
    Mutable declarations text.

    Regions are never cached: every rewrite locates its region again right
    before mutating, so growth caused by earlier insertions or rewrites can
    never leave a stale offset behind.
    """

    def __init__(self, text: str):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def contains(self, snippet: str) -> bool:
        return snippet in self._text

    def locate(self, header_pattern: HeaderPattern) -> Optional[Region]:
        return locate(self._text, header_pattern)

    def declaration_names(self, name_pattern: Optional[Pattern[str]] = None) -> List[str]:
        """Unique declaration names in buffer order, optionally filtered."""
        names = []
        for match in DECLARATION_HEADER_RE.finditer(self._text):
            name = match.group("name")
            if name in names:
                continue
            if name_pattern is not None and not name_pattern.fullmatch(name):
                continue
            names.append(name)
        return names

    def prepend(self, snippet: str):
        self._text = snippet + self._text

    def insert_before(self, anchor: str, snippet: str) -> bool:
        """Insert text immediately before the first exact occurrence of anchor."""
        index = self._text.find(anchor)
        if index == -1:
            return False
        self._text = self._text[:index] + snippet + self._text[index:]
        return True

    def _splice(self, region: Region, rewrite: Rewrite) -> Tuple[int, int]:
        """Rewrite one region; return (substitutions, new region end)."""
        segment = region.text(self._text)
        new_segment, count = rewrite(segment)
        if count:
            self._text = self._text[:region.start] + new_segment + self._text[region.end:]
        return count, region.start + len(new_segment)

    def rewrite_region(self, header_pattern: HeaderPattern, rewrite: Rewrite) -> Optional[int]:
        """
        Rewrite the first declaration matching a header pattern.

        Returns:
            Number of substitutions, or None if the declaration was not found
        """
        region = self.locate(header_pattern)
        if region is None:
            return None
        count, _ = self._splice(region, rewrite)
        return count

    def rewrite_all(
        self,
        header_pattern: HeaderPattern,
        rewrite: Rewrite,
        name_filter: Optional[Callable[[str], bool]] = None,
    ) -> int:
        """
        Rewrite every declaration matching a header pattern, front to back.

        The search resumes after the rewritten region using the offsets of
        the buffer as it is after the mutation.

        Args:
            header_pattern: Literal header text or compiled regex; a ``name``
                group, when present, is passed to ``name_filter``
            rewrite: Rewrite applied to each region
            name_filter: Predicate selecting declarations by name

        Returns:
            Total number of substitutions
        """
        pattern = _compile(header_pattern)
        total = 0
        position = 0

        while True:
            match = pattern.search(self._text, position)
            if match is None:
                return total

            name = match.groupdict().get("name")
            if name_filter is not None and (name is None or not name_filter(name)):
                position = match.end()
                continue

            region = region_from_header(self._text, match)
            if region is None:
                position = match.end()
                continue

            count, position = self._splice(region, rewrite)
            total += count
