"""
Paginated text layout.

TextFlow owns the cursor and page breaks; drawing and measuring are
delegated to a Canvas so pagination can be exercised without a PDF.
Coordinates follow PDF user space: y grows upward from the page bottom.

Dependencies: None
System role: Word wrapping and pagination for the export renderer
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class FontSpec:
    """Font face, size and line advance for one run of text."""

    name: str
    size: float
    line_height: float


class Canvas(Protocol):
    """Drawing surface used by TextFlow."""

    page_width: float
    page_height: float

    def new_page(self) -> Any: ...

    def draw_text(self, page: Any, x: float, y: float, text: str, font: FontSpec) -> None: ...

    def text_width(self, text: str, font: FontSpec) -> float: ...


class TextFlow:
    """
    Word-wrapping cursor over a growing sequence of pages.

    Text is split on hard newlines, each line is packed greedily word by
    word up to max_width, and a page is appended whenever the next line
    would cross the bottom margin. A single word wider than max_width is
    drawn alone on its own line.
    """

    def __init__(self, canvas: Canvas, margin: float) -> None:
        self.canvas = canvas
        self.margin = margin
        self.page: Any = None
        self.page_index = -1
        self.y = 0.0

    @property
    def content_width(self) -> float:
        return self.canvas.page_width - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.canvas.page_height - 2 * self.margin

    @property
    def section_top(self) -> float:
        """Cursor position for the first line of a section page."""
        return self.content_height + self.margin - 20

    def new_page(self, y: float | None = None) -> Any:
        """Append a page and move the cursor to its top."""
        self.page = self.canvas.new_page()
        self.page_index += 1
        self.y = self.canvas.page_height - self.margin if y is None else y
        return self.page

    def start_section_page(self) -> Any:
        return self.new_page(self.section_top)

    def move_down(self, amount: float) -> None:
        self.y -= amount

    def _ensure_room(self, line_height: float) -> None:
        if self.y - line_height < self.margin:
            self.new_page()

    def draw_line(self, text: str, font: FontSpec, x: float) -> None:
        """Draw one already-fitted line and advance the cursor."""
        self._ensure_room(font.line_height)
        self.canvas.draw_text(self.page, x, self.y, text, font)
        self.y -= font.line_height

    def write(self, text: str, font: FontSpec, x: float | None = None, max_width: float | None = None) -> None:
        """
        Lay out pre-sanitized text starting at the current cursor.

        Args:
            text: Text that may contain hard newlines
            font: Font used for measuring and drawing
            x: Left edge (defaults to the margin)
            max_width: Wrap width (defaults to the content width)
        """
        x = self.margin if x is None else x
        max_width = self.content_width if max_width is None else max_width

        for raw_line in text.split("\n"):
            line = raw_line.rstrip("\r").expandtabs(4)
            if not line.strip():
                self._ensure_room(font.line_height)
                self.y -= font.line_height
                continue

            segment = ""
            for word in line.split(" "):
                if not word.strip() and not segment.strip():
                    continue
                candidate = f"{segment} {word}" if segment else word
                if self.canvas.text_width(candidate, font) <= max_width:
                    segment = candidate
                    continue

                if segment.strip():
                    self.draw_line(segment, font, x)
                segment = word
                if segment.strip() and self.canvas.text_width(segment, font) > max_width:
                    self.draw_line(segment, font, x)
                    segment = ""

            if segment.strip():
                self.draw_line(segment, font, x)
