"""
Page layout primitives for the PDF report.

Positions are measured in millimetres from the top of the page, the way the
report is laid out on paper; the renderer converts them to PDF points.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

from reportlab.pdfbase.pdfmetrics import stringWidth


@dataclass(frozen=True)
class Placement:
    """One block drawn on a page."""
    section: str
    kind: str
    page: int
    top: float
    bottom: float


class PageCursor:
    """
    Single-pass, no-lookahead vertical cursor.

    Before a block is placed the cursor checks that the block fits above the
    bottom margin; otherwise it starts a new page and resets to the top
    margin. A placed block is never split across pages.
    """

    def __init__(self, page_height: float, top_margin: float, bottom_margin: float,
                 on_new_page: Optional[Callable[[], None]] = None):
        self.page_height = page_height
        self.top_margin = top_margin
        self.bottom_margin = bottom_margin
        self.on_new_page = on_new_page
        self.cursor_y = top_margin
        self.page = 1
        self.placements: List[Placement] = []

    @property
    def limit(self) -> float:
        return self.page_height - self.bottom_margin

    def fits(self, height: float) -> bool:
        return self.cursor_y + height <= self.limit

    def new_page(self):
        if self.on_new_page is not None:
            self.on_new_page()
        self.page += 1
        self.cursor_y = self.top_margin

    def ensure(self, height: float) -> bool:
        """Break the page if `height` does not fit. Returns True on a break."""
        if self.fits(height) or self.cursor_y == self.top_margin:
            return False
        self.new_page()
        return True

    def place(self, height: float, section: str = '', kind: str = 'block') -> float:
        """Reserve `height` mm for a block and return its top position."""
        self.ensure(height)
        top = self.cursor_y
        self.cursor_y = top + height
        self.placements.append(Placement(section, kind, self.page, top, self.cursor_y))
        return top

    def skip(self, gap: float):
        """Add vertical space without ever moving past the bottom margin."""
        self.cursor_y = min(self.cursor_y + gap, self.limit)


def wrap_text(text: str, max_width: float, font_name: str = 'Helvetica',
              font_size: float = 11) -> List[str]:
    """
    Greedy word wrap.

    Words are appended to the current line until the next one would make it
    wider than `max_width` points, then the line is flushed. A single word
    wider than `max_width` is kept whole on its own line.
    """
    lines = []
    current = ''
    for word in (text or '').split():
        candidate = f"{current} {word}" if current else word
        if current and stringWidth(candidate, font_name, font_size) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
