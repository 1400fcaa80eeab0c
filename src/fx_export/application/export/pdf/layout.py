"""Vector document – page flow.

:class:`PageFlowController` owns the :class:`PageCursor` and one
:class:`DisplayList` per page.  Layout code asks it for room before drawing
a block; when the block does not fit above the footer reserve a new page is
started and, inside a table section, the column header is drawn again.
Footers need the final page count, so they are drawn by :meth:`finalize`
once all content has been laid out.

State machine::

    HEADER → (SECTION_TITLE → CONTENT_BLOCK)* → PAGE_BREAK? → … → FINALIZED
"""
from __future__ import annotations

import dataclasses
import enum
from collections.abc import Callable

from fx_export.application.export.pdf.paint import DARK, DisplayList, Paint, Painter
from fx_export.kernel.errors import InvariantViolationError

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

#: Draws a repeated table header at the given y; returns the height used.
HeaderRenderer = Callable[[Painter, float], float]
#: Draws the footer of page ``number`` out of ``total``.
FooterRenderer = Callable[[Painter, int, int], None]


class DocumentState(str, enum.Enum):
    HEADER = "header"
    SECTION_TITLE = "section_title"
    CONTENT_BLOCK = "content_block"
    PAGE_BREAK = "page_break"
    FINALIZED = "finalized"


@dataclasses.dataclass
class PageCursor:
    """Current page (1-based) and vertical position in millimetres."""

    page: int = 1
    y: float = 0.0
    page_width: float = A4_WIDTH_MM
    page_height: float = A4_HEIGHT_MM


def page_label(number: int, total: int) -> str:
    return f"Page {number} of {total}"


class PageFlowController:
    """Hands out vertical space on A4 pages and breaks pages when needed."""

    def __init__(
        self,
        *,
        page_width: float = A4_WIDTH_MM,
        page_height: float = A4_HEIGHT_MM,
        margin: float = 20.0,
        footer_reserve: float = 25.0,
    ) -> None:
        self.margin = margin
        self.footer_reserve = footer_reserve
        self.cursor = PageCursor(page=1, y=margin, page_width=page_width, page_height=page_height)
        self._pages: list[DisplayList] = [DisplayList()]
        self._state = DocumentState.HEADER
        self._table_header: HeaderRenderer | None = None
        self._page_top = margin
        self.page_breaks = 0

    # -- state ---------------------------------------------------------------

    @property
    def state(self) -> DocumentState:
        return self._state

    def _enter(self, state: DocumentState) -> None:
        if self._state is DocumentState.FINALIZED:
            raise InvariantViolationError(
                "Document already finalized", detail={"attempted_state": state.value}
            )
        self._state = state

    @property
    def page(self) -> DisplayList:
        """Display list of the current page."""
        if self._state is DocumentState.FINALIZED:
            raise InvariantViolationError("Document already finalized")
        return self._pages[-1]

    @property
    def pages(self) -> tuple[DisplayList, ...]:
        return tuple(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def content_width(self) -> float:
        return self.cursor.page_width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        return self.cursor.page_height - self.footer_reserve

    # -- flow ----------------------------------------------------------------

    def header(self, block: DisplayList, height: float, *, gap: float = 0.0) -> None:
        """Place the document header band, drawn from the top edge of page 1.

        Content starts *gap* below the band.  Only valid before anything
        else has been laid out; the state stays ``HEADER``.
        """
        if self._state is not DocumentState.HEADER or self.page_count != 1:
            raise InvariantViolationError(
                "Document header must come first", detail={"state": self._state.value}
            )
        self.page.extend(block)
        self.cursor.y = max(self.cursor.y, height + gap)
        self._page_top = self.cursor.y

    def ensure_space(self, height: float) -> bool:
        """Make room for a block of *height*; return ``True`` if a page was broken.

        A block taller than an empty page breaks at most once: on a page
        with nothing below its top the block is placed and allowed to
        overflow.
        """
        if self._state is DocumentState.FINALIZED:
            raise InvariantViolationError("Document already finalized")
        if self.cursor.y + height <= self.bottom_limit:
            return False
        if self.cursor.y <= self._page_top:
            return False
        self.new_page()
        return True

    def new_page(self) -> None:
        self._enter(DocumentState.PAGE_BREAK)
        self._pages.append(DisplayList())
        self.page_breaks += 1
        self.cursor.page += 1
        self.cursor.y = self.margin
        if self._table_header is not None:
            self.cursor.y += self._table_header(self._pages[-1], self.cursor.y)
        self._page_top = self.cursor.y

    def advance(self, height: float) -> None:
        self.cursor.y += height

    def section_title(self, title: str, *, height: float = 12.0) -> None:
        """Draw a section heading, keeping it on the same page as the block that follows."""
        self.ensure_space(height + 20)
        self._enter(DocumentState.SECTION_TITLE)
        self.page.text(self.margin, self.cursor.y + 7, title, Paint(fill=DARK, font_size=14, bold=True))
        self.advance(height)

    def commit(self, block: DisplayList, height: float = 0.0) -> None:
        """Append a drawn block to the current page and move the cursor past it."""
        self._enter(DocumentState.CONTENT_BLOCK)
        self.page.extend(block)
        self.advance(height)

    # -- tables --------------------------------------------------------------

    def begin_table(self, header: HeaderRenderer) -> None:
        """Draw *header* now and again at the top of every page until :meth:`end_table`."""
        self._table_header = header
        self._enter(DocumentState.CONTENT_BLOCK)
        self.advance(header(self.page, self.cursor.y))

    def end_table(self) -> None:
        self._table_header = None

    # -- finish --------------------------------------------------------------

    def finalize(self, footer: FooterRenderer) -> tuple[DisplayList, ...]:
        """Draw every footer with the final page count, then seal all pages."""
        if self._state is DocumentState.FINALIZED:
            raise InvariantViolationError("finalize() may only run once")
        total = len(self._pages)
        for number, page in enumerate(self._pages, start=1):
            footer(page, number, total)
        for page in self._pages:
            page.seal()
        self._table_header = None
        self._state = DocumentState.FINALIZED
        return tuple(self._pages)


__all__ = [
    "A4_HEIGHT_MM",
    "A4_WIDTH_MM",
    "DocumentState",
    "FooterRenderer",
    "HeaderRenderer",
    "PageCursor",
    "PageFlowController",
    "page_label",
]
