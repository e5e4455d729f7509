"""Document index over a parsed HTML tree.

:func:`parse_markup` builds a :class:`MarkupDocument` with BeautifulSoup;
:func:`query` evaluates CSS selectors strictly within a
:class:`ScopedElement`. Only descendants of the scope are candidates, and
under a nested scope every selector is anchored at ``:scope``, so nothing
outside the scope element can decide whether a descendant matches.

A :class:`ScopedElement` only weakly references its document. Keep the
:class:`MarkupDocument` bound to a name for as long as its scopes are
queried; ``query(parse_markup(html).root, ...)`` fails because the
temporary document is released as soon as ``.root`` is evaluated.
"""

from __future__ import annotations

import functools
import weakref
from typing import TYPE_CHECKING

import soupsieve
from bs4 import BeautifulSoup, FeatureNotFound, Tag

from htmlbind.domain.errors import ParseError
from htmlbind.domain.types import BindingBehavior

if TYPE_CHECKING:
    from collections.abc import Iterator

DEFAULT_PARSER = "html.parser"


class MarkupDocument:
    """A parsed HTML document. Read-only once constructed."""

    def __init__(self, soup: BeautifulSoup, parser: str) -> None:
        self._soup = soup
        self.parser = parser

    @property
    def root(self) -> ScopedElement:
        """Scope covering the whole document."""
        return ScopedElement(self._soup, self)

    def __repr__(self) -> str:
        return f"MarkupDocument(parser={self.parser!r})"


class ScopedElement:
    """A handle on one element of a :class:`MarkupDocument`.

    Holds only a weak reference to the document that produced it; the
    caller owns the :class:`MarkupDocument` and must keep it alive.
    """

    __slots__ = ("_document", "tag")

    def __init__(self, tag: Tag, document: MarkupDocument) -> None:
        self.tag = tag
        self._document = weakref.ref(document)

    @property
    def document(self) -> MarkupDocument | None:
        """Owning document, or None once it has been released."""
        return self._document()

    @property
    def is_root(self) -> bool:
        return isinstance(self.tag, BeautifulSoup)

    def text(self, *, strip: bool = True) -> str:
        value = self.tag.get_text()
        return value.strip() if strip else value

    def inner_html(self, *, strip: bool = True) -> str:
        value = self.tag.decode_contents()
        return value.strip() if strip else value

    def attr(self, name: str) -> str | None:
        """Return attribute *name*; multi-valued attributes are space-joined."""
        value = self.tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return value

    def form_value(self) -> str | None:
        """Return the value a form control would submit.

        ``<textarea>`` yields its text content. ``<select>`` yields the
        selected option (the first option when none is marked), using the
        option's ``value`` attribute or else its text. Other elements yield
        their ``value`` attribute.
        """
        if self.tag.name == "textarea":
            return self.tag.get_text()
        if self.tag.name == "select":
            options = self.tag.find_all("option")
            if not options:
                return None
            chosen = next((o for o in options if o.has_attr("selected")), options[0])
            value = chosen.get("value")
            return value if value is not None else chosen.get_text()
        return self.attr("value")

    def content(
        self,
        behavior: BindingBehavior,
        *,
        attribute: str | None = None,
        strip: bool = True,
    ) -> str | None:
        """Extract the leaf content selected by *behavior*.

        Returns None when the requested attribute is absent.
        """
        if behavior is BindingBehavior.TEXT:
            return self.text(strip=strip)
        if behavior is BindingBehavior.HTML:
            return self.inner_html(strip=strip)
        if behavior is BindingBehavior.VALUE:
            value = self.form_value()
        else:
            if attribute is None:
                raise ValueError("attribute extraction requires an attribute name")
            value = self.attr(attribute)
        if value is not None and strip:
            value = value.strip()
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScopedElement):
            return NotImplemented
        return self.tag is other.tag

    def __hash__(self) -> int:
        return id(self.tag)

    def __repr__(self) -> str:
        return f"ScopedElement(<{self.tag.name}>)"


def parse_markup(markup: str | bytes, *, parser: str = DEFAULT_PARSER) -> MarkupDocument:
    """Parse *markup* into a :class:`MarkupDocument`.

    Raises:
        ParseError: *markup* is not text, the *parser* backend is not
            installed, or the parser rejected the input.
    """
    if not isinstance(markup, (str, bytes)):
        raise ParseError(f"markup must be str or bytes, not {type(markup).__name__}")
    try:
        soup = BeautifulSoup(markup, parser)
    except FeatureNotFound as exc:
        raise ParseError(f"HTML parser backend {parser!r} is not available") from exc
    except (ValueError, AssertionError, LookupError) as exc:
        raise ParseError(f"could not parse markup: {exc}") from exc
    return MarkupDocument(soup, parser)


def _split_selector_list(selector: str) -> list[str]:
    """Split a selector list on its top-level commas."""
    parts: list[str] = []
    depth = 0
    quote: str | None = None
    start = 0
    chars = iter(enumerate(selector))
    for index, char in chars:
        if char == "\\":
            next(chars, None)
        elif quote is not None:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(selector[start:index])
            start = index + 1
    parts.append(selector[start:])
    return parts


@functools.lru_cache(maxsize=512)
def _anchor_to_scope(selector: str) -> str:
    """Anchor every complex selector in *selector* at ``:scope``.

    Combinators in an unanchored selector may be satisfied by ancestors
    outside the scope element, so ``section span`` under a ``<div>`` would
    depend on whether the div sits inside a ``<section>``. Parts that
    already mention ``:scope`` are left alone.
    """
    anchored = []
    for part in _split_selector_list(selector):
        part = part.strip()
        if not part or ":scope" in part:
            anchored.append(part)
        else:
            anchored.append(f":scope {part}")
    return ", ".join(anchored)


def _iter_matches(scope: ScopedElement, selector: str, limit: int) -> Iterator[Tag]:
    if not selector or not selector.strip():
        raise ValueError("selector must not be blank")
    # The document root has no ancestors to leak through.
    effective = selector if scope.is_root else _anchor_to_scope(selector)
    try:
        yield from soupsieve.iselect(effective, scope.tag, limit=limit)
    except soupsieve.SelectorSyntaxError as exc:
        raise ValueError(f"invalid selector {selector!r}: {exc}") from exc


def query(scope: ScopedElement, selector: str, *, multiple: bool) -> list[ScopedElement]:
    """Find elements matching *selector* among the descendants of *scope*.

    With ``multiple=False`` at most the first match in document order is
    returned; with ``multiple=True`` every match, in document order.

    Raises:
        ValueError: *selector* is blank or malformed.
        RuntimeError: the :class:`MarkupDocument` behind *scope* was
            already released.
    """
    document = scope.document
    if document is None:
        raise RuntimeError(
            "scope outlived its document; keep a reference to the MarkupDocument"
            " while querying its elements"
        )
    limit = 0 if multiple else 1
    return [ScopedElement(tag, document) for tag in _iter_matches(scope, selector, limit)]
