"""
Markdown to HTML conversion for recipe bodies.

Internally the :py:mod:`marko` markdown parser is used providing support for
`CommonMark <https://commonmark.org/>`_ markdown syntax along with the GitHub
flavoured extensions (tables, strikethrough, autolinks). An additional
extension, :py:data:`HeadingAnchors`, gives every heading an ``id`` attribute
derived from its text so that sections of a recipe may be linked to.
"""

from typing import Any, MutableMapping, Optional, cast

import re

from marko import Markdown  # type: ignore
from marko.helpers import MarkoExtension  # type: ignore


def heading_anchor(text: str) -> str:
    """
    Convert heading text into an anchor name: lower case with every run of
    non-alphanumeric characters replaced by a single ``-``.

    Example::

        >>> heading_anchor("Step 2: Make the Sauce!")
        "step-2-make-the-sauce"
    """
    return re.sub(r"[\W_]+", "-", text.lower()).strip("-")


def element_text(element: Any) -> str:
    """Get the plain text content of a marko element tree."""
    children = getattr(element, "children", "")
    if isinstance(children, str):
        return children
    return "".join(element_text(child) for child in children)


class HeadingAnchorRendererMixin:
    """
    A :py:mod:`marko` renderer mixin which adds an ``id`` to headings. Where
    the same anchor occurs more than once in a document, later occurrences
    are suffixed with ``-1``, ``-2`` and so on.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)  # type: ignore
        self.anchor_counts: MutableMapping[str, int] = {}

    def unique_anchor(self, text: str) -> Optional[str]:
        anchor = heading_anchor(text)
        if not anchor:
            return None

        count = self.anchor_counts.get(anchor, 0)
        self.anchor_counts[anchor] = count + 1
        if count:
            return f"{anchor}-{count}"
        else:
            return anchor

    def render_heading(self, element: Any) -> str:
        children = self.render_children(element)  # type: ignore
        anchor = self.unique_anchor(element_text(element))
        if anchor is None:
            return f"<h{element.level}>{children}</h{element.level}>\n"
        return f'<h{element.level} id="{anchor}">{children}</h{element.level}>\n'

    def render_setext_heading(self, element: Any) -> str:
        return self.render_heading(element)


HeadingAnchors = MarkoExtension(renderer_mixins=[HeadingAnchorRendererMixin])
"""A :py:mod:`marko` extension which adds ids to headings."""


def render_markdown(markdown_source: str) -> str:
    """
    Render a markdown document into HTML.
    """
    # NB: A fresh Markdown instance is used for each document so that anchor
    # numbering restarts.
    markdown = Markdown(extensions=["gfm", HeadingAnchors])
    return cast(str, markdown(markdown_source))
