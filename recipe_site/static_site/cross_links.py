"""
Rewrites rendered recipe HTML so that mentions of other recipes link to them.

A mention is the exact title of a recipe forming the entire text of an HTML
element, for example ``<li>Pizza dough</li>``. This is a plain substring
match on the HTML source: titles which differ in case, are only part of an
element's text or contain characters escaped by the markdown renderer are not
linked.
"""

from typing import List, Mapping, Tuple

import re


def link_order(titles: Mapping[str, str]) -> List[Tuple[str, str]]:
    """
    The (slug, title) pairs in the order links are inserted: longest title
    first, ties broken by slug. Empty titles are omitted.
    """
    return sorted(
        ((slug, title) for slug, title in titles.items() if title),
        key=lambda pair: (-len(pair[1]), pair[0]),
    )


def link_title(html: str, slug: str, title: str) -> str:
    """
    Replace every ``>title<`` in the HTML with
    ``><a href="slug.html">title</a><``. Occurrences which are already the
    text of a link are left unchanged.
    """
    pattern = re.compile(
        r"(<a\b[^>]*)?>" + re.escape(title) + r"<(/a>)?"
    )
    replacement = f'><a href="{slug}.html">{title}</a><'

    def substitute(match: "re.Match[str]") -> str:
        if match.group(1) is not None and match.group(2) is not None:
            return match.group(0)
        # NB: Anything matched after the '<' belongs to the enclosing element
        # and must be preserved.
        prefix = match.group(1) or ""
        suffix = match.group(2) or ""
        return prefix + replacement + suffix

    return pattern.sub(substitute, html)


def add_cross_links(html: str, titles: Mapping[str, str]) -> str:
    """
    Link every mention of a recipe title in a rendered recipe body to that
    recipe's page.

    Parameters
    ==========
    html : str
        The rendered recipe HTML.
    titles : {slug: title, ...}
        The recipes which may be linked to.
    """
    for slug, title in link_order(titles):
        html = link_title(html, slug, title)
    return html

