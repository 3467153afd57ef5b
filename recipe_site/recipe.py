"""
The in-memory representation of a recipe website.

A :py:class:`Site` is assembled once, by the recipe loader, using a
:py:class:`SiteBuilder` and is read-only from then on.
"""

from typing import List, Mapping, MutableMapping, Optional, Tuple

from pathlib import Path

from types import MappingProxyType

from dataclasses import dataclass, field


def slug_to_title(slug: str) -> str:
    """
    The default title of a recipe, used when neither a heading nor
    frontmatter provides one.

    Example::

        >>> slug_to_title("spag_bol")
        "spag bol"
    """
    return slug.replace("_", " ")


@dataclass(frozen=True)
class Recipe:
    slug: str
    """
    The recipe's filename without its ``.md`` extension. Used as the base name
    of the recipe's page.
    """

    title: str
    """The user-facing recipe title."""

    tags: Tuple[str, ...] = ()
    """Tags given in the frontmatter, in the order given."""

    content: str = ""
    """The markdown body, with any frontmatter removed."""

    source: Optional[Path] = field(default=None, compare=False)
    """The file this recipe was read from, if any."""

    @property
    def page_name(self) -> str:
        """The filename of this recipe's page in the generated website."""
        return f"{self.slug}.html"


@dataclass(frozen=True)
class Site:
    recipes: Tuple[Recipe, ...]
    """All recipes, in the order their files were listed."""

    titles: Mapping[str, str]
    """A read-only slug -> title lookup."""


class SiteBuilder:
    """
    Accumulates recipes and produces an immutable :py:class:`Site`.

    When two recipes share a slug, both appear in :py:attr:`Site.recipes` but
    the title lookup holds the one added last.
    """

    def __init__(self) -> None:
        self._recipes: List[Recipe] = []
        self._titles: MutableMapping[str, str] = {}

    def add(self, recipe: Recipe) -> "SiteBuilder":
        self._recipes.append(recipe)
        self._titles[recipe.slug] = recipe.title
        return self

    def build(self) -> Site:
        return Site(
            recipes=tuple(self._recipes),
            titles=MappingProxyType(dict(self._titles)),
        )
