"""
Utilities for loading a directory of markdown recipes.

Every file in the directory with a ``.md`` extension, other than
``README.md``, is a recipe. Sub-directories are not searched.

Recipe titles
=============

A recipe's title is chosen as follows, with each step overriding the last:

* The filename (without its extension) with underscores replaced by spaces.
* The text of the first line beginning with ``# `` anywhere in the file.
* The ``title`` field of the recipe's frontmatter, if present.

Frontmatter
===========

A recipe may start with a YAML frontmatter block delimited by ``---`` lines::

    ---
    title: Spaghetti bolognese
    tags: [italian, dinner]
    ---
    Brown the mince...

Only the ``title`` and ``tags`` fields are used. Malformed frontmatter
produces a warning and is otherwise ignored.
"""

from typing import Any, List, NamedTuple, Optional, Tuple

from pathlib import Path

import logging

import yaml

from recipe_site.recipe import Recipe, Site, SiteBuilder, slug_to_title

from recipe_site.static_site.exceptions import (
    FrontmatterError,
    RecipeDirectoryError,
    RecipeReadError,
)


logger = logging.getLogger(__name__)


FRONTMATTER_DELIMITER = "---"

README_FILENAME = "README.md"

RECIPE_SUFFIX = ".md"


class Frontmatter(NamedTuple):
    title: Optional[str] = None
    """The title override, if given."""

    tags: Optional[Tuple[str, ...]] = None
    """The recipe's tags, if given."""


def enumerate_recipe_directory(directory: Path) -> List[Path]:
    """
    List the recipe files in a directory, sorted by filename.
    """
    if not directory.is_dir():
        raise RecipeDirectoryError(f"{directory} is not a directory")

    try:
        paths = sorted(directory.iterdir(), key=lambda path: path.name)
    except OSError as e:
        raise RecipeDirectoryError(f"Cannot list {directory}: {e}")

    return [
        path
        for path in paths
        if path.suffix == RECIPE_SUFFIX
        and path.name != README_FILENAME
        and not path.is_dir()
    ]


def find_heading_title(content: str) -> Optional[str]:
    """
    Return the text of the first line starting with ``# `` or None if there
    isn't one. The remainder of the line is returned verbatim.
    """
    for line in content.split("\n"):
        if line.startswith("# "):
            return line[len("# ") :]
    return None


def split_frontmatter(content: str) -> Tuple[Optional[str], str]:
    """
    Split a recipe file into its frontmatter source and markdown body.

    Returns
    =======
    frontmatter: str or None
        The (unparsed) text between the first two ``---`` delimiters, or None
        if the file has no frontmatter block.
    body: str
        The remainder of the file. If there is no frontmatter, the entire
        file.
    """
    if not content.startswith(FRONTMATTER_DELIMITER):
        return None, content

    parts = content.split(FRONTMATTER_DELIMITER, 2)
    if len(parts) != 3:
        return None, content

    _empty, frontmatter, body = parts
    return frontmatter, body


def parse_frontmatter(source: str) -> Frontmatter:
    """
    Parse a YAML frontmatter block. Fields other than ``title`` and ``tags``
    are ignored, as are empty fields.

    Scalars are never interpreted: ``title: 1984`` gives the title "1984" and
    ``tags: [quick, yes]`` the tags "quick" and "yes".

    Raises :py:exc:`FrontmatterError` if the YAML is invalid, is not a
    mapping, or the title or tags have the wrong shape.
    """
    try:
        # NB: BaseLoader leaves every scalar as a string, null included ("").
        data: Any = yaml.load(source, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise FrontmatterError(str(e))

    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"expected a mapping, got {type(data).__name__}"
        )

    title = data.get("title") or None
    if title is not None and not isinstance(title, str):
        raise FrontmatterError(f"title must be a string, got {title!r}")

    tags = data.get("tags")
    if tags == "":
        tags = None
    if tags is not None:
        if not isinstance(tags, list) or not all(
            isinstance(tag, str) for tag in tags
        ):
            raise FrontmatterError(f"tags must be a list of strings, got {tags!r}")
        tags = tuple(tags)

    return Frontmatter(title=title, tags=tags)


def read_recipe(path: Path) -> Recipe:
    """
    Read a recipe markdown file.

    Raises :py:exc:`RecipeReadError` if the file cannot be read. Malformed
    frontmatter is logged as a warning and otherwise ignored.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RecipeReadError(f"Cannot read {path}: {e}")

    slug = path.name[: -len(RECIPE_SUFFIX)]

    title = slug_to_title(slug)
    heading = find_heading_title(content)
    if heading is not None:
        title = heading

    tags: Tuple[str, ...] = ()

    frontmatter_source, body = split_frontmatter(content)
    if frontmatter_source is not None:
        try:
            frontmatter = parse_frontmatter(frontmatter_source)
        except FrontmatterError as e:
            logger.warning("Failed to parse frontmatter for %s: %s", path.name, e)
        else:
            if frontmatter.title is not None:
                title = frontmatter.title
            if frontmatter.tags is not None:
                tags = frontmatter.tags

    return Recipe(slug=slug, title=title, tags=tags, content=body, source=path)


def load_site(directory: Path) -> Site:
    """
    Load every recipe in a directory.
    """
    builder = SiteBuilder()
    for path in enumerate_recipe_directory(directory):
        builder.add(read_recipe(path))
    site = builder.build()
    logger.info("Loaded %d recipes from %s", len(site.recipes), directory)
    return site
