"""
Static recipe website generator.

Site layout
===========

The generated website is flat:

* ``/index.html``: Lists every recipe along with its tags.
* ``/<slug>.html``: One page per recipe, where ``<slug>`` is the recipe's
  markdown filename without its ``.md`` extension.

No other files are written.
"""

from typing import Any, List, Mapping

from pathlib import Path

from dataclasses import dataclass

from urllib.parse import quote

import logging

from recipe_site.recipe import Recipe, Site

from recipe_site.markdown import render_markdown

from recipe_site.static_site.cross_links import add_cross_links

from recipe_site.static_site.exceptions import OutputDirectoryError

from recipe_site.static_site.recipe_directory import load_site

from recipe_site.static_site.templates import index_template, recipe_template


logger = logging.getLogger(__name__)


DEFAULT_SITE_NAME = "Recipes"

INDEX_PAGE_NAME = "index.html"


@dataclass(frozen=True)
class RecipePage:
    recipe: Recipe

    rendered_html: str
    """
    The recipe body as HTML, with cross-links inserted. Trusted: inserted into
    the page without escaping.
    """

    @classmethod
    def from_recipe(cls, recipe: Recipe, site: Site) -> "RecipePage":
        return cls(
            recipe=recipe,
            rendered_html=add_cross_links(render_markdown(recipe.content), site.titles),
        )

    @property
    def path(self) -> str:
        return self.recipe.page_name

    def render(self, site_name: str = DEFAULT_SITE_NAME) -> str:
        return recipe_template.render(
            site_name=site_name,
            title=self.recipe.title,
            tags=self.recipe.tags,
            body=self.rendered_html,
            index_href=INDEX_PAGE_NAME,
        )


def index_entries(site: Site) -> List[Mapping[str, Any]]:
    """The per-recipe template variables for the index page."""
    return [
        {
            "href": quote(recipe.page_name),
            "title": recipe.title,
            "tags": recipe.tags,
        }
        for recipe in site.recipes
    ]


def render_index_page(site: Site, site_name: str = DEFAULT_SITE_NAME) -> str:
    return index_template.render(
        site_name=site_name,
        recipes=index_entries(site),
    )


def write_page(output_directory: Path, name: str, html: str) -> None:
    filename = output_directory / name
    try:
        filename.write_text(html, encoding="utf-8")
    except OSError as e:
        raise OutputDirectoryError(f"Cannot write {filename}: {e}")
    logger.debug("Wrote %s", filename)


def generate_static_site(
    input_directory: Path,
    output_directory: Path,
    site_name: str = DEFAULT_SITE_NAME,
) -> Site:
    """
    Generate a static recipe website.

    Parameters
    ==========
    input_directory: Path
        The directory containing the recipe markdown files.
    output_directory: Path
        The directory to write the generated pages. Will be created if it does
        not exist. Existing pages will be overwritten.
    site_name: str
        The website name, shown in page titles and on the index page.

    Returns
    =======
    site: Site
        The recipes the website was generated from.
    """
    try:
        output_directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(f"Cannot create {output_directory}: {e}")

    site = load_site(input_directory)

    for recipe in site.recipes:
        page = RecipePage.from_recipe(recipe, site)
        write_page(output_directory, page.path, page.render(site_name))

    write_page(output_directory, INDEX_PAGE_NAME, render_index_page(site, site_name))

    logger.info(
        "Generated %d recipe pages in %s", len(site.recipes), output_directory
    )

    return site
