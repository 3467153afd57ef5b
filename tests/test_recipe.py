import pytest

from pathlib import Path

from recipe_site.recipe import Recipe, SiteBuilder, slug_to_title


@pytest.mark.parametrize(
    "slug, exp",
    [
        ("pasta", "pasta"),
        ("spag_bol", "spag bol"),
        ("__odd__", "  odd  "),
        ("garlic-bread", "garlic-bread"),
    ],
)
def test_slug_to_title(slug: str, exp: str) -> None:
    assert slug_to_title(slug) == exp


class TestRecipe:
    def test_page_name(self) -> None:
        assert Recipe(slug="spag_bol", title="Spag bol").page_name == "spag_bol.html"

    def test_source_ignored_in_comparison(self) -> None:
        assert Recipe("a", "A", source=Path("x/a.md")) == Recipe("a", "A")


class TestSiteBuilder:
    def test_empty(self) -> None:
        site = SiteBuilder().build()
        assert site.recipes == ()
        assert dict(site.titles) == {}

    def test_preserves_order(self) -> None:
        site = (
            SiteBuilder()
            .add(Recipe("b", "Bee"))
            .add(Recipe("a", "Ay"))
            .build()
        )
        assert [r.slug for r in site.recipes] == ["b", "a"]
        assert dict(site.titles) == {"b": "Bee", "a": "Ay"}

    def test_duplicate_slug_last_wins(self) -> None:
        site = (
            SiteBuilder()
            .add(Recipe("a", "First"))
            .add(Recipe("a", "Second"))
            .build()
        )
        assert len(site.recipes) == 2
        assert dict(site.titles) == {"a": "Second"}

    def test_built_site_is_read_only(self) -> None:
        builder = SiteBuilder().add(Recipe("a", "Ay"))
        site = builder.build()

        with pytest.raises(TypeError):
            site.titles["b"] = "Bee"  # type: ignore

        # Later additions to the builder don't leak into existing sites
        builder.add(Recipe("b", "Bee"))
        assert len(site.recipes) == 1
        assert "b" not in site.titles
