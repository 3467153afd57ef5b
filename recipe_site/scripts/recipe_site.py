"""
The ``recipe-site`` command generates a static website from a directory of
markdown recipes and optionally publishes it to an S3 bucket::

    $ recipe-site --recipes recipes/ --output dist/ --bucket my-recipes

Input directory
===============

Every file in the recipes directory with a ``.md`` extension (except
``README.md``) is treated as one recipe. Each recipe gets its own page named
after its file (e.g. ``spag_bol.md`` becomes ``spag_bol.html``) and an
``index.html`` lists them all.

A recipe's title is taken from its first H1 heading (a line starting with
``# ``), or failing that from its filename with underscores replaced by
spaces. A YAML frontmatter block may be used to set the title explicitly and
to give the recipe tags::

    ---
    title: Spaghetti bolognese
    tags: [italian, dinner]
    ---

Wherever the exact title of a recipe appears as the complete text of an
element in another recipe (e.g. an ingredient in a list), it becomes a link to
that recipe.

Publishing
==========

When ``--bucket`` is given, the output directory is uploaded to the named S3
bucket after generation using the standard AWS credential chain. Pages are
uploaded with caching disabled; all other files are marked cacheable for a
year. Files which fail to upload are reported but do not cause the command to
fail.
"""

from typing import List, Optional

import sys

import logging

from argparse import ArgumentParser

from pathlib import Path

from recipe_site.static_site.exceptions import StaticSiteError

from recipe_site.static_site.website import DEFAULT_SITE_NAME, generate_static_site

from recipe_site.static_site.publish import Publisher, make_s3_client


def main(argv: Optional[List[str]] = None) -> None:
    parser = ArgumentParser(
        description="""
            Compile a directory of markdown recipes into a static recipe
            website.
        """,
    )

    parser.add_argument(
        "--recipes",
        "-recipes",
        type=Path,
        default=Path("recipes"),
        help="""
            The directory containing the recipe markdown files. Default:
            %(default)s.
        """,
    )
    parser.add_argument(
        "--output",
        "-output",
        type=Path,
        default=Path("dist"),
        help="""
            The directory to write the generated website to. Will be created if
            it does not exist. Files already in this directory may be
            overwritten silently. Default: %(default)s.
        """,
    )
    parser.add_argument(
        "--bucket",
        "-bucket",
        default="",
        help="""
            If given, the name of an S3 bucket to upload the generated website
            to.
        """,
    )
    parser.add_argument(
        "--site-name",
        default=DEFAULT_SITE_NAME,
        help="""
            The name of the website, shown on every page. Default:
            %(default)s.
        """,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="""
            Log every file written.
        """,
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        # NB: Credentials are checked before anything is written.
        client = make_s3_client() if args.bucket else None

        generate_static_site(args.recipes, args.output, site_name=args.site_name)

        if client is not None:
            publisher = Publisher(client, args.bucket, args.output)
            report = publisher.publish()
            if report.failed:
                sys.stderr.write(
                    f"{len(report.failed)} of "
                    f"{len(report.failed) + len(report.uploaded)} "
                    f"files failed to upload\n"
                )
    except StaticSiteError as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
