class StaticSiteError(Exception):
    """Base class for exceptions thrown during website generation."""


class RecipeDirectoryError(StaticSiteError):
    """Thrown when the recipe directory is missing or cannot be listed."""


class RecipeReadError(StaticSiteError):
    """Thrown when a recipe file cannot be read."""


class FrontmatterError(StaticSiteError):
    """Thrown when a recipe's frontmatter block is malformed."""


class OutputDirectoryError(StaticSiteError):
    """Thrown when the output directory or a page within it cannot be written."""


class PublishConfigError(StaticSiteError):
    """Thrown when the object store client cannot be configured."""


class PublishError(StaticSiteError):
    """Thrown when the generated website cannot be enumerated for publishing."""
