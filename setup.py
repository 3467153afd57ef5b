from setuptools import setup, find_packages

setup(
    name="recipe_site",
    version="1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"recipe_site.static_site.templates": ["*.html"]},
    description="A static website generator for directories of markdown recipes.",
    install_requires=["marko>=2.0", "jinja2>=3.0", "PyYAML>=6.0", "boto3"],
    extras_require={"test": ["pytest", "lxml"]},
    entry_points={
        "console_scripts": [
            "recipe-site=recipe_site.scripts.recipe_site:main",
        ],
    },
)
