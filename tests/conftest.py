import pytest

from typing import Callable, Mapping

import shutil

from pathlib import Path


@pytest.fixture
def input_path(tmp_path: Path) -> Path:
    return tmp_path / "recipes"


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    return tmp_path / "dist"


MakeDirectoryFn = Callable[[Mapping[str, str]], Path]


@pytest.fixture
def make_directory(input_path: Path) -> MakeDirectoryFn:
    """
    Text fixture which resolves to a function which takes a filename: content
    dictionary and returns a path to the generated directory.
    """
    shutil.rmtree(input_path, ignore_errors=True)
    input_path.mkdir()

    def make_directory(files: Mapping[str, str] = {}) -> Path:
        for filename, content in files.items():
            path = input_path / Path(filename)
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                f.write(content)

        return input_path

    return make_directory
