from pathlib import Path

import pytest

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


def test_only_library_package_is_installed():
    tomllib = pytest.importorskip("tomllib")
    with open(PYPROJECT, "rb") as f:
        cfg = tomllib.load(f)
    include = cfg["tool"]["setuptools"]["packages"]["find"]["include"]
    assert include == ["sokoban_engine*"]
