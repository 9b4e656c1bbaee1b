"""Shared pytest configuration for verso examples.

Provides the ``example_site`` fixture that creates a fresh Site with the
``create_site`` factory of the ``app.py`` next to the test, building into
a temporary directory so the example tree stays clean.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_site(request: pytest.FixtureRequest, tmp_path: Path):
    """Create a site from the sibling app.py, building into ``tmp_path``."""
    app_path = Path(request.path).parent / "app.py"
    module_name = f"example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    return module.create_site(out_dir=tmp_path / "build")
