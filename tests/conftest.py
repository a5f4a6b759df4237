import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so they never outlive a test."""
    yield
    logger = logging.getLogger("project_browser")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def proj_tree(tmp_path):
    """Create a project folder with source dirs, noise dirs and a file."""
    proj = tmp_path / "proj"
    (proj / "src" / "utils").mkdir(parents=True)
    (proj / "src" / "components").mkdir()
    (proj / "node_modules" / "left-pad").mkdir(parents=True)
    (proj / ".git" / "objects").mkdir(parents=True)
    (proj / "README.md").write_text("# proj\n")
    (proj / "src" / "main.py").write_text("print('hi')\n")
    return proj
