"""Shared pytest fixtures for the Freakend test suite.

Provides reusable fixtures for:
- A throwaway feature-template tree (``<root>/<framework>/<version>/<feature>``)
- Configs pointing at that tree and at a temporary target directory
- Mock subprocess helpers for the package-manager step
- A clean ``FREAKEND_*`` environment
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from freakend.config import Config


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip any ``FREAKEND_*`` variables inherited from the developer's shell."""
    import os

    for key in list(os.environ):
        if key.startswith("FREAKEND_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Template trees & directories
# ---------------------------------------------------------------------------

@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A small feature-template tree.

    Layout::

        templates/
            node-express/
                1.0.0/
                    login/
                        controllers/login.controller.js
                        routes/login.route.js
                        .env.example
                    comments/
                        comment.model.js
                2.0.0/
                    login/
                        routes/login.route.js
            django/
                1.0.0/
                    auth/views.py
    """
    root = tmp_path / "templates"
    files = {
        "node-express/1.0.0/login/controllers/login.controller.js": "exports.login = () => {};\n",
        "node-express/1.0.0/login/routes/login.route.js": "module.exports = 'v1';\n",
        "node-express/1.0.0/login/.env.example": "JWT_SECRET=change-me\n",
        "node-express/1.0.0/comments/comment.model.js": "module.exports = {};\n",
        "node-express/2.0.0/login/routes/login.route.js": "module.exports = 'v2';\n",
        "django/1.0.0/auth/views.py": "def login(request):\n    pass\n",
    }
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Empty directory standing in for the user's project."""
    path = tmp_path / "my-backend"
    path.mkdir()
    return path


@pytest.fixture
def config(template_root: Path, target_dir: Path) -> Config:
    """Config wired to the fixture template tree and target directory."""
    return Config(template_dir=template_root, target_dir=target_dir)


# ---------------------------------------------------------------------------
# Subprocess mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_shell", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
