"""Freakend configuration.

Centralised, typed configuration for the ``fxp`` CLI.  All settings use a
Pydantic v2 model so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_TEMPLATE_VERSION = "1.0.0"

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global Freakend configuration.

    Instances are typically created once by the CLI entry point (from the
    environment, then overridden by command-line flags) and passed to the
    generators.
    """

    template_dir: Path | None = Field(
        default=None,
        description="Root of the feature templates; the packaged set when unset",
    )
    template_version: str = Field(default=DEFAULT_TEMPLATE_VERSION, min_length=1)
    target_dir: Path = Field(default_factory=Path.cwd)

    # ``fxp init`` settings
    package_manager: str = Field(default="npm", min_length=1)
    install_dependencies: list[str] = Field(
        default_factory=lambda: ["express", "mongoose", "dotenv"]
    )
    skip_install: bool = Field(default=False)
    install_timeout: int = Field(default=600, ge=10, description="Install timeout in seconds")
    server_port: int = Field(default=5000, ge=1, le=65535)
    mongo_uri: str = Field(default="your-mongo-uri-here")

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FREAKEND_TEMPLATE_DIR, FREAKEND_TEMPLATE_VERSION,
            FREAKEND_TARGET_DIR, FREAKEND_PACKAGE_MANAGER,
            FREAKEND_SKIP_INSTALL, FREAKEND_INSTALL_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FREAKEND_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["FREAKEND_TEMPLATE_DIR"])
        if os.environ.get("FREAKEND_TEMPLATE_VERSION"):
            kwargs["template_version"] = os.environ["FREAKEND_TEMPLATE_VERSION"]
        if os.environ.get("FREAKEND_TARGET_DIR"):
            kwargs["target_dir"] = Path(os.environ["FREAKEND_TARGET_DIR"])
        if os.environ.get("FREAKEND_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["FREAKEND_PACKAGE_MANAGER"]
        if os.environ.get("FREAKEND_SKIP_INSTALL"):
            kwargs["skip_install"] = (
                os.environ["FREAKEND_SKIP_INSTALL"].strip().lower() in _TRUTHY
            )
        if os.environ.get("FREAKEND_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["FREAKEND_INSTALL_TIMEOUT"])
        return cls(**kwargs)
