"""Project bootstrap: ``fxp init -f <framework>``.

Writes a small fixed set of boilerplate files into the target directory and
then shells out to the package manager to create ``package.json`` and
install the runtime dependencies.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

from pydantic import BaseModel, Field

from freakend.config import Config
from freakend.utils import (
    display_path,
    format_duration,
    print_info,
    print_success,
    print_warning,
    run_command,
    sanitize_name,
)

from .catalog import (
    ScaffoldError,
    TargetDirError,
    TemplateCatalog,
    UnsupportedFrameworkError,
)
from .templates import TemplateRenderer

SUPPORTED_FRAMEWORKS: tuple[str, ...] = ("node-express",)

# Directories created even when no template lands in them.
SCAFFOLD_DIRS: dict[str, tuple[str, ...]] = {
    "node-express": ("config", "routes", "controllers", "models"),
}

ENTRYPOINTS: dict[str, str] = {
    "node-express": "node server.js",
}


class InstallError(ScaffoldError):
    """Raised when the package-manager step exits non-zero or times out."""

    def __init__(self, command: str, returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(
            f"Dependency install failed (exit code {returncode}): {command}"
        )


class InitReport(BaseModel):
    """Outcome of bootstrapping a project."""

    framework: str
    target_dir: Path
    written: list[str] = Field(default_factory=list)
    install_command: str
    installed: bool = False


class InitGenerator:
    """Writes the boilerplate project skeleton and installs dependencies."""

    def __init__(
        self,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    def install_command(self) -> str:
        """The shell command run inside the target directory."""
        pm = self.config.package_manager
        deps = " ".join(self.config.install_dependencies)
        command = f"{pm} init -y"
        if deps:
            command += f" && {pm} install {deps}"
        return command

    async def generate(
        self,
        framework: str,
        target_dir: str | Path | None = None,
        *,
        skip_install: bool | None = None,
    ) -> InitReport:
        """Bootstrap a *framework* project in *target_dir*.

        Raises:
            UnsupportedFrameworkError: If *framework* is not supported.
            TargetDirError: If the project files cannot be written.
            InstallError: If the install command fails.
        """
        framework = TemplateCatalog.resolve_framework(framework)
        if framework not in SUPPORTED_FRAMEWORKS:
            raise UnsupportedFrameworkError(framework, SUPPORTED_FRAMEWORKS)

        root = Path(target_dir) if target_dir is not None else self.config.target_dir
        if skip_install is None:
            skip_install = self.config.skip_install

        started = time.monotonic()
        print_info(f"Initializing backend project: {framework}")

        try:
            for name in SCAFFOLD_DIRS[framework]:
                await asyncio.to_thread((root / name).mkdir, parents=True, exist_ok=True)
            written = await self.renderer.render_tree(
                f"init/{framework}", root, self._build_context(root)
            )
        except OSError as exc:
            raise TargetDirError(root, exc) from exc

        report = InitReport(
            framework=framework,
            target_dir=root,
            written=[display_path(path, root) for path in written],
            install_command=self.install_command(),
        )
        for rel in report.written:
            print_success(f"Created: {rel}")

        if skip_install:
            print_warning(f"Skipping dependency install. Run '{report.install_command}' later.")
        else:
            print_info("Installing dependencies...")
            returncode, _, _ = await run_command(
                report.install_command,
                cwd=root,
                timeout=self.config.install_timeout,
                capture=False,
            )
            if returncode != 0:
                raise InstallError(report.install_command, returncode)
            report.installed = True

        print_success(
            f"Project ready in {format_duration(time.monotonic() - started)}. "
            f"Run with: {ENTRYPOINTS[framework]}"
        )
        return report

    def _build_context(self, root: Path) -> dict[str, object]:
        return {
            "project_name": sanitize_name(root.resolve().name) or "freakend-app",
            "port": self.config.server_port,
            "mongo_uri": self.config.mongo_uri,
        }
