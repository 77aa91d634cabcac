"""Mounting feature routes into ``freakend.server.js``.

Each injected feature adds a ``require`` line and an ``app.use`` mount just
above the ``// -- CLI_INJECT_HERE --`` marker.  The server file is created
from a template the first time a feature is injected.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from pydantic import BaseModel

from freakend.config import Config
from freakend.utils import ensure_dir, is_safe_name, print_success, print_warning

from .catalog import ScaffoldError, TargetDirError
from .templates import TemplateRenderer

SERVER_FILENAME = "freakend.server.js"
INJECT_MARKER = "// -- CLI_INJECT_HERE --"
SERVER_TEMPLATE = "server/freakend.server.js.j2"


class InjectResult(BaseModel):
    feature: str
    server_path: Path
    created: bool = False
    already_present: bool = False


class ServerInjector:
    """Adds feature route mounts to the project's test server file."""

    def __init__(
        self,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    async def inject(self, feature: str, target_dir: str | Path | None = None) -> InjectResult:
        """Mount *feature*'s routes at ``/api/<feature>``.

        Raises:
            ScaffoldError: If the feature name is unusable or an existing
                server file has no injection marker.
            TargetDirError: If the server file cannot be written.
        """
        if not is_safe_name(feature):
            raise ScaffoldError(f"Invalid feature name: '{feature}'")

        root = Path(target_dir) if target_dir is not None else self.config.target_dir
        server_path = root / SERVER_FILENAME
        result = InjectResult(feature=feature, server_path=server_path)

        if server_path.exists():
            content = await asyncio.to_thread(server_path.read_text, encoding="utf-8")
        else:
            content = self.renderer.render(
                SERVER_TEMPLATE,
                {"inject_marker": INJECT_MARKER, "port": self.config.server_port},
            )
            result.created = True

        route_file = f"./{feature}/{feature}.route"
        if route_file in content:
            result.already_present = True
            print_warning(f"{feature} already injected")
            return result

        if INJECT_MARKER not in content:
            raise ScaffoldError(f"No '{INJECT_MARKER}' marker found in {server_path}")

        content = content.replace(INJECT_MARKER, self.mount_lines(feature), 1)
        try:
            await asyncio.to_thread(ensure_dir, root)
            await asyncio.to_thread(server_path.write_text, content, encoding="utf-8")
        except OSError as exc:
            raise TargetDirError(root, exc) from exc

        print_success(f"Injected {feature} into {SERVER_FILENAME}")
        return result

    def mount_lines(self, feature: str) -> str:
        """The ``require``/``app.use`` block for *feature*, ending in the marker."""
        return self.renderer.render_string(
            "const {{ feature | camel_case }}Routes = require('./{{ feature }}/{{ feature }}.route');\n"
            "app.use('/api/{{ feature }}', {{ feature | camel_case }}Routes);\n"
            "{{ marker }}",
            {"feature": feature, "marker": INJECT_MARKER},
        )
