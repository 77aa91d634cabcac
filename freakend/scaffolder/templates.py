"""Jinja2 rendering for the files ``fxp`` generates rather than copies.

Two callers use it: ``fxp init`` renders the ``init/<framework>/`` boilerplate
tree, and the server injector renders ``server/freakend.server.js.j2`` plus
the per-feature mount lines.  Feature payloads under ``templates/features/``
never pass through here; they are copied byte for byte.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATE_SUFFIX = ".j2"

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
_WORD_SPLIT = re.compile(r"[-_\s]+")


class TemplateRenderer:
    """Renders ``.j2`` boilerplate with project settings.

    Output is JavaScript and dotenv text, so nothing is HTML-escaped, and an
    undefined variable raises rather than leaving ``PORT=`` in a ``.env``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else _DEFAULT_TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["camel_case"] = camel_case

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative to the template directory)."""
        return self.env.get_template(template_path).render(**context)

    def render_string(self, source: str, context: dict[str, Any]) -> str:
        return self.env.from_string(source).render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render *template_path* into *output_path*, creating parent directories."""
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, self.render(template_path, context))
        return out

    async def render_tree(
        self,
        template_prefix: str,
        output_dir: str | Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Render every template under *template_prefix* into *output_dir*.

        ``init/node-express/config/db.js.j2`` with prefix ``init/node-express``
        lands at ``<output_dir>/config/db.js``.  Dotfiles such as ``.env.j2``
        are included.  Files without the ``.j2`` suffix are ignored.

        Returns:
            The written paths, in sorted template order.  Empty when the
            prefix does not exist.
        """
        base = self.template_dir / template_prefix
        if not base.is_dir():
            return []

        out_dir = Path(output_dir)
        written: list[Path] = []
        for source in sorted(base.rglob(f"*{TEMPLATE_SUFFIX}")):
            rel = source.relative_to(base).as_posix()
            target = out_dir / rel[: -len(TEMPLATE_SUFFIX)]
            written.append(
                await self.render_to_file(f"{template_prefix}/{rel}", target, context)
            )
        return written


def pascal_case(value: str) -> str:
    """``email-verify`` -> ``EmailVerify``."""
    return "".join(word[:1].upper() + word[1:] for word in _WORD_SPLIT.split(value) if word)


def camel_case(value: str) -> str:
    """``email-verify`` -> ``emailVerify``; used for generated JS identifiers."""
    pascal = pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
