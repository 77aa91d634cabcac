"""Feature scaffolding: ``fxp add <feature> -f <framework>``.

Copies a feature's template directory verbatim into the target project.
Templates are opaque payload: nothing is rendered or substituted, and
existing files at the destination are overwritten.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from pydantic import BaseModel, Field, computed_field

from freakend.config import Config
from freakend.utils import display_path, print_error, print_info, print_success, print_warning

from .catalog import TargetDirError, TemplateCatalog


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class CopyFailure(BaseModel):
    """A single file or directory that could not be written."""

    path: str
    reason: str


class CopyReport(BaseModel):
    """Outcome of copying one feature into a project."""

    feature: str
    framework: str
    version: str
    source: Path
    destination: Path
    copied: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failed: list[CopyFailure] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        """True when every entry was copied or deliberately skipped."""
        return not self.failed


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class FeatureGenerator:
    """Copies feature templates into a target directory."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.catalog = TemplateCatalog(
            self.config.template_dir, self.config.template_version
        )

    async def generate(
        self,
        feature: str,
        framework: str,
        output_dir: str | Path | None = None,
        *,
        version: str | None = None,
    ) -> CopyReport:
        """Copy *feature* for *framework* into *output_dir*.

        Args:
            feature: Feature directory name, e.g. ``"login"``.
            framework: Framework name or alias, e.g. ``"node-express"``.
            output_dir: Destination; defaults to ``config.target_dir``.
            version: Template version; defaults to ``config.template_version``.

        Returns:
            A :class:`CopyReport` listing copied, skipped and failed paths.

        Raises:
            FeatureNotFoundError: If the feature has no template directory.
                Nothing is written in that case.
            TargetDirError: If the destination cannot be created.
        """
        framework = self.catalog.resolve_framework(framework)
        version = version or self.catalog.default_version
        source = self.catalog.feature_path(feature, framework, version)
        destination = Path(output_dir) if output_dir is not None else self.config.target_dir

        report = CopyReport(
            feature=feature,
            framework=framework,
            version=version,
            source=source,
            destination=destination,
        )

        print_info(f"Generating feature '{feature}' from '{framework}'...")
        try:
            await asyncio.to_thread(destination.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise TargetDirError(destination, exc) from exc
        await asyncio.to_thread(
            _copy_tree, source, destination, destination, report, {source.resolve()}
        )

        if report.ok:
            print_success(f"Feature '{feature}' added successfully!")
        else:
            print_error(
                f"Feature '{feature}' added with {len(report.failed)} failed file(s)"
            )
        return report


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _copy_tree(
    src_dir: Path,
    dst_dir: Path,
    root: Path,
    report: CopyReport,
    ancestors: set[Path],
) -> None:
    """Recursively copy *src_dir* into *dst_dir*, recording every entry.

    *ancestors* holds the resolved source directories on the current path;
    a symlink back into one of them is skipped instead of followed.
    """
    try:
        entries = sorted(src_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        _record_failure(report, display_path(dst_dir, root), exc)
        return

    for entry in entries:
        target = dst_dir / entry.name
        rel = display_path(target, root)

        if entry.is_dir():
            real = entry.resolve()
            if real in ancestors:
                report.skipped.append(rel)
                print_warning(f"Symlink loop: {entry.name}. Skipping.")
                continue
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                _record_failure(report, rel, exc)
                continue
            _copy_tree(entry, target, root, report, ancestors | {real})
        elif entry.is_file():
            try:
                shutil.copy2(entry, target)
            except OSError as exc:
                _record_failure(report, rel, exc)
                continue
            report.copied.append(rel)
            print_success(f"Copied: {rel}")
        else:
            report.skipped.append(rel)
            print_warning(f"Unknown item (not file/folder): {entry.name}. Skipping.")


def _record_failure(report: CopyReport, rel: str, exc: OSError) -> None:
    reason = exc.strerror or str(exc)
    report.failed.append(CopyFailure(path=rel, reason=reason))
    print_error(f"Failed: {rel} ({reason})")
