"""Freakend scaffolder -- copies backend boilerplate into a project.

Quick usage::

    from freakend.scaffolder import FeatureGenerator

    report = await FeatureGenerator().generate("login", "node-express")
    assert report.ok
"""

from freakend.scaffolder.catalog import (
    FeatureNotFoundError,
    ScaffoldError,
    TargetDirError,
    TemplateCatalog,
    UnsupportedFrameworkError,
)
from freakend.scaffolder.generator import CopyReport, FeatureGenerator
from freakend.scaffolder.init_gen import InitGenerator, InitReport, InstallError
from freakend.scaffolder.injector import InjectResult, ServerInjector
from freakend.scaffolder.templates import TemplateRenderer

__all__ = [
    "CopyReport",
    "FeatureGenerator",
    "FeatureNotFoundError",
    "InitGenerator",
    "InitReport",
    "InjectResult",
    "InstallError",
    "ScaffoldError",
    "ServerInjector",
    "TargetDirError",
    "TemplateCatalog",
    "TemplateRenderer",
    "UnsupportedFrameworkError",
]
