"""Template catalog: locating feature templates on disk.

Feature templates live under ``<root>/<framework>/<version>/<feature>/``.
The catalog only resolves and enumerates those directories; copying is done
by :class:`~freakend.scaffolder.generator.FeatureGenerator`.
"""

from __future__ import annotations

from pathlib import Path

from freakend.config import DEFAULT_TEMPLATE_VERSION
from freakend.utils import is_safe_name

DEFAULT_TEMPLATE_ROOT = Path(__file__).parent / "templates" / "features"

FRAMEWORK_ALIASES: dict[str, str] = {
    "em": "node-express",
}

# Feature name -> display category for ``fxp list``.
CATEGORIES: dict[str, list[str]] = {
    "auth": [
        "auth", "signin", "password-reset", "email-verify", "otp", "otp-2fa",
        "oauth", "roles", "roles-based-access", "permissions", "login",
        "register", "logout", "forgot-password",
    ],
    "user": ["profiles", "update-user", "user-block", "avatar"],
    "crud": ["crud", "soft-delete", "pagination", "search", "relation"],
    "comments": ["comments", "reactions", "report"],
    "media": ["upload", "image-resize", "video-upload", "s3-upload"],
    "security": ["rate-limit", "api-key", "cors", "security-headers"],
    "admin": ["admin", "admin-pannel", "analytics", "audit-log"],
    "api": ["api", "graphql", "swagger", "versioning"],
    "smart": ["chatbot", "ai-search"],
    "devops": ["docker", "env", "seeder", "cron", "logger"],
    "business": ["payment", "subscription", "invoice"],
    "notifications": ["email-service", "sms", "notifications", "push"],
}

OTHER_CATEGORY = "other"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for every error the scaffolder reports to the user."""


class FeatureNotFoundError(ScaffoldError):
    """Raised when no template directory exists for a feature."""

    def __init__(self, feature: str, framework: str) -> None:
        self.feature = feature
        self.framework = framework
        super().__init__(f"Feature '{feature}' not found in '{framework}'")


class UnsupportedFrameworkError(ScaffoldError):
    """Raised when a command is asked to target a framework it cannot handle."""

    def __init__(self, framework: str, supported: list[str] | tuple[str, ...]) -> None:
        self.framework = framework
        self.supported = list(supported)
        choices = ", ".join(f"'{name}'" for name in self.supported) or "none"
        super().__init__(
            f"Unsupported framework '{framework}'. Supported: {choices}"
        )


class TargetDirError(ScaffoldError):
    """Raised when the target directory cannot be created or written."""

    def __init__(self, path: Path, exc: OSError) -> None:
        self.path = path
        self.reason = exc.strerror or str(exc)
        super().__init__(f"Cannot write to {path}: {self.reason}")


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class TemplateCatalog:
    """Resolves feature template directories for a framework and version."""

    def __init__(
        self,
        root: str | Path | None = None,
        default_version: str = DEFAULT_TEMPLATE_VERSION,
    ) -> None:
        self.root = Path(root) if root is not None else DEFAULT_TEMPLATE_ROOT
        self.default_version = default_version

    @staticmethod
    def resolve_framework(name: str) -> str:
        """Normalise a framework name and expand aliases (``em``)."""
        normalised = name.strip().lower()
        return FRAMEWORK_ALIASES.get(normalised, normalised)

    def feature_path(
        self,
        feature: str,
        framework: str,
        version: str | None = None,
    ) -> Path:
        """Return the template directory for *feature*.

        Raises:
            FeatureNotFoundError: If the name is not a plain path segment or
                the directory does not exist.
        """
        framework = self.resolve_framework(framework)
        version = version or self.default_version
        if not (is_safe_name(feature) and is_safe_name(framework) and is_safe_name(version)):
            raise FeatureNotFoundError(feature, framework)

        path = self.root / framework / version / feature
        if not path.is_dir():
            raise FeatureNotFoundError(feature, framework)
        return path

    def list_frameworks(self) -> list[str]:
        return _subdirectories(self.root)

    def list_versions(self, framework: str) -> list[str]:
        return _subdirectories(self.root / self.resolve_framework(framework))

    def list_features(self, framework: str, version: str | None = None) -> list[str]:
        version = version or self.default_version
        return _subdirectories(self.root / self.resolve_framework(framework) / version)

    @staticmethod
    def categorize(features: list[str]) -> dict[str, list[str]]:
        """Group feature names by category.

        Categories keep their declaration order; names that belong to no
        category are collected under ``other``.  Empty categories are
        omitted.
        """
        lookup = {
            feature: category
            for category, members in CATEGORIES.items()
            for feature in members
        }
        grouped: dict[str, list[str]] = {}
        for category in [*CATEGORIES, OTHER_CATEGORY]:
            members = sorted(f for f in features if lookup.get(f, OTHER_CATEGORY) == category)
            if members:
                grouped[category] = members
        return grouped


def _subdirectories(path: Path) -> list[str]:
    if not path.is_dir():
        return []
    return sorted(child.name for child in path.iterdir() if child.is_dir())
