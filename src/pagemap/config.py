"""Pagemap configuration.

PagemapConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pagemap._errors import ConfigError


@dataclass(frozen=True, slots=True)
class PagemapConfig:
    """Configuration for resolving a pages directory.

    Attributes:
        root: Path to the project root (contains ``pages/``).
              Always resolved to an absolute path on construction.
        pages_dir: Directory, relative to *root*, holding page files.
        extensions: Page file extensions to scan, without the dot.
        meta_macro: Name of the in-file metadata declaration call.
        debounce_ms: Watcher debounce window before a rebuild is triggered.
        max_events: Capacity of the observability event log.

    """

    root: Path = field(default_factory=Path.cwd)
    pages_dir: str = "pages"
    extensions: tuple[str, ...] = ("vue", "js", "ts", "jsx", "tsx")
    meta_macro: str = "definePageMeta"
    debounce_ms: int = 1000
    max_events: int = 10_000

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

        if isinstance(self.extensions, list):
            object.__setattr__(self, "extensions", tuple(self.extensions))
        if not self.extensions:
            msg = "At least one page extension must be configured"
            raise ConfigError(msg)
        object.__setattr__(
            self, "extensions", tuple(ext.lstrip(".") for ext in self.extensions)
        )

        if self.debounce_ms <= 0:
            msg = f"debounce_ms must be positive, got {self.debounce_ms}"
            raise ConfigError(msg)
        if not self.meta_macro.isidentifier():
            msg = f"meta_macro must be an identifier, got {self.meta_macro!r}"
            raise ConfigError(msg)

    @property
    def pages_path(self) -> Path:
        """Absolute path to the pages directory."""
        return self.root / self.pages_dir

    @property
    def glob_pattern(self) -> str:
        """Glob matching every page file, e.g. ``**/*.{vue,ts}``."""
        if len(self.extensions) == 1:
            return f"**/*.{self.extensions[0]}"
        return "**/*.{" + ",".join(self.extensions) + "}"
