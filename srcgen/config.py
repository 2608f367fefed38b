"""Configuration loading (.srcgen.yml) and selection settings for srcgen."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".srcgen.yml"

DEFAULT_INCLUDE_GLOBS: Tuple[str, ...] = ("**/*.{ts,svelte}",)

DEFAULT_IGNORE_GLOBS: Tuple[str, ...] = (
    "**/_*",
    "**/_*/**",
    "**/index.ts",
    "**/global.d.ts",
    "**/*.d.ts",
    "**/node_modules/**",
    "**/.*/**",
    "**/dist/**",
    "**/build/**",
)


class ConfigError(RuntimeError):
    """Raised when configuration or invocation parameters are invalid."""


@dataclass
class ExportsSettings:
    """Raw `exports` options; ``None`` means "not specified here"."""

    dir: Optional[Path] = None
    out: Optional[Path] = None
    include_glob: Optional[List[str]] = None
    ignore_glob: Optional[List[str]] = None
    include_bin: Optional[bool] = None
    types_only: Optional[bool] = None
    is_module: Optional[bool] = None
    dir_skip: Optional[List[str]] = None

    def merged(self, overrides: "ExportsSettings") -> "ExportsSettings":
        """Return a copy where every value set on ``overrides`` wins."""
        return replace(self, **_explicit_values(overrides))


@dataclass
class ThemesSettings:
    """Raw `themes` options."""

    dir: Optional[Path] = None
    out: Optional[Path] = None
    format: Optional[str] = None

    def merged(self, overrides: "ThemesSettings") -> "ThemesSettings":
        return replace(self, **_explicit_values(overrides))


@dataclass
class RoutesSettings:
    """Raw `routes` options."""

    routes: Optional[Path] = None
    locales: Optional[Path] = None
    routes_dir: Optional[Path] = None
    out: Optional[Path] = None

    def merged(self, overrides: "RoutesSettings") -> "RoutesSettings":
        return replace(self, **_explicit_values(overrides))


@dataclass
class SrcGenConfig:
    """Represents the settings defined in .srcgen.yml."""

    root: Path
    exports: ExportsSettings = field(default_factory=ExportsSettings)
    themes: ThemesSettings = field(default_factory=ThemesSettings)
    routes: RoutesSettings = field(default_factory=RoutesSettings)


@dataclass(frozen=True)
class SelectionConfig:
    """Fully resolved, immutable input of one aggregator run."""

    base_dir: Path
    out_dir: Path
    include_patterns: Tuple[str, ...] = DEFAULT_INCLUDE_GLOBS
    exclude_patterns: Tuple[str, ...] = DEFAULT_IGNORE_GLOBS
    include_bin: bool = False
    types_only: bool = False
    is_module: bool = True
    skip_dirs: Tuple[str, ...] = ()


def load_config(config_path: Path, *, required: bool = False) -> SrcGenConfig:
    """Load configuration from ``config_path`` (a file, or a directory holding one).

    A missing file yields empty settings unless ``required`` is set.
    """
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        if required:
            raise ConfigError(f"Config file not found: {config_file}")
        return SrcGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    exports_data = _as_dict(data.get("exports"))
    exports = ExportsSettings(
        dir=_as_path(exports_data.get("dir"), root),
        out=_as_path(exports_data.get("out"), root),
        include_glob=_as_optional_str_list(exports_data.get("include_glob")),
        ignore_glob=_as_optional_str_list(exports_data.get("ignore_glob")),
        include_bin=_as_bool(exports_data.get("include_bin")),
        types_only=_as_bool(exports_data.get("types_only")),
        is_module=_as_bool(exports_data.get("is_module")),
        dir_skip=_as_optional_str_list(exports_data.get("dir_skip")),
    )

    themes_data = _as_dict(data.get("themes"))
    themes = ThemesSettings(
        dir=_as_path(themes_data.get("dir"), root),
        out=_as_path(themes_data.get("out"), root),
        format=_as_str(themes_data.get("format")),
    )

    routes_data = _as_dict(data.get("routes"))
    routes = RoutesSettings(
        routes=_as_path(routes_data.get("routes"), root),
        locales=_as_path(routes_data.get("locales"), root),
        routes_dir=_as_path(routes_data.get("routes_dir"), root),
        out=_as_path(routes_data.get("out"), root),
    )

    return SrcGenConfig(root=root, exports=exports, themes=themes, routes=routes)


def build_selection_config(settings: ExportsSettings) -> SelectionConfig:
    """Apply defaults to ``settings`` and validate them into a SelectionConfig.

    Raises ConfigError before any scanning happens when a directory is missing
    or a pattern list is unusable.
    """
    if settings.dir is None:
        raise ConfigError("Missing base directory (--dir or exports.dir)")
    if settings.out is None:
        raise ConfigError("Missing output directory (--out or exports.out)")

    base_dir = require_directory(settings.dir, "Base directory")
    out_dir = require_directory(settings.out, "Output directory")

    include = tuple(settings.include_glob) if settings.include_glob is not None else DEFAULT_INCLUDE_GLOBS
    exclude = tuple(settings.ignore_glob) if settings.ignore_glob is not None else DEFAULT_IGNORE_GLOBS
    skip_dirs = tuple(settings.dir_skip or ())
    types_only = bool(settings.types_only)

    if not include and not types_only:
        raise ConfigError("include_glob must contain at least one pattern")
    _reject_blank("include_glob", include)
    _reject_blank("ignore_glob", exclude)
    _reject_blank("dir_skip", skip_dirs)

    return SelectionConfig(
        base_dir=base_dir,
        out_dir=out_dir,
        include_patterns=include,
        exclude_patterns=exclude,
        include_bin=bool(settings.include_bin),
        types_only=types_only,
        is_module=True if settings.is_module is None else settings.is_module,
        skip_dirs=skip_dirs,
    )


def require_directory(path: Path, label: str) -> Path:
    """Return ``path`` made absolute, or raise ConfigError if it is not a directory."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise ConfigError(f"{label} not found: {resolved}")
    if not resolved.is_dir():
        raise ConfigError(f"{label} is not a directory: {resolved}")
    return resolved


def _reject_blank(name: str, values: Sequence[str]) -> None:
    for value in values:
        if not value.strip():
            raise ConfigError(f"{name} entries must not be blank")


def _explicit_values(settings: object) -> Dict[str, Any]:
    return {
        item.name: getattr(settings, item.name)
        for item in fields(settings)  # type: ignore[arg-type]
        if getattr(settings, item.name) is not None
    }


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path} is not valid UTF-8: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_path(value: Any, root: Path) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else root / path


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_optional_str_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_IGNORE_GLOBS",
    "DEFAULT_INCLUDE_GLOBS",
    "ExportsSettings",
    "RoutesSettings",
    "SelectionConfig",
    "SrcGenConfig",
    "ThemesSettings",
    "build_selection_config",
    "load_config",
    "require_directory",
]
