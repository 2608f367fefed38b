"""Flattens theme layer JSON into CSS custom properties and daisyUI theme blocks."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from jinja2 import Environment
from pydantic import ValidationError

from .. import fs
from ..config import ConfigError, require_directory
from ..logging import get_logger
from ..templating import create_environment
from .models import ColorTriple, ThemeLayer, ThemeLayers

THEME_MODES = ("dark", "light")
THEME_FORMATS = ("hsl", "rgb")
BASE_THEME_FILENAME = "theme.css"

_CATEGORIES = ("surface", "glyphs")
_UNDERSCORE_RUN = re.compile(r"_+")
_DASH_RUN = re.compile(r"-+")
_TOKEN_KEY = re.compile(r"^--color-(.+?):")


class ThemeError(RuntimeError):
    """Raised when theme sources are incomplete or malformed."""


@dataclass
class ModeTokens:
    name: str
    tokens: List[str] = field(default_factory=list)


def _format_channel(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_color(triple: ColorTriple, color_format: str) -> str:
    """Render a colour triple as CSS function arguments (``210, 40%, 98%`` for hsl)."""
    first, second, third = (_format_channel(channel) for channel in triple)
    if color_format == "hsl":
        return f"{first}, {second}%, {third}%"
    return f"{first}, {second}, {third}"


def css_var_name(layer_index: str, name: str, *, glyphs: bool) -> str:
    raw = f"color-ly{layer_index}{'-gl' if glyphs else ''}-{name}"
    collapsed = _DASH_RUN.sub("-", _UNDERSCORE_RUN.sub("-", raw))
    return collapsed[:-1] if collapsed.endswith("-") else collapsed


def layers_to_css_vars(layers: Mapping[str, ThemeLayer], color_format: str) -> List[str]:
    """Return ``--color-ly<n>[-gl]-<name>: <format>(...);`` declarations for every layer.

    Layer keys without an ``_<index>`` part are ignored.
    """
    declarations: List[str] = []
    for key, layer in layers.items():
        parts = key.split("_")
        if len(parts) < 2 or not parts[1]:
            continue
        layer_index = parts[1]
        for category in _CATEGORIES:
            colors: Dict[str, ColorTriple] = getattr(layer, category)
            for name, triple in colors.items():
                var_name = css_var_name(layer_index, name, glyphs=category == "glyphs")
                declarations.append(f"--{var_name}: {color_format}({format_color(triple, color_format)});")
    return declarations


def base_var_for(token: str, color_format: str) -> str | None:
    """Map a theme token to its alpha-aware ``@theme`` base variable."""
    match = _TOKEN_KEY.match(token)
    if not match:
        return None
    key = match.group(1)
    return f"--color-{key}: {color_format}(var(--{key}) / <alpha-value>);"


def find_theme_files(base_dir: Path, color_format: str) -> Dict[str, Dict[str, Path]]:
    """Group ``<theme>.<format>.<mode>.json`` files in ``base_dir`` by theme key."""
    pattern = re.compile(rf"^(?P<key>.+)\.{re.escape(color_format)}\.(?P<mode>dark|light)\.json$")
    themes: Dict[str, Dict[str, Path]] = {}
    for entry in sorted(base_dir.iterdir()):
        if not entry.is_file():
            continue
        match = pattern.match(entry.name)
        if not match:
            continue
        themes.setdefault(match.group("key"), {})[match.group("mode")] = entry
    return themes


class ThemeGenerator:
    """Writes one CSS file per theme plus a shared ``theme.css``."""

    def __init__(self, environment: Environment | None = None) -> None:
        self.environment = environment or create_environment()
        self.logger = get_logger("themes")

    def run(self, source_dir: Path, out_dir: Path, color_format: str = "hsl") -> List[Path]:
        if color_format not in THEME_FORMATS:
            raise ConfigError(
                f"Unsupported colour format {color_format!r}; expected one of {', '.join(THEME_FORMATS)}"
            )
        source = require_directory(source_dir, "Theme directory")
        target = require_directory(out_dir, "Theme output directory")

        themes = find_theme_files(source, color_format)
        self.logger.info("Found %d %s themes in %s", len(themes), color_format, source)

        written: List[Path] = []
        all_base_vars: Dict[str, None] = {}
        for theme_key in sorted(themes):
            base_vars, modes = self._collect_theme(theme_key, themes[theme_key], color_format)
            all_base_vars.update(dict.fromkeys(base_vars))
            content = self.environment.get_template("theme.css.j2").render(
                theme_key=theme_key,
                base_vars=base_vars,
                modes=modes,
            )
            written.append(self._write(target / f"{theme_key}.css", content))

        content = self.environment.get_template("theme_base.css.j2").render(
            base_vars=list(all_base_vars),
        )
        written.append(self._write(target / BASE_THEME_FILENAME, content))
        return written

    def _collect_theme(
        self,
        theme_key: str,
        paths: Mapping[str, Path],
        color_format: str,
    ) -> tuple[List[str], Sequence[ModeTokens]]:
        base_vars: Dict[str, None] = {}
        modes: List[ModeTokens] = []
        for mode in THEME_MODES:
            path = paths.get(mode)
            if path is None:
                raise ThemeError(f'Missing {mode} file for theme "{theme_key}"')
            tokens = layers_to_css_vars(self._load_layers(path), color_format)
            modes.append(ModeTokens(name=mode, tokens=tokens))
            for token in tokens:
                base_line = base_var_for(token, color_format)
                if base_line is not None:
                    base_vars[base_line] = None
        return list(base_vars), modes

    def _load_layers(self, path: Path) -> Dict[str, ThemeLayer]:
        try:
            payload = fs.read_json(path)
        except UnicodeDecodeError as exc:
            raise ThemeError(f"{path} is not valid UTF-8: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ThemeError(f"Invalid JSON in {path}: {exc}") from exc
        try:
            return ThemeLayers.validate_python(payload)
        except ValidationError as exc:
            raise ThemeError(f"Invalid theme layers in {path}: {exc}") from exc

    def _write(self, path: Path, content: str) -> Path:
        fs.write_text(path, content)
        self.logger.info("Wrote %s", path)
        return path


__all__ = [
    "BASE_THEME_FILENAME",
    "THEME_FORMATS",
    "THEME_MODES",
    "ThemeError",
    "ThemeGenerator",
    "base_var_for",
    "css_var_name",
    "find_theme_files",
    "format_color",
    "layers_to_css_vars",
]
