"""Generates the localised route lookup module from route translations."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from jinja2 import Environment
from pydantic import TypeAdapter, ValidationError

from .. import fs
from ..config import ConfigError, require_directory
from ..logging import get_logger
from ..templating import create_environment

OUTPUT_FILENAME = "localised.gen.ts"
PAGE_FILENAME = "+page.svelte"
DEFAULT_ROUTES_DIR = Path("src") / "routes"
DEFAULT_OUT_DIR = Path("src") / "lib" / "utils" / "routes"

_TRANSLATIONS = TypeAdapter(Dict[str, Dict[str, str]])
_LOCALES = TypeAdapter(List[str])


@dataclass
class RouteTable:
    """Localised path -> canonical path mapping plus every known prefix."""

    locale_routes: Dict[str, str] = field(default_factory=dict)
    prefixes: List[str] = field(default_factory=list)


def _is_skippable(segment: str) -> bool:
    # Route groups "(app)" and parameters "[id]" are not part of the URL prefix.
    return segment.startswith("(") or segment.startswith("[")


def localisable_prefixes(routes_dir: Path) -> List[str]:
    """Return first URL segments of every page under ``routes_dir``, in walk order."""
    found: Dict[str, None] = {}
    for dirpath, dirnames, filenames in os.walk(routes_dir):
        dirnames.sort()
        if PAGE_FILENAME not in filenames:
            continue
        parts = Path(dirpath).relative_to(routes_dir).parts
        meaningful = [part for part in parts if not _is_skippable(part)]
        if meaningful:
            found[meaningful[0]] = None
    return list(found)


def build_route_table(
    prefixes: Sequence[str],
    translations: Mapping[str, Mapping[str, str]],
    locales: Sequence[str],
) -> RouteTable:
    """Map ``/<translated>`` to ``/<canonical>`` for every prefix and locale.

    Untranslated prefixes map to themselves.
    """
    table = RouteTable()
    seen: Dict[str, None] = {}
    for canonical in prefixes:
        seen[canonical] = None
        for locale in locales:
            localised = translations.get(locale, {}).get(canonical, canonical)
            table.locale_routes[f"/{localised}"] = f"/{canonical}"
            seen[localised] = None
    table.prefixes = list(seen)
    return table


class RouteTableGenerator:
    """Renders ``localised.gen.ts`` from translations and the routes tree."""

    def __init__(self, environment: Environment | None = None) -> None:
        self.environment = environment or create_environment()
        self.logger = get_logger("routes")

    def run(
        self,
        routes_path: Path,
        locales_path: Path,
        routes_dir: Path,
        out_dir: Path,
    ) -> Path:
        translations = self._load(routes_path, _TRANSLATIONS, "routes")
        locales = self._load(locales_path, _LOCALES, "locales")
        source = require_directory(routes_dir, "Routes directory")
        target = require_directory(out_dir, "Routes output directory")

        prefixes = localisable_prefixes(source)
        self.logger.debug("Localisable prefixes: %s", prefixes)
        table = build_route_table(prefixes, translations, locales)

        content = self.environment.get_template("localised_routes.ts.j2").render(
            locale_routes=table.locale_routes,
            prefixes=table.prefixes,
        )
        output_path = target / OUTPUT_FILENAME
        fs.write_text(output_path, content)
        self.logger.info("Routes written to %s", output_path)
        return output_path

    @staticmethod
    def _load(path: Path, adapter: TypeAdapter, label: str):
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise ConfigError(f"Missing {label} file at {resolved}")
        try:
            return adapter.validate_python(fs.read_json(resolved))
        except UnicodeDecodeError as exc:
            raise ConfigError(f"{label} file {resolved} is not valid UTF-8: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {resolved}: {exc}") from exc
        except ValidationError as exc:
            raise ConfigError(f"Invalid {label} file {resolved}: {exc}") from exc


__all__ = [
    "DEFAULT_OUT_DIR",
    "DEFAULT_ROUTES_DIR",
    "OUTPUT_FILENAME",
    "RouteTable",
    "RouteTableGenerator",
    "build_route_table",
    "localisable_prefixes",
]
