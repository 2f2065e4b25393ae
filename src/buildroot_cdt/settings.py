"""Runtime settings for a registration pass.

Settings come from three layers, later ones winning:

    1. Built-in defaults (``~/.buildroot-eclipse.toolchains``, abort on
       malformed lines, host-resolved state directory).
    2. An optional YAML settings file.
    3. Explicit overrides (CLI options).

Example settings file::

    toolchains_file: /srv/br/toolchains.list
    malformed_lines: skip
    state_dir: /var/lib/buildroot-cdt
    output_dir: /usr/share/eclipse/dropins/buildroot
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from buildroot_cdt.descriptors.builder import DEFAULT_STATE_DIR
from buildroot_cdt.discovery.ingest import default_toolchains_file
from buildroot_cdt.discovery.models import MalformedLinePolicy
from buildroot_cdt.exceptions import SettingsError

DEFAULT_OUTPUT_DIR = Path("buildroot-cdt-plugins")

_PATH_KEYS = frozenset({"toolchains_file", "output_dir"})


@dataclass(frozen=True)
class Settings:
    """Resolved settings.

    Attributes:
        toolchains_file: Registry file listing installed toolchains.
        malformed_lines: What to do with lines that lack three fields.
        state_dir: Directory the scanner profiles read spec files from.
        output_dir: Where ``DirectorySink`` writes documents.
    """

    toolchains_file: Path = field(default_factory=default_toolchains_file)
    malformed_lines: MalformedLinePolicy = MalformedLinePolicy.ABORT
    state_dir: str = DEFAULT_STATE_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR

    @classmethod
    def load(cls, path: Path | None = None, **overrides: Any) -> Settings:
        """Build settings from an optional YAML file plus overrides.

        ``None`` overrides are ignored so CLI options left unset do not
        mask values from the file.

        Raises:
            SettingsError: The file is unreadable, is not a mapping, or
                holds unknown keys or invalid values.
        """
        values: dict[str, Any] = {}
        if path is not None:
            values.update(_read_yaml(path))
        values.update({k: v for k, v in overrides.items() if v is not None})
        return replace(cls(), **_coerce(values))


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in settings file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")
    return data


def _coerce(values: dict[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise SettingsError(f"Unknown settings: {', '.join(unknown)}")

    coerced: dict[str, Any] = {}
    for key, value in values.items():
        if key in _PATH_KEYS:
            coerced[key] = Path(value).expanduser()
        elif key == "malformed_lines":
            try:
                coerced[key] = MalformedLinePolicy(value)
            except ValueError as exc:
                choices = ", ".join(p.value for p in MalformedLinePolicy)
                raise SettingsError(
                    f"malformed_lines must be one of: {choices} (got {value!r})"
                ) from exc
        else:
            coerced[key] = str(value)
    return coerced
