from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

DEFAULT_CONFIG_NAME = "variantgen.toml"
DEFAULT_DIRECTIVE_TAG = "vgen"
DEFAULT_RUNTIME_MODULE = "variantgen.runtime"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


@dataclass(frozen=True)
class GeneratorConfig:
    directive_tag: str = DEFAULT_DIRECTIVE_TAG
    runtime_module: str = DEFAULT_RUNTIME_MODULE


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def generate_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("generate", {})
    return section if isinstance(section, dict) else {}


def is_dotted_name(value: TomlValue) -> bool:
    if not isinstance(value, str) or not value:
        return False
    return all(part.isidentifier() for part in value.split("."))


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def generator_config_from_section(section: TomlTable | None) -> GeneratorConfig:
    if not isinstance(section, dict):
        return GeneratorConfig()
    tag = section.get("directive_tag")
    runtime_module = section.get("runtime_module")
    return GeneratorConfig(
        directive_tag=tag if isinstance(tag, str) and tag.isidentifier() else DEFAULT_DIRECTIVE_TAG,
        runtime_module=(
            runtime_module if is_dotted_name(runtime_module) else DEFAULT_RUNTIME_MODULE
        ),
    )


def generator_config(
    root: Path | None = None,
    config_path: Path | None = None,
    overrides: TomlTable | None = None,
) -> GeneratorConfig:
    section = generate_defaults(root=root, config_path=config_path)
    if overrides:
        section = merge_payload(overrides, section)
    return generator_config_from_section(section)
