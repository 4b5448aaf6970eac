"""Expansion options and their YAML configuration file."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import attrs
import yaml

from ssinclude.file_types import FileTypeMap, merge_file_type_map

DEFAULT_MAX_DEPTH = 10

# Accepted spellings for each option; the camelCase forms match bundler-style configs.
OPTION_ALIASES = {
    "max_depth": "max_depth",
    "maxDepth": "max_depth",
    "include_file_types": "include_file_types",
    "includeFileTypes": "include_file_types",
    "file_type_map": "file_type_map",
    "fileTypeMap": "file_type_map",
}


class ConfigError(ValueError):
    """Invalid expansion configuration."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(f"{source}: {message}" if source else message)
        self.source = source


def _check_max_depth(_instance: Any, _attribute: Any, value: Any) -> None:
    # bool is an int subclass but never a meaningful depth.
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"max_depth must be a positive integer, got {value!r}"
        raise ConfigError(msg)


def _check_type_names(_instance: Any, _attribute: Any, value: tuple[str, ...]) -> None:
    for name in value:
        if not isinstance(name, str) or not name:
            msg = f"include_file_types entries must be non-empty strings, got {name!r}"
            raise ConfigError(msg)


def _to_type_names(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Iterable):
        msg = f"include_file_types must be a list of type names, got {value!r}"
        raise ConfigError(msg)
    return tuple(value)


def _to_file_type_map(value: Any) -> FileTypeMap:
    if value is None:
        return merge_file_type_map()
    if not isinstance(value, Mapping):
        msg = f"file_type_map must be a mapping of type name to extensions, got {value!r}"
        raise ConfigError(msg)
    for type_name, extensions in value.items():
        if not isinstance(type_name, str):
            msg = f"file_type_map keys must be strings, got {type_name!r}"
            raise ConfigError(msg)
        if isinstance(extensions, str) or not isinstance(extensions, Iterable):
            msg = f"file_type_map[{type_name!r}] must be a list of extensions"
            raise ConfigError(msg)
        for ext in extensions:
            if not isinstance(ext, str) or not ext.startswith("."):
                msg = f"file_type_map[{type_name!r}] has invalid extension {ext!r}"
                raise ConfigError(msg)
    return merge_file_type_map(value)


@attrs.define(frozen=True)
class SsiOptions:
    """Settings consumed by the expander.

    ``file_type_map`` always holds a merged copy of the default table, so
    instances never share or mutate it.
    """

    max_depth: int = attrs.field(default=DEFAULT_MAX_DEPTH, validator=_check_max_depth)
    include_file_types: tuple[str, ...] = attrs.field(
        default=(),
        converter=_to_type_names,
        validator=_check_type_names,
    )
    file_type_map: FileTypeMap = attrs.field(default=None, converter=_to_file_type_map)

    @classmethod
    def create(
        cls,
        max_depth: int | None = None,
        include_file_types: Iterable[str] | None = None,
        file_type_map: Mapping[str, Iterable[str]] | None = None,
    ) -> SsiOptions:
        """Build options, falling back to defaults for anything left as None."""
        return cls(
            max_depth=DEFAULT_MAX_DEPTH if max_depth is None else max_depth,
            include_file_types=include_file_types,
            file_type_map=file_type_map,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str | None = None) -> SsiOptions:
        """Build options from a plain mapping (snake_case or camelCase keys)."""
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = OPTION_ALIASES.get(key)
            if name is None:
                msg = f"unknown option {key!r}"
                raise ConfigError(msg, source)
            kwargs[name] = value
        try:
            return cls.create(**kwargs)
        except ConfigError as e:
            if source and e.source is None:
                raise ConfigError(str(e), source) from None
            raise

    def evolve(self, **changes: Any) -> SsiOptions:
        """Return a copy with ``changes`` applied (None values are ignored)."""
        updates = {key: value for key, value in changes.items() if value is not None}
        return attrs.evolve(self, **updates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_depth": self.max_depth,
            "include_file_types": list(self.include_file_types),
            "file_type_map": {name: list(exts) for name, exts in self.file_type_map.items()},
        }


def load_config(path: str | Path) -> SsiOptions:
    """Load options from a YAML file. An empty file yields the defaults."""
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"cannot read config file: {e.strerror or e}"
        raise ConfigError(msg, str(config_path)) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"invalid YAML: {e}"
        raise ConfigError(msg, str(config_path)) from e

    if data is None:
        return SsiOptions()
    if not isinstance(data, Mapping):
        msg = "top level of the config file must be a mapping"
        raise ConfigError(msg, str(config_path))

    return SsiOptions.from_mapping(data, source=str(config_path))
