"""Load raw navigation configuration from YAML or JSON files.

Both parsers reject a key repeated within one mapping instead of keeping the
last value, so a doubled ``social`` platform reaches the user as
:class:`~sitenav.errors.DuplicateSocialKeyError`.
"""

from __future__ import annotations

import json
from collections.abc import Hashable
from pathlib import Path
from typing import Final

import yaml
from yaml.constructor import ConstructorError

from sitenav.errors import ConfigLoadError, DuplicateSocialKeyError
from sitenav.logging import get_logger

__all__ = ["load_raw_config"]

LOGGER = get_logger(__name__)

_YAML_SUFFIXES: Final = frozenset({".yaml", ".yml"})
_JSON_SUFFIXES: Final = frozenset({".json"})
_SOCIAL_KEY: Final[str] = "social"
_MERGE_TAG: Final[str] = "tag:yaml.org,2002:merge"


class _RepeatedKeyError(ConstructorError):
    def __init__(self, key: object, *, in_social: bool, mark: yaml.Mark | None) -> None:
        super().__init__(None, None, f"found repeated key {key!r}", mark)
        self.key = key
        self.in_social = in_social


class _UniqueKeyLoader(yaml.SafeLoader):
    """Safe loader that fails on a key repeated within one mapping.

    Keys brought in through ``<<`` merges may still be overridden.
    """

    _root: yaml.Node | None = None

    def construct_document(self, node: yaml.Node) -> object:
        self._root = node
        return super().construct_document(node)

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[object, object]:  # noqa: FBT001, FBT002
        seen: set[object] = set()
        for key_node, _ in node.value:
            if key_node.tag == _MERGE_TAG:
                continue
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise _RepeatedKeyError(key, in_social=self._is_social(node), mark=key_node.start_mark)
            seen.add(key)
        return super().construct_mapping(node, deep=deep)

    def _is_social(self, node: yaml.Node) -> bool:
        root = self._root
        if not isinstance(root, yaml.MappingNode):
            return False
        return any(
            isinstance(key_node, yaml.ScalarNode) and key_node.value == _SOCIAL_KEY and value_node is node
            for key_node, value_node in root.value
        )


class _RepeatedKeyObject(dict[str, object]):
    """Decoded JSON object that repeated ``repeated_key``."""

    repeated_key: str = ""


def _json_object(pairs: list[tuple[str, object]]) -> dict[str, object]:
    mapping: dict[str, object] = {}
    for key, value in pairs:
        if key in mapping:
            repeated = _RepeatedKeyObject(pairs)
            repeated.repeated_key = key
            return repeated
        mapping[key] = value
    return mapping


def _first_repeated_key(value: object) -> str | None:
    if isinstance(value, _RepeatedKeyObject):
        return value.repeated_key
    if isinstance(value, dict):
        children: list[object] = list(value.values())
    elif isinstance(value, list):
        children = value
    else:
        return None
    for child in children:
        found = _first_repeated_key(child)
        if found is not None:
            return found
    return None


def _load_yaml(text: str, *, source: str) -> object:
    try:
        return yaml.load(text, Loader=_UniqueKeyLoader)  # noqa: S506
    except _RepeatedKeyError as exc:
        if exc.in_social:
            raise DuplicateSocialKeyError(str(exc.key)) from exc
        msg = f"Configuration file '{source}' repeats the key '{exc.key}'"
        raise ConfigLoadError(msg, source=source, cause=exc) from exc


def _load_json(text: str, *, source: str) -> object:
    loaded = json.loads(text, object_pairs_hook=_json_object)
    if isinstance(loaded, dict):
        social = loaded.get(_SOCIAL_KEY)
        if isinstance(social, _RepeatedKeyObject):
            raise DuplicateSocialKeyError(social.repeated_key)
    repeated = _first_repeated_key(loaded)
    if repeated is not None:
        msg = f"Configuration file '{source}' repeats the key '{repeated}'"
        raise ConfigLoadError(msg, source=source)
    return loaded


def load_raw_config(path: Path | str) -> dict[str, object]:
    """Read the configuration file at ``path`` into an untyped mapping.

    The result still has to go through :func:`sitenav.validator.validate_config`.

    Raises
    ------
    ConfigLoadError
        If the file is missing, has an unsupported suffix, does not parse,
        repeats a key within one mapping, or does not contain a mapping at
        the top level.
    DuplicateSocialKeyError
        If the ``social`` mapping names a platform twice.
    """
    config_path = Path(path)
    source = str(config_path)
    suffix = config_path.suffix.lower()
    if suffix not in _YAML_SUFFIXES | _JSON_SUFFIXES:
        msg = f"Unsupported configuration format '{suffix or config_path.name}'; use YAML or JSON"
        raise ConfigLoadError(msg, source=source)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read configuration file '{source}'"
        raise ConfigLoadError(msg, source=source, cause=exc) from exc

    try:
        if suffix in _YAML_SUFFIXES:
            loaded = _load_yaml(text, source=source)
        else:
            loaded = _load_json(text, source=source)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        msg = f"Configuration file '{source}' does not parse"
        raise ConfigLoadError(msg, source=source, cause=exc) from exc

    if not isinstance(loaded, dict):
        msg = f"Configuration file '{source}' must contain a mapping at the top level"
        raise ConfigLoadError(msg, source=source)
    LOGGER.debug("Configuration loaded", extra={"operation": "config_load", "source": source})
    return loaded
