"""Settings loading and validation for YAML-based bluectl configuration."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from bluectl.core.errors import SettingsLoadError, SettingsValidationError
from bluectl.core.model import DiscoveryDefaults, Settings, WaitDefaults

SETTINGS_FILENAME = "settings.yaml"
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

# Only explicit true/false count as booleans; "yes", "no", "on", "off" stay strings.
for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag != "tag:yaml.org,2002:bool"
    ]


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise SettingsValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("bluectl.schemas").joinpath("settings.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def user_settings_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "bluectl" / SETTINGS_FILENAME


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsLoadError(f"Could not read settings file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise SettingsValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise SettingsValidationError(f"Settings file {path} must contain a mapping at root")
    return loaded


def _normalize_bool(value: Any, *, context: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise SettingsValidationError(f"{context} must be boolean true/false")


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _validate(doc: dict[str, Any], source: Path | Traversable) -> None:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise SettingsValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc


def _build_settings(doc: dict[str, Any]) -> Settings:
    wait = doc.get("wait", {})
    discovery = doc.get("discovery", {})
    return Settings(
        adapter=doc.get("adapter"),
        wait=WaitDefaults(
            timeout_s=float(wait.get("timeout_s", WaitDefaults.timeout_s)),
            poll_interval_s=float(wait.get("poll_interval_s", WaitDefaults.poll_interval_s)),
        ),
        discovery=DiscoveryDefaults(
            transport=discovery.get("transport", DiscoveryDefaults.transport),
            duplicate_data=_normalize_bool(
                discovery.get("duplicate_data", DiscoveryDefaults.duplicate_data),
                context="discovery.duplicate_data",
            ),
        ),
    )


def _packaged_settings_path() -> Traversable:
    return resources.files("bluectl.defaults").joinpath(SETTINGS_FILENAME)


def load_settings() -> LoadedSettings:
    warnings: list[str] = []

    packaged = _packaged_settings_path()
    doc = _read_yaml(packaged)
    _validate(doc, packaged)

    user_path = user_settings_path()
    if user_path.is_file():
        user_doc = _read_yaml(user_path)
        _validate(user_doc, user_path)
        for key in sorted(set(user_doc) - {"adapter", "wait", "discovery"}):
            warning = f"Ignoring unknown settings key '{key}' in {user_path}"
            LOGGER.warning(warning)
            warnings.append(warning)
        doc = _merge(doc, user_doc)
        LOGGER.debug("Loaded user settings from %s", user_path)

    return LoadedSettings(settings=_build_settings(doc), warnings=tuple(warnings))
