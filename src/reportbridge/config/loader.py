"""Layered configuration for ingestion runs.

Later layers override earlier ones, key by key inside each section:

- built-in defaults
- ``~/.config/reportbridge/config.yaml``
- ``<base_dir>/.reportbridge/config.yaml``
- ``REPORTBRIDGE__<SECTION>__<KEY>`` environment variables
- keyword arguments to :func:`load_config`
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from reportbridge.config.constants import CONFIG_DIR_NAME
from reportbridge.config.models import (
    LoggingConfig,
    ProjectConfig,
    ReportBridgeConfig,
    ReportsConfig,
)
from reportbridge.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/reportbridge/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    """Mapping stored in a YAML file; empty when the file is missing or blank."""
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class _YamlLayers(PydanticBaseSettingsSource):
    """Settings source built from YAML files, later files winning."""

    def __init__(self, settings_cls: type[BaseSettings], paths: tuple[Path, ...]) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        for path in paths:
            self._data = _deep_merge(self._data, _load_yaml(path))

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:  # noqa: ARG002
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        fields = self.settings_cls.model_fields
        return {name: value for name, value in self._data.items() if name in fields}


class _Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="REPORTBRIDGE__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    project: ProjectConfig = ProjectConfig()
    reports: ReportsConfig = ReportsConfig()


def _settings_with_yaml(paths: tuple[Path, ...]) -> type[_Settings]:
    # Sources are resolved per class, so each load gets its own subclass
    yaml_source = _YamlLayers(_Settings, paths)

    class _LoadedSettings(_Settings):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],  # noqa: ARG003
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, yaml_source)

    return _LoadedSettings


def _as_config_error(e: ValidationError) -> ConfigError:
    first = e.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return ConfigError.invalid_value(field, first.get("input"), first["msg"])


def load_config(base_dir: Path | None = None, **kwargs: Any) -> ReportBridgeConfig:
    """Resolve the configuration for a project.

    Args:
        base_dir: Project directory whose ``.reportbridge/config.yaml`` is
            read. Defaults to the working directory.
        **kwargs: Section overrides, e.g. ``reports={"tailor": {"enabled": False}}``.

    Raises:
        ConfigError: A YAML file is malformed or a value fails validation.
    """
    repo_file = (base_dir or Path.cwd()) / CONFIG_DIR_NAME / "config.yaml"
    settings_cls = _settings_with_yaml((GLOBAL_CONFIG_PATH, repo_file))
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        raise _as_config_error(e) from e
    return ReportBridgeConfig.model_validate(settings.model_dump())


def resolve_root_directory(config: ReportBridgeConfig, base_dir: Path) -> Path:
    """Directory that relative paths inside reports are joined to.

    Defaults to ``base_dir``; a relative ``project.root_directory`` is taken
    relative to it.
    """
    configured = config.project.root_directory
    if configured is None:
        return base_dir
    root = Path(configured).expanduser()
    return root if root.is_absolute() else base_dir / root
