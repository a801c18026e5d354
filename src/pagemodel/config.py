"""
Configuration for content resolution.

Provides validated Pydantic models for wait behaviour and template defaults,
plus a loader that reads them from a YAML (or JSON) file with optional
per-environment sections and environment variable overrides.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationLoadError, ContentDefinitionError
from .waiting import Wait

load_dotenv()  # Loads variables from .env file

logger = logging.getLogger(__name__)

WaitSpec = Union[None, bool, int, float, str, Tuple[float, float]]


class WaitSettings(BaseModel):
    """Timeout and polling interval of a wait, in seconds."""

    model_config = ConfigDict(validate_assignment=True)

    timeout: float = Field(
        default=5.0,
        description="Seconds to keep polling before giving up",
        gt=0,
    )

    retry_interval: float = Field(
        default=0.1,
        description="Seconds between two polls",
        gt=0,
    )

    def to_wait(self) -> Wait:
        return Wait(timeout=self.timeout, retry_interval=self.retry_interval)


class TemplateDefaults(BaseModel):
    """Option values used by content that does not set them explicitly."""

    model_config = ConfigDict(validate_assignment=True)

    cache: bool = Field(
        default=True,
        description="Memoize resolved content per owning instance",
    )

    required: bool = Field(
        default=True,
        description="Fail when content resolves to nothing",
    )

    wait: Union[bool, float, str] = Field(
        default=False,
        description="Wait for content: true, a timeout in seconds or a preset name",
    )


class Configuration(BaseModel):
    """
    Runtime configuration shared by a page and every module inside it.

    All fields are validated by Pydantic.
    """

    model_config = ConfigDict(validate_assignment=True)

    wait: WaitSettings = Field(
        default_factory=WaitSettings,
        description="Settings used by wait=True",
    )

    wait_presets: Dict[str, WaitSettings] = Field(
        default_factory=dict,
        description="Named waits, selected with wait='<name>'",
    )

    template_options: TemplateDefaults = Field(
        default_factory=TemplateDefaults,
        description="Defaults for cache, required and wait",
    )

    environment: Optional[str] = Field(
        default=None,
        description="Environment the configuration was loaded for",
    )

    def wait_for(self, value: WaitSpec) -> Optional[Wait]:
        """
        Build the Wait described by a content ``wait`` option.

        Args:
            value: False/None (no wait), True (default wait), a number
                (timeout in seconds), a preset name, or a
                ``(timeout, retry_interval)`` pair

        Returns:
            Wait instance, or None when no waiting is requested

        Raises:
            ContentDefinitionError: If ``value`` names an unknown preset
        """
        if value is None or value is False:
            return None
        if value is True:
            return self.wait.to_wait()
        if isinstance(value, str):
            preset = self.wait_presets.get(value)
            if preset is None:
                raise ContentDefinitionError(
                    f"Unknown wait preset '{value}' "
                    f"(known: {sorted(self.wait_presets)})"
                )
            return preset.to_wait()
        if isinstance(value, tuple):
            timeout, retry_interval = value
            return Wait(timeout=float(timeout), retry_interval=float(retry_interval))
        return Wait(timeout=float(value), retry_interval=self.wait.retry_interval)


# Environment variables overriding file values, mapped to config paths
PROPERTY_OVERRIDES = {
    "PAGEMODEL_WAIT_TIMEOUT": ("wait", "timeout"),
    "PAGEMODEL_WAIT_RETRY_INTERVAL": ("wait", "retry_interval"),
    "PAGEMODEL_TEMPLATE_CACHE": ("template_options", "cache"),
    "PAGEMODEL_TEMPLATE_REQUIRED": ("template_options", "required"),
}


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(dict(merged[key]), value)
        else:
            merged[key] = value
    return merged


class ConfigurationLoader:
    """
    Creates Configuration objects from configuration files.

    A configuration file is a YAML mapping of Configuration fields. It may
    carry an ``environments`` mapping whose section for the active
    environment is merged over the top-level values:

        wait:
          timeout: 5
        environments:
          ci:
            wait:
              timeout: 20
    """

    DEFAULT_CONFIG_PATH = "pagemodel.yaml"
    ENVIRONMENT_VARIABLE = "PAGEMODEL_ENV"

    def __init__(
        self,
        environment: Optional[str] = None,
        properties: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the loader.

        Args:
            environment: Environment section to apply. Defaults to the
                PAGEMODEL_ENV environment variable.
            properties: Override values. Defaults to os.environ.
        """
        self.environment = environment or self.get_default_environment()
        self.properties = (
            properties if properties is not None else self.get_default_properties()
        )

    def get_default_environment(self) -> Optional[str]:
        return os.getenv(self.ENVIRONMENT_VARIABLE)

    def get_default_properties(self) -> Mapping[str, str]:
        return dict(os.environ)

    def get_conf(self, path: Optional[Union[str, Path]] = None) -> Configuration:
        """
        Create a configuration backed by the file at ``path``.

        A missing file yields the default configuration.

        Args:
            path: Configuration file path (defaults to DEFAULT_CONFIG_PATH)

        Raises:
            ConfigurationLoadError: If the file exists but could not be
                read, parsed or validated
        """
        config_path = Path(path or self.DEFAULT_CONFIG_PATH)
        if not config_path.exists():
            logger.debug(f"No configuration at {config_path}, using defaults")
            return self.create_conf({}, config_path)
        return self.create_conf(self.load_raw_config(config_path), config_path)

    def load_raw_config(self, path: Path) -> Dict[str, Any]:
        """Read the file at ``path`` and apply the active environment section."""
        try:
            with open(path, "r") as f:
                raw = yaml.safe_load(f) or {}
            if not isinstance(raw, Mapping):
                raise ValueError(f"expected a mapping, got {type(raw).__name__}")
        except (OSError, yaml.YAMLError, ValueError) as e:
            raise ConfigurationLoadError(path, self.environment) from e

        raw = dict(raw)
        environments = raw.pop("environments", None) or {}
        if self.environment and self.environment in environments:
            logger.debug(f"Applying '{self.environment}' section of {path}")
            raw = _deep_merge(raw, environments[self.environment])
        return raw

    def create_conf(self, raw: Mapping[str, Any], location: Any = None) -> Configuration:
        """Validate ``raw`` with property overrides applied."""
        values = _deep_merge({}, raw)
        for variable, (section, key) in PROPERTY_OVERRIDES.items():
            if variable in self.properties:
                values.setdefault(section, {})
                values[section] = dict(values[section], **{key: self.properties[variable]})
        values["environment"] = self.environment
        try:
            return Configuration.model_validate(values)
        except ValidationError as e:
            raise ConfigurationLoadError(location, self.environment) from e
