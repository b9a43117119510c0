"""Tool configuration loaded from YAML."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import yaml

from sbomscan.core.errors import ConfigError

DEFAULT_CONFIG_PATH = pathlib.Path("config/sbomscan.yml")
DEFAULT_CYCLONEDX_PLUGIN = "org.cyclonedx:cyclonedx-maven-plugin:2.7.9"


@dataclass(frozen=True)
class ToolConfig:
    maven: str = "mvn"
    osv_scanner: str = "osv-scanner"
    cyclonedx_plugin: str = DEFAULT_CYCLONEDX_PLUGIN
    maven_options: Tuple[str, ...] = field(default_factory=tuple)

    def required_tools(self) -> List[str]:
        return [self.maven, self.osv_scanner]


def load_tool_config(path: pathlib.Path) -> ToolConfig:
    """Read the ``tools`` section of *path*; a missing file yields the defaults."""

    if not path.exists():
        return ToolConfig()
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    tools = data.get("tools") or {}
    if not isinstance(tools, dict):
        raise ConfigError(f"'tools' in {path} must be a mapping")
    return _build(tools, path)


def _build(tools: Dict[str, Any], path: pathlib.Path) -> ToolConfig:
    defaults = ToolConfig()
    unknown = sorted(set(tools) - {"maven", "osv_scanner", "cyclonedx_plugin", "maven_options"})
    if unknown:
        raise ConfigError(f"Unknown tool settings in {path}: {', '.join(unknown)}")
    options = tools.get("maven_options") or []
    if isinstance(options, str):
        options = options.split()
    if not isinstance(options, list):
        raise ConfigError(f"'maven_options' in {path} must be a list")
    return ToolConfig(
        maven=_string(tools, "maven", defaults.maven, path),
        osv_scanner=_string(tools, "osv_scanner", defaults.osv_scanner, path),
        cyclonedx_plugin=_string(tools, "cyclonedx_plugin", defaults.cyclonedx_plugin, path),
        maven_options=tuple(str(option) for option in options),
    )


def _string(tools: Dict[str, Any], key: str, default: str, path: pathlib.Path) -> str:
    value = tools.get(key)
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{key}' in {path} must be a non-empty string")
    return value.strip()
