"""Typed configuration loading and access.

This module provides dataclasses for the ``miniship.toml`` structure. The
same ``Config.from_dict`` reads the per-application configuration document
kept in the metadata store, which shares the layout:

    [codepush]
    app_name = "Shop-Android"
    deployments = ["Staging", "Production"]
    binary = "node_modules/.bin/code-push"

    [container]
    generator = "maven"
    url = "https://repo.example.com/releases"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "CodePushConfig",
    "Config",
    "ConfigError",
    "GeneratorConfig",
    "GeneratorName",
    "load_config",
]

CONFIG_FILE_NAME = "miniship.toml"
DEFAULT_CODEPUSH_BINARY = "code-push"

GeneratorName = Literal["maven", "github"]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Container generator selection.

    ``url`` is the maven repository URL for ``maven`` and the target git
    repository URL for ``github``. None means the generator default.
    """

    name: GeneratorName
    url: str | None = None


@dataclass(frozen=True, slots=True)
class CodePushConfig:
    app_name: str | None = None
    deployments: tuple[str, ...] = ()
    binary: str = DEFAULT_CODEPUSH_BINARY


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    codepush: CodePushConfig = field(default_factory=CodePushConfig)
    container: GeneratorConfig | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML or a store document).

        Raises:
            ValueError: If the container generator name is unknown.
        """
        codepush: StrDict = get_table(data, "codepush") or {}
        container: StrDict | None = get_table(data, "container")

        generator: GeneratorConfig | None = None
        if container is not None:
            name = get_str(container, "generator")
            if name not in ("maven", "github"):
                raise ValueError(f"unknown container generator: {name!r}")
            generator = GeneratorConfig(name=name, url=get_str(container, "url"))

        return cls(
            codepush=CodePushConfig(
                app_name=get_str(codepush, "app_name"),
                deployments=tuple(get_str_list(codepush, "deployments") or ()),
                binary=get_str(codepush, "binary") or DEFAULT_CODEPUSH_BINARY,
            ),
            container=generator,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to miniship.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
