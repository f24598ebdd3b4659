# pyright: reportExplicitAny=false, reportAny=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing ffhost configuration values.
"""

from pathlib import Path
from typing import Any, ClassVar, Self, TypeVar, overload

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from ffhost.config._defaults import DEFAULT_CONFIG
from ffhost.config._loader import deep_merge, parse_env_vars, read_toml_file
from ffhost.config._models._common import ConfigSource, ConfigSourceName
from ffhost.config._models._logging import LoggingConfig
from ffhost.config._models._provision import ProvisionConfig
from ffhost.config._models._supervisor import SupervisorConfig
from ffhost.exceptions import ConfigValidationError

T = TypeVar("T")


def _validation_error(
    error: ValidationError,
    data: dict[str, Any],
    source: str | None,
) -> ConfigValidationError:
    """Convert the first pydantic error into a ConfigValidationError."""
    first = error.errors()[0]
    key = ".".join(str(part) for part in first["loc"])

    value: Any = data
    for part in first["loc"]:
        value = value.get(part) if isinstance(value, dict) else None

    location = f" in {source}" if source else ""
    msg = f"Invalid value for '{key}'{location}: {first['msg']}"
    return ConfigValidationError(
        msg,
        key=key,
        value=value,
        expected=first["type"],
        source=source,
    )


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to ffhost configuration.
    Use factory methods to create instances rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    provision: ProvisionConfig = ProvisionConfig()
    supervisor: SupervisorConfig = SupervisorConfig()

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def _build(
        cls,
        merged: dict[str, Any],
        sources: tuple[ConfigSource, ...],
        *,
        source: str | None = None,
    ) -> Self:
        try:
            config = cls.model_validate(merged)
        except ValidationError as e:
            raise _validation_error(e, merged, source) from e
        config._sources = sources
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return cls._build(deep_merge(DEFAULT_CONFIG, data), ())

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.

        Returns:
            Configuration object from the specified file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT,
            path=path,
            exists=True,
            values=data,
        )
        return cls._build(
            deep_merge(DEFAULT_CONFIG, data),
            (source,),
            source=str(path),
        )

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | None = None,
        include_env: bool = True,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources merge in precedence order (defaults -> project -> env -> cli).

        Args:
            project_root: Project root directory holding ffhost.toml.
                Defaults to the current working directory.
            include_env: Include FFHOST_* environment variables as a source.
            cli_overrides: Dict of CLI argument overrides.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If the project file cannot be parsed.
            ConfigValidationError: If merged config fails validation.
        """
        from ffhost.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            project_root=project_root,
            include_env=include_env,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        # Discovery returns highest precedence first
        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path is not None:
                if source.exists:
                    values = read_toml_file(source.path)
            else:
                values = source.values

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )

            if values:
                merged = deep_merge(merged, values)

        return cls._build(merged, tuple(reversed(loaded_sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration."""
        return list(self._sources)

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("supervisor.port")
            3005
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self.model_dump(mode="json")

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")
