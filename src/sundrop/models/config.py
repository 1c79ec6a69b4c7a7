"""Configuration models for the sundrop sprite bundler.

Defines Pydantic models for the icon search settings, the full build
configuration, and logging options. Configuration values are immutable once
validated; every build receives one of these objects as a plain value.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sundrop.constants import DEFAULT_ID_PREFIX, DEFAULT_SEARCH_PATTERN, FILE_READ_BATCH_SIZE


def _normalize_path(path: str | Path) -> Path:
    """Convert a string path to a Path object.

    Internal utility function to avoid circular imports with path_utils.

    Args:
        path: String or Path object

    Returns:
        A Path object.
    """
    return Path(path) if isinstance(path, str) else path


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "console"
    max_size_mb: int = 5
    backup_count: int = 3

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the log format is one of the supported renderers.

        Args:
            v: The log format string.

        Returns:
            The validated, lower-cased format.

        Raises:
            ValueError: If the format is not "json" or "console".
        """
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v.lower()


class SearchConfig(BaseModel):
    """Icon search configuration.

    Attributes:
        cwd: Base directory for relative source locations and the scan glob
        paths: Filesystem paths or package identifiers holding icon SVGs
        aliases: Alternate names for icons, mapping alias -> icon name
        id_prefix: Prefixes registered for every icon; also used for output ids
        search_pattern: Glob of project files scanned for icon references
        scan_batch_size: Number of project files read concurrently
    """

    model_config = ConfigDict(frozen=True)

    cwd: Path = Field(default_factory=Path.cwd)
    paths: list[str] = Field(default_factory=list)
    aliases: dict[str, str] = Field(default_factory=dict)
    id_prefix: list[str] = Field(default_factory=list)
    search_pattern: str = DEFAULT_SEARCH_PATTERN
    scan_batch_size: int = FILE_READ_BATCH_SIZE

    @field_validator("cwd", mode="before")
    @classmethod
    def validate_cwd(cls, v: str | Path | None) -> Path:
        """Resolve the working directory to an absolute path.

        Args:
            v: The configured working directory, or None for the process cwd.

        Returns:
            The absolute working directory.
        """
        if v is None:
            return Path.cwd()
        return _normalize_path(v).resolve()

    @field_validator("id_prefix", mode="before")
    @classmethod
    def validate_id_prefix(cls, v: str | list[str] | None) -> list[str]:
        """Normalize a single prefix string to a list of prefixes.

        Args:
            v: A prefix, a list of prefixes, or None.

        Returns:
            The list of non-empty prefixes.
        """
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v else []
        return [prefix for prefix in v if prefix]

    @field_validator("scan_batch_size")
    @classmethod
    def validate_scan_batch_size(cls, v: int) -> int:
        """Validate the scan batch size is positive.

        Args:
            v: The batch size.

        Returns:
            The validated batch size.

        Raises:
            ValueError: If the batch size is less than 1.
        """
        if v < 1:
            raise ValueError("Scan batch size must be at least 1")
        return v

    @property
    def id_prefixes(self) -> list[str]:
        """Prefixes registered for every indexed icon."""
        return list(self.id_prefix)

    @property
    def output_prefix(self) -> str:
        """Prefix for the ids written into the sprite sheet (the first configured prefix)."""
        return self.id_prefix[0] if self.id_prefix else ""


class BuildConfig(SearchConfig):
    """Full configuration for one sprite sheet build.

    Attributes:
        out: Output file for the sprite sheet, relative to cwd unless absolute
        strict_aliases: Fail the build when an alias targets an unknown icon
        logging: Logging options
    """

    out: Path
    id_prefix: list[str] = Field(default_factory=lambda: [DEFAULT_ID_PREFIX])
    strict_aliases: bool = False
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def output_path(self) -> Path:
        """Absolute path of the sprite sheet."""
        return self.out if self.out.is_absolute() else self.cwd / self.out

    @classmethod
    def from_file(cls, config_path: str | Path, **overrides: Any) -> "BuildConfig":
        """Load configuration from a YAML (or JSON) file.

        Values passed as keyword arguments override the ones from the file;
        overrides set to None are ignored.

        Args:
            config_path: Path to the configuration file.
            **overrides: Field values taking precedence over the file.

        Returns:
            A validated BuildConfig.

        Raises:
            ConfigFileNotFoundError: If the file does not exist.
            InvalidConfigError: If the file is not a mapping or fails validation.
        """
        import yaml

        from sundrop.exceptions import ConfigFileNotFoundError, InvalidConfigError, chain_exception
        from sundrop.utils.file_utils import read_text

        path = _normalize_path(config_path)
        if not path.is_file():
            raise ConfigFileNotFoundError(
                f"Configuration file not found: {path}", {"path": str(path)}
            )

        try:
            config_data = yaml.safe_load(read_text(path)) or {}
        except yaml.YAMLError as e:
            raise chain_exception(
                InvalidConfigError(f"Configuration file is not valid YAML: {path}", {"path": str(path)}),
                e,
            )

        if not isinstance(config_data, dict):
            raise InvalidConfigError(
                f"Configuration file must contain a mapping: {path}", {"path": str(path)}
            )

        # Relative cwd entries in a config file are relative to the file itself
        if "cwd" in config_data and config_data["cwd"] is not None:
            config_data["cwd"] = path.parent / str(config_data["cwd"])

        config_data.update({key: value for key, value in overrides.items() if value is not None})
        return cls.validate_data(config_data, source=str(path))

    @classmethod
    def validate_data(cls, data: dict[str, Any], source: str | None = None) -> "BuildConfig":
        """Validate raw configuration data, raising the domain configuration error.

        Args:
            data: Raw configuration mapping.
            source: Where the data came from, for error details.

        Returns:
            A validated BuildConfig.

        Raises:
            InvalidConfigError: If validation fails.
        """
        from sundrop.exceptions import InvalidConfigError, chain_exception

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            raise chain_exception(
                InvalidConfigError("Invalid configuration", {"source": source, "errors": errors}),
                e,
            )
