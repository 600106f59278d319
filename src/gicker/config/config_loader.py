"""
Configuration loader for gicker.

This module finds and loads the optional YAML configuration file and
validates it against the pydantic schema.

"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError
from xdg.BaseDirectory import xdg_config_home

from gicker.config.config_schema import GickerConfig
from gicker.errors import ConfigFileNotFoundError, ConfigParsingError

logger = logging.getLogger(__name__)

LOCAL_CONFIG_NAME = ".gicker.yml"


class ConfigLoader:
	"""
	Loads configuration for gicker.

	A loader is created per run; nothing is cached at module level.

	"""

	def __init__(self, config_file: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
			config_file: Path to configuration file (optional)

		"""
		self._config_file = config_file
		self.resolved_config_file = self._resolve_config_file(config_file)
		self._config = self._load_config()

	@property
	def get(self) -> GickerConfig:
		"""Return the loaded configuration."""
		return self._config

	def _resolve_config_file(self, config_file: Path | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. ./.gicker.yml in the current directory
		2. $XDG_CONFIG_HOME/gicker/config.yml

		Returns:
			Path of the file to load, or None to use defaults

		Raises:
			ConfigFileNotFoundError: If an explicitly given file does not exist

		"""
		if config_file is not None:
			if not config_file.is_file():
				msg = f"Configuration file not found: {config_file}"
				raise ConfigFileNotFoundError(msg)
			return config_file

		candidates = [
			Path.cwd() / LOCAL_CONFIG_NAME,
			Path(xdg_config_home) / "gicker" / "config.yml",
		]
		for candidate in candidates:
			if candidate.is_file():
				return candidate
		return None

	def _load_config(self) -> GickerConfig:
		if self.resolved_config_file is None:
			logger.debug("No configuration file found, using defaults")
			return GickerConfig()

		try:
			with self.resolved_config_file.open(encoding="utf-8") as f:
				data = yaml.safe_load(f)
		except yaml.YAMLError as e:
			msg = f"Error parsing configuration file {self.resolved_config_file}: {_describe_yaml_error(e)}"
			raise ConfigParsingError(msg) from e
		except OSError as e:
			msg = f"Unable to read configuration file {self.resolved_config_file}: {e}"
			raise ConfigParsingError(msg) from e

		if data is None:
			data = {}
		if not isinstance(data, dict):
			msg = f"Configuration file {self.resolved_config_file} must contain a mapping"
			raise ConfigParsingError(msg)

		try:
			config = GickerConfig.model_validate(data)
		except ValidationError as e:
			msg = f"Invalid configuration in {self.resolved_config_file}: {_describe_validation_error(e)}"
			raise ConfigParsingError(msg) from e

		logger.debug("Loaded configuration from %s", self.resolved_config_file)
		return config


def _describe_yaml_error(error: yaml.YAMLError) -> str:
	"""Return a one-line description of a YAML error."""
	problem = getattr(error, "problem", None)
	mark = getattr(error, "problem_mark", None)
	if not problem:
		lines = [line.strip() for line in str(error).splitlines() if line.strip()]
		return lines[0] if lines else type(error).__name__
	if mark is None:
		return problem
	return f"{problem} (line {mark.line + 1}, column {mark.column + 1})"


def _describe_validation_error(error: ValidationError) -> str:
	"""Return a one-line description of schema violations."""
	parts = []
	for err in error.errors():
		location = ".".join(str(part) for part in err["loc"])
		parts.append(f"{location}: {err['msg']}" if location else err["msg"])
	return "; ".join(parts)
