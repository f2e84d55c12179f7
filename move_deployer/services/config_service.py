"""Configuration loading and merging service"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import tomli

from ..api.exceptions import ConfigInvariantError
from ..constants import ENV_PRIVATE_KEY
from ..core.report_writer import load_report
from ..models.config import DeployConfig

logger = logging.getLogger(__name__)


def parse_address_map(value: Optional[str]) -> Dict[str, str]:
    """
    Parse ``name=address`` pairs separated by commas

    Raises:
        ConfigInvariantError: If a pair is malformed
    """
    result = {}
    if not value:
        return result

    for pair in value.split(','):
        pair = pair.strip()
        if not pair:
            continue
        name, sep, address = pair.partition('=')
        if not sep or not name.strip() or not address.strip():
            raise ConfigInvariantError(f"Invalid address mapping '{pair}', expected name=address")
        result[name.strip()] = address.strip()

    return result


class ConfigService:
    """Builds a run configuration from a config file and explicit overrides"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize config service

        Args:
            config_path: Optional TOML configuration file
        """
        self.config_path = Path(config_path) if config_path else None

    def load_file(self) -> Dict[str, Any]:
        """Load raw values from the configuration file

        Returns:
            Parsed values, empty when no file is configured

        Raises:
            ConfigInvariantError: If the file is missing or not valid TOML
        """
        if self.config_path is None:
            return {}

        if not self.config_path.is_file():
            raise ConfigInvariantError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, 'rb') as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigInvariantError(f"Invalid configuration file {self.config_path}: {e}")

        logger.debug("Loaded configuration from %s", self.config_path)
        return data

    def build(self,
              overrides: Optional[Dict[str, Any]] = None,
              resume_from: Optional[Union[str, Path]] = None) -> DeployConfig:
        """Merge defaults, file values and overrides into a config

        Overrides set to None are ignored so that file values survive.
        Addresses from a previous report have the lowest priority; its
        records are kept on the config so the new report carries them on.

        Args:
            overrides: Explicitly given values (e.g. from the command line)
            resume_from: Report of a previous run to resume from

        Returns:
            DeployConfig (not yet validated)
        """
        data = self.load_file()

        file_addresses = dict(data.get("deployed_addresses") or {})
        override_addresses = {}

        for key, value in (overrides or {}).items():
            if value is None:
                continue
            if key == "deployed_addresses":
                override_addresses = dict(value)
                continue
            data[key] = value

        resumed = {}
        if resume_from:
            try:
                previous = load_report(resume_from)
            except (OSError, ValueError) as e:
                raise ConfigInvariantError(f"Cannot resume from {resume_from}: {e}")
            resumed = previous.address_map()
            data["resumed_records"] = previous.info
            logger.info("Resuming with %d deployed address(es) from %s", len(resumed), resume_from)

        data["deployed_addresses"] = {**resumed, **file_addresses, **override_addresses}

        if not data.get("private_key") and os.environ.get(ENV_PRIVATE_KEY):
            data["private_key"] = os.environ[ENV_PRIVATE_KEY]

        return DeployConfig.from_dict(data)
