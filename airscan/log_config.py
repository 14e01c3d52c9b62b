# (c) Copyright Datacraft, 2026
"""Logging setup for applications embedding the client."""
import logging
from logging.config import dictConfig
from pathlib import Path

import yaml

from airscan.config import get_settings

DEFAULT_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(path: Path | None = None, level: int = logging.INFO) -> bool:
	"""
	Configure logging from a YAML dictConfig file.

	Falls back to the configured ``log_config`` setting, and to
	``logging.basicConfig`` when no file is available.

	Returns:
		True if the YAML file was applied
	"""
	if path is None:
		path = get_settings().log_config

	if path is not None and path.exists() and path.is_file():
		with open(path, "r") as stream:
			config = yaml.load(stream, Loader=yaml.FullLoader)

		dictConfig(config)
		return True

	logging.basicConfig(level=level, format=DEFAULT_FORMAT)
	return False
