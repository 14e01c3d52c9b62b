# (c) Copyright Datacraft, 2026
"""Client settings configuration."""
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from airscan.version import __version__


class Settings(BaseSettings):
	user_agent: str = f"airscan-python/{__version__}"
	root_path: str = '/eSCL'

	# Connection
	dial_timeout: float = Field(gt=0, default=30.0)
	# None: wait for slow devices as long as they keep the connection open
	request_timeout: float | None = Field(gt=0, default=None)
	max_connections: int = Field(gt=0, default=4)

	# TLS
	skip_cert_verify: bool = False

	log_config: Path | None = None

	model_config = SettingsConfigDict(
		env_prefix='airscan_',
		env_file='.env',
		env_file_encoding='utf-8',
		extra='ignore',
	)


_settings: Settings | None = None


def get_settings() -> Settings:
	global _settings
	if _settings is None:
		_settings = Settings()
	return _settings
