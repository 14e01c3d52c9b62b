# (c) Copyright Datacraft, 2026
"""Client for eSCL (AirScan) network document scanners."""
import logging

from .base import (
	ScanSettings, ScanRegion, ScannerStatus, JobState,
	InputSource, ColorMode, DocumentFormat, ScannerState, AdfState,
)
from .capabilities import ScannerCapabilities, ADFCapabilities, InputCaps, Resolution
from .client import Client
from .config import Settings, get_settings
from .dialer import FallbackDialer, check_candidates
from .discovery import DiscoveredScanner, SERVICE_TYPE, SECURE_SERVICE_TYPE
from .exceptions import (
	AirscanError,
	TransportError,
	UnexpectedStatusError,
	DecodeError,
	SettingsError,
	NegotiationError,
	ScannerNotReadyError,
	FeederEmptyError,
	UnsupportedSettingsError,
	RetryLimitError,
	JobStateError,
)
from .job import ScanJob, Page
from .version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
	'Client',
	'ScanJob',
	'Page',
	'ScanSettings',
	'ScanRegion',
	'ScannerStatus',
	'JobState',
	'InputSource',
	'ColorMode',
	'DocumentFormat',
	'ScannerState',
	'AdfState',
	'ScannerCapabilities',
	'ADFCapabilities',
	'InputCaps',
	'Resolution',
	'Settings',
	'get_settings',
	'FallbackDialer',
	'check_candidates',
	'DiscoveredScanner',
	'SERVICE_TYPE',
	'SECURE_SERVICE_TYPE',
	'AirscanError',
	'TransportError',
	'UnexpectedStatusError',
	'DecodeError',
	'SettingsError',
	'NegotiationError',
	'ScannerNotReadyError',
	'FeederEmptyError',
	'UnsupportedSettingsError',
	'RetryLimitError',
	'JobStateError',
	'__version__',
]
