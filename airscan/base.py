# (c) Copyright Datacraft, 2026
"""Scan request and device status data models."""
from dataclasses import dataclass, field
from enum import Enum


class InputSource(str, Enum):
	"""Paper input sources."""
	PLATEN = 'Platen'  # Flatbed glass
	FEEDER = 'Feeder'  # Automatic Document Feeder
	CAMERA = 'Camera'


class ColorMode(str, Enum):
	"""Color modes understood by eSCL devices."""
	BLACK_AND_WHITE = 'BlackAndWhite1'
	GRAYSCALE = 'Grayscale8'
	RGB = 'RGB24'


class DocumentFormat(str, Enum):
	JPEG = 'image/jpeg'
	PNG = 'image/png'
	TIFF = 'image/tiff'
	PDF = 'application/pdf'


class ScannerState(str, Enum):
	IDLE = 'Idle'
	PROCESSING = 'Processing'
	TESTING = 'Testing'
	STOPPED = 'Stopped'
	DOWN = 'Down'


class AdfState(str, Enum):
	LOADED = 'ScannerAdfLoaded'
	EMPTY = 'ScannerAdfEmpty'
	JAM = 'ScannerAdfJam'


class JobState(str, Enum):
	"""Client-side lifecycle of a scan job."""
	NEGOTIATING = 'negotiating'
	CREATED = 'created'
	WAITING = 'waiting'
	PAGE_READY = 'page_ready'
	EXHAUSTED = 'exhausted'
	FAILED = 'failed'
	CLOSED = 'closed'


THREE_HUNDREDTHS_OF_INCHES = 'escl:ThreeHundredthsOfInches'


@dataclass
class ScanRegion:
	"""Area to scan, in ``units`` (1/300 inch by default)."""
	width: int
	height: int
	x_offset: int = 0
	y_offset: int = 0
	units: str = THREE_HUNDREDTHS_OF_INCHES


@dataclass
class ScanSettings:
	"""
	Instructions for the device on how to scan.

	Start from a preset (see ``airscan.preset``) to get a configuration
	known to work with devices in the wild.
	"""
	regions: list[ScanRegion] = field(default_factory=list)
	must_honor: bool = True
	version: str = '2.0'
	document_format: str = DocumentFormat.JPEG.value
	input_source: str = InputSource.PLATEN.value
	color_mode: str = ColorMode.GRAYSCALE.value
	x_resolution: int = 300
	y_resolution: int = 300
	duplex: bool = False

	@property
	def uses_feeder(self) -> bool:
		return self.input_source == InputSource.FEEDER


@dataclass
class ScannerStatus:
	"""Snapshot of the device status; fetched fresh for every scan."""
	version: str = ''
	state: str = ''
	adf_state: str = ''

	@property
	def is_idle(self) -> bool:
		return self.state == ScannerState.IDLE
