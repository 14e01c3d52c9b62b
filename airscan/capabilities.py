# (c) Copyright Datacraft, 2026
"""Scanner capabilities models."""
from dataclasses import dataclass, field

from .base import InputSource


@dataclass
class Resolution:
	"""Discrete resolution in dpi."""
	x: int
	y: int


@dataclass
class SettingProfile:
	"""Combination of settings the device supports for one input."""
	color_modes: list[str] = field(default_factory=list)
	content_types: list[str] = field(default_factory=list)
	document_formats: list[str] = field(default_factory=list)
	document_format_exts: list[str] = field(default_factory=list)
	resolutions: list[Resolution] = field(default_factory=list)
	ccd_channels: list[str] = field(default_factory=list)
	color_spaces: list[str] = field(default_factory=list)


@dataclass
class InputCaps:
	"""Capabilities of one input (platen, ADF simplex, ADF duplex)."""
	min_width: int = 0
	max_width: int = 0
	min_height: int = 0
	max_height: int = 0
	max_physical_width: int = 0
	max_physical_height: int = 0
	max_optical_x_resolution: int = 0
	max_optical_y_resolution: int = 0
	max_scan_regions: int = 0
	setting_profiles: list[SettingProfile] = field(default_factory=list)
	supported_intents: list[str] = field(default_factory=list)
	feed_directions: list[str] = field(default_factory=list)

	@property
	def resolutions(self) -> list[Resolution]:
		return [r for p in self.setting_profiles for r in p.resolutions]

	@property
	def color_modes(self) -> list[str]:
		return _unique(m for p in self.setting_profiles for m in p.color_modes)

	@property
	def document_formats(self) -> list[str]:
		return _unique(
			f
			for p in self.setting_profiles
			for f in p.document_formats + p.document_format_exts
		)


@dataclass
class Justification:
	x_image_position: str = ''
	y_image_position: str = ''


@dataclass
class ADFCapabilities:
	"""ADF-specific capabilities."""
	simplex: InputCaps | None = None
	duplex: InputCaps | None = None
	feeder_capacity: int = 0
	options: list[str] = field(default_factory=list)
	justification: Justification = field(default_factory=Justification)


@dataclass
class Certification:
	name: str = ''
	version: str = ''


@dataclass
class ScannerCapabilities:
	"""Complete scanner capabilities, as advertised by the device."""
	version: str = ''
	make_and_model: str = ''
	manufacturer: str = ''
	serial_number: str = ''
	uuid: str = ''
	admin_uri: str = ''
	icon_uri: str = ''
	certification: Certification | None = None

	platen: InputCaps | None = None
	adf: ADFCapabilities | None = None

	def supports_input_source(self, source: str, duplex: bool = False) -> bool:
		"""Check if input source (and duplex mode for the feeder) is supported."""
		return self.input_caps(source, duplex) is not None

	def input_caps(self, source: str, duplex: bool = False) -> InputCaps | None:
		if source == InputSource.PLATEN:
			return self.platen
		if source == InputSource.FEEDER and self.adf is not None:
			return self.adf.duplex if duplex else self.adf.simplex
		return None

	def resolutions(self, source: str, duplex: bool = False) -> list[Resolution]:
		caps = self.input_caps(source, duplex)
		return caps.resolutions if caps else []

	def color_modes(self, source: str, duplex: bool = False) -> list[str]:
		caps = self.input_caps(source, duplex)
		return caps.color_modes if caps else []

	def document_formats(self, source: str, duplex: bool = False) -> list[str]:
		caps = self.input_caps(source, duplex)
		return caps.document_formats if caps else []


def _unique(values) -> list[str]:
	return list(dict.fromkeys(values))
