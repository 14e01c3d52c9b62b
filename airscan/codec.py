# (c) Copyright Datacraft, 2026
"""eSCL XML encoding and decoding."""
import xml.etree.ElementTree as ET
from enum import Enum
from xml.sax.saxutils import escape, quoteattr

from .base import ScanSettings, ScannerStatus
from .capabilities import (
	ScannerCapabilities, ADFCapabilities, InputCaps, SettingProfile,
	Resolution, Justification, Certification,
)
from .exceptions import DecodeError, SettingsError

# eSCL XML namespaces
NAMESPACES = {
	'scan': 'http://schemas.hp.com/imaging/escl/2011/05/03',
	'pwg': 'http://www.pwg.org/schemas/2010/12/sm',
}

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>'
INDENT = '  '


def _text(value) -> str:
	if isinstance(value, Enum):
		value = value.value
	if isinstance(value, bool):
		return 'true' if value else 'false'
	return escape(str(value))


def _element(depth: int, tag: str, value) -> str:
	return f"{INDENT * depth}<{tag}>{_text(value)}</{tag}>"


def validate_scan_settings(settings: ScanSettings) -> None:
	"""Reject settings no device could honor."""
	if not settings.regions:
		raise SettingsError("at least one scan region is required")
	for region in settings.regions:
		if region.width <= 0 or region.height <= 0:
			raise SettingsError(
				f"scan region size must be positive: {region.width}x{region.height}"
			)
		if region.x_offset < 0 or region.y_offset < 0:
			raise SettingsError(
				f"scan region offset must not be negative: "
				f"{region.x_offset},{region.y_offset}"
			)
		if not region.units:
			raise SettingsError("scan region units must be set")
	if settings.x_resolution <= 0 or settings.y_resolution <= 0:
		raise SettingsError(
			f"resolution must be positive: {settings.x_resolution}x{settings.y_resolution}"
		)
	for name in ('version', 'document_format', 'input_source', 'color_mode'):
		if not _text(getattr(settings, name)):
			raise SettingsError(f"{name} must be set")


def encode_scan_settings(settings: ScanSettings) -> str:
	"""
	Build the ScanSettings request document.

	Element order, namespace prefixes and indentation match what Apple's
	AirScanScanner sends, which conformance-sensitive devices expect.

	Raises:
		SettingsError: if the settings are incomplete or out of range
	"""
	validate_scan_settings(settings)

	lines = [
		XML_DECLARATION,
		f'<scan:ScanSettings xmlns:scan={quoteattr(NAMESPACES["scan"])} '
		f'xmlns:pwg={quoteattr(NAMESPACES["pwg"])}>',
		_element(1, 'pwg:Version', settings.version),
		f'{INDENT}<pwg:ScanRegions pwg:MustHonor="{_text(settings.must_honor)}">',
	]
	for region in settings.regions:
		lines += [
			f'{INDENT * 2}<pwg:ScanRegion>',
			_element(3, 'pwg:ContentRegionUnits', region.units),
			_element(3, 'pwg:Width', region.width),
			_element(3, 'pwg:Height', region.height),
			_element(3, 'pwg:XOffset', region.x_offset),
			_element(3, 'pwg:YOffset', region.y_offset),
			f'{INDENT * 2}</pwg:ScanRegion>',
		]
	lines += [
		f'{INDENT}</pwg:ScanRegions>',
		_element(1, 'pwg:DocumentFormat', settings.document_format),
		_element(1, 'pwg:InputSource', settings.input_source),
		_element(1, 'scan:ColorMode', settings.color_mode),
		_element(1, 'scan:XResolution', settings.x_resolution),
		_element(1, 'scan:YResolution', settings.y_resolution),
		_element(1, 'scan:Duplex', settings.duplex),
		'</scan:ScanSettings>',
	]
	return '\n'.join(lines)


# === Decoding ===
# Elements are matched by local name, whatever namespace the device uses.

def _parse(payload: bytes) -> ET.Element:
	try:
		return ET.fromstring(payload)
	except ET.ParseError as e:
		raise DecodeError("decoding XML", payload, e) from e


def _str(parent: ET.Element, tag: str) -> str:
	elem = parent.find(f'{{*}}{tag}')
	if elem is None or elem.text is None:
		return ''
	return elem.text.strip()


def _strs(parent: ET.Element | None, path: str) -> list[str]:
	if parent is None:
		return []
	return [e.text.strip() for e in parent.iterfind(path) if e.text and e.text.strip()]


def _int(parent: ET.Element, tag: str, payload: bytes) -> int:
	value = _str(parent, tag)
	if not value:
		return 0
	try:
		return int(value)
	except ValueError as e:
		raise DecodeError(f"decoding XML: element {tag}", payload, e) from e


def decode_status(payload: bytes) -> ScannerStatus:
	"""Decode a ScannerStatus document."""
	root = _parse(payload)
	return ScannerStatus(
		version=_str(root, 'Version'),
		state=_str(root, 'State'),
		adf_state=_str(root, 'AdfState'),
	)


def _decode_profile(elem: ET.Element, payload: bytes) -> SettingProfile:
	resolutions = [
		Resolution(
			x=_int(res, 'XResolution', payload),
			y=_int(res, 'YResolution', payload),
		)
		for res in elem.iterfind(
			'{*}SupportedResolutions/{*}DiscreteResolutions/{*}DiscreteResolution'
		)
	]
	return SettingProfile(
		color_modes=_strs(elem, '{*}ColorModes/{*}ColorMode'),
		content_types=_strs(elem, '{*}ContentTypes/{*}ContentType'),
		document_formats=_strs(elem, '{*}DocumentFormats/{*}DocumentFormat'),
		document_format_exts=_strs(elem, '{*}DocumentFormats/{*}DocumentFormatExt'),
		resolutions=resolutions,
		ccd_channels=_strs(elem, '{*}CcdChannels/{*}CcdChannel'),
		color_spaces=_strs(elem, '{*}ColorSpaces/{*}ColorSpace'),
	)


def _decode_input_caps(elem: ET.Element | None, payload: bytes) -> InputCaps | None:
	if elem is None:
		return None
	return InputCaps(
		min_width=_int(elem, 'MinWidth', payload),
		max_width=_int(elem, 'MaxWidth', payload),
		min_height=_int(elem, 'MinHeight', payload),
		max_height=_int(elem, 'MaxHeight', payload),
		max_physical_width=_int(elem, 'MaxPhysicalWidth', payload),
		max_physical_height=_int(elem, 'MaxPhysicalHeight', payload),
		max_optical_x_resolution=_int(elem, 'MaxOpticalXResolution', payload),
		max_optical_y_resolution=_int(elem, 'MaxOpticalYResolution', payload),
		max_scan_regions=_int(elem, 'MaxScanRegions', payload),
		setting_profiles=[
			_decode_profile(p, payload)
			for p in elem.iterfind('{*}SettingProfiles/{*}SettingProfile')
		],
		supported_intents=_strs(elem, '{*}SupportedIntents/{*}Intent'),
		feed_directions=_strs(elem, '{*}FeedDirections/{*}FeedDirection'),
	)


def _decode_adf(elem: ET.Element | None, payload: bytes) -> ADFCapabilities | None:
	if elem is None:
		return None
	justification = elem.find('{*}Justification')
	return ADFCapabilities(
		simplex=_decode_input_caps(elem.find('{*}AdfSimplexInputCaps'), payload),
		duplex=_decode_input_caps(elem.find('{*}AdfDuplexInputCaps'), payload),
		feeder_capacity=_int(elem, 'FeederCapacity', payload),
		options=_strs(elem, '{*}AdfOptions/{*}AdfOption'),
		justification=Justification(
			x_image_position=_str(justification, 'XImagePosition'),
			y_image_position=_str(justification, 'YImagePosition'),
		) if justification is not None else Justification(),
	)


def decode_capabilities(payload: bytes) -> ScannerCapabilities:
	"""Decode a ScannerCapabilities document."""
	root = _parse(payload)

	certification = root.find('{*}Certifications')
	return ScannerCapabilities(
		version=_str(root, 'Version'),
		make_and_model=_str(root, 'MakeAndModel'),
		manufacturer=_str(root, 'Manufacturer'),
		serial_number=_str(root, 'SerialNumber'),
		uuid=_str(root, 'UUID'),
		admin_uri=_str(root, 'AdminURI'),
		icon_uri=_str(root, 'IconURI'),
		certification=Certification(
			name=_str(certification, 'Name'),
			version=_str(certification, 'Version'),
		) if certification is not None else None,
		platen=_decode_input_caps(root.find('{*}Platen/{*}PlatenInputCaps'), payload),
		adf=_decode_adf(root.find('{*}Adf'), payload),
	)
