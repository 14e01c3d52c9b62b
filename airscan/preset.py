# (c) Copyright Datacraft, 2026
"""
Scan settings verified to match, character by character, the requests
Apple's AirScanScanner library produces.

AirScan is not an open standard, so copying a widely deployed client is
the best way of staying compatible with devices in the wild.
"""
from .base import ScanRegion, ScanSettings, InputSource, ColorMode, DocumentFormat
from .exceptions import SettingsError

# Width x height at 300 dpi, in 1/300 inch
PAPER_SIZES = {
	'A4': (2480, 3508),
	'letter': (2550, 3300),
}


def region_for(size: str) -> ScanRegion:
	"""Full-page scan region for a paper size name."""
	try:
		width, height = PAPER_SIZES[size]
	except KeyError:
		raise SettingsError(
			f"unexpected page size: got {size!r}, want one of {', '.join(PAPER_SIZES)}"
		)
	return ScanRegion(width=width, height=height)


def grayscale_a4_adf() -> ScanSettings:
	"""
	A4 document at 300 dpi from the Automatic Document Feeder in grayscale,
	both sides. Each call returns a new object that is safe to modify.
	"""
	return ScanSettings(
		version='2.0',
		must_honor=True,
		regions=[region_for('A4')],
		document_format=DocumentFormat.JPEG.value,
		input_source=InputSource.FEEDER.value,
		color_mode=ColorMode.GRAYSCALE.value,
		x_resolution=300,
		y_resolution=300,
		duplex=True,
	)
