# (c) Copyright Datacraft, 2026
"""Device status and capability queries."""
import logging
from typing import Callable

import httpx

from .base import ScannerStatus
from .capabilities import ScannerCapabilities
from .codec import decode_status, decode_capabilities
from .executor import RequestExecutor

STATUS_PATH = '/ScannerStatus'
CAPABILITIES_PATH = '/ScannerCapabilities'


class DeviceProbe:
	"""
	Stateless, side-effect-free queries against the device.

	Nothing is cached: every call fetches a fresh document.
	"""

	def __init__(
		self,
		executor: RequestExecutor,
		endpoint: Callable[[str], str],
		logger: logging.Logger | None = None,
	):
		self._executor = executor
		self._endpoint = endpoint
		self._logger = logger or logging.getLogger(__name__)

	async def _fetch(self, path: str) -> bytes:
		request = httpx.Request('GET', self._endpoint(path))
		response = await self._executor.execute(request, (httpx.codes.OK,))
		return response.content

	async def fetch_status(self) -> ScannerStatus:
		"""
		Query the device status.

		This tells whether the scanner is idle and whether a document has
		been inserted into the Automatic Document Feeder (ADF).
		"""
		status = decode_status(await self._fetch(STATUS_PATH))
		self._logger.debug(f"scanner status: {status}")
		return status

	async def fetch_capabilities(self) -> ScannerCapabilities:
		capabilities = decode_capabilities(await self._fetch(CAPABILITIES_PATH))
		self._logger.debug(f"capabilities: {capabilities}")
		return capabilities
