# (c) Copyright Datacraft, 2026
"""Scan job lifecycle: negotiation, page retrieval, teardown."""
import asyncio
import logging
import posixpath
from typing import TYPE_CHECKING, AsyncIterator

import httpx

from .base import JobState, ScanSettings, AdfState
from .codec import encode_scan_settings
from .exceptions import (
	AirscanError, TransportError, JobStateError, RetryLimitError,
	ScannerNotReadyError, FeederEmptyError, UnsupportedSettingsError,
)

if TYPE_CHECKING:
	from .client import Client

# Some devices answer NextDocument with 503 until the page is ready
RETRY_LIMIT = 10
RETRY_BACKOFF = 1.0  # seconds

NEXT_DOCUMENT_OK = (
	httpx.codes.OK,
	httpx.codes.NOT_FOUND,
	httpx.codes.SERVICE_UNAVAILABLE,
)


class Page:
	"""
	Data of one scanned page, streamed from the device.

	The data is never interpreted: decode it yourself according to the
	requested document format. A page is only valid until the next
	``scan_page()`` call or until the job is closed.
	"""

	def __init__(self, number: int, response: httpx.Response):
		self.number = number
		self._response = response

	@property
	def content_type(self) -> str | None:
		return self._response.headers.get('Content-Type')

	@property
	def closed(self) -> bool:
		return self._response.is_closed

	async def aiter_bytes(self, chunk_size: int | None = None) -> AsyncIterator[bytes]:
		try:
			async for chunk in self._response.aiter_bytes(chunk_size):
				yield chunk
		except httpx.TransportError as e:
			raise TransportError(str(self._response.request.url), e) from e

	async def read(self) -> bytes:
		return b''.join([chunk async for chunk in self.aiter_bytes()])

	async def aclose(self) -> None:
		await self._response.aclose()

	def __repr__(self):
		return f"Page({self.number}, {self.content_type})"


class ScanJob:
	"""
	A scan job on the device, consumed one page at a time.

	Usage::

		async with await client.scan(settings) as job:
			async for page in job:
				data = await page.read()

	The first error is kept: once set, ``scan_page()`` returns False
	without contacting the device and only ``close()`` remains useful.
	"""

	def __init__(
		self,
		client: "Client",
		settings: ScanSettings,
		logger: logging.Logger | None = None,
	):
		self._client = client
		self._settings = settings
		self._logger = logger or logging.getLogger(__name__)
		self._state = JobState.NEGOTIATING
		self._location: httpx.URL | None = None
		self._error: Exception | None = None
		self._page: Page | None = None
		self._pages_received = 0

	@property
	def state(self) -> JobState:
		return self._state

	@property
	def location(self) -> httpx.URL | None:
		"""Job URL, with the host the client used to reach the device."""
		return self._location

	@property
	def error(self) -> Exception | None:
		"""First error that occurred, if any."""
		return self._error

	@property
	def pages_received(self) -> int:
		return self._pages_received

	def _fail(self, error: Exception) -> None:
		if self._error is None:
			self._error = error
		self._state = JobState.FAILED

	async def start(self) -> None:
		"""
		Validate the settings against the device and create the job.

		All checks run before the job is created: on failure no
		job-creation request has been sent.

		Raises:
			SettingsError: settings cannot be encoded
			NegotiationError: device state or capabilities do not fit
			TransportError, UnexpectedStatusError, DecodeError: device errors
		"""
		if self._state is not JobState.NEGOTIATING:
			raise JobStateError(f"cannot start a scan job in state {self._state.value}")

		try:
			# Ensure settings are valid before doing anything else
			body = encode_scan_settings(self._settings)
			await self._preflight()
			self._location = await self._client.create_job(body)
		except AirscanError as e:
			self._fail(e)
			raise

		self._state = JobState.CREATED
		self._logger.debug(f"ScanJob created: {self._location}")

	async def _preflight(self) -> None:
		settings = self._settings

		status = await self._client.scanner_status()
		if not status.is_idle:
			raise ScannerNotReadyError(status.state)
		if settings.uses_feeder and status.adf_state:
			if status.adf_state != AdfState.LOADED:
				raise FeederEmptyError(status.adf_state)

		caps = await self._client.scanner_capabilities()
		if settings.uses_feeder:
			if caps.adf is None:
				raise UnsupportedSettingsError("this scanner doesn't have an ADF")
			if settings.duplex and caps.adf.duplex is None:
				raise UnsupportedSettingsError("this scanner doesn't support duplex mode")
			if not settings.duplex and caps.adf.simplex is None:
				raise UnsupportedSettingsError("this scanner doesn't support simplex mode")

	def _next_document_url(self) -> httpx.URL:
		assert self._location is not None
		path = posixpath.join(self._location.path or '/', 'NextDocument')
		return self._location.copy_with(path=path)

	async def _release_page(self) -> None:
		if self._page is not None:
			page, self._page = self._page, None
			await page.aclose()

	async def scan_page(self) -> bool:
		"""
		Request the next page of this scan job.

		Returns:
			True if a new page is available via ``current_page()``, False
			when all pages were received or an error occurred (see ``error``)
		"""
		if self._state in (JobState.FAILED, JobState.EXHAUSTED):
			return False  # avoid clobbering existing errors
		if self._state in (JobState.NEGOTIATING, JobState.CLOSED):
			raise JobStateError(f"cannot scan a page in state {self._state.value}")

		await self._release_page()
		self._state = JobState.WAITING
		url = self._next_document_url()

		for attempt in range(RETRY_LIMIT):
			request = self._client.build_request('GET', url)
			try:
				response = await self._client.executor.execute(
					request, NEXT_DOCUMENT_OK, stream=True
				)
			except AirscanError as e:
				self._fail(e)
				return False

			if response.status_code == httpx.codes.NOT_FOUND:
				await response.aclose()
				self._logger.debug("NotFound: all pages received")
				self._state = JobState.EXHAUSTED
				return False

			if response.status_code == httpx.codes.SERVICE_UNAVAILABLE:
				await response.aclose()
				self._logger.debug(
					f"ServiceUnavailable: will retry (try {attempt + 1}/{RETRY_LIMIT})"
				)
				await asyncio.sleep(RETRY_BACKOFF)
				continue

			self._pages_received += 1
			self._page = Page(self._pages_received, response)
			self._state = JobState.PAGE_READY
			return True

		self._fail(RetryLimitError(str(url), RETRY_LIMIT))
		return False

	def current_page(self) -> Page | None:
		"""The page made available by the last successful ``scan_page()``."""
		if self._state is not JobState.PAGE_READY:
			return None
		return self._page

	async def close(self) -> None:
		"""
		Delete the scan job on the device.

		Some devices work fine without this, but Apple's scan client always
		deletes its jobs, so do the same. A job the device already dropped
		(404) counts as deleted. Closing twice is a no-op.
		"""
		if self._state is JobState.CLOSED:
			return

		await self._release_page()
		if self._location is not None:
			self._logger.debug(f"Deleting ScanJob {self._location}")
			await self._client.delete_job(self._location)
		self._state = JobState.CLOSED

	async def __aiter__(self) -> AsyncIterator[Page]:
		while await self.scan_page():
			yield self._page
		if self._error is not None:
			raise self._error

	async def __aenter__(self) -> "ScanJob":
		return self

	async def __aexit__(self, *args) -> None:
		await self.close()

	def __repr__(self):
		return f"ScanJob({self._location}, {self._state.value})"
