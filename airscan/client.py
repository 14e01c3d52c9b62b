# (c) Copyright Datacraft, 2026
"""eSCL (AirScan) client."""
import logging
from typing import Iterable

import httpcore
import httpx

from .base import ScanSettings, ScannerStatus
from .capabilities import ScannerCapabilities
from .config import Settings, get_settings
from .dialer import FallbackDialer, join_host_port
from .discovery import DiscoveredScanner
from .exceptions import DecodeError
from .executor import RequestExecutor, RequestSender
from .job import ScanJob
from .probe import DeviceProbe
from .transport import DialerTransport, create_ssl_context

SCAN_JOBS_PATH = '/ScanJobs'

DELETE_JOB_OK = (
	httpx.codes.OK,
	httpx.codes.ACCEPTED,
	httpx.codes.NO_CONTENT,
	httpx.codes.NOT_FOUND,
)


class Client:
	"""
	Scans documents from one eSCL (AirScan) device.

	With ``candidates``, every connection is dialed through a
	FallbackDialer trying those host:port endpoints in turn; ``host``
	then only names the device in URLs. Prefer ``Client.for_service``
	when the device was found via DNS-SD.

	``network_backend`` is what the dialer opens connections with
	(default: anyio sockets). ``sender`` replaces the HTTP client
	entirely, e.g. an ``httpx.AsyncClient`` over a mock transport.
	"""

	def __init__(
		self,
		host: str,
		*,
		candidates: Iterable[str] | None = None,
		sender: RequestSender | None = None,
		settings: Settings | None = None,
		use_https: bool = False,
		root_path: str | None = None,
		skip_cert_verify: bool | None = None,
		network_backend: httpcore.AsyncNetworkBackend | None = None,
		logger: logging.Logger | None = None,
	):
		if sender is not None and candidates is not None:
			raise ValueError("candidates require the built-in HTTP client, not a custom sender")

		self.settings = settings or get_settings()
		self.logger = logger or logging.getLogger(__name__)
		self._host = host
		self._scheme = 'https' if use_https else 'http'
		if root_path is None:
			root_path = self.settings.root_path
		self._root_path = root_path.rstrip('/')
		if skip_cert_verify is None:
			skip_cert_verify = self.settings.skip_cert_verify

		self.dialer: FallbackDialer | None = None
		self._owns_sender = sender is None
		if sender is None:
			sender = self._create_http_client(candidates, skip_cert_verify, network_backend)

		self._sender = sender
		self.executor = RequestExecutor(
			sender,
			user_agent=self.settings.user_agent,
			timeout=httpx.Timeout(
				self.settings.request_timeout,
				connect=self.settings.dial_timeout,
			),
			logger=self.logger,
		)
		self.probe = DeviceProbe(self.executor, self.get_endpoint, logger=self.logger)

	@classmethod
	def for_service(cls, service: DiscoveredScanner, **kwargs) -> "Client":
		"""
		Client for a DNS-SD discovered scanner.

		Connects via the service's host name or any of its addresses,
		whichever works, which also covers networks without DHCP-based DNS
		and hosts without an mDNS resolver.
		"""
		kwargs.setdefault('use_https', service.secure)
		kwargs.setdefault('root_path', service.root_path)
		return cls(
			join_host_port(service.host, service.port),
			candidates=service.candidate_endpoints(),
			**kwargs,
		)

	def _create_http_client(
		self,
		candidates: Iterable[str] | None,
		skip_cert_verify: bool,
		network_backend: httpcore.AsyncNetworkBackend | None,
	) -> httpx.AsyncClient:
		max_connections = self.settings.max_connections
		if candidates is None:
			return httpx.AsyncClient(
				verify=create_ssl_context(skip_cert_verify),
				limits=httpx.Limits(max_connections=max_connections),
				follow_redirects=True,
			)

		self.dialer = FallbackDialer(candidates, backend=network_backend, logger=self.logger)
		return httpx.AsyncClient(
			transport=DialerTransport(
				self.dialer,
				skip_cert_verify=skip_cert_verify,
				max_connections=max_connections,
			),
			follow_redirects=True,
		)

	@property
	def host(self) -> str:
		return self._host

	def get_endpoint(self, path: str) -> str:
		"""Absolute URL of an eSCL resource, e.g. ``/ScannerStatus``."""
		return f"{self._scheme}://{self._host}{self._root_path}{path}"

	def build_request(
		self,
		method: str,
		url: httpx.URL | str,
		content: bytes | None = None,
		headers: dict[str, str] | None = None,
	) -> httpx.Request:
		return httpx.Request(method, url, content=content, headers=headers)

	async def scanner_status(self) -> ScannerStatus:
		return await self.probe.fetch_status()

	async def scanner_capabilities(self) -> ScannerCapabilities:
		return await self.probe.fetch_capabilities()

	async def create_job(self, settings_xml: str) -> httpx.URL:
		"""
		POST the scan settings and return the new job's URL.

		Only the path of the advertised location is used: the host and
		port are those this client used to reach the device, since devices
		may advertise addresses that are not reachable.
		"""
		request = self.build_request(
			'POST',
			self.get_endpoint(SCAN_JOBS_PATH),
			content=settings_xml.encode('utf-8'),
			headers={'Content-Type': 'application/xml'},
		)
		response = await self.executor.execute(request, (httpx.codes.CREATED,))

		location = response.headers.get('Location')
		if not location:
			raise DecodeError("job creation response has no Location header", response.content)
		job_url = request.url.join(location)
		return job_url.copy_with(host=request.url.host, port=request.url.port)

	async def delete_job(self, location: httpx.URL | str) -> None:
		"""Delete a job. Deleting a job the device no longer knows is not an error."""
		request = self.build_request('DELETE', location)
		await self.executor.execute(request, DELETE_JOB_OK)

	async def scan(self, settings: ScanSettings) -> ScanJob:
		"""
		Start a new scan job using the specified settings.

		The device must be idle. When scanning from the Automatic Document
		Feeder (ADF), a loaded feeder and the requested simplex/duplex
		support are verified before the job is created, since the device
		would otherwise fail with a less clear error.
		"""
		job = ScanJob(self, settings, logger=self.logger)
		await job.start()
		return job

	async def aclose(self) -> None:
		"""Close the HTTP client, unless it was passed in."""
		if self._owns_sender:
			await self._sender.aclose()

	async def __aenter__(self) -> "Client":
		return self

	async def __aexit__(self, *args) -> None:
		await self.aclose()

	def __repr__(self):
		return f"Client({self._host})"
