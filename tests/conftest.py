# (c) Copyright Datacraft, 2026
"""Pytest fixtures: an in-memory eSCL device and network."""
import asyncio
import uuid

import httpcore
import httpx
import pytest

from airscan import Client, Settings
from airscan.dialer import join_host_port

SCAN_DATA_STAND_IN = b'\x22\x33\x44'

STATUS_IDLE_ADF_EMPTY = (
	b'<?xml version="1.0" encoding="UTF-8"?><scan:ScannerStatus '
	b'xmlns:pwg="http://www.pwg.org/schemas/2010/12/sm" '
	b'xmlns:scan="http://schemas.hp.com/imaging/escl/2011/05/03" '
	b'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
	b'xsi:schemaLocation="http://schemas.hp.com/imaging/escl/2011/05/03 ../../schemas/eSCL-1_92.xsd">'
	b'<pwg:Version>2.63</pwg:Version><pwg:State>Idle</pwg:State>'
	b'<scan:AdfState>ScannerAdfEmpty</scan:AdfState><scan:Jobs></scan:Jobs></scan:ScannerStatus>'
)

STATUS_IDLE_ADF_LOADED = STATUS_IDLE_ADF_EMPTY.replace(b'ScannerAdfEmpty', b'ScannerAdfLoaded')

STATUS_PROCESSING = STATUS_IDLE_ADF_EMPTY.replace(b'>Idle<', b'>Processing<')

_INPUT_CAPS = b'''
      <scan:MinWidth>16</scan:MinWidth>
      <scan:MaxWidth>2550</scan:MaxWidth>
      <scan:MinHeight>16</scan:MinHeight>
      <scan:MaxHeight>4200</scan:MaxHeight>
      <scan:MaxScanRegions>1</scan:MaxScanRegions>
      <scan:SettingProfiles>
        <scan:SettingProfile>
          <scan:ColorModes>
            <scan:ColorMode>BlackAndWhite1</scan:ColorMode>
            <scan:ColorMode>Grayscale8</scan:ColorMode>
            <scan:ColorMode>RGB24</scan:ColorMode>
          </scan:ColorModes>
          <scan:DocumentFormats>
            <pwg:DocumentFormat>image/jpeg</pwg:DocumentFormat>
            <pwg:DocumentFormat>application/pdf</pwg:DocumentFormat>
            <scan:DocumentFormatExt>image/jpeg</scan:DocumentFormatExt>
          </scan:DocumentFormats>
          <scan:SupportedResolutions>
            <scan:DiscreteResolutions>
              <scan:DiscreteResolution>
                <scan:XResolution>300</scan:XResolution>
                <scan:YResolution>300</scan:YResolution>
              </scan:DiscreteResolution>
              <scan:DiscreteResolution>
                <scan:XResolution>600</scan:XResolution>
                <scan:YResolution>600</scan:YResolution>
              </scan:DiscreteResolution>
            </scan:DiscreteResolutions>
          </scan:SupportedResolutions>
        </scan:SettingProfile>
      </scan:SettingProfiles>
      <scan:SupportedIntents>
        <scan:Intent>Document</scan:Intent>
        <scan:Intent>Photo</scan:Intent>
      </scan:SupportedIntents>'''


def capabilities_xml(platen: bool = True, simplex: bool = True, duplex: bool = True) -> bytes:
	parts = [
		b'<?xml version="1.0" encoding="UTF-8"?>',
		b'<scan:ScannerCapabilities xmlns:pwg="http://www.pwg.org/schemas/2010/12/sm" '
		b'xmlns:scan="http://schemas.hp.com/imaging/escl/2011/05/03">',
		b'<pwg:Version>2.63</pwg:Version>',
		b'<pwg:MakeAndModel>Mock Scanner 3000</pwg:MakeAndModel>',
		b'<pwg:SerialNumber>SN-0001</pwg:SerialNumber>',
		b'<scan:UUID>4509a320-00a0-008f-00b6-002507510eca</scan:UUID>',
		b'<scan:AdminURI>http://scanner.test/admin</scan:AdminURI>',
	]
	if platen:
		parts += [b'<scan:Platen><scan:PlatenInputCaps>', _INPUT_CAPS, b'</scan:PlatenInputCaps></scan:Platen>']
	if simplex or duplex:
		parts.append(b'<scan:Adf>')
		if simplex:
			parts += [b'<scan:AdfSimplexInputCaps>', _INPUT_CAPS, b'</scan:AdfSimplexInputCaps>']
		if duplex:
			parts += [
				b'<scan:AdfDuplexInputCaps>',
				b'<scan:MaxWidth>2550</scan:MaxWidth>',
				b'<scan:FeedDirections><scan:FeedDirection>ShortEdgeFeed</scan:FeedDirection></scan:FeedDirections>',
				b'</scan:AdfDuplexInputCaps>',
			]
		parts += [
			b'<scan:FeederCapacity>50</scan:FeederCapacity>',
			b'<scan:AdfOptions><scan:AdfOption>DetectPaperLoaded</scan:AdfOption></scan:AdfOptions>',
			b'<scan:Justification><pwg:XImagePosition>Center</pwg:XImagePosition>'
			b'<pwg:YImagePosition>Top</pwg:YImagePosition></scan:Justification>',
			b'</scan:Adf>',
		]
	parts.append(b'</scan:ScannerCapabilities>')
	return b''.join(parts)


def page_data(number: int) -> bytes:
	return SCAN_DATA_STAND_IN + bytes([number])


class MockScanner:
	"""
	eSCL device answering httpx.MockTransport requests.

	Job locations deliberately name a never-working host (port 9 is the
	discard protocol): the client must keep using its own host.
	"""

	def __init__(
		self,
		status: bytes = STATUS_IDLE_ADF_LOADED,
		capabilities: bytes | None = None,
		pages: int = 2,
		unavailable: int = 0,
	):
		self.status = status
		self.capabilities = capabilities if capabilities is not None else capabilities_xml()
		self.pages = pages
		self.unavailable = unavailable
		self.jobs: dict[str, int] = {}
		self.requests: list[httpx.Request] = []

	def requests_for(self, method: str, suffix: str = '') -> list[httpx.Request]:
		return [
			r for r in self.requests
			if r.method == method and r.url.path.endswith(suffix)
		]

	def __call__(self, request: httpx.Request) -> httpx.Response:
		self.requests.append(request)
		path = request.url.path

		if path == '/eSCL/ScannerStatus':
			return httpx.Response(200, content=self.status)
		if path == '/eSCL/ScannerCapabilities':
			return httpx.Response(200, content=self.capabilities)
		if path == '/eSCL/ScanJobs':
			if request.method != 'POST':
				return httpx.Response(400, text='bad method')
			key = uuid.uuid4().hex
			self.jobs[key] = self.pages
			return httpx.Response(
				201,
				headers={'Location': f'http://localhost:9/eSCL/ScanJobs/{key}'},
			)
		if path.startswith('/eSCL/ScanJobs/'):
			job_id, _, rest = path[len('/eSCL/ScanJobs/'):].partition('/')
			if request.method == 'DELETE' and not rest:
				if self.jobs.pop(job_id, None) is None:
					return httpx.Response(404, text='no such job')
				return httpx.Response(200)
			if rest != 'NextDocument':
				return httpx.Response(404, text='no such handler')
			if self.unavailable:
				self.unavailable -= 1
				return httpx.Response(503, text='busy')
			remaining = self.jobs.get(job_id, 0)
			if not remaining:
				return httpx.Response(404, text='no such job')
			self.jobs[job_id] = remaining - 1
			number = self.pages - remaining + 1
			return httpx.Response(
				200,
				content=page_data(number),
				headers={'Content-Type': 'image/jpeg'},
			)

		return httpx.Response(404, text='no such handler')


OK_RESPONSE = (
	b"HTTP/1.1 200 OK\r\n"
	b"Content-Type: text/plain\r\n"
	b"Content-Length: 2\r\n"
	b"Connection: close\r\n"
	b"\r\n"
	b"ok"
)


class FakeNetwork(httpcore.AsyncNetworkBackend):
	"""
	Network where only some host:port endpoints accept connections.

	Every accepted connection replays ``response`` once.
	"""

	def __init__(self, reachable=(), response=OK_RESPONSE, hang=(), delay=0.0):
		self.reachable = set(reachable)
		self.response = response
		self.hang = set(hang)
		self.delay = delay
		self.attempts = []
		self.in_progress = 0
		self.max_in_progress = 0

	async def connect_tcp(
		self, host, port, timeout=None, local_address=None, socket_options=None
	):
		hostport = join_host_port(host, port)
		self.attempts.append(hostport)
		self.in_progress += 1
		self.max_in_progress = max(self.max_in_progress, self.in_progress)
		try:
			if hostport in self.hang:
				await asyncio.Event().wait()
			if self.delay:
				await asyncio.sleep(self.delay)
			if hostport not in self.reachable:
				raise httpcore.ConnectError(f"dial tcp {hostport}: connection refused")
			return httpcore.AsyncMockStream([self.response])
		finally:
			self.in_progress -= 1

	async def sleep(self, seconds):
		await asyncio.sleep(seconds)


@pytest.fixture
def test_settings():
	return Settings(user_agent='airscan-test')


@pytest.fixture
def mock_scanner():
	return MockScanner()


@pytest.fixture
def make_client(test_settings):
	"""Client talking to a MockScanner through httpx.MockTransport."""
	def _make(handler, **kwargs) -> Client:
		sender = httpx.AsyncClient(transport=httpx.MockTransport(handler))
		return Client(
			'scanner.test:8080',
			sender=sender,
			settings=test_settings,
			**kwargs,
		)
	return _make


@pytest.fixture
def no_backoff(monkeypatch):
	monkeypatch.setattr('airscan.job.RETRY_BACKOFF', 0)
