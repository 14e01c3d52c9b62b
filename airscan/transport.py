# (c) Copyright Datacraft, 2026
"""httpx transport whose connections are opened by a FallbackDialer."""
import contextlib
import ssl
import typing

import httpcore
import httpx

from .dialer import FallbackDialer

# Most specific classes first
_ERROR_MAP: list[tuple[type[Exception], type[httpx.TransportError]]] = [
	(httpcore.ConnectTimeout, httpx.ConnectTimeout),
	(httpcore.ReadTimeout, httpx.ReadTimeout),
	(httpcore.WriteTimeout, httpx.WriteTimeout),
	(httpcore.PoolTimeout, httpx.PoolTimeout),
	(httpcore.TimeoutException, httpx.TimeoutException),
	(httpcore.ConnectError, httpx.ConnectError),
	(httpcore.ReadError, httpx.ReadError),
	(httpcore.WriteError, httpx.WriteError),
	(httpcore.NetworkError, httpx.NetworkError),
	(httpcore.RemoteProtocolError, httpx.RemoteProtocolError),
	(httpcore.LocalProtocolError, httpx.LocalProtocolError),
	(httpcore.UnsupportedProtocol, httpx.UnsupportedProtocol),
	(httpcore.ProtocolError, httpx.ProtocolError),
]


@contextlib.contextmanager
def map_httpcore_errors(request: httpx.Request) -> typing.Iterator[None]:
	try:
		yield
	except Exception as e:
		for core_error, httpx_error in _ERROR_MAP:
			if isinstance(e, core_error):
				raise httpx_error(str(e), request=request) from e
		if isinstance(e, OSError):
			raise httpx.ConnectError(str(e), request=request) from e
		raise


def create_ssl_context(skip_cert_verify: bool = False) -> ssl.SSLContext:
	context = ssl.create_default_context()
	if skip_cert_verify:
		context.check_hostname = False
		context.verify_mode = ssl.CERT_NONE
	return context


class _ResponseStream(httpx.AsyncByteStream):

	def __init__(self, stream: typing.AsyncIterable[bytes], request: httpx.Request):
		self._stream = stream
		self._request = request

	async def __aiter__(self) -> typing.AsyncIterator[bytes]:
		with map_httpcore_errors(self._request):
			async for chunk in self._stream:
				yield chunk

	async def aclose(self) -> None:
		if hasattr(self._stream, 'aclose'):
			await self._stream.aclose()


class DialerTransport(httpx.AsyncBaseTransport):
	"""
	Connection-pooling transport that dials through a FallbackDialer.

	The URL host stays the logical device name (Host header, TLS server
	name); the TCP connection goes to whichever candidate answers.
	"""

	def __init__(
		self,
		dialer: FallbackDialer,
		skip_cert_verify: bool = False,
		max_connections: int = 4,
		keepalive_expiry: float | None = 5.0,
	):
		self.dialer = dialer
		self._pool = httpcore.AsyncConnectionPool(
			ssl_context=create_ssl_context(skip_cert_verify),
			max_connections=max_connections,
			keepalive_expiry=keepalive_expiry,
			network_backend=dialer,
		)

	async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
		assert isinstance(request.stream, httpx.AsyncByteStream)

		core_request = httpcore.Request(
			method=request.method,
			url=httpcore.URL(
				scheme=request.url.raw_scheme,
				host=request.url.raw_host,
				port=request.url.port,
				target=request.url.raw_path,
			),
			headers=request.headers.raw,
			content=request.stream,
			extensions=request.extensions,
		)
		with map_httpcore_errors(request):
			response = await self._pool.handle_async_request(core_request)

		assert isinstance(response.stream, typing.AsyncIterable)
		return httpx.Response(
			status_code=response.status,
			headers=response.headers,
			stream=_ResponseStream(response.stream, request),
			extensions=response.extensions,
		)

	async def aclose(self) -> None:
		await self._pool.aclose()
