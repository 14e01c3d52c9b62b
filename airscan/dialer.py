# (c) Copyright Datacraft, 2026
"""Fallback dialer: one logical device, several ways of reaching it."""
import asyncio
import logging
import typing

import httpcore

logger = logging.getLogger(__name__)

# Errors after which the next candidate is tried
DIAL_ERRORS = (httpcore.ConnectError, httpcore.ConnectTimeout, OSError)


def split_host_port(hostport: str) -> tuple[str, int]:
	"""Split ``host:port`` or ``[v6addr]:port`` into its parts."""
	if hostport.startswith('['):
		end = hostport.find(']')
		if end < 0 or hostport[end + 1:end + 2] != ':':
			raise ValueError(f"invalid endpoint {hostport!r}")
		host, port = hostport[1:end], hostport[end + 2:]
	else:
		host, sep, port = hostport.rpartition(':')
		if not sep or ':' in host:
			raise ValueError(f"invalid endpoint {hostport!r}")
	if not host or not port.isdigit():
		raise ValueError(f"invalid endpoint {hostport!r}")
	return host, int(port)


def join_host_port(host: str, port: int) -> str:
	if ':' in host:
		return f"[{host}]:{port}"
	return f"{host}:{port}"


class FallbackDialer(httpcore.AsyncNetworkBackend):
	"""
	Network backend that dials the first reachable candidate endpoint.

	The host and port of the URL being requested are ignored: every
	connection goes to one of the candidates, tried in list order. The
	candidate that connected moves to the front of the list, so the next
	dial starts with the last path known to work.

	Dialing and reordering happen under one lock. Requests on already
	established connections are not serialized.
	"""

	def __init__(
		self,
		candidates: typing.Iterable[str],
		backend: httpcore.AsyncNetworkBackend | None = None,
		logger: logging.Logger | None = None,
	):
		self._candidates = list(candidates)
		if not self._candidates:
			raise ValueError("at least one candidate endpoint is required")
		for candidate in self._candidates:
			split_host_port(candidate)
		self._backend = backend or httpcore.AnyIOBackend()
		self._logger = logger or logging.getLogger(__name__)
		self._lock = asyncio.Lock()

	@property
	def candidates(self) -> list[str]:
		"""Current trial order (copy)."""
		return list(self._candidates)

	async def dial(
		self,
		timeout: float | None = None,
		local_address: str | None = None,
		socket_options: typing.Iterable[typing.Any] | None = None,
	) -> httpcore.AsyncNetworkStream:
		"""
		Connect to the first candidate that accepts a TCP connection.

		Raises:
			The error of the last candidate tried, if none connected.
		"""
		last_error: BaseException | None = None
		async with self._lock:
			for idx, hostport in enumerate(self._candidates):
				self._logger.debug(f"-> trying {hostport}")
				host, port = split_host_port(hostport)
				try:
					stream = await self._backend.connect_tcp(
						host,
						port,
						timeout=timeout,
						local_address=local_address,
						socket_options=socket_options,
					)
				except DIAL_ERRORS as e:
					self._logger.debug(f"-> {hostport} failed: {e!r}")
					last_error = e
					continue

				if idx:
					self._candidates.insert(0, self._candidates.pop(idx))
				self._logger.debug(f"-> connected via {hostport}")
				return stream

		assert last_error is not None
		raise last_error

	async def connect_tcp(
		self,
		host: str,
		port: int,
		timeout: float | None = None,
		local_address: str | None = None,
		socket_options: typing.Iterable[typing.Any] | None = None,
	) -> httpcore.AsyncNetworkStream:
		self._logger.debug(f"dial requested for {join_host_port(host, port)}")
		return await self.dial(
			timeout=timeout,
			local_address=local_address,
			socket_options=socket_options,
		)

	async def connect_unix_socket(
		self,
		path: str,
		timeout: float | None = None,
		socket_options: typing.Iterable[typing.Any] | None = None,
	) -> httpcore.AsyncNetworkStream:
		return await self._backend.connect_unix_socket(
			path, timeout=timeout, socket_options=socket_options
		)

	async def sleep(self, seconds: float) -> None:
		await self._backend.sleep(seconds)


async def check_candidates(
	candidates: typing.Iterable[str],
	timeout: float | None = 5.0,
	backend: httpcore.AsyncNetworkBackend | None = None,
) -> dict[str, BaseException | None]:
	"""
	Try a TCP connection to every candidate concurrently.

	Returns:
		Mapping of candidate to None (reachable) or the connect error
	"""
	backend = backend or httpcore.AnyIOBackend()

	async def _try(hostport: str) -> tuple[str, BaseException | None]:
		host, port = split_host_port(hostport)
		try:
			stream = await backend.connect_tcp(host, port, timeout=timeout)
		except DIAL_ERRORS as e:
			logger.info(f"{hostport}: {e!r}")
			return hostport, e
		await stream.aclose()
		logger.info(f"{hostport}: reachable!")
		return hostport, None

	results = await asyncio.gather(*(_try(c) for c in candidates))
	return dict(results)
