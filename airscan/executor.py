# (c) Copyright Datacraft, 2026
"""Single request execution with status validation."""
import logging
from typing import Collection, Protocol

import httpx

from .exceptions import TransportError, UnexpectedStatusError

NON_PRINTABLE_BODY = '<non-printable body>'


class RequestSender(Protocol):
	"""Anything that can send one request; ``httpx.AsyncClient`` qualifies."""

	async def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
		...


def printable_message(body: bytes) -> str:
	"""Trimmed body text, or a placeholder if it is not entirely printable."""
	message = body.decode('utf-8', errors='replace').strip()
	if not message.isprintable():
		return NON_PRINTABLE_BODY
	return message


class RequestExecutor:
	"""
	Sends requests and checks the response status.

	Responses with an accepted status are returned unchanged. Any other
	status raises UnexpectedStatusError including the device's message,
	network failures raise TransportError.
	"""

	def __init__(
		self,
		sender: RequestSender,
		user_agent: str,
		timeout: httpx.Timeout | None = None,
		logger: logging.Logger | None = None,
	):
		self._sender = sender
		self._user_agent = user_agent
		self._timeout = timeout
		self._logger = logger or logging.getLogger(__name__)

	async def execute(
		self,
		request: httpx.Request,
		ok_statuses: Collection[int],
		stream: bool = False,
	) -> httpx.Response:
		"""
		Execute one request.

		Args:
			request: Request to send
			ok_statuses: Status codes returned to the caller as-is
			stream: Leave the body unread (caller must read or close it)

		Returns:
			The response, if its status is in ok_statuses
		"""
		request.headers['User-Agent'] = self._user_agent
		if self._timeout is not None:
			request.extensions.setdefault('timeout', self._timeout.as_dict())
		self._logger.debug(f"{request.method} {request.url}")

		try:
			response = await self._sender.send(request, stream=stream)
		except httpx.TransportError as e:
			self._logger.debug(f"-> error: {e!r}")
			raise TransportError(str(request.url), e) from e

		if response.status_code in ok_statuses:
			self._logger.debug(f"-> okay: {response.status_code} {response.reason_phrase}")
			return response

		try:
			body = await response.aread()
		except httpx.TransportError as e:
			self._logger.debug(f"-> could not read error body: {e!r}")
			body = b''
		finally:
			await response.aclose()

		error = UnexpectedStatusError(
			url=str(request.url),
			status_code=response.status_code,
			reason=response.reason_phrase,
			message=printable_message(body),
			expected=ok_statuses,
		)
		self._logger.debug(f"-> error: {error}")
		raise error
