# (c) Copyright Datacraft, 2026
"""Errors raised by the eSCL client."""
from typing import Collection


class AirscanError(Exception):
	"""Base class for all errors raised by this package."""


class TransportError(AirscanError):
	"""Network-level failure: no candidate reachable, timeout, broken connection."""

	def __init__(self, url: str, cause: Exception):
		self.url = url
		self.cause = cause
		super().__init__(f"{url}: {cause.__class__.__name__}: {cause}")


class UnexpectedStatusError(AirscanError):
	"""The device answered with a status outside the accepted set."""

	def __init__(
		self,
		url: str,
		status_code: int,
		reason: str,
		message: str,
		expected: Collection[int],
	):
		self.url = url
		self.status_code = status_code
		self.reason = reason
		self.message = message
		self.expected = tuple(int(s) for s in expected)
		if len(self.expected) == 1:
			want = str(self.expected[0])
		else:
			want = f"one of {list(self.expected)}"
		super().__init__(
			f"{url}: unexpected HTTP status: got {status_code} {reason} "
			f"({message}), want {want}"
		)


class DecodeError(AirscanError):
	"""A response body could not be decoded."""

	max_payload_repr = 512

	def __init__(self, message: str, payload: bytes = b'', cause: Exception | None = None):
		self.payload = payload
		self.cause = cause
		shown = payload[:self.max_payload_repr]
		suffix = '...' if len(payload) > self.max_payload_repr else ''
		detail = f"{message}: {cause}" if cause else message
		super().__init__(f"{detail} (invalid input? {shown!r}{suffix})")


class SettingsError(AirscanError, ValueError):
	"""Scan settings are incomplete or out of range."""


class NegotiationError(AirscanError):
	"""The requested settings do not match the device's state or capabilities."""


class ScannerNotReadyError(NegotiationError):

	def __init__(self, state: str):
		self.state = state
		super().__init__(f"scanner not ready: in state {state!r}, want 'Idle'")


class FeederEmptyError(NegotiationError):

	def __init__(self, adf_state: str):
		self.adf_state = adf_state
		super().__init__(
			f"scanner feeder contains no documents: status {adf_state!r}, "
			f"want 'ScannerAdfLoaded'"
		)


class UnsupportedSettingsError(NegotiationError):
	"""The device does not advertise a capability the settings require."""


class RetryLimitError(AirscanError):
	"""The device kept answering 503 to NextDocument."""

	def __init__(self, url: str, tries: int):
		self.url = url
		self.tries = tries
		super().__init__(f"503 retry limit ({tries}) reached while calling {url}")


class JobStateError(AirscanError, RuntimeError):
	"""A scan job operation was called in a state that does not allow it."""
