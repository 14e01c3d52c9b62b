# (c) Copyright Datacraft, 2026
"""Resolved eSCL service records and the endpoints they lead to."""
import logging
from dataclasses import dataclass, field
from datetime import datetime

from .dialer import join_host_port

logger = logging.getLogger(__name__)

# DNS-SD service types
SERVICE_TYPE = '_uscan._tcp.local.'  # eSCL over HTTP
SECURE_SERVICE_TYPE = '_uscans._tcp.local.'  # eSCL over HTTPS

DEFAULT_ROOT_PATH = '/eSCL'


@dataclass
class DiscoveredScanner:
	"""
	A scanner found by DNS-SD, already resolved.

	Browsing the network is left to the caller (e.g. zeroconf); this
	record only turns the result into candidate endpoints.
	"""
	name: str
	host: str  # host name without domain, e.g. 'HP1234'
	port: int
	domain: str = 'local'
	addresses: list[str] = field(default_factory=list)
	txt_records: dict[str, str] = field(default_factory=dict)
	secure: bool = False
	discovered_at: datetime = field(default_factory=datetime.now)

	@property
	def human_name(self) -> str:
		"""Name for display: the TXT ``ty`` record, else the service name."""
		if self.txt_records.get('ty'):
			return self.txt_records['ty']
		# DNS labels come with master-file escaping, which looks wrong in a UI
		return self.name.replace('\\', '')

	@property
	def root_path(self) -> str:
		root = self.txt_records.get('rs', '').strip('/')
		return f"/{root}" if root else DEFAULT_ROOT_PATH

	@property
	def uuid(self) -> str | None:
		return self.txt_records.get('UUID') or self.txt_records.get('uuid')

	def candidate_endpoints(self) -> list[str]:
		"""
		All host:port strings that may reach this scanner, most likely first.

		The plain host name works with DHCP-based DNS, the ``.local`` name
		with an mDNS resolver (Avahi), the addresses without either.
		"""
		candidates = [
			join_host_port(self.host, self.port),
			join_host_port(f"{self.host}.{self.domain}", self.port),
		]
		for address in self.addresses:
			candidates.append(join_host_port(address, self.port))
		return candidates

	@classmethod
	def from_service_info(
		cls,
		name: str,
		service_type: str,
		info,
	) -> "DiscoveredScanner":
		"""
		Build a record from a zeroconf-style ``ServiceInfo``.

		Only ``server``, ``port``, ``properties`` and ``parsed_addresses()``
		are used, so zeroconf itself is not required here.
		"""
		server = (info.server or '').rstrip('.')
		host, _, domain = server.partition('.')
		secure = service_type == SECURE_SERVICE_TYPE

		txt_records = {}
		for key, value in (info.properties or {}).items():
			if isinstance(key, bytes):
				key = key.decode('utf-8', errors='replace')
			if isinstance(value, bytes):
				value = value.decode('utf-8', errors='replace')
			txt_records[key] = value if value is not None else ''

		scanner = cls(
			name=name.split('.')[0],  # Remove service suffix
			host=host or name.split('.')[0],
			port=info.port or (443 if secure else 80),
			domain=domain or 'local',
			addresses=list(info.parsed_addresses()),
			txt_records=txt_records,
			secure=secure,
		)
		logger.debug(f"Resolved scanner: {scanner.human_name} at {scanner.host}")
		return scanner
