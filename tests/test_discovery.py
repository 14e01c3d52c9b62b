# (c) Copyright Datacraft, 2026
"""Tests for discovered service records."""
from types import SimpleNamespace

from airscan.discovery import (
    DEFAULT_ROOT_PATH,
    SECURE_SERVICE_TYPE,
    SERVICE_TYPE,
    DiscoveredScanner,
)


def service_info(**overrides):
    info = dict(
        server='HP1234.local.',
        port=8080,
        properties={b'ty': b'HP OfficeJet Pro', b'rs': b'eSCL', b'UUID': b'abc-123'},
        addresses=['192.168.1.20', 'fe80::1'],
    )
    info.update(overrides)
    addresses = info.pop('addresses')
    return SimpleNamespace(parsed_addresses=lambda: addresses, **info)


def test_candidate_endpoints_order():
    scanner = DiscoveredScanner(
        name='HP OfficeJet', host='HP1234', port=80, addresses=['192.168.1.20', 'fe80::1'],
    )

    assert scanner.candidate_endpoints() == [
        'HP1234:80',
        'HP1234.local:80',
        '192.168.1.20:80',
        '[fe80::1]:80',
    ]


def test_from_service_info():
    scanner = DiscoveredScanner.from_service_info(
        'HP OfficeJet Pro._uscan._tcp.local.', SERVICE_TYPE, service_info(),
    )

    assert scanner.name == 'HP OfficeJet Pro'
    assert scanner.host == 'HP1234'
    assert scanner.domain == 'local'
    assert scanner.port == 8080
    assert scanner.addresses == ['192.168.1.20', 'fe80::1']
    assert scanner.txt_records['ty'] == 'HP OfficeJet Pro'
    assert scanner.human_name == 'HP OfficeJet Pro'
    assert scanner.root_path == '/eSCL'
    assert scanner.uuid == 'abc-123'
    assert scanner.secure is False


def test_from_secure_service_info():
    scanner = DiscoveredScanner.from_service_info(
        'Brother._uscans._tcp.local.', SECURE_SERVICE_TYPE, service_info(port=0, properties={}),
    )

    assert scanner.secure is True
    assert scanner.port == 443
    assert scanner.uuid is None


def test_human_name_falls_back_to_unescaped_name():
    scanner = DiscoveredScanner(name='Brother\\ MFC\\-L2750DW', host='brother', port=80)

    assert scanner.human_name == 'Brother MFC-L2750DW'


def test_root_path():
    assert DiscoveredScanner(name='a', host='a', port=80).root_path == DEFAULT_ROOT_PATH
    scanner = DiscoveredScanner(name='a', host='a', port=80, txt_records={'rs': '/scan/'})
    assert scanner.root_path == '/scan'
