"""
Pytest configuration and fixtures for ifs-volumes tests.

This module provides shared fixtures and configuration for all tests,
including an in-memory transport that simulates the storage array.
"""

import asyncio
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ifs_volumes.config import ClientConfig  # noqa: E402
from ifs_volumes.errors import NotFoundError, TransportError  # noqa: E402
from ifs_volumes.storage.volumes import VolumeService  # noqa: E402
from ifs_volumes.transport.base import Transport  # noqa: E402


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "http: Tests running the HTTP transport against a local server"
    )


# =============================================================================
# Fake Storage Array
# =============================================================================

class FakeTransport(Transport):
    """
    In-memory stand-in for the storage array.

    Records every request in ``calls`` and classifies it as one of
    list/get/create/acl/copy/delete. ``fail(kind, exc)`` makes the next
    request of that kind raise ``exc``; ``hang(kind)`` makes it block
    until cancelled.
    """

    DEFAULT_OWNER = "root"

    def __init__(self, user: str = "svc", group: str = ""):
        self._user = user
        self._group = group
        self.volumes: Dict[str, Dict[str, Any]] = {}
        self.calls: List[Dict[str, Any]] = []
        self._failures: Dict[str, BaseException] = {}
        self._hangs: set = set()

    def user(self) -> str:
        return self._user

    def group(self) -> str:
        return self._group

    def fail(self, kind: str, exc: BaseException) -> None:
        self._failures[kind] = exc

    def hang(self, kind: str) -> None:
        self._hangs.add(kind)

    def calls_of(self, kind: str) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call["kind"] == kind]

    @staticmethod
    def _classify(method: str, subpath: str, query: Dict[str, str], headers: Dict[str, str]) -> str:
        if method == "GET":
            return "get" if subpath else "list"
        if method == "DELETE":
            return "delete"
        if "acl" in query:
            return "acl"
        if "x-isi-ifs-copy-source" in headers:
            return "copy"
        return "create"

    async def _record(self, method, path, subpath, query, headers, body, timeout) -> str:
        query = dict(query or {})
        headers = dict(headers or {})
        kind = self._classify(method, subpath, query, headers)
        self.calls.append({
            "kind": kind,
            "method": method,
            "path": path,
            "subpath": subpath,
            "query": query,
            "headers": headers,
            "body": body,
            "timeout": timeout,
        })
        if kind in self._hangs:
            self._hangs.discard(kind)
            await asyncio.Event().wait()
        if kind in self._failures:
            raise self._failures.pop(kind)
        return kind

    def _missing(self, name: str) -> NotFoundError:
        return NotFoundError(message=f"Path '{name}' not found")

    async def get(self, path, subpath="", query=None, headers=None, timeout=None):
        await self._record("GET", path, subpath, query, headers, None, timeout)
        if not subpath:
            return {"children": [{"name": name} for name in self.volumes]}
        if subpath not in self.volumes:
            raise self._missing(subpath)
        volume = self.volumes[subpath]
        return {
            "attrs": [
                {"name": "owner", "value": volume["owner"], "namespace": None},
                {"name": "group", "value": volume["group"], "namespace": None},
                {"name": "type", "value": "container", "namespace": None},
            ]
        }

    async def put(self, path, subpath="", query=None, headers=None, body=None, timeout=None):
        kind = await self._record("PUT", path, subpath, query, headers, body, timeout)
        if kind == "acl":
            if subpath not in self.volumes:
                raise self._missing(subpath)
            self.volumes[subpath]["owner"] = body["owner"]["name"]
            if "group" in body:
                self.volumes[subpath]["group"] = body["group"]["name"]
        elif kind == "copy":
            source = headers["x-isi-ifs-copy-source"].rsplit("/", 1)[-1]
            if source not in self.volumes:
                raise self._missing(source)
            self.volumes[subpath] = dict(self.volumes[source])
        else:
            self.volumes.setdefault(subpath, {"owner": self.DEFAULT_OWNER, "group": ""})
        return None

    async def delete(self, path, subpath="", query=None, headers=None, timeout=None):
        await self._record("DELETE", path, subpath, query, headers, None, timeout)
        if subpath not in self.volumes:
            raise self._missing(subpath)
        del self.volumes[subpath]
        return None


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def client_config() -> ClientConfig:
    """Client configuration with identity user=svc and no group."""
    return ClientConfig(
        endpoint="https://array.example.com:8080",
        user="svc",
        group="",
        volumes_path="/ifs/volumes",
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Empty simulated array for identity user=svc, group=''."""
    return FakeTransport(user="svc", group="")


@pytest.fixture
def volume_service(fake_transport, client_config) -> VolumeService:
    """VolumeService wired to the simulated array."""
    return VolumeService(fake_transport, client_config)


@pytest.fixture
def transport_error() -> TransportError:
    """A generic transport failure."""
    return TransportError(message="connection reset by peer", method="PUT")


def make_service(user: str = "svc", group: str = "", volumes_path: Optional[str] = None):
    """Build a (service, transport) pair for a custom identity."""
    transport = FakeTransport(user=user, group=group)
    config = ClientConfig(user=user, group=group, volumes_path=volumes_path or "/ifs/volumes")
    return VolumeService(transport, config), transport


@pytest.fixture
def service_factory():
    """Factory fixture returning make_service."""
    return make_service
