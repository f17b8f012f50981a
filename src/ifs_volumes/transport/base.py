"""
Transport base class

Narrow capability the volume operations are built on: path-based
requests against the array plus the identity the client acts as.
All transports must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class Transport(ABC):
    """
    Abstract base class for transports.

    Request methods return the decoded response body (``None`` when the
    body is empty) and raise ``NotFoundError`` when the remote reports
    a missing resource or ``TransportError`` for any other failure.
    ``timeout`` is the request deadline in seconds; ``None`` selects the
    transport's configured default.
    """

    @abstractmethod
    async def get(
        self,
        path: str,
        subpath: str = "",
        query: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        pass

    @abstractmethod
    async def put(
        self,
        path: str,
        subpath: str = "",
        query: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        pass

    @abstractmethod
    async def delete(
        self,
        path: str,
        subpath: str = "",
        query: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        pass

    @abstractmethod
    def user(self) -> str:
        """Name of the user the client authenticates as"""
        pass

    @abstractmethod
    def group(self) -> str:
        """Group of the client, or an empty string"""
        pass
