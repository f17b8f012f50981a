"""
HTTP transport for the storage array's namespace API.

Example usage:
    import asyncio
    from ifs_volumes import ClientConfig, HttpTransport, VolumeService

    async def main():
        config = ClientConfig.from_env()
        async with HttpTransport(config) as transport:
            service = VolumeService(transport, config)
            await service.create("my-volume")

    asyncio.run(main())
"""

import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp

from ifs_volumes.config import ClientConfig
from ifs_volumes.errors import NotFoundError, TransportError
from ifs_volumes.transport.base import Transport

logger = logging.getLogger(__name__)

__all__ = ["HttpTransport", "build_query_string"]


def build_query_string(query: Optional[Dict[str, str]]) -> str:
    """
    Render query parameters, leaving keys with empty values bare.

    ``{"acl": ""}`` renders as ``acl`` rather than ``acl=``.
    """
    if not query:
        return ""
    parts = []
    for key, value in query.items():
        if value == "":
            parts.append(quote(key, safe=""))
        else:
            parts.append(f"{quote(key, safe='')}={quote(str(value), safe='')}")
    return "&".join(parts)


class HttpTransport(Transport):
    """
    aiohttp-backed transport.

    Requests are issued exactly once; failures are raised as
    ``TransportError`` (``NotFoundError`` for HTTP 404) and never retried.

    Attributes:
        endpoint: The array's management endpoint URL
        timeout: Default request deadline in seconds
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the transport.

        Args:
            config: Client configuration (endpoint, identity, TLS, deadline)
            session: Optional aiohttp session to reuse
        """
        self.config = config
        self.endpoint = config.endpoint.rstrip("/")
        self.timeout = config.timeout_sec
        self._session = session
        self._own_session = session is None

        logger.info(f"HttpTransport initialized with endpoint: {self.endpoint}")

    def user(self) -> str:
        return self.config.user

    def group(self) -> str:
        return self.config.group

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self._session is None or self._session.closed:
            auth = None
            if self.config.password is not None:
                auth = aiohttp.BasicAuth(self.config.user, self.config.password)
            connector = None
            if not self.config.verify_ssl:
                connector = aiohttp.TCPConnector(ssl=False)
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                auth=auth,
                connector=connector,
            )
            self._own_session = True
        return self._session

    async def close(self) -> None:
        """Close the underlying aiohttp session"""
        if self._own_session and self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.info("HttpTransport session closed")

    async def __aenter__(self) -> "HttpTransport":
        await self._get_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _build_url(
        self,
        path: str,
        subpath: str = "",
        query: Optional[Dict[str, str]] = None,
    ) -> str:
        """Build full URL from path, subpath and query"""
        url = f"{self.endpoint}/{path.strip('/')}"
        if subpath:
            url = f"{url}/{subpath}"
        query_string = build_query_string(query)
        if query_string:
            url = f"{url}?{query_string}"
        return url

    async def _request(
        self,
        method: str,
        path: str,
        subpath: str = "",
        query: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Make a single HTTP request.

        Returns:
            Decoded JSON body, ``{"content": text}`` for non-JSON bodies,
            or None for an empty body

        Raises:
            NotFoundError: On HTTP 404
            TransportError: On any other HTTP error, connection failure or timeout
        """
        url = self._build_url(path, subpath, query)
        session = await self._get_session()

        kwargs: Dict[str, Any] = {"headers": dict(headers or {})}
        if body is not None:
            kwargs["json"] = body
        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        try:
            logger.debug(f"{method} {url}")
            async with session.request(method, url, **kwargs) as response:
                await self._check_response(method, url, response)

                try:
                    text = await response.text()
                    if not text:
                        return None
                    if response.content_type == "application/json":
                        return await response.json()
                    return {"content": text}
                except ValueError as e:
                    # undecodable text or malformed JSON
                    raise TransportError(
                        message=f"{method} {url} returned an unreadable body: {e}",
                        status=response.status,
                        method=method,
                        url=url,
                        error_code="BAD_RESPONSE",
                    ) from e

        except asyncio.TimeoutError as e:
            # before ClientError: ServerTimeoutError is both
            raise TransportError(
                message=f"{method} {url} timed out",
                method=method,
                url=url,
                error_code="TIMEOUT",
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(
                message=f"{method} {url} failed: {e}",
                method=method,
                url=url,
            ) from e

    async def _check_response(
        self,
        method: str,
        url: str,
        response: aiohttp.ClientResponse,
    ) -> None:
        """
        Check response for errors.

        The array reports failures as ``{"errors": [{"code": ..., "message": ...}]}``.

        Raises:
            NotFoundError: On HTTP 404
            TransportError: On any other HTTP status >= 400
        """
        if response.status < 400:
            return

        message = f"HTTP {response.status}: {response.reason}"
        details: Dict[str, Any] = {}
        try:
            error_data = await response.json(content_type=None)
        except ValueError:
            error_data = None

        errors = error_data.get("errors") if isinstance(error_data, dict) else None
        if isinstance(errors, list) and errors:
            details = {"errors": errors}
            first = errors[0]
            if isinstance(first, dict):
                message = first.get("message", message)
                details["code"] = first.get("code")

        if response.status == 404:
            raise NotFoundError(message=message, method=method, url=url, details=details)
        raise TransportError(
            message=message,
            status=response.status,
            method=method,
            url=url,
            error_code=f"HTTP_{response.status}",
            details=details,
        )

    async def get(
        self,
        path: str,
        subpath: str = "",
        query: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self._request("GET", path, subpath, query, headers, timeout=timeout)

    async def put(
        self,
        path: str,
        subpath: str = "",
        query: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self._request("PUT", path, subpath, query, headers, body, timeout)

    async def delete(
        self,
        path: str,
        subpath: str = "",
        query: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self._request("DELETE", path, subpath, query, headers, timeout=timeout)
