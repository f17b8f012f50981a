"""
Volume operations for ifs-volumes

Provides the volume lifecycle on top of a Transport:
- VolumeService: list, get, create, copy, delete volumes
- CreateVolumeWorkflow: the two-phase create (materialize, then assign ownership)

Volume lifecycle: Unstarted → Materialized → OwnershipAssigned
                                           ↘ PartiallyFailed

A create whose ownership step fails leaves the volume on the array with
its initial ownership. Nothing is rolled back or retried; the caller gets
a PartialCreationError and decides whether to delete the volume or call
set_ownership again.
"""

import asyncio
import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import ClientConfig
from ..errors import (
    InvalidRequestError,
    NotFoundError,
    PartialCreationError,
    TransportError,
)
from ..path_utils import resolve_namespace_path, validate_volume_name, volume_path
from ..transport.base import Transport
from ..types import (
    AccessControlRequest,
    CreationState,
    VolumeAttributes,
    VolumeListResult,
    VolumeResult,
)

logger = logging.getLogger(__name__)

# Headers of the materialize request: a directory, world read/write until
# ownership is assigned
CREATE_VOLUME_HEADERS = {
    "x-isi-ifs-target-type": "container",
    "x-isi-ifs-access-control": "public_read_write",
}

COPY_SOURCE_HEADER = "x-isi-ifs-copy-source"

ACL_QUERY = {"acl": ""}
METADATA_QUERY = {"metadata": ""}
RECURSIVE_DELETE_QUERY = {"recursive": "true"}

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse_response(model: Type[ModelT], data: Any, path: str) -> ModelT:
    """Validate a decoded body against ``model``; bad shapes raise TransportError"""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TransportError(
            message=f"Unexpected response for {path}: expected an object, got {type(data).__name__}",
            error_code="BAD_RESPONSE",
            details={"path": path, "body": data},
        )
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise TransportError(
            message=f"Unexpected response for {path}: {e.error_count()} invalid field(s)",
            error_code="BAD_RESPONSE",
            details={"path": path, "errors": e.errors(include_url=False)},
        ) from e


class CreateVolumeWorkflow:
    """
    Two-phase creation of a single volume.

    The array has no atomic create-with-owner call, so creation is a
    materialize request followed by an ACL request. ``state`` records how
    far the workflow got and can be inspected after ``run`` raises.

    Attributes:
        name: Volume name
        path: Remote path of the volume
        state: Current CreationState
        response: Decoded body of the last successful request
    """

    def __init__(
        self,
        transport: Transport,
        root: str,
        name: str,
        timeout: Optional[float] = None,
    ):
        self.transport = transport
        self.root = root
        self.name = name
        self.path = volume_path(root, name)
        self.timeout = timeout
        self.state = CreationState.UNSTARTED
        self.response: Any = None

    def build_acl_request(self) -> AccessControlRequest:
        """Ownership for the client's identity; the group only if one is configured"""
        return AccessControlRequest.for_identity(
            user=self.transport.user(),
            group=self.transport.group(),
        )

    async def materialize(self) -> None:
        # Errors propagate unchanged and the state stays UNSTARTED
        self.response = await self.transport.put(
            self.root,
            self.name,
            headers=dict(CREATE_VOLUME_HEADERS),
            timeout=self.timeout,
        )
        self.state = CreationState.MATERIALIZED

    async def apply_acl(self) -> None:
        """Send the ACL request; transport errors propagate unchanged"""
        self.response = await self.transport.put(
            self.root,
            self.name,
            query=dict(ACL_QUERY),
            body=self.build_acl_request().to_payload(),
            timeout=self.timeout,
        )
        self.state = CreationState.OWNERSHIP_ASSIGNED

    async def assign_ownership(self) -> None:
        # Second phase of run(): any failure leaves a materialized volume behind
        try:
            await self.apply_acl()
        except asyncio.CancelledError:
            self.state = CreationState.PARTIALLY_FAILED
            raise
        except Exception as e:
            self.state = CreationState.PARTIALLY_FAILED
            raise PartialCreationError(self.name, self.path, e) from e

    async def run(self) -> VolumeResult:
        """
        Execute both phases.

        Raises:
            TransportError: Materialize failed; no ACL request was sent
            PartialCreationError: Volume exists but ownership was not assigned
        """
        await self.materialize()
        await self.assign_ownership()
        return self.result()

    def result(self) -> VolumeResult:
        return VolumeResult(
            name=self.name,
            path=self.path,
            state=self.state,
            response=self.response,
        )


class VolumeService:
    """
    Volume operations against one volumes directory on the array.

    Holds no mutable state besides the resolved namespace root, so a
    single instance can serve concurrent callers. No locking is done:
    callers racing creates on the same name must coordinate themselves.
    Every operation accepts ``timeout`` (seconds) as the request deadline.
    """

    def __init__(self, transport: Transport, config: ClientConfig):
        """
        Initialize the service.

        Args:
            transport: Transport used for all requests
            config: Client configuration the namespace root is resolved from
        """
        self.transport = transport
        self._root = resolve_namespace_path(config)
        logger.debug(f"VolumeService using namespace root {self._root}")

    @property
    def root(self) -> str:
        """Resolved namespace root (read-only)"""
        return self._root

    def path_of(self, name: str) -> str:
        return volume_path(self._root, name)

    async def list(self, timeout: Optional[float] = None) -> VolumeListResult:
        """
        List all volumes.

        Returns:
            VolumeListResult; empty when the directory holds no volumes
        """
        logger.debug("Listing volumes")
        data = await self.transport.get(self._root, timeout=timeout)
        return _parse_response(VolumeListResult, data, self._root)

    async def get(self, name: str, timeout: Optional[float] = None) -> VolumeAttributes:
        """
        Get the metadata of a volume.

        Raises:
            NotFoundError: If the volume doesn't exist
            TransportError: On any other failure
        """
        validate_volume_name(name)
        logger.debug(f"Getting volume: {name}")
        data = await self.transport.get(
            self._root,
            name,
            query=dict(METADATA_QUERY),
            timeout=timeout,
        )
        return _parse_response(VolumeAttributes, data, self.path_of(name))

    async def exists(self, name: str, timeout: Optional[float] = None) -> bool:
        """Check whether a volume exists; errors other than not-found propagate"""
        try:
            await self.get(name, timeout=timeout)
        except NotFoundError:
            return False
        return True

    async def create(self, name: str, timeout: Optional[float] = None) -> VolumeResult:
        """
        Create a volume owned by the client's user (and group, if set).

        Returns:
            VolumeResult in state OWNERSHIP_ASSIGNED

        Raises:
            TransportError: Creation failed; nothing was created
            PartialCreationError: Volume was created but ownership assignment failed
        """
        validate_volume_name(name)
        workflow = CreateVolumeWorkflow(self.transport, self._root, name, timeout=timeout)

        logger.info(f"Creating volume: {name}")
        result = await workflow.run()
        logger.info(f"Volume created: {name}")
        return result

    async def set_ownership(self, name: str, timeout: Optional[float] = None) -> VolumeResult:
        """
        Assign the client's ownership to an existing volume.

        Recovery step after a PartialCreationError; only the ACL request is sent.
        Nothing is created here, so failures are never PartialCreationError.

        Raises:
            NotFoundError: If the volume doesn't exist
            TransportError: On any other failure
        """
        validate_volume_name(name)
        workflow = CreateVolumeWorkflow(self.transport, self._root, name, timeout=timeout)
        workflow.state = CreationState.MATERIALIZED

        logger.info(f"Assigning ownership of volume: {name}")
        await workflow.apply_acl()
        return workflow.result()

    async def copy(
        self,
        source_name: str,
        destination_name: str,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Create a new volume from the contents of an existing one.

        The copy is a single request; ownership is whatever the array gives it.

        Raises:
            InvalidRequestError: If a name is empty or both names are equal
            TransportError: On failure, including a missing source
        """
        validate_volume_name(source_name, "source_name")
        validate_volume_name(destination_name, "destination_name")
        if source_name == destination_name:
            raise InvalidRequestError(
                field="destination_name",
                value=destination_name,
                reason="destination_name must differ from source_name",
            )

        headers = {COPY_SOURCE_HEADER: f"/{self.path_of(source_name)}"}

        logger.info(f"Copying volume {source_name} to {destination_name}")
        await self.transport.put(self._root, destination_name, headers=headers, timeout=timeout)
        logger.info(f"Volume copied: {destination_name}")

    async def delete(self, name: str, timeout: Optional[float] = None) -> None:
        """
        Delete a volume and everything in it.

        Raises:
            NotFoundError: If the volume doesn't exist
            TransportError: On any other failure
        """
        validate_volume_name(name)
        logger.info(f"Deleting volume: {name}")
        await self.transport.delete(
            self._root,
            name,
            query=dict(RECURSIVE_DELETE_QUERY),
            timeout=timeout,
        )
        logger.info(f"Volume deleted: {name}")
