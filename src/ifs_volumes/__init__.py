"""
ifs-volumes: volume provisioning for OneFS-style namespace APIs

Creates, inspects, copies and deletes volumes (directories) below a
configured path on a storage array, assigning ownership to the client's
identity on creation.
"""

__version__ = "1.0.0"

from ifs_volumes.config import ClientConfig
from ifs_volumes.storage import VolumeService, CreateVolumeWorkflow
from ifs_volumes.transport import Transport, HttpTransport
from ifs_volumes.types import (
    Ownership,
    AccessControlRequest,
    VolumeDescriptor,
    VolumeListResult,
    VolumeAttribute,
    VolumeAttributes,
    CreationState,
    VolumeResult,
)
from ifs_volumes.errors import (
    VolumeError,
    TransportError,
    NotFoundError,
    PartialCreationError,
    InvalidRequestError,
)

# Re-export core classes
__all__ = [
    "ClientConfig",
    "VolumeService",
    "CreateVolumeWorkflow",
    "Transport",
    "HttpTransport",
    # Models
    "Ownership",
    "AccessControlRequest",
    "VolumeDescriptor",
    "VolumeListResult",
    "VolumeAttribute",
    "VolumeAttributes",
    "CreationState",
    "VolumeResult",
    # Exception classes
    "VolumeError",
    "TransportError",
    "NotFoundError",
    "PartialCreationError",
    "InvalidRequestError",
]
