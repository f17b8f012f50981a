"""
ifs-volumes type definitions

Request and response models exchanged with the storage array.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "Ownership",
    "AccessControlRequest",
    "VolumeDescriptor",
    "VolumeListResult",
    "VolumeAttribute",
    "VolumeAttributes",
    "CreationState",
    "VolumeResult",
]


class Ownership(BaseModel):
    """Owner or group entry of an ACL request"""

    name: str = Field(..., description="User or group name")
    type: Literal["user", "group"] = Field(..., description="Kind of principal")


class AccessControlRequest(BaseModel):
    """
    Body of the ``?acl`` request that assigns ownership to a volume.

    ``group`` is omitted from the payload entirely when not set.
    """

    authoritative: Literal["acl"] = "acl"
    action: Literal["update"] = "update"
    owner: Ownership
    group: Optional[Ownership] = None

    @classmethod
    def for_identity(cls, user: str, group: str = "") -> "AccessControlRequest":
        request = cls(owner=Ownership(name=user, type="user"))
        if group:
            request.group = Ownership(name=group, type="group")
        return request

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class VolumeDescriptor(BaseModel):
    """Entry in a namespace listing"""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Volume name")


class VolumeListResult(BaseModel):
    """Listing of the volumes namespace, in server order"""

    model_config = ConfigDict(extra="allow")

    children: List[VolumeDescriptor] = Field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [child.name for child in self.children]


class VolumeAttribute(BaseModel):
    """Single metadata attribute"""

    model_config = ConfigDict(extra="allow")

    name: str
    value: Any = None
    namespace: Optional[str] = None


class VolumeAttributes(BaseModel):
    """Metadata of an existing volume as returned by a ``?metadata`` query"""

    model_config = ConfigDict(extra="allow")

    attrs: List[VolumeAttribute] = Field(default_factory=list)

    def get(self, name: str) -> Any:
        """Return the value of attribute ``name``, or None if absent"""
        for attr in self.attrs:
            if attr.name == name:
                return attr.value
        return None

    @property
    def owner(self) -> Optional[str]:
        return self.get("owner")

    @property
    def group(self) -> Optional[str]:
        return self.get("group")


class CreationState(str, Enum):
    """Progress of the two-phase volume creation"""

    UNSTARTED = "unstarted"
    MATERIALIZED = "materialized"
    OWNERSHIP_ASSIGNED = "ownership_assigned"
    PARTIALLY_FAILED = "partially_failed"


class VolumeResult(BaseModel):
    """Outcome of a successful create call"""

    name: str = Field(..., description="Volume name")
    path: str = Field(..., description="Remote path of the volume")
    state: CreationState = Field(..., description="Final creation state")
    response: Any = Field(None, description="Decoded body of the last response")

    @property
    def ready(self) -> bool:
        return self.state == CreationState.OWNERSHIP_ASSIGNED
