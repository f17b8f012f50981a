"""
Path helpers for the volumes namespace.

Volume names are used verbatim as path segments; no escaping is done
here, so callers must supply path-safe names.
"""

from ifs_volumes.config import ClientConfig
from ifs_volumes.errors import InvalidRequestError

# Prefix of the namespace (file system) API on the array
NAMESPACE_PREFIX = "namespace"


def resolve_namespace_path(config: ClientConfig) -> str:
    """
    Build the namespace root for the configured volumes directory.

    ``/ifs/volumes`` resolves to ``namespace/ifs/volumes``.
    """
    return f"{NAMESPACE_PREFIX}/{config.volumes_path.strip('/')}"


def volume_path(root: str, name: str) -> str:
    """Remote path of volume ``name`` below ``root``."""
    return f"{root}/{name}"


def validate_volume_name(value: str, field_name: str = "name") -> None:
    """
    Validate that a volume name is usable.

    Raises:
        InvalidRequestError: If the name is empty.
    """
    if not value:
        raise InvalidRequestError(
            field=field_name,
            value=value,
            reason=f"{field_name} cannot be empty",
        )
