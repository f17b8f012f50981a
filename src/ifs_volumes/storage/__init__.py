"""
Volume management module for ifs-volumes

Provides the volume lifecycle operations and the two-phase create workflow.
"""

from .volumes import (
    VolumeService,
    CreateVolumeWorkflow,
    CREATE_VOLUME_HEADERS,
    COPY_SOURCE_HEADER,
)

__all__ = [
    "VolumeService",
    "CreateVolumeWorkflow",
    "CREATE_VOLUME_HEADERS",
    "COPY_SOURCE_HEADER",
]
