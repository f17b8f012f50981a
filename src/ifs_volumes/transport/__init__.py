"""
Transports for talking to the storage array.
"""

from ifs_volumes.transport.base import Transport
from ifs_volumes.transport.http import HttpTransport

__all__ = ["Transport", "HttpTransport"]
