"""Protocols for treeshift adapters and capabilities."""

from .file_adapter_protocol import FileAdapterProtocol
from .rename_protocol import RenameCapabilityProtocol


__all__ = ["FileAdapterProtocol", "RenameCapabilityProtocol"]
