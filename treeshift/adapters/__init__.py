"""Adapters for external systems."""

from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol

from .file_adapter import LocalFileSystemAdapter, create_file_adapter


__all__ = ["FileAdapterProtocol", "LocalFileSystemAdapter", "create_file_adapter"]
