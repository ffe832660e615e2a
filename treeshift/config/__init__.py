"""Configuration for treeshift."""

from .settings import TreeshiftSettings


__all__ = ["TreeshiftSettings"]
