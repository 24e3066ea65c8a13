"""Adaptive radix tree keyed by byte strings: nodes, lookup, insert, min/max, iteration and delete."""

__version__ = "0.1.0"
__all__ = ["nodes", "lookup", "insert", "minmax", "iterator", "delete"]