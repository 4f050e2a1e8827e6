"""Duplex IRC client: incremental line decoder plus concurrent outbound writer."""

__version__ = "0.1.0"
