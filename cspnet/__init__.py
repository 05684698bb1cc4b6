"""Cubesat Space Protocol building blocks: headers, checksums, authentication, buffers and connections."""

__version__ = "0.1.0"