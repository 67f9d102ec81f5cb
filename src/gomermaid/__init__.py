"""Mermaid diagrams of the internal package dependencies of a Go module."""

__version__ = "0.1.0"
