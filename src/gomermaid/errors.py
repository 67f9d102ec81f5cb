"""Exception hierarchy for gomermaid."""

from __future__ import annotations


class GomermaidError(Exception):
    """Base class for errors that abort a run."""


class LoadError(GomermaidError):
    """The module's package facts could not be loaded."""


class ConfigError(GomermaidError):
    """A configuration file is unreadable or malformed."""
