"""Study helper: subjects and questions kept locally, importable from a remote question bank."""

__version__ = "0.1.0"
