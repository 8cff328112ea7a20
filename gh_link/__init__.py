"""GitHub request orchestration for note-taking links."""

__version__ = "0.1.0"
