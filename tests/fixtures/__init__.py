"""Shared testing fixtures for the study-aid test suite."""

from .chat_client import FakeChatClient  # noqa: F401
from .workspace import WorkspaceBuilder  # noqa: F401

__all__ = [
    "FakeChatClient",
    "WorkspaceBuilder",
]
