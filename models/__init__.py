"""Code assistant simulator data models.

This package contains the virtual filesystem, the generated-file extractor,
the simulated shell interpreter, the terminal session and chat transcript,
and the workspace aggregate that ties them together.
"""

from models.catalog import MODEL_CATALOG, ModelDescriptor
from models.chat import ChatMessage, ChatState
from models.extractor import GeneratedFileBatch, extract_files, stage_files
from models.filesystem import (
    HOME_DIRECTORY,
    DirectoryNode,
    FileNode,
    FileSystemState,
    outputs_path,
)
from models.session import PROMPT_MARKER, Session
from models.shell import CommandResult, ShellInterpreter

__all__ = [
    "MODEL_CATALOG",
    "ModelDescriptor",
    "ChatMessage",
    "ChatState",
    "GeneratedFileBatch",
    "extract_files",
    "stage_files",
    "HOME_DIRECTORY",
    "DirectoryNode",
    "FileNode",
    "FileSystemState",
    "outputs_path",
    "PROMPT_MARKER",
    "Session",
    "CommandResult",
    "ShellInterpreter",
]
