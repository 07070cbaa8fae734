"""Virtual filesystem model.

The filesystem is a mapping from absolute directory paths to listings of
entry name to node. A path without a listing is an empty directory; parent
directories are implicit and never checked. Directories created with
``mkdir`` appear only as entries in their parent's listing and are not
reconciled with the path-keyed listings.

Every operation returns a new FileSystemState and leaves the original
untouched.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

HOME_DIRECTORY = "/home/user"
OUTPUTS_DIRECTORY = "outputs"


class FileNode(BaseModel):
    """A file entry.

    Args:
        type: Always "file".
        content: Full text content of the file.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["file"] = Field(default="file")
    content: str = Field(description="Full text content of the file")


class DirectoryNode(BaseModel):
    """A directory entry. Directories carry no payload beyond existence."""

    model_config = ConfigDict(frozen=True)

    type: Literal["dir"] = Field(default="dir")


Node = Annotated[Union[FileNode, DirectoryNode], Field(discriminator="type")]


def validate_path(path: str) -> str:
    """Check that ``path`` is a non-empty absolute path.

    Raises:
        ValueError: If the path is empty or relative.
    """
    if not path or not path.startswith("/"):
        raise ValueError(f"Path must be absolute, got {path!r}")
    return path


def join_path(path: str, name: str) -> str:
    """Join a directory path and an entry name."""
    validate_path(path)
    if path == "/":
        return f"/{name}"
    return f"{path}/{name}"


def outputs_path(cwd: str) -> str:
    """Return the outputs directory under ``cwd``."""
    return join_path(cwd, OUTPUTS_DIRECTORY)


class FileSystemState(BaseModel):
    """Immutable snapshot of the whole virtual filesystem.

    Args:
        directories: Mapping from absolute directory path to its listing.
    """

    model_config = ConfigDict(frozen=True)

    directories: dict[str, dict[str, Node]] = Field(
        default_factory=dict,
        description="Mapping from absolute directory path to its listing",
    )

    def get_listing(self, path: str) -> dict[str, Node]:
        """Return a copy of the listing at ``path`` (empty if absent)."""
        validate_path(path)
        return dict(self.directories.get(path, {}))

    def list_entries(self, path: str) -> list[str]:
        """Return entry names at ``path`` in insertion order."""
        return list(self.get_listing(path))

    def get_node(self, path: str, name: str) -> Node | None:
        """Return the node named ``name`` under ``path``, or None."""
        return self.get_listing(path).get(name)

    def read_file(self, path: str, name: str) -> str | None:
        """Return the content of file ``name`` under ``path``.

        Returns:
            The file content, or None when there is no such file. Directory
            entries have no content and also yield None.
        """
        node = self.get_node(path, name)
        if isinstance(node, FileNode):
            return node.content
        return None

    def _with_listing(self, path: str, listing: dict[str, Node]) -> "FileSystemState":
        directories = dict(self.directories)
        directories[path] = listing
        return FileSystemState(directories=directories)

    def make_directory(self, path: str, name: str) -> "FileSystemState":
        """Insert a directory entry ``name`` under ``path``.

        Always succeeds: an existing entry with the same name, file or
        directory, is replaced without a diagnostic.
        """
        listing = self.get_listing(path)
        listing[name] = DirectoryNode()
        return self._with_listing(path, listing)

    def merge_files(self, path: str, batch: Mapping[str, str]) -> "FileSystemState":
        """Insert or overwrite one file per ``batch`` item under ``path``.

        Entries at ``path`` that are not named in the batch are preserved.
        """
        listing = self.get_listing(path)
        for name, content in batch.items():
            listing[name] = FileNode(content=content)
        return self._with_listing(path, listing)

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-serializable view of every listing."""
        return {
            "directories": {
                path: {name: node.model_dump() for name, node in listing.items()}
                for path, listing in self.directories.items()
            },
            "directory_count": len(self.directories),
        }

    def validate_state(self) -> list[str]:
        """Return a list of consistency issues (empty when valid)."""
        issues = []
        for path, listing in self.directories.items():
            if not path.startswith("/"):
                issues.append(f"Directory key {path!r} is not an absolute path")
            if len(path) > 1 and path.endswith("/"):
                issues.append(f"Directory key {path!r} has a trailing slash")
            for name in listing:
                if not name:
                    issues.append(f"Directory {path!r} contains an empty entry name")
        return issues
