"""Directory tree of deployed files.

Groups deployed FileMappings into a nested tree rooted at ``~`` for
browsing.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from dotviz.models.mapping import FileMapping

ROOT_NAME = "~"


class NodeType(str, Enum):
    """Kind of tree node."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(slots=True)
class FileTreeNode:
    """A node in the deployed file tree.

    Attributes:
        name: Final path segment (``~`` for the root).
        path: Home-relative path of the node (``~`` for the root).
        node_type: File or directory.
        children: Child nodes in insertion order (directories only).
        file_info: The mapping deployed at this path, if any.
    """

    name: str
    path: str
    node_type: NodeType
    children: list["FileTreeNode"] = field(default_factory=list)
    file_info: FileMapping | None = None

    @property
    def is_directory(self) -> bool:
        """Whether the node is a directory."""
        return self.node_type is NodeType.DIRECTORY

    def get_child(self, name: str) -> "FileTreeNode | None":
        """Find a direct child by name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def iter_files(self) -> Iterator[FileMapping]:
        """Yield the mappings of all file leaves, depth-first."""
        if self.file_info is not None:
            yield self.file_info
        for child in self.children:
            yield from child.iter_files()

    def to_dict(self) -> dict[str, object]:
        """Convert to a nested dictionary for JSON serialization."""
        result: dict[str, object] = {
            "name": self.name,
            "path": self.path,
            "type": self.node_type.value,
        }
        if self.is_directory:
            result["children"] = [child.to_dict() for child in self.children]
        if self.file_info is not None:
            result["file"] = self.file_info.to_dict()
        return result


def build_file_tree(files: Iterable[FileMapping]) -> FileTreeNode:
    """Build a directory tree from deployed mappings.

    Intermediate directories are created on demand. When several
    mappings share a deploy path, the first one wins. A file whose
    path is also the parent of other files becomes a directory that
    still carries its own mapping.

    Args:
        files: Deployed mappings.

    Returns:
        Root node named ``~``.
    """
    root = FileTreeNode(name=ROOT_NAME, path=ROOT_NAME, node_type=NodeType.DIRECTORY)

    for mapping in files:
        parts = mapping.relative_deploy_path.split("/")
        node = root

        for index, part in enumerate(parts):
            is_last = index == len(parts) - 1
            child = node.get_child(part)
            if child is None:
                child = FileTreeNode(
                    name=part,
                    path="/".join(parts[: index + 1]),
                    node_type=NodeType.FILE if is_last else NodeType.DIRECTORY,
                    file_info=mapping if is_last else None,
                )
                node.children.append(child)
            elif not is_last and not child.is_directory:
                # A path deployed both as a file and as a parent keeps its mapping
                child.node_type = NodeType.DIRECTORY
            elif is_last and child.file_info is None:
                child.file_info = mapping
            node = child

    return root
