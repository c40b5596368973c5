"""
File Tree - Build the explorer tree for a generated project
"""

from __future__ import annotations

from models.project import FileTreeNode, ProjectFile, ProjectOutput


def _sort_key(node: FileTreeNode) -> tuple[bool, str, str]:
    # Directories first, then case-insensitive name
    return (node.children is None, node.name.casefold(), node.name)


def _sort_nodes(nodes: list[FileTreeNode]) -> None:
    nodes.sort(key=_sort_key)
    for node in nodes:
        if node.children is not None:
            _sort_nodes(node.children)


def build_file_tree(files: list[ProjectFile]) -> FileTreeNode:
    """
    Build a nested tree from flat file paths.

    Every segment but the last is a directory. Siblings are sorted with
    directories before files, then by name.
    """
    root = FileTreeNode(name="root", path="", children=[])

    for file in files:
        parts = [part for part in file.path.split("/") if part]
        if not parts:
            continue

        level = root.children
        current_path = ""
        for part in parts[:-1]:
            current_path = f"{current_path}/{part}" if current_path else part
            node = next((c for c in level if c.name == part and c.children is not None), None)
            if node is None:
                node = FileTreeNode(name=part, path=current_path, children=[])
                level.append(node)
            level = node.children

        level.append(
            FileTreeNode(
                name=parts[-1],
                path=file.path,
                content=file.content,
                explanation=file.explanation,
            )
        )

    _sort_nodes(root.children)
    return root


def default_file(project: ProjectOutput) -> ProjectFile | None:
    """File to open first: main.dart when present, else the first file"""
    for file in project.files:
        if file.path.endswith("main.dart"):
            return file
    return project.files[0] if project.files else None
