"""
TreeRenderer - ASCII drawing of an LLRB tree.
"""

from llrbset.models.sortedcontainers.llrb_node import Color, Node


class TreeRenderer:
    """
    Renders a tree top-down, one node per line, left subtree first.

    Example for keys 1..3::

        ├── 2 (B)
        │   ├── 1 (B)
        │   └── 3 (B)
    """

    UNLIMITED_DEPTH = -1

    BRANCH_LEFT = "├── "
    BRANCH_RIGHT = "└── "
    INDENT_LEFT = "│   "
    INDENT_RIGHT = "    "
    TRUNCATED = " ..."

    def render(self, root: Node | None, max_depth: int = UNLIMITED_DEPTH) -> list[str]:
        """
        Render the subtree rooted at root.

        Args:
            root: Subtree root. None renders nothing.
            max_depth: Deepest level drawn in full (root is depth 0). Nodes
                below it are drawn as "key ..." and their subtrees skipped.
                UNLIMITED_DEPTH draws everything.

        Returns:
            The drawing as a list of lines.

        Raises:
            ValueError: If max_depth is below UNLIMITED_DEPTH.
        """
        if max_depth < self.UNLIMITED_DEPTH:
            raise ValueError(f"max_depth must be >= {self.UNLIMITED_DEPTH}, got {max_depth}")

        lines: list[str] = []
        self._render(root, "", True, 0, max_depth, lines)
        return lines

    def _render(
        self,
        node: Node | None,
        prefix: str,
        is_left: bool,
        depth: int,
        max_depth: int,
        lines: list[str],
    ) -> None:
        if node is None:
            return

        branch = prefix + (self.BRANCH_LEFT if is_left else self.BRANCH_RIGHT)

        if max_depth != self.UNLIMITED_DEPTH and depth > max_depth:
            lines.append(f"{branch}{node.key}{self.TRUNCATED}")
            return

        color = "R" if node.color == Color.RED else "B"
        lines.append(f"{branch}{node.key} ({color})")

        child_prefix = prefix + (self.INDENT_LEFT if is_left else self.INDENT_RIGHT)
        self._render(node.left, child_prefix, True, depth + 1, max_depth, lines)
        self._render(node.right, child_prefix, False, depth + 1, max_depth, lines)
