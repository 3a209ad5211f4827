"""Union-Find (Disjoint Set Union) over contact positions."""


class UnionFind:
    """Union-Find with path compression and union by rank.

    Elements are 0-based positions in the input contact list, created up
    front so that component order follows input order.

    Attributes
    ----------
    parent : list[int]
        Parent pointer per element.
    rank : list[int]
        Rank (approximate tree height) per root.
    """

    def __init__(self, size: int) -> None:
        """Create ``size`` singleton sets."""
        self.parent: list[int] = list(range(size))
        self.rank: list[int] = [0] * size

    def find(self, x: int) -> int:
        """Find root of the set containing x, compressing the path."""
        root = x
        while self.parent[root] != root:
            root = self.parent[root]

        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]

        return root

    def union(self, x: int, y: int) -> bool:
        """Union the sets containing x and y.

        Returns
        -------
        bool
            True if two distinct sets were merged, False if already joined.
        """
        root_x = self.find(x)
        root_y = self.find(y)

        if root_x == root_y:
            return False

        if self.rank[root_x] < self.rank[root_y]:
            root_x, root_y = root_y, root_x

        self.parent[root_y] = root_x
        if self.rank[root_x] == self.rank[root_y]:
            self.rank[root_x] += 1

        return True

    def get_components(self) -> list[list[int]]:
        """Get all components with their members in ascending order.

        Components are ordered by their smallest member.
        """
        components: dict[int, list[int]] = {}
        for element in range(len(self.parent)):
            components.setdefault(self.find(element), []).append(element)
        return list(components.values())
