"""Unit tests for connected-component grouping."""

from sheetfont.core.components import UnionFind, group_regions
from sheetfont.domain import Grid


class TestUnionFind:
    """Tests for the disjoint-set forest."""

    def test_initial_sets_are_singletons(self):
        """Test that every element starts as its own root."""
        forest = UnionFind(4)
        assert len(forest) == 4
        assert [forest.find(i) for i in range(4)] == [0, 1, 2, 3]

    def test_union_and_connected(self):
        """Test merging sets."""
        forest = UnionFind(5)
        assert forest.union(0, 1) is True
        assert forest.union(3, 4) is True
        assert forest.connected(0, 1)
        assert not forest.connected(1, 3)

        assert forest.union(1, 4) is True
        assert forest.connected(0, 3)

    def test_union_of_joined_elements(self):
        """Test that a redundant union reports no merge."""
        forest = UnionFind(3)
        forest.union(0, 1)
        forest.union(1, 2)
        assert forest.union(0, 2) is False

    def test_long_chain_does_not_recurse(self):
        """Test find over a long chain of unions."""
        size = 50_000
        forest = UnionFind(size)
        for i in range(size - 1):
            forest.union(i + 1, i)
        root = forest.find(size - 1)
        assert all(forest.find(i) == root for i in range(0, size, 997))


class TestGroupRegions:
    """Tests for group_regions."""

    def test_empty_grid(self):
        """Test that a zero-size grid has no regions."""
        assert group_regions(Grid(width=0, height=0, weights=())) == {}

    def test_all_background(self):
        """Test that background cells never form a region."""
        assert group_regions(Grid.from_ascii("---\n---")) == {}

    def test_fully_foreground(self):
        """Test that a filled grid is one region."""
        regions = group_regions(Grid.from_ascii("###\n###\n###"))
        assert regions == {0: tuple(range(9))}

    def test_diagonal_cells_stay_separate(self):
        """Test 4-connectivity: corner contact does not join cells."""
        regions = group_regions(Grid.from_ascii("#-\n-#"))
        assert regions == {0: (0,), 1: (3,)}

    def test_u_shape_joins_through_bottom(self):
        """Test that cells joined only via a later row share a region."""
        regions = group_regions(
            Grid.from_ascii(
                """
                #-#
                #-#
                ###
                """
            )
        )
        assert regions == {0: (0, 2, 3, 5, 6, 7, 8)}

    def test_region_ids_follow_scan_order(self):
        """Test that ids are assigned by first cell in row-major order."""
        grid = Grid.from_ascii(
            """
            --#-
            #---
            --##
            """
        )
        regions = group_regions(grid)
        assert list(regions) == [0, 1, 2]
        assert regions[0] == (2,)
        assert regions[1] == (4,)
        assert regions[2] == (10, 11)

    def test_fractional_weight_is_foreground(self):
        """Test that any positive weight counts as foreground."""
        grid = Grid.from_rows([[0.01, 0.0, 1.0]])
        assert group_regions(grid) == {0: (0,), 1: (2,)}

    def test_regions_partition_foreground(self):
        """Test that every foreground cell is in exactly one region."""
        grid = Grid.from_ascii(
            """
            ##-#-
            -#-##
            ##--#
            --#--
            """
        )
        regions = group_regions(grid)
        cells = [cell for members in regions.values() for cell in members]
        foreground = [i for i, w in enumerate(grid.weights) if w > 0]
        assert sorted(cells) == foreground
        assert len(cells) == len(set(cells))
