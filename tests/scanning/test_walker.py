"""
Tests for tree walking in usage and binding modes.

Focus Areas:
1. Pre-order traversal over one or more roots
2. Deduplication in usage mode versus full records in binding mode
3. Cooperative yielding between roots
"""

import asyncio
from unittest.mock import patch

from varaudit.scanning import (
    BindingRecord,
    collect_bindings,
    collect_used_ids,
    collect_used_ids_async,
    walk,
)


class TestWalk:
    """Test tree traversal order and depth."""

    def test_pre_order(self, make_node):
        """Parents come before children, children in original order."""
        root = make_node(
            "a",
            children=[
                make_node("b", children=[make_node("c"), make_node("d")]),
                make_node("e"),
            ],
        )
        assert [node.id for node in walk(root)] == ["a", "b", "c", "d", "e"]

    def test_deep_tree(self, make_node):
        """Deep trees do not hit the recursion limit."""
        node = make_node("leaf", fills=["V1"])
        for depth in range(3000):
            node = make_node(f"n{depth}", children=[node])
        assert collect_used_ids([node]) == {"V1"}


class TestUsageMode:
    """Test used-id collection."""

    def test_collects_across_roots_and_channels(self, make_node):
        """Test ids are gathered from every root and binding channel."""
        roots = [
            make_node("a", bindings={"width": "V1"}, children=[make_node("b", strokes=["V2"])]),
            make_node("c", fills=["V3"]),
        ]
        assert collect_used_ids(roots) == {"V1", "V2", "V3"}

    def test_empty_roots(self):
        """Test no roots gives an empty set."""
        assert collect_used_ids([]) == set()

    def test_idempotent(self, make_node):
        """Scanning the same tree twice yields the same set."""
        roots = [make_node("a", fills=["V1"], children=[make_node("b", bindings={"fontSize": ["V2"]})])]
        assert collect_used_ids(roots) == collect_used_ids(roots)

    def test_async_matches_sync(self, make_node):
        """Test the async walk finds the same ids as the sync walk."""
        roots = [make_node("a", fills=["V1"]), make_node("b", strokes=["V2"])]
        assert asyncio.run(collect_used_ids_async(roots)) == collect_used_ids(roots)

    def test_async_yields_once_per_root(self, make_node):
        """The async walk suspends once before each root."""
        roots = [make_node("a"), make_node("b"), make_node("c")]
        real_sleep = asyncio.sleep
        calls = []

        async def fake_sleep(delay):
            calls.append(delay)
            await real_sleep(delay)

        with patch("varaudit.scanning.walker.asyncio.sleep", fake_sleep):
            asyncio.run(collect_used_ids_async(roots))
        assert calls == [0, 0, 0]

    def test_async_without_yield(self, make_node):
        """Test yielding can be switched off."""
        roots = [make_node("a", fills=["V1"])]
        with patch("varaudit.scanning.walker.asyncio.sleep") as sleep:
            result = asyncio.run(collect_used_ids_async(roots, yield_between_roots=False))
        sleep.assert_not_called()
        assert result == {"V1"}


class TestBindingMode:
    """Test binding record collection."""

    def test_same_variable_bound_five_times(self, make_node):
        """Five bindings dedupe to one used id but produce five records."""
        roots = [
            make_node(
                "root",
                fills=["V1"],
                children=[
                    make_node("a", strokes=["V1"]),
                    make_node("b", bindings={"width": "V1", "height": "V1"}),
                    make_node("c", fills=["V1"]),
                ],
            )
        ]
        assert collect_used_ids(roots) == {"V1"}
        assert len(collect_bindings(roots)) == 5

    def test_records_carry_source_context(self, make_node):
        """Test each record names its node and property."""
        roots = [
            make_node(
                "1:1",
                name="Card",
                bindings={"paddingTop": "V1"},
                children=[make_node("1:2", name="Title", fills=["V2"])],
            )
        ]
        assert collect_bindings(roots) == [
            BindingRecord("1:1", "Card", "paddingTop", "V1"),
            BindingRecord("1:2", "Title", "fills.color", "V2"),
        ]
