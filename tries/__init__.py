"""Segmented tries over token sequences and their length-grouped abstraction."""

from .length_grouped_trie import (
    LengthGroupedNode,
    LengthGroupedTransformer,
    LengthGroupKey,
    transform,
)
from .render import RenderConfig, print_tree, render_tree
from .segmented_trie import SegmentedTrie, SegmentedTrieBuilder, SegmentedTrieNode, build
from .standard_trie import Trie, TrieNode

__all__ = [
    "Trie",
    "TrieNode",
    "SegmentedTrie",
    "SegmentedTrieBuilder",
    "SegmentedTrieNode",
    "build",
    "LengthGroupKey",
    "LengthGroupedNode",
    "LengthGroupedTransformer",
    "transform",
    "RenderConfig",
    "render_tree",
    "print_tree",
]
