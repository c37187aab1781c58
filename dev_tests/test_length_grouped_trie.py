import os
import random
import sys
import unittest

# ---------------- Import shim (works from dev_tests/) ----------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from tries.length_grouped_trie import (
    LengthGroupedNode,
    LengthGroupedTransformer,
    LengthGroupKey,
    transform,
)
from tries.segmented_trie import SegmentedTrie, build


def key(*segments):
    return LengthGroupKey.from_segments(tuple(s) for s in segments)


def groups(node):
    return dict(node.edges())


def shape(node):
    return (node.is_terminal, tuple((seg, shape(child)) for seg, child in node.edges()))


def check_against_contributors(test, grouped, contributors):
    """Walk grouped + the segmented nodes merged into each group side by side.

    For every group: its key lists exactly the contributors' segments of that
    length, and it is terminal iff one of the folded nodes is terminal.
    """
    stack = [(grouped, contributors)]
    while stack:
        gnode, nodes = stack.pop()
        by_length = {}
        for n in nodes:
            for seg, child in n.edges():
                by_length.setdefault(len(seg), []).append((seg, child))
        test.assertEqual({k.length for k, _ in gnode.edges()}, set(by_length))
        for k, gchild in gnode.edges():
            members = by_length[k.length]
            test.assertEqual(k.segments, frozenset(seg for seg, _ in members))
            test.assertEqual(gchild.is_terminal, any(child.is_terminal for _, child in members))
            stack.append((gchild, [child for _, child in members]))


class TestScenarios(unittest.TestCase):
    def test_mixed_lengths_give_one_group_per_length(self):
        trie = SegmentedTrie.from_words(["ab", "ac", "bd", "be", "cf"])
        self.assertEqual(sorted(len(s) for s, _ in trie.root.edges()), [1, 1, 2])

        grouped = transform(trie)
        self.assertEqual(grouped.degree(), 2)
        top = groups(grouped)
        self.assertEqual(set(top), {key("a", "b"), key("cf")})

        ones = top[key("a", "b")]
        self.assertFalse(ones.is_terminal)
        self.assertEqual(set(groups(ones)), {key("b", "c", "d", "e")})
        self.assertTrue(groups(ones)[key("b", "c", "d", "e")].is_terminal)
        self.assertTrue(top[key("cf")].is_terminal)
        self.assertIsNone(top[key("cf")].children)

    def test_empty_input(self):
        grouped = transform(build([]))
        self.assertFalse(grouped.is_terminal)
        self.assertIsNone(grouped.children)
        self.assertEqual(grouped.count_nodes(), 1)

    def test_single_sequence(self):
        grouped = transform(build([("a",)]))
        self.assertFalse(grouped.is_terminal)
        self.assertEqual(list(groups(grouped)), [LengthGroupKey(1, frozenset({("a",)}))])
        leaf = groups(grouped)[key("a")]
        self.assertTrue(leaf.is_terminal)
        self.assertIsNone(leaf.children)

    def test_terminal_root_is_copied(self):
        grouped = transform(build([(), ("x",)]))
        self.assertTrue(grouped.is_terminal)

    def test_character_demo(self):
        trie = SegmentedTrie.from_words(["ape", "app", "application", "bans", "bat", "banner", "pot", "potion"])
        grouped = LengthGroupedNode.from_trie(trie)
        self.assertEqual(grouped.degree(), 2)
        top = groups(grouped)
        self.assertEqual(set(top), {key("ap", "ba"), key("pot")})

        two = top[key("ap", "ba")]
        self.assertFalse(two.is_terminal)
        self.assertEqual(list(groups(two)), [key("e", "p", "n", "t")])
        one = groups(two)[key("e", "p", "n", "t")]
        self.assertTrue(one.is_terminal)
        self.assertEqual([k for k, _ in one.edges()], [key("s"), key("ner"), key("lication")])

        pot = top[key("pot")]
        self.assertTrue(pot.is_terminal)
        self.assertEqual(list(groups(pot)), [key("ion")])

        self.assertEqual(grouped.count_nodes(), 8)
        self.assertEqual(grouped.count_terminals(), 6)
        self.assertEqual(grouped.max_depth(), 3)

    def test_integer_sequences(self):
        grouped = transform(build([(1, 2), (1, 3), (2, 3)]))
        self.assertEqual([k.length for k, _ in grouped.edges()], [1, 2])
        one, two = (child for _, child in grouped.edges())
        self.assertEqual(list(groups(one)), [key((2,), (3,))])
        self.assertTrue(two.is_terminal)

    def test_child_for_length(self):
        grouped = transform(build([(1, 2), (1, 3), (2, 3)]))
        k, _ = grouped.child_for_length(2)
        self.assertEqual(k, key((2, 3)))
        self.assertIsNone(grouped.child_for_length(5))


class TestCollisions(unittest.TestCase):
    """a -> c(terminal) -> x and b -> c -> {z, w}: both folded siblings own a 'c' edge."""

    def setUp(self):
        self.trie = SegmentedTrie.from_words(["ac", "acx", "adq", "bcz", "bcw", "beq"])

    def test_merge_unions_colliding_subtrees(self):
        grouped = transform(self.trie, on_collision="merge")
        ones = groups(grouped)[key("a", "b")]
        c_group = groups(ones)[key("c")]
        self.assertTrue(c_group.is_terminal)
        self.assertEqual(list(groups(c_group)), [key("w", "x", "z")])
        self.assertTrue(groups(ones)[key("dq", "eq")].is_terminal)

    def test_overwrite_keeps_later_sibling(self):
        grouped = transform(self.trie, on_collision="overwrite")
        ones = groups(grouped)[key("a", "b")]
        c_group = groups(ones)[key("c")]
        self.assertFalse(c_group.is_terminal)
        self.assertEqual(list(groups(c_group)), [key("w", "z")])

    def test_default_mode_lets_later_sibling_win(self):
        grouped = transform(self.trie.root)
        c_group = groups(groups(grouped)[key("a", "b")])[key("c")]
        self.assertFalse(c_group.is_terminal)
        self.assertEqual([k for k, _ in c_group.edges()], [key("w", "z")])
        self.assertEqual(shape(grouped), shape(transform(self.trie, on_collision="overwrite")))
        self.assertEqual(LengthGroupedTransformer().on_collision, "overwrite")

    def test_transform_does_not_modify_input(self):
        before = shape(self.trie.root)
        transform(self.trie, on_collision="merge")
        transform(self.trie, on_collision="overwrite")
        self.assertEqual(shape(self.trie.root), before)

    def test_unknown_mode(self):
        with self.assertRaises(ValueError):
            LengthGroupedTransformer(on_collision="union")


class TestLengthGroupKey(unittest.TestCase):
    def test_identity_includes_segments(self):
        self.assertEqual(key("ab", "cd"), key("cd", "ab"))
        self.assertNotEqual(key("ab"), key("cd"))
        self.assertEqual(len({key("ab", "cd"), key("cd", "ab")}), 1)

    def test_segments_must_match_length(self):
        with self.assertRaises(AssertionError):
            LengthGroupKey(2, frozenset({("a",)}))
        with self.assertRaises(AssertionError):
            key("a", "bc")

    def test_length_must_be_positive(self):
        with self.assertRaises(AssertionError):
            LengthGroupKey(0, frozenset({()}))
        with self.assertRaises(AssertionError):
            LengthGroupKey.from_segments([])

    def test_sort_key(self):
        self.assertEqual(key("b", "a").sorted_segments(), [("a",), ("b",)])
        self.assertLess(key("z").sort_key(), key("ab").sort_key())

    def test_order_keeps_lengths_numeric_with_mixed_tokens(self):
        ints, strs = LengthGroupKey(1, frozenset({(1,)})), LengthGroupKey(1, frozenset({("a",)}))
        two, ten = key((2, 2)), key(tuple(range(10)))
        keys = LengthGroupKey.order([ten, strs, two, ints])
        self.assertEqual([k.length for k in keys], [1, 1, 2, 10])
        self.assertEqual(keys, LengthGroupKey.order([ints, two, strs, ten]))


class TestProperties(unittest.TestCase):
    def test_terminal_iff_any_contributor_terminal(self):
        rng = random.Random(99)
        for _ in range(25):
            words = ["".join(rng.choice("abcd") for _ in range(rng.randint(0, 7))) for _ in range(30)]
            trie = SegmentedTrie.from_words(words)
            grouped = transform(trie, on_collision="merge")
            self.assertEqual(grouped.is_terminal, trie.root.is_terminal)
            check_against_contributors(self, grouped, [trie.root])

    def test_terminals_never_lost(self):
        rng = random.Random(5)
        for _ in range(25):
            words = ["".join(rng.choice("xyz") for _ in range(rng.randint(1, 6))) for _ in range(20)]
            trie = SegmentedTrie.from_words(words)
            grouped = transform(trie, on_collision="merge")
            segmented_depths = set()
            stack = [(trie.root, 0)]
            while stack:
                node, depth = stack.pop()
                if node.is_terminal:
                    segmented_depths.add(depth)
                stack.extend((child, depth + 1) for _, child in node.edges())
            grouped_depths = {depth for node, depth in grouped.walk() if node.is_terminal}
            self.assertEqual(segmented_depths, grouped_depths)

    def test_deterministic(self):
        words = ["ape", "app", "application", "bans", "bat", "banner", "pot", "potion"]
        a = transform(SegmentedTrie.from_words(words))
        b = transform(SegmentedTrie.from_words(list(reversed(words))))
        self.assertEqual(shape(a), shape(b))


if __name__ == "__main__":
    unittest.main(verbosity=2)
