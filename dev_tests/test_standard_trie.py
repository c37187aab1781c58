import os
import random
import string
import sys
import unittest

# ---------------- Import shim (works from dev_tests/) ----------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from tries.sequences import lcp, ordered, prepare_batch
from tries.standard_trie import Trie


# ---------- Test data ----------
def gen_words_fixed():
    return [
        "app", "apple", "apply",
        "bat", "batch", "bath",
        "bar", "bark",
        "cat", "cater",
        "do", "dog", "dove",
    ]


def gen_random_words(rng, n, alphabet=string.ascii_lowercase[:5], min_len=1, max_len=8):
    return ["".join(rng.choice(alphabet) for _ in range(rng.randint(min_len, max_len))) for _ in range(n)]


def as_tuples(words):
    return {tuple(w) for w in words}


class TestSequences(unittest.TestCase):
    def test_lcp(self):
        self.assertEqual(lcp("apple", "apply"), 4)
        self.assertEqual(lcp("apple", "apply", start=2), 2)
        self.assertEqual(lcp((1, 2), (1, 2, 3)), 2)
        self.assertEqual(lcp("", "abc"), 0)

    def test_ordered_natural_and_fallback(self):
        self.assertEqual(ordered([3, 1, 2]), [1, 2, 3])
        mixed = ordered([1, "a", None])
        self.assertEqual(sorted(mixed, key=repr), mixed)
        pairs = ordered([(10, "x"), (2, 1), (2, "y")], key=lambda p: p, fallback=lambda p: (p[0], repr(p[1])))
        self.assertEqual([p[0] for p in pairs], [2, 2, 10])

    def test_prepare_batch(self):
        self.assertEqual(prepare_batch(["ab", "ab", "c"]), [("a", "b"), ("c",)])
        self.assertEqual(len(prepare_batch(["ab", "ab"], dedup=False)), 2)
        self.assertEqual(prepare_batch(["B", "a"], normalize=str.lower, sort=True), [("a",), ("b",)])
        self.assertEqual(prepare_batch(["a", "a", "b", "b"], presorted=True), [("a",), ("b",)])


class TestTrie(unittest.TestCase):
    def setUp(self):
        self.words = gen_words_fixed()
        self.trie = Trie()
        self.trie.batch_insert(self.words)

    # ---------- Insertion ----------
    def test_single_and_batch_insert_agree(self):
        single = Trie()
        for w in self.words:
            single.single_insert(w)
        self.assertEqual(set(single.enumerate_prefix()), set(self.trie.enumerate_prefix()))
        self.assertEqual(single.count_nodes(), self.trie.count_nodes())

    def test_batch_insert_with_dups_and_normalize(self):
        trie = Trie()
        trie.batch_insert(["apply", "APP", "app", "Bath", "bath"], normalize=str.lower)
        self.assertEqual(set(trie.enumerate_prefix()), as_tuples(["app", "apply", "bath"]))

    def test_integer_tokens(self):
        trie = Trie()
        trie.batch_insert([(1, 2), (1, 3), (2, 3)])
        self.assertIsNotNone(trie.search((1, 3)))
        self.assertIsNone(trie.search((1,)))
        self.assertEqual(trie.count_nodes(), 6)

    def test_empty_sequence_marks_root(self):
        trie = Trie()
        trie.single_insert("")
        self.assertTrue(trie.root.is_terminal)
        self.assertEqual(list(trie.enumerate_prefix()), [()])

    # ---------- Queries ----------
    def test_search(self):
        for w in self.words:
            self.assertIsNotNone(self.trie.search(w), w)
        for w in ["ap", "ba", "cats", "x", ""]:
            self.assertIsNone(self.trie.search(w), w)
        self.assertIsNotNone(self.trie.search("DOG", normalize=str.lower))

    def test_prefix_search(self):
        self.assertIsNotNone(self.trie.prefix_search("ba"))
        self.assertIsNone(self.trie.prefix_search("bz"))
        self.assertIs(self.trie.prefix_search(""), self.trie.root)

    def test_enumerate_prefix(self):
        self.assertEqual(set(self.trie.enumerate_prefix("bat")), as_tuples(["bat", "batch", "bath"]))
        self.assertEqual(set(self.trie.enumerate_prefix("ca")), as_tuples(["cat", "cater"]))
        self.assertEqual(list(self.trie.enumerate_prefix("zz")), [])
        self.assertEqual(len(list(self.trie.enumerate_prefix("", k=4))), 4)
        self.assertEqual(list(self.trie.enumerate_prefix("", k=0)), [])

    def test_enumerate_is_sorted(self):
        out = ["".join(t) for t in self.trie.enumerate_prefix()]
        self.assertEqual(out, sorted(self.words))

    # ---------- Structure ----------
    def test_count_nodes(self):
        trie = Trie()
        trie.batch_insert(["car", "cat"])
        self.assertEqual(trie.count_nodes(), 5)
        self.assertAlmostEqual(trie.count_nodes(get_avg_branch_factor=True), 4 / 3)
        self.assertEqual(Trie().count_nodes(get_avg_branch_factor=True), 0.0)

    def test_to_segmented_keeps_sequences(self):
        rng = random.Random(11)
        words = gen_random_words(rng, 200)
        trie = Trie()
        trie.batch_insert(words)
        segmented = trie.to_segmented()
        self.assertEqual(set(segmented.enumerate_prefix(())), as_tuples(words))
        self.assertLessEqual(segmented.count_nodes(), trie.count_nodes())


if __name__ == "__main__":
    unittest.main(verbosity=2)
