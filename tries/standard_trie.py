"""
Basic Trie (one token per edge) over arbitrary token sequences.

This is the baseline the segmented and length-grouped tries are compared
against: every edge carries exactly one token, so a sequence of length L
always occupies L edges. Tokens can be characters, words, integers or any
other hashable value; a `str` input is treated as a sequence of characters.

Key design choices:
- **Memory efficiency:** `TrieNode` uses `__slots__` and *lazy* child dicts
  (`children=None` until the first child is added).
- **Generic tokens:** sequences are stored as tuples; an optional `normalize`
  callable (e.g. `str.casefold`) is applied to each raw sequence at the API
  boundary.
- **Batch performance:** `batch_insert` exploits the Longest Common Prefix
  (LCP) between *adjacent, sorted* inputs to avoid re-walking shared paths.
- **Iterative traversals:** no recursion, so long sequences never hit the
  interpreter recursion limit.


Classes
-------
TrieNode
    Minimal node holding `children` (dict[token, TrieNode] or None) and `is_terminal`.
Trie
    Public API for insertion, search, prefix enumeration, structural stats and
    export into a `SegmentedTrie`.


Complexity (typical)
--------------------
- single insert / search: O(L)
- batch insert (sorted): ~O(total new tokens created)
- enumerate prefix: O(L + K * avg_suffix_length), K = number of results


Conventions & Notes
-------------------
- **Children:** `children` is `None` for leaves. Always guard with
  `if node.children: ...`.
- **Enumeration order:** children are visited through `edges()`, in token
  order, so `enumerate_prefix` yields sequences sorted.
- **Empty sequence:** inserting `()` marks the root terminal.
- The trie is built by insertion only; there is no deletion.
"""

from .segmented_trie import SegmentedTrie
from .sequences import ordered, prepare_batch


class TrieNode:
  __slots__ = ("children", "is_terminal")

  def __init__(self):
    self.children = None
    self.is_terminal = False

  def edges(self):
    """Yield (token, child) pairs in token order."""
    children = self.children
    if not children:
      return
    for token in ordered(children):
      yield token, children[token]


class Trie:
  __slots__ = ("root", )

  def __init__(self):
    self.root = TrieNode()

  def single_insert(self, sequence, normalize=None):
    """Insert a single token sequence into the trie.

    Parameters
    ----------
    sequence : Iterable[Hashable]
        Sequence to insert.
    normalize : Callable | None, default=None
        Normalization applied before insertion.

    Complexity
    ----------
    O(L) time, O(new_nodes) space where L = len(sequence).
    """
    if normalize is not None:
      sequence = normalize(sequence)
    node = self.root

    for token in sequence:
      children = node.children
      nxt = None if children is None else children.get(token)
      if nxt is None:
        nxt = TrieNode()
        if children is None:
          node.children = {token: nxt}
        else:
          children[token] = nxt
      node = nxt
    node.is_terminal = True

  def batch_insert(self,
                   sequences,
                   *,
                   normalize=None,
                   dedup=True,
                   presorted=False):
    """Bulk-insert many sequences using LCP reuse.

    Parameters
    ----------
    sequences : Iterable[Iterable[Hashable]]
    normalize, dedup, presorted
        See `tries.sequences.prepare_batch`.

    Notes
    -----
    Sequences are visited in sorted order and the path of the previous
    sequence is reused up to their longest common prefix.
    """
    batch = prepare_batch(sequences, normalize, dedup, presorted, sort=True)

    prev = ()
    path = [self.root]

    for seq in batch:
      lp, ls = len(prev), len(seq)
      i = 0
      while i < lp and i < ls and prev[i] == seq[i]:
        i += 1

      path = path[:i + 1]
      node = path[-1]

      for token in seq[i:]:
        children = node.children
        nxt = None if children is None else children.get(token)
        if nxt is None:
          nxt = TrieNode()
          if children is None:
            node.children = {token: nxt}
          else:
            children[token] = nxt
        path.append(nxt)
        node = nxt

      node.is_terminal = True
      prev = seq

  def prefix_search(self, prefix, normalize=None):
    """Return the node at the end of `prefix`, or None if the path is missing."""
    if normalize is not None:
      prefix = normalize(prefix)
    node = self.root
    for token in prefix:
      node = None if node.children is None else node.children.get(token)
      if node is None:
        return None
    return node

  def search(self, sequence, normalize=None):
    """Return the terminal node for `sequence` if present, else None."""
    node = self.prefix_search(sequence, normalize)
    return node if node and node.is_terminal else None

  def enumerate_prefix(self, prefix=(), k=None, normalize=None):
    """Yield stored sequences (as tuples) that start with `prefix`.

    Parameters
    ----------
    prefix : Iterable[Hashable], default=()
        The prefix to enumerate from. Use () to export the entire trie.
    k : int | None, default=None
        If None, yield all matches; otherwise, yield up to `k` matches.

    Implementation details
    ----------------------
    Iterative DFS over a shared token buffer; each match is copied into a
    tuple only at yield time.
    """
    if normalize is not None:
      prefix = normalize(prefix)
    node = self.prefix_search(prefix)
    if node is None or (k is not None and k <= 0):
      return

    yielded = 0
    buf = list(prefix)

    if node.is_terminal:
      yield tuple(buf)
      yielded += 1
      if k is not None and yielded >= k:
        return

    stack = [(node, node.edges(), len(buf))]
    while stack:
      _, it, depth = stack[-1]
      try:
        token, child = next(it)
      except StopIteration:
        stack.pop()
        continue
      buf[depth:] = []
      buf.append(token)
      if child.is_terminal:
        yield tuple(buf)
        yielded += 1
        if k is not None and yielded >= k:
          return
      stack.append((child, child.edges(), len(buf)))

  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If True, return `sum(len(children)) / (# internal nodes)` instead.

    Returns
    -------
    int | float
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self.root]
    while stack:
      node = stack.pop()
      total_nodes += 1
      children = node.children
      if children:
        total_deg += len(children)
        internal += 1
        stack.extend(children.values())
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes

  def to_segmented(self):
    """Build a `SegmentedTrie` from every sequence stored in this trie."""
    return SegmentedTrie.from_sequences(self.enumerate_prefix(()))
