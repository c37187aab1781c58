"""
Length-Grouped Trie: abstracts a segmented trie by the length of its edge labels.

Sibling edges whose segments have the same number of tokens are folded into
one group, so `"ap"` and `"ba"` under the same parent become a single
"two-token edge". The subtrees below the folded siblings are unioned, and the
union is grouped again one level down. The result keeps the *shape* of the
input sequences while forgetting which concrete tokens produced it.

Transformation (applied at every node)
--------------------------------------
1. The new node starts with the source node's terminal flag.
2. Children are bucketed by segment length, one bucket per distinct length.
3. Each bucket becomes one child keyed by `LengthGroupKey(length, segments)`:
   - its terminal flag is the OR of the folded children's flags;
   - its own children come from the union of the folded children's children
     (the grandchildren), bucketed by length again.

Grandchild collisions
---------------------
Two folded siblings can both own a grandchild edge with the same segment.
`on_collision="overwrite"` (default) keeps only the later one, visiting
siblings in segment order so the winner is deterministic; the earlier
subtree, terminal flags included, is dropped. `on_collision="merge"` unions
the two subtrees recursively into a fresh node, so no terminal flag is lost.

The input trie is never modified, and no node of the result is shared with it.
"""

from dataclasses import dataclass
from operator import itemgetter

from .logger import init_logger
from .segmented_trie import SegmentedTrie, SegmentedTrieNode
from .sequences import ordered

logger = init_logger(__name__)

COLLISION_MODES = ("overwrite", "merge")


@dataclass(frozen=True)
class LengthGroupKey:
  """Identity of one merged sibling group: a length and the segments folded into it."""
  length: int
  segments: frozenset

  def __post_init__(self):
    segments = frozenset(tuple(seg) for seg in self.segments)
    object.__setattr__(self, 'segments', segments)
    if self.length <= 0:
      raise AssertionError(f"group length must be positive, got {self.length}")
    if not segments:
      raise AssertionError("a length group needs at least one segment")
    wrong = [seg for seg in segments if len(seg) != self.length]
    if wrong:
      raise AssertionError(f"segments {wrong!r} do not have length {self.length}")

  @classmethod
  def from_segments(cls, segments):
    segments = frozenset(tuple(seg) for seg in segments)
    length = len(next(iter(segments))) if segments else 0
    return cls(length, segments)

  def sorted_segments(self):
    return ordered(self.segments)

  def sort_key(self):
    return self.length, tuple(self.sorted_segments())

  def repr_sort_key(self):
    """`sort_key` for keys whose tokens do not compare; length stays numeric."""
    return self.length, tuple(repr(seg) for seg in self.sorted_segments())

  @classmethod
  def order(cls, keys):
    """Sort keys by length, then segments, whatever the token types."""
    return ordered(keys, key=cls.sort_key, fallback=cls.repr_sort_key)


class LengthGroupedNode:
  __slots__ = ("children", "is_terminal")

  def __init__(self, is_terminal=False):
    self.children = None
    self.is_terminal = is_terminal

  @classmethod
  def from_trie(cls, trie, on_collision="overwrite"):
    """Transform a `SegmentedTrie` (or its root node) into a length-grouped tree."""
    return LengthGroupedTransformer(on_collision).transform(trie)

  def _set(self, key, child):
    if self.children is None:
      self.children = {key: child}
    else:
      self.children[key] = child

  def edges(self):
    """Yield (LengthGroupKey, child) pairs ordered by key."""
    children = self.children
    if not children:
      return
    for key in LengthGroupKey.order(children):
      yield key, children[key]

  def degree(self):
    return len(self.children) if self.children else 0

  def child_for_length(self, length):
    """Return (key, child) for the group of `length`-token edges, or None."""
    for key, child in self.edges():
      if key.length == length:
        return key, child
    return None

  def walk(self):
    """Yield (node, depth) for every node, depth-first."""
    stack = [(self, 0)]
    while stack:
      node, depth = stack.pop()
      yield node, depth
      if node.children:
        stack.extend((child, depth + 1) for child in node.children.values())

  def count_nodes(self):
    return sum(1 for _ in self.walk())

  def count_terminals(self):
    return sum(1 for node, _ in self.walk() if node.is_terminal)

  def max_depth(self):
    return max(depth for _, depth in self.walk())

  def __repr__(self):
    keys = ", ".join(f"{key.length}:{len(key.segments)}" for key, _ in self.edges())
    return f"LengthGroupedNode(terminal={self.is_terminal}, [{keys}])"


def _merge_nodes(first, second):
  """Union two segmented subtrees into a fresh node; colliding edges merge recursively."""
  merged = SegmentedTrieNode(first.is_terminal or second.is_terminal)
  stack = [(merged, first, second)]
  while stack:
    target, left, right = stack.pop()
    for segment, child in left.edges():
      target._set(segment, child)
    for segment, child in right.edges():
      existing = target.children.get(segment) if target.children else None
      if existing is None:
        target._set(segment, child)
        continue
      both = SegmentedTrieNode(existing.is_terminal or child.is_terminal)
      target._set(segment, both)
      stack.append((both, existing, child))
  return merged


class LengthGroupedTransformer:
  """Turns a segmented trie into a `LengthGroupedNode` tree.

  Args:
      on_collision (str): "overwrite" (later sibling wins) or "merge"; how
          grandchildren with the same segment under two folded siblings are
          combined.

  Raises:
      ValueError: for an unknown `on_collision` mode.
  """
  __slots__ = ("on_collision", )

  def __init__(self, on_collision="overwrite"):
    if on_collision not in COLLISION_MODES:
      raise ValueError(f"on_collision must be one of {COLLISION_MODES}, got {on_collision!r}")
    self.on_collision = on_collision

  def transform(self, node):
    """Return the length-grouped tree for `node` (a root node or a `SegmentedTrie`)."""
    if isinstance(node, SegmentedTrie):
      node = node.root
    root = LengthGroupedNode(node.is_terminal)
    stack = [(root, node.children)]
    groups = 0
    while stack:
      target, children = stack.pop()
      if not children:
        continue
      for length, members in self._buckets(children):
        key = LengthGroupKey.from_segments(segment for segment, _ in members)
        merged = LengthGroupedNode(any(child.is_terminal for _, child in members))
        target._set(key, merged)
        stack.append((merged, self._union_grandchildren(members)))
        groups += 1
        logger.debug("length %d groups %d segments", length, len(members))
    logger.info("length-grouped trie built with %d groups", groups)
    return root

  @staticmethod
  def _buckets(children):
    """Bucket (segment, child) pairs by segment length; buckets ordered by length."""
    buckets = {}
    for segment, child in ordered(children.items(), key=itemgetter(0)):
      buckets.setdefault(len(segment), []).append((segment, child))
    return sorted(buckets.items(), key=itemgetter(0))

  def _union_grandchildren(self, members):
    combined = {}
    for _, member in members:
      for segment, grandchild in member.edges():
        existing = combined.get(segment)
        if existing is None or self.on_collision == "overwrite":
          combined[segment] = grandchild
        else:
          combined[segment] = _merge_nodes(existing, grandchild)
    return combined


def transform(node, on_collision="overwrite"):
  """Length-group a segmented trie (see `LengthGroupedTransformer`)."""
  return LengthGroupedTransformer(on_collision).transform(node)
