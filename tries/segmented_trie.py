"""
Segmented Trie: a compressed trie whose edges carry multi-token segments.

Like a radix/Patricia trie, labels live on **edges** rather than on nodes, but
the trie is built in one pass from a whole batch of token sequences instead of
by repeated insertion. Segment boundaries are chosen by a divergence-point
heuristic so that the structure exposes real branch points rather than
one-token-per-level chains.

Construction (per node, at offset `start_pos` into every sequence)
-----------------------------------------------------------------
1. Sequences of length exactly `start_pos` end here: the node is terminal.
   Only longer sequences are carried on.
2. Nothing carried on → leaf.
3. `L` = longest common prefix length of the carried sequences from
   `start_pos`.
4. `L > 0`: partition by what follows the shared prefix (next token, or END).
   A single partition means the whole prefix is one edge. Several partitions
   fall through to *divergent segmentation*: every sequence grows its own
   segment token by token and stops when at most one sequence shares it, or
   when the sequences sharing it disagree on what comes next (including
   END vs. continue). Sequences are grouped by segment, one child per group.
5. `L == 0`: group by the token at `start_pos`; each group's segment is the
   longest run every member shares.

Every child resumes at `start_pos + len(segment)`.

Classes
-------
SegmentedTrieNode
    `__slots__` node with `children` (None | dict[segment, node]) and `is_terminal`.
    Helper methods:
      - `_get(token)` → `(segment, child)` for the edge starting with `token`
      - `_set(segment, child)` → attach an edge
      - `edges()` → `(segment, child)` pairs in segment order
      - `degree()` / `only_edge()`
SegmentedTrieBuilder
    Batch construction (`build(sequences, start_pos=0)`).
SegmentedTrie
    Owns a built root and answers read-only queries.

Conventions & invariants
------------------------
- **Edge invariant:** sibling segments are distinct, and none is a token-wise
  prefix of another; in fact no two siblings share a first token.
- **Round trip:** concatenating edge labels along a path from the root spells
  a stored sequence exactly when the path ends on a terminal node.
- **Immutability:** nodes are not modified once `build` returns.
- **Duplicates:** repeated input sequences collapse to one path.
"""

from .logger import init_logger
from .sequences import lcp, ordered, prepare_batch

logger = init_logger(__name__)

# Follower of a sequence that ends exactly at the inspected offset.
_END = object()


class SegmentedTrieNode:
  __slots__ = ("children", "is_terminal")

  def __init__(self, is_terminal=False):
    self.children = None
    self.is_terminal = is_terminal

  def _get(self, token):
    """Return (segment, child) or None for the edge whose segment starts with token."""
    children = self.children
    if not children:
      return None
    for segment, child in children.items():
      if segment[0] == token:
        return segment, child
    return None

  def _set(self, segment, child):
    if self.children is None:
      self.children = {segment: child}
    else:
      self.children[segment] = child

  def edges(self):
    """Yield (segment, child) for all outgoing edges, ordered by segment."""
    children = self.children
    if not children:
      return
    for segment in ordered(children):
      yield segment, children[segment]

  def degree(self):
    return len(self.children) if self.children else 0

  def only_edge(self):
    """Return (segment, child) if exactly one outgoing edge; else None."""
    if self.degree() != 1:
      return None
    return next(iter(self.children.items()))

  def __repr__(self):
    labels = ", ".join(repr(seg) for seg in ordered(self.children or ()))
    return f"SegmentedTrieNode(terminal={self.is_terminal}, [{labels}])"


def _follower(sequence, pos):
  return sequence[pos] if pos < len(sequence) else _END


def _common_prefix_length(sequences, start):
  first = sequences[0]
  shared = len(first) - start
  for seq in sequences[1:]:
    shared = min(shared, lcp(first, seq, start))
    if shared == 0:
      break
  return shared


def _segment_until_divergence(sequence, candidates, start):
  """Grow `sequence`'s segment from `start` up to its first divergence point."""
  limit = len(sequence) - start
  sharers = candidates
  k = 1
  while k < limit:
    token = sequence[start + k - 1]
    sharers = [s for s in sharers if len(s) > start + k - 1 and s[start + k - 1] == token]
    if len(sharers) <= 1:
      break
    if len({_follower(s, start + k) for s in sharers}) > 1:
      break
    k += 1
  return sequence[start:start + k]


def _divergent_segments(sequences, start):
  groups = {}
  for seq in sequences:
    segment = _segment_until_divergence(seq, sequences, start)
    groups.setdefault(segment, []).append(seq)
  return list(groups.items())


def _first_token_segments(sequences, start):
  groups = {}
  for seq in sequences:
    groups.setdefault(seq[start], []).append(seq)
  segments = []
  for group in groups.values():
    shared = _common_prefix_length(group, start)
    segments.append((group[0][start:start + shared], group))
  return segments


def split_segments(sequences, start_pos):
  """Decide one node's terminal flag and its outgoing segments.

  Parameters
  ----------
  sequences : list[tuple]
      Every sequence that reaches this node (already prepared).
  start_pos : int
      Offset consumed by the ancestor segments.

  Returns
  -------
  tuple[bool, list[tuple[tuple, list[tuple]]]]
      `(is_terminal, [(segment, member_sequences), ...])`.
  """
  is_terminal = any(len(seq) == start_pos for seq in sequences)
  live = [seq for seq in sequences if len(seq) > start_pos]
  if not live:
    return is_terminal, []

  shared = _common_prefix_length(live, start_pos)
  if shared > 0:
    followers = {_follower(seq, start_pos + shared) for seq in live}
    if len(followers) == 1:
      logger.debug("absorb %d shared tokens at offset %d", shared, start_pos)
      return is_terminal, [(live[0][start_pos:start_pos + shared], live)]
    logger.debug("divergent segmentation of %d sequences at offset %d", len(live), start_pos)
    return is_terminal, _divergent_segments(live, start_pos)

  logger.debug("first-token grouping of %d sequences at offset %d", len(live), start_pos)
  return is_terminal, _first_token_segments(live, start_pos)


class SegmentedTrieBuilder:
  """Builds a `SegmentedTrieNode` tree from a batch of token sequences.

  Args:
      normalize (Callable | None): Applied to each raw sequence (e.g. `str.casefold`).
      dedup (bool): Drop repeated sequences before building. The result is
          the same either way; deduplication only saves work.
  """
  __slots__ = ("normalize", "dedup")

  def __init__(self, normalize=None, dedup=True):
    self.normalize = normalize
    self.dedup = dedup

  def build(self, sequences, start_pos=0):
    """Return the root of the segmented trie for `sequences`.

    `start_pos` is the offset already consumed by ancestor segments; the
    returned root describes every sequence from that offset on. Construction
    uses an explicit work stack, so the depth of the trie is not bounded by
    the interpreter recursion limit.
    """
    batch = prepare_batch(sequences, self.normalize, self.dedup)
    root = SegmentedTrieNode()
    stack = [(root, batch, start_pos)]
    while stack:
      node, members, pos = stack.pop()
      node.is_terminal, segments = split_segments(members, pos)
      for segment, group in segments:
        child = SegmentedTrieNode()
        node._set(segment, child)
        stack.append((child, group, pos + len(segment)))
    return root


def build(sequences, start_pos=0, normalize=None):
  """Build a segmented trie root from `sequences` (see `SegmentedTrieBuilder`)."""
  return SegmentedTrieBuilder(normalize=normalize).build(sequences, start_pos)


class SegmentedTrie:
  __slots__ = ("root", )

  def __init__(self, root=None):
    self.root = root if root is not None else SegmentedTrieNode()

  @classmethod
  def from_sequences(cls, sequences, normalize=None):
    """Build a trie from any token sequences (words, integers, ...)."""
    sequences = list(sequences)
    trie = cls(build(sequences, normalize=normalize))
    logger.info("built segmented trie from %d sequences: %d nodes",
                len(sequences), trie.count_nodes())
    return trie

  @classmethod
  def from_words(cls, words, normalize=None):
    """Build a character-level trie: every word is a sequence of characters.

    Args:
        words (Iterable[str]): Words to split into characters.
        normalize (Callable[[str], str] | None): e.g. `str.casefold`.
    """
    return cls.from_sequences((str(w) for w in words), normalize=normalize)

  def prefix_search(self, prefix, normalize=None):
    """Locate the node for `prefix`.

    Returns
    -------
    tuple[SegmentedTrieNode | None, tuple]
        `(node, pending)` where `pending == ()` if the prefix ends on a node
        boundary; otherwise `pending` is the unconsumed rest of the edge the
        prefix ends in, and `node` is that edge's child. A missing path
        returns `(None, ())`.
    """
    if normalize is not None:
      prefix = normalize(prefix)
    prefix = tuple(prefix)
    node = self.root
    while prefix:
      hit = node._get(prefix[0])
      if hit is None:
        return None, ()
      segment, child = hit
      i = lcp(prefix, segment)
      if i == len(segment):
        prefix = prefix[i:]
        node = child
        continue
      if i == len(prefix):
        return child, segment[i:]
      return None, ()
    return node, ()

  def search(self, sequence, normalize=None):
    """Return the terminal node for `sequence` if present, else None."""
    node, pending = self.prefix_search(sequence, normalize)
    return node if node and node.is_terminal and not pending else None

  def __contains__(self, sequence):
    return self.search(sequence) is not None

  def enumerate_prefix(self, prefix=(), k=None, normalize=None):
    """Yield stored sequences (as tuples) beginning with `prefix`.

    Walks edges depth-first with a shared token buffer, so every yielded
    tuple is the concatenation of the edge labels on its path. Prefixes
    ending mid-edge are completed with the pending part of that edge.
    Yields up to `k` results when `k` is given.
    """
    if normalize is not None:
      prefix = normalize(prefix)
    prefix = tuple(prefix)
    node, pending = self.prefix_search(prefix)
    if node is None or (k is not None and k <= 0):
      return

    buf = list(prefix)
    buf.extend(pending)
    yielded = 0
    if node.is_terminal:
      yield tuple(buf)
      yielded += 1
      if k is not None and yielded >= k:
        return

    stack = [(node.edges(), len(buf))]
    while stack:
      children, depth = stack[-1]
      try:
        segment, child = next(children)
      except StopIteration:
        stack.pop()
        continue
      buf[depth:] = []
      buf.extend(segment)
      if child.is_terminal:
        yield tuple(buf)
        yielded += 1
        if k is not None and yielded >= k:
          return
      stack.append((child.edges(), len(buf)))

  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average out-degree over internal nodes."""
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self.root]
    while stack:
      node = stack.pop()
      total_nodes += 1
      deg = node.degree()
      if deg > 0:
        total_deg += deg
        internal += 1
        stack.extend(node.children.values())
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes

  def max_depth(self):
    """Number of edges on the longest root-to-leaf path."""
    deepest = 0
    stack = [(self.root, 0)]
    while stack:
      node, depth = stack.pop()
      deepest = max(deepest, depth)
      if node.children:
        stack.extend((child, depth + 1) for child in node.children.values())
    return deepest

  def segment_lengths(self):
    """Return the length of every edge label, in depth-first order."""
    lengths = []
    stack = [self.root]
    while stack:
      node = stack.pop()
      for segment, child in node.edges():
        lengths.append(len(segment))
        stack.append(child)
    return lengths
