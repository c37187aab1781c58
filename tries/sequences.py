"""
Token-sequence helpers shared by every trie in the package.

A token is any hashable value (a character, a word, an integer, ...). A
sequence is any iterable of tokens; internally sequences and edge labels are
stored as tuples so they can be hashed, sliced and compared uniformly,
whatever the token type.

Ordering only matters where it is observable (rendering, merge order). Tokens
are ordered by their natural order; when a batch mixes token types that do
not compare, `ordered` falls back to `repr` so output stays deterministic.
"""


def lcp(a, b, start=0):
  """Return the length of the Longest Common Prefix of a[start:] and b[start:]."""
  i = start
  n = min(len(a), len(b))
  while i < n and a[i] == b[i]:
    i += 1
  return i - start


def ordered(items, key=None, fallback=None):
  """Sort `items` by natural order, or by `repr` when tokens do not compare.

  `fallback` replaces `key` in that second pass; it should keep the orderable
  parts of the key as they are and `repr` only the tokens.
  """
  items = list(items)
  try:
    return sorted(items, key=key)
  except TypeError:
    if fallback is not None:
      return sorted(items, key=fallback)
    if key is None:
      return sorted(items, key=repr)
    return sorted(items, key=lambda item: repr(key(item)))


def prepare_batch(sequences, normalize=None, dedup=True, presorted=False, sort=False):
  """Normalize sequences to tuples and optionally deduplicate/sort them.

  Parameters
  ----------
  sequences : Iterable[Iterable[Hashable]]
      Incoming token sequences. A `str` counts as a sequence of characters.
  normalize : Callable | None, default=None
      Applied to each raw sequence before it is turned into a tuple
      (e.g. `str.casefold` for character workloads).
  dedup : bool, default=True
      Remove duplicate sequences, keeping the first occurrence.
  presorted : bool, default=False
      If True the input is already sorted under `normalize`; deduplication
      then drops adjacent repeats only.
  sort : bool, default=False
      Sort the batch (ignored when `presorted=True`).

  Returns
  -------
  list[tuple]
  """
  items = (tuple(normalize(s) if normalize is not None else s) for s in sequences)

  if presorted:
    if not dedup:
      return list(items)
    unique = []
    last = None
    for seq in items:
      if not unique or seq != last:
        unique.append(seq)
        last = seq
    return unique

  batch = list(dict.fromkeys(items)) if dedup else list(items)
  return ordered(batch) if sort else batch
