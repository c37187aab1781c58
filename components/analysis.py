"""Tabular summaries of built tries, consumed by the streamlit app and demo."""

import numpy as np
import pandas as pd

from tries.length_grouped_trie import transform
from tries.render import RenderConfig, format_label
from tries.segmented_trie import SegmentedTrie
from tries.standard_trie import Trie

SUMMARY_COLUMNS = ["structure", "nodes", "terminals", "avg_branch_factor", "max_depth"]


def _grouped_stats(root):
  degrees = np.array([node.degree() for node, _ in root.walk()])
  internal = degrees[degrees > 0]
  avg = float(internal.mean()) if internal.size else 0.0
  return root.count_nodes(), root.count_terminals(), avg, root.max_depth()


def trie_summary(sequences, on_collision="overwrite"):
  """Build all three structures for `sequences` and compare their shape.

  Returns a DataFrame with one row per structure ("standard", "segmented",
  "length-grouped") and the columns in SUMMARY_COLUMNS.
  """
  sequences = [tuple(s) for s in sequences]
  standard = Trie()
  standard.batch_insert(sequences)
  segmented = SegmentedTrie.from_sequences(sequences)
  grouped = transform(segmented, on_collision=on_collision)

  rows = [
    ("standard",
     standard.count_nodes(),
     sum(1 for _ in standard.enumerate_prefix(())),
     standard.count_nodes(get_avg_branch_factor=True),
     max((len(s) for s in sequences), default=0)),
    ("segmented",
     segmented.count_nodes(),
     sum(1 for _ in segmented.enumerate_prefix(())),
     segmented.count_nodes(get_avg_branch_factor=True),
     segmented.max_depth()),
    ("length-grouped", *_grouped_stats(grouped)),
  ]
  return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def segment_length_table(trie):
  """Count edges of a `SegmentedTrie` per segment length."""
  lengths = np.asarray(trie.segment_lengths(), dtype=int)
  if lengths.size == 0:
    return pd.DataFrame({"length": pd.Series(dtype=int), "edges": pd.Series(dtype=int)})
  values, counts = np.unique(lengths, return_counts=True)
  return pd.DataFrame({"length": values, "edges": counts})


def group_table(root, token_separator=""):
  """One row per edge of a length-grouped tree; siblings appear in key order."""
  config = RenderConfig(token_separator=token_separator)
  rows = []
  stack = [(root, 0)]
  while stack:
    node, depth = stack.pop()
    edges = list(node.edges())
    for key, child in edges:
      rows.append({
        "depth": depth + 1,
        "length": key.length,
        "segments": len(key.segments),
        "labels": ", ".join(format_label(seg, config) for seg in key.sorted_segments()),
        "terminal": child.is_terminal,
      })
    stack.extend((child, depth + 1) for _, child in reversed(edges))
  return pd.DataFrame(rows, columns=["depth", "length", "segments", "labels", "terminal"])
