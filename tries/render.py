"""
Text rendering for every trie in the package.

The renderer is a read-only consumer: it needs nothing from a node but
`is_terminal` and `edges()` (ordered `(label, child)` pairs), so the same code
draws a basic `TrieNode`, a `SegmentedTrieNode` and a `LengthGroupedNode`.

    ├── ap
    │   ├── e.
    │   └── p.
    │       └── lication.
    └── pot.
        └── ion.

Labels are drawn as
- basic trie: the token;
- segmented trie: the segment's tokens joined by `token_separator`;
- length-grouped trie: `Length <n> {<segment>, ...}`.

Terminal nodes get `terminal_marker` appended. A terminal root (the empty
sequence was stored) is drawn as a bare marker on the first line.
"""

from dataclasses import dataclass

from .length_grouped_trie import LengthGroupKey


@dataclass
class RenderConfig:
  """
  Configuration for render_tree
      token_separator: str, placed between tokens of one label
      terminal_marker: str, appended to labels of terminal nodes
      compress_chains: bool, fold unary non-terminal chains into one label
      length_prefix: str, text before the length of a length-grouped label
  """
  token_separator: str = ""
  terminal_marker: str = "."
  compress_chains: bool = False
  length_prefix: str = "Length "

  def __post_init__(self):
    for name in ("token_separator", "terminal_marker", "length_prefix"):
      if not isinstance(getattr(self, name), str):
        raise ValueError(f"{name} must be a string")
    if "\n" in self.token_separator or "\n" in self.terminal_marker:
      raise ValueError("separator and marker must fit on one line")


def _tokens(label):
  """Token list of a label, or None for labels that do not concatenate."""
  if isinstance(label, LengthGroupKey):
    return None
  if isinstance(label, tuple):
    return list(label)
  return [label]


def format_label(label, config=None):
  config = config or RenderConfig()
  if isinstance(label, LengthGroupKey):
    segments = ", ".join(format_label(seg, config) for seg in label.sorted_segments())
    return f"{config.length_prefix}{label.length} {{{segments}}}"
  return config.token_separator.join(str(token) for token in _tokens(label))


def _degree(node):
  return len(node.children) if node.children else 0


def render_tree(node, config=None):
  """Draw the tree below `node` with box-drawing characters.

  Args:
      node: Any trie node exposing `is_terminal` and `edges()`.
      config (RenderConfig | None): Rendering options.

  Returns:
      str: One line per drawn edge, no trailing newline.
  """
  config = config or RenderConfig()
  marker = config.terminal_marker
  lines = []
  if node.is_terminal:
    lines.append(marker)

  children = list(node.edges())
  stack = [(child, label, "", i == len(children) - 1)
           for i, (label, child) in reversed(list(enumerate(children)))]
  while stack:
    node, label, indent, is_last = stack.pop()
    tokens = _tokens(label)
    if config.compress_chains and tokens is not None:
      while not node.is_terminal and _degree(node) == 1:
        next_label, nxt = next(node.edges())
        next_tokens = _tokens(next_label)
        if next_tokens is None:
          break
        tokens.extend(next_tokens)
        node = nxt
      text = config.token_separator.join(str(token) for token in tokens)
    else:
      text = format_label(label, config)

    branch = "└── " if is_last else "├── "
    lines.append(f"{indent}{branch}{text}{marker if node.is_terminal else ''}")

    children = list(node.edges())
    child_indent = indent + ("    " if is_last else "│   ")
    for i in range(len(children) - 1, -1, -1):
      child_label, child = children[i]
      stack.append((child, child_label, child_indent, i == len(children) - 1))
  return "\n".join(lines)


def print_tree(node, config=None):
  print(render_tree(node, config))
