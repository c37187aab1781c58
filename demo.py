#!/usr/bin/env python3
"""Print segmented and length-grouped tries for the bundled demos or for literal input."""

import argparse
import sys
from argparse import RawTextHelpFormatter
from functools import partial

from components.workload import TOKEN_MODES, parse_sequences
from tries import LengthGroupedNode, RenderConfig, SegmentedTrie, print_tree
from tries.logger import disable_logging, enable_logging, set_logging_level

MyFormatter = partial(RawTextHelpFormatter, max_help_position=60, width=100)

DEMOS = {
  "chars": ("Character-based example",
            [tuple(w) for w in ["ape", "app", "application", "bans", "bat", "banner", "pot", "potion"]],
            ""),
  "words": ("Word-based example",
            [("the", "dog", "ate", "choco"),
             ("the", "dog", "ate", "cookie"),
             ("the", "dog"),
             ("a", "big", "dog", "ate", "choco"),
             ("a", "cat"),
             ("a", "big", "dog", "ate", "cookie")],
            " "),
  "integers": ("Integer-based example",
               [(1, 2), (1, 3), (1, 2, 4, 5), (2, 3), (2, 3, 4)],
               "-"),
}


def show(title, sequences, render_config, on_collision):
  print(f"=== {title} ===")
  print(f"Building trie from {len(sequences)} sequences")
  trie = SegmentedTrie.from_sequences(sequences)
  print("\nSegmented trie:")
  print_tree(trie.root, render_config)
  grouped = LengthGroupedNode.from_trie(trie, on_collision=on_collision)
  print("\nLength-grouped trie:")
  print_tree(grouped, render_config)
  print()


def main(argv=None):
  parser = argparse.ArgumentParser(
    prog="demo.py",
    description=(
      "Segmented trie demo\n\n"
      "Builds a segmented trie from token sequences and its length-grouped abstraction.\n"
    ),
    formatter_class=MyFormatter,
    epilog=(
      "Usage examples:\n\n"
      "  python demo.py\n"
      "  python demo.py --demo words --marker '*'\n"
      "  python demo.py --mode words --input sentences.txt --separator ' '\n"
      "  printf 'ape\\napp\\n' | python demo.py --input -\n"
    ),
  )
  parser.add_argument("--demo", choices=["all", *DEMOS], default="all",
                      help="Bundled demo to print (ignored with --input).")
  parser.add_argument("--input", metavar="FILE",
                      help="One sequence per line; '-' reads stdin.")
  parser.add_argument("--mode", choices=TOKEN_MODES, default="chars",
                      help="How --input lines are split into tokens.")
  parser.add_argument("--separator", default=None,
                      help="Token separator inside edge labels.")
  parser.add_argument("--marker", default=".", help="Terminal marker.")
  parser.add_argument("--on-collision", choices=["overwrite", "merge"], default="overwrite",
                      help="Grandchild collision handling when grouping.")
  parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
  parser.add_argument("--quiet", action="store_true", help="Silence library logging.")
  args = parser.parse_args(argv)

  if args.quiet:
    disable_logging()
  else:
    enable_logging()
  if args.log_level:
    set_logging_level(args.log_level)

  if args.input:
    if args.input == "-":
      text = sys.stdin.read()
    else:
      with open(args.input, "r", encoding="utf-8") as f:
        text = f.read()
    try:
      sequences = parse_sequences(text, args.mode)
    except ValueError as e:
      parser.error(str(e))
    separator = args.separator if args.separator is not None else ("" if args.mode == "chars" else " ")
    show(f"{args.input} ({args.mode})", sequences,
         RenderConfig(token_separator=separator, terminal_marker=args.marker), args.on_collision)
    return 0

  names = list(DEMOS) if args.demo == "all" else [args.demo]
  for name in names:
    title, sequences, separator = DEMOS[name]
    if args.separator is not None:
      separator = args.separator
    show(title, sequences,
         RenderConfig(token_separator=separator, terminal_marker=args.marker), args.on_collision)
  return 0


if __name__ == "__main__":
  sys.exit(main())
