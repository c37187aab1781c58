#!/usr/bin/env python3
from components.work_loads.ip_generator import IPConfig, IPGenerator
from components.work_loads.sentence_generator import SentenceConfig, SentenceGenerator, generate_int_sequences
from components.work_loads.url_generator import UrlConfig, UrlGenerator
from components.work_loads.word_generator import generate_random_words, gen_words_with_prefix_freq

TOKEN_MODES = ("chars", "words", "integers")


class WorkLoad:
  """Seeded source of token-sequence workloads for the tries."""

  def __init__(self, seed=None):
    self.seed = seed

  def words(self, num_words, p_freq=0, unique=False):
    """Character workload: each word is a sequence of characters."""
    if p_freq > 0:
      return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
    return generate_random_words(num_words, self.seed, unique)

  def sentences(self, num_sentences, p_freq=0.3, min_words=2, max_words=6):
    cfg = SentenceConfig(min_words=min_words, max_words=max_words, prefix_freq=p_freq, seed=self.seed)
    return SentenceGenerator(cfg).batch(num_sentences)

  def integers(self, num_sequences, min_len=1, max_len=6, alphabet=10):
    return generate_int_sequences(num_sequences, min_len, max_len, alphabet, self.seed)

  def ips(self, num_ips, public_share=0.9, subnet_share=0.0):
    cfg = IPConfig(public_share=public_share, subnet_share=subnet_share, seed=self.seed)
    return IPGenerator(cfg).batch(num_ips)

  def urls(self, num_urls, num_hosts=25):
    return UrlGenerator(UrlConfig(num_hosts=num_hosts, seed=self.seed)).batch(num_urls)


def parse_sequences(text, mode="chars"):
  """Parse one sequence per non-empty line.

  mode "chars": the line's characters; "words": whitespace-separated words;
  "integers": whitespace- or comma-separated integers.

  Raises:
      ValueError: unknown mode or a non-integer token in "integers" mode.
  """
  if mode not in TOKEN_MODES:
    raise ValueError(f"mode must be one of {TOKEN_MODES}, got {mode!r}")
  sequences = []
  for line in text.splitlines():
    line = line.strip()
    if not line:
      continue
    if mode == "chars":
      sequences.append(tuple(line))
    elif mode == "words":
      sequences.append(tuple(line.split()))
    else:
      sequences.append(tuple(int(tok) for tok in line.replace(",", " ").split()))
  return sequences
