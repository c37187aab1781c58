import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from faker import Faker

### ================= URL Generation Probability Config ================= ###

# --- Path depth and its weights --- #
depths, depth_weights = zip(*[
  (0, 0.20), (1, 0.30), (2, 0.25), (3, 0.13), (4, 0.10), (5, 0.02)
])

# --- Common static file extensions --- #
file_exts = ["js", "css", "html", "png", "jpg", "svg", "json", "pdf", "woff2"]
file_ext_weights = [0.30, 0.10, 0.05, 0.12, 0.12, 0.05, 0.10, 0.06, 0.10]

# --- Section words that recur across sites, giving shared path segments --- #
sections = ["blog", "docs", "api", "static", "products", "news", "help", "user"]


@dataclass
class UrlConfig:
  """
  Configuration for UrlGenerator
      https_share: float, proportion of https URLs
      num_hosts: int, size of the host pool URLs are drawn from
      section_p: float, probability a path segment is a recurring section word
      seed: int, seed for random number generators
  """
  https_share: float = 0.88
  num_hosts: int = 25
  section_p: float = 0.4
  seed: Optional[int] = None

  def __post_init__(self):
    if not 0.0 <= self.https_share <= 1.0:
      raise ValueError("https_share must be between 0 and 1")
    if not 0.0 <= self.section_p <= 1.0:
      raise ValueError("section_p must be between 0 and 1")
    if self.num_hosts < 1:
      raise ValueError("num_hosts must be positive")


class UrlGenerator:
  """URLs as token sequences: (scheme, host, *path segments)."""

  def __init__(self, config: UrlConfig):
    self.config = config
    self.rng = random.Random(config.seed)
    self.fake = Faker()
    if config.seed is not None:
      self.fake.seed_instance(config.seed)
    # Zipf-like weights so a few hosts dominate, as on real traffic
    self.hosts = [self.fake.domain_name() for _ in range(config.num_hosts)]
    self.host_weights = [1 / ((r + 1) ** 1.1) for r in range(config.num_hosts)]

  def _scheme(self):
    return "https" if self.rng.random() < self.config.https_share else "http"

  def _segment(self):
    if self.rng.random() < self.config.section_p:
      return self.rng.choice(sections)
    return self.fake.slug()

  def single(self) -> Tuple[str, ...]:
    host = self.rng.choices(self.hosts, weights=self.host_weights, k=1)[0]
    depth = self.rng.choices(depths, weights=depth_weights, k=1)[0]
    path = [self._segment() for _ in range(depth)]
    if path and self.rng.random() < 0.3:
      ext = self.rng.choices(file_exts, weights=file_ext_weights, k=1)[0]
      path[-1] = f"{path[-1]}.{ext}"
    return (self._scheme(), host, *path)

  def batch(self, n: int) -> List[Tuple[str, ...]]:
    if n <= 0:
      raise ValueError("n must be positive")
    return [self.single() for _ in range(n)]


def generate_urls(num_urls, seed=None):
  """Generate URL token sequences with the default configuration."""
  return UrlGenerator(UrlConfig(seed=seed)).batch(num_urls)


def join_url(tokens):
  """Turn a URL token sequence back into URL text."""
  scheme, host, *path = tokens
  return f"{scheme}://{host}/" + "/".join(path)
