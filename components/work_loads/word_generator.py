import random
import math
from collections import defaultdict

from faker.providers.lorem.en_US import Provider as LoremProvider

# Faker's English word list, lower-cased and deduplicated
WORDS = sorted({w.lower() for w in LoremProvider.word_list if w.isalpha()})


## Words sharing their first two letters, used to cluster common prefixes
prefix_bucket = defaultdict(list)
for word in WORDS:
  prefix_bucket[word[:2]].append(word)
prefixes = list(prefix_bucket.keys())
prefix_weights = [len(prefix_bucket[p]) for p in prefixes]


def _p_eff_log(x, max_mean=100):
  """Logarithmic mapping of prefix frequency to effective repeat probability."""
  if x < 0 or x > 1:
    raise ValueError("prefix_freq must be between 0 and 1")
  x = min(0.999999, x)
  p = 1.0 - math.exp(-math.log(max_mean) * x)
  return min(p, 0.999999)


def generate_random_words(num_words, seed=None, unique=False):
  """
  Return num_words random words.
  - unique=False: sample with replacement (allows duplicates)
  - unique=True: sample without replacement (requires num_words <= len(WORDS))
  """
  if num_words < 1 or (unique and num_words > len(WORDS)):
    raise ValueError(f"num_words must be between 1 and {len(WORDS)}")
  rng = random.Random(seed)
  if unique:
    return rng.sample(WORDS, num_words)
  return rng.choices(WORDS, k=num_words)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """Generate words where runs of consecutive words share a two-letter prefix.

  prefix_freq: 0 -> 1, applied logarithmically. Higher values make longer
  runs, which in a trie means deeper shared segments.
  """
  repeat_p = _p_eff_log(prefix_freq)
  max_unique = int(len(WORDS) // 1.1)
  if num_words < 1 or (unique and num_words > max_unique):
    raise ValueError(f"num_words must be between 1 and {max_unique}")
  rng = random.Random(seed)

  out = []
  seen = set()
  exhausted = set()
  while len(out) < num_words:
    prefix = rng.choices(prefixes, weights=prefix_weights)[0]
    if prefix in exhausted:
      continue
    options = prefix_bucket[prefix]
    remaining = [w for w in options if w not in seen] if unique else options
    if not remaining:
      exhausted.add(prefix)
      continue

    out.append(rng.choice(remaining))
    if unique:
      seen.add(out[-1])

    while len(out) < num_words and rng.random() < repeat_p:
      remaining = [w for w in options if w not in seen] if unique else options
      if not remaining:
        exhausted.add(prefix)
        break
      out.append(rng.choice(remaining))
      if unique:
        seen.add(out[-1])
  return out
