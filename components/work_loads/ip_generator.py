import ipaddress
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from faker import Faker

Octets = Tuple[int, int, int, int]

## === Config Class === ##

@dataclass
class IPConfig:
    """
    Configuration for IPGenerator
        public_share: float, proportion of public (vs. private) addresses
        private_weights: dict, weights of the private classes {a: x, b: x, c: x}
        subnet_share: float, proportion of addresses drawn from a shared /24 pool
        num_subnets: int, size of that /24 pool
        seed: int, seed for random number generators
    """
    public_share: float = 0.9
    private_weights: Optional[Dict[str, float]] = None
    subnet_share: float = 0.0
    num_subnets: int = 8
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ("public_share", "subnet_share"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1")
        if self.num_subnets < 1:
            raise ValueError("num_subnets must be positive")

        weights = self.private_weights or {'a': 0.35, 'b': 0.10, 'c': 0.55}
        missing = sorted({'a', 'b', 'c'} - set(weights))
        if missing:
            raise ValueError(f"private_weights missing keys: {missing}")
        if min(weights.values()) < 0 or sum(weights.values()) == 0:
            raise ValueError("private_weights must be non-negative with a positive sum")
        self.private_weights = dict(sorted(weights.items()))


class IPGenerator:
    """IPv4 addresses as four-octet integer token sequences.

    Addresses from the /24 pool share their first three octets, which a
    segmented trie stores as one three-token segment.
    """

    def __init__(self, config: IPConfig):
        self.config = config
        self.rng = random.Random(config.seed)
        self.fake = Faker()
        if config.seed is not None:
            self.fake.seed_instance(config.seed)

        self.classes = list(config.private_weights)
        self.class_weights = list(config.private_weights.values())
        self.subnets = [self._octets(self._fresh())[:3] for _ in range(config.num_subnets)]

    def _fresh(self) -> str:
        if self.rng.random() < self.config.public_share:
            return self.fake.ipv4_public()
        address_class = self.rng.choices(self.classes, weights=self.class_weights, k=1)[0]
        return self.fake.ipv4_private(address_class=address_class)

    @staticmethod
    def _octets(address: str) -> Octets:
        return tuple(ipaddress.IPv4Address(address).packed)

    def address(self) -> str:
        return ".".join(map(str, self.single()))

    def single(self) -> Octets:
        if self.rng.random() < self.config.subnet_share:
            net = self.rng.choice(self.subnets)
            return (*net, self.rng.randint(1, 254))
        return self._octets(self._fresh())

    def batch(self, n: int) -> List[Octets]:
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]
