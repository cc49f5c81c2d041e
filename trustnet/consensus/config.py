import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional
from .base_node import NodeConfig
from .compliant_node import STRATEGIES
from .malicious_node import MALICIOUS_BEHAVIOURS

ENV_PREFIX = "TRUSTNET_"

@dataclass
class SimulationConfig:
    num_nodes: int = 100
    graph_edge_prob: float = 0.1      # chance that node i follows node j
    malicious_prob: float = 0.15      # chance that a node is faulty
    tx_distribution_prob: float = 0.01  # chance that a node starts with a given transaction
    num_rounds: int = 10
    num_transactions: int = 500
    strategy: str = "gossip_whats_new"
    malicious_behaviour: str = "silent"
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SimulationConfig':
        """Defaults overridden by TRUSTNET_<FIELD> environment variables."""
        environ = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.name == 'seed':
                overrides[f.name] = int(raw)
            else:
                overrides[f.name] = type(f.default)(raw)
        config = cls(**overrides)
        config.validate()
        return config

    def validate(self) -> None:
        for name in ('graph_edge_prob', 'malicious_prob', 'tx_distribution_prob'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.num_nodes < 1:
            raise ValueError(f"num_nodes must be positive, got {self.num_nodes}")
        if self.num_rounds < 1:
            raise ValueError(f"num_rounds must be positive, got {self.num_rounds}")
        if self.num_transactions < 0:
            raise ValueError(f"num_transactions cannot be negative, got {self.num_transactions}")
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy {self.strategy!r}")
        if self.malicious_behaviour not in MALICIOUS_BEHAVIOURS:
            raise ValueError(f"Unknown malicious behaviour {self.malicious_behaviour!r}")

    def node_config(self) -> NodeConfig:
        return NodeConfig(self.graph_edge_prob, self.malicious_prob,
                          self.tx_distribution_prob, self.num_rounds)
