"""Consensus from Trust: gossip nodes that agree on transactions over a trust graph."""

from .message_types import Transaction, Candidate, PeerId
from .exceptions import NodeStateError
from .trust_filter import TrustFilter
from .knowledge_store import KnowledgeStore
from .base_node import Node, NodeConfig
from .compliant_node import CompliantNode, NeverForgetNode, GossipWhatsNewNode, STRATEGIES, create_node
from .malicious_node import SilentNode, FloodingNode, TurncoatNode, MALICIOUS_BEHAVIOURS, create_malicious_node
from .config import SimulationConfig
from .trust_simulation import TrustSimulation, build_trust_graph

__all__ = [
    'Transaction', 'Candidate', 'PeerId', 'NodeStateError',
    'TrustFilter', 'KnowledgeStore', 'Node', 'NodeConfig',
    'CompliantNode', 'NeverForgetNode', 'GossipWhatsNewNode', 'STRATEGIES', 'create_node',
    'SilentNode', 'FloodingNode', 'TurncoatNode', 'MALICIOUS_BEHAVIOURS', 'create_malicious_node',
    'SimulationConfig', 'TrustSimulation', 'build_trust_graph',
]
