import pytest
from trustnet.consensus.base_node import NodeConfig
from trustnet.consensus.config import SimulationConfig

def test_defaults_are_valid():
    config = SimulationConfig()
    config.validate()
    assert config.node_config() == NodeConfig(0.1, 0.15, 0.01, 10)

def test_from_env_overrides():
    config = SimulationConfig.from_env({
        'TRUSTNET_NUM_NODES': '40',
        'TRUSTNET_GRAPH_EDGE_PROB': '0.2',
        'TRUSTNET_STRATEGY': 'never_forget',
        'TRUSTNET_SEED': '42',
        'UNRELATED': 'ignored',
    })
    assert config.num_nodes == 40
    assert config.graph_edge_prob == 0.2
    assert config.strategy == 'never_forget'
    assert config.seed == 42
    assert config.num_rounds == 10

def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv('TRUSTNET_NUM_ROUNDS', '3')
    assert SimulationConfig.from_env().num_rounds == 3

@pytest.mark.parametrize('overrides', [
    {'graph_edge_prob': 1.5},
    {'malicious_prob': -0.1},
    {'num_nodes': 0},
    {'num_rounds': 0},
    {'num_transactions': -1},
    {'strategy': 'majority_vote'},
    {'malicious_behaviour': 'sybil'},
])
def test_validate_rejects_bad_values(overrides):
    with pytest.raises(ValueError):
        SimulationConfig(**overrides).validate()

def test_from_env_validates():
    with pytest.raises(ValueError):
        SimulationConfig.from_env({'TRUSTNET_MALICIOUS_PROB': '2'})
