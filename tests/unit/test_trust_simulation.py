import numpy as np
import pytest
from trustnet.consensus.compliant_node import CompliantNode
from trustnet.consensus.config import SimulationConfig
from trustnet.consensus.trust_simulation import TrustSimulation, build_trust_graph

def complete_graph_config(strategy):
    return SimulationConfig(num_nodes=10, graph_edge_prob=1.0, malicious_prob=0.0,
                            tx_distribution_prob=0.3, num_rounds=4, num_transactions=50,
                            strategy=strategy, seed=1)

def test_trust_graph_has_no_self_edges():
    rng = np.random.default_rng(0)
    graph = build_trust_graph(20, 0.5, rng)
    assert graph.shape == (20, 20)
    assert graph.dtype == bool
    assert not graph.diagonal().any()

def test_trust_graph_extremes():
    rng = np.random.default_rng(0)
    assert not build_trust_graph(5, 0.0, rng).any()
    full = build_trust_graph(5, 1.0, rng)
    assert full.sum() == 5 * 4

@pytest.mark.parametrize('strategy', ['never_forget', 'gossip_whats_new'])
def test_honest_complete_graph_reaches_full_agreement(strategy):
    sim = TrustSimulation(complete_graph_config(strategy))
    final_sets = sim.run()

    everything = set().union(*(sim.initial_transactions(i) for i in range(10)))
    assert everything
    assert all(final == everything for final in final_sets.values())
    assert sim.consensus_set() == frozenset(everything)
    assert sim.honest_agreement() == 1.0

@pytest.mark.parametrize('strategy', ['never_forget', 'gossip_whats_new'])
def test_every_compliant_node_sees_num_rounds_plus_one_broadcasts(strategy):
    config = SimulationConfig(num_nodes=30, num_rounds=5, num_transactions=100,
                              tx_distribution_prob=0.05, strategy=strategy, seed=3)
    sim = TrustSimulation(config)
    sim.run()
    compliant = [node for node in sim.nodes if isinstance(node, CompliantNode)]
    assert compliant
    assert all(node.round_counter == 6 and node.is_terminal for node in compliant)
    assert len(sim.broadcast_volume()) == 5

@pytest.mark.parametrize('behaviour', ['silent', 'flooding', 'turncoat'])
def test_strategies_agree_on_the_same_environment(behaviour):
    finals = {}
    for strategy in ('never_forget', 'gossip_whats_new'):
        config = SimulationConfig(num_nodes=40, graph_edge_prob=0.15, malicious_prob=0.2,
                                  tx_distribution_prob=0.05, num_rounds=8,
                                  num_transactions=100, strategy=strategy,
                                  malicious_behaviour=behaviour, seed=21)
        sim = TrustSimulation(config)
        finals[strategy] = sim.run()
    assert finals['never_forget'] == finals['gossip_whats_new']

def test_gossip_whats_new_sends_less():
    volumes = {}
    for strategy in ('never_forget', 'gossip_whats_new'):
        sim = TrustSimulation(complete_graph_config(strategy))
        sim.run()
        volumes[strategy] = sim.broadcast_volume()
    assert (volumes['gossip_whats_new'] <= volumes['never_forget']).all()
    assert volumes['gossip_whats_new'].sum() < volumes['never_forget'].sum()
    assert volumes['gossip_whats_new'].index.name == 'round'

def test_results_frame():
    sim = TrustSimulation(SimulationConfig(num_nodes=25, seed=8))
    sim.run()
    df = sim.results_frame()
    assert len(df) == 25
    assert df.index.name == 'node_id'
    assert list(df.columns) == ['malicious', 'followees', 'initial', 'final', 'agrees']
    assert df['malicious'].sum() == sim.malicious.sum()
    assert (df.loc[~df['malicious'], 'final'] >= df.loc[~df['malicious'], 'initial']).all()

def test_results_require_a_run():
    sim = TrustSimulation(SimulationConfig(num_nodes=5, seed=2))
    with pytest.raises(RuntimeError):
        sim.results_frame()
    sim.run()
    with pytest.raises(RuntimeError):
        sim.run()

def test_invalid_config_is_rejected():
    with pytest.raises(ValueError):
        TrustSimulation(SimulationConfig(graph_edge_prob=2.0))
