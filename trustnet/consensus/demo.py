from .config import SimulationConfig
from .trust_simulation import TrustSimulation

def run_consensus_demo(seed: int = 7):
    """Run both compliant strategies against the same seeded environment."""

    print("Running Consensus from Trust Demo")
    print("=" * 50)

    results = {}
    for strategy in ("never_forget", "gossip_whats_new"):
        for behaviour in ("silent", "flooding", "turncoat"):
            config = SimulationConfig(strategy=strategy, malicious_behaviour=behaviour, seed=seed)
            sim = TrustSimulation(config)
            sim.run()

            agreement = sim.honest_agreement()
            volume = int(sim.broadcast_volume().sum())
            consensus_size = len(sim.consensus_set())
            results[(strategy, behaviour)] = agreement

            print(f"{strategy:>16} vs {behaviour:<8}: agreement {agreement:6.1%}, "
                  f"consensus {consensus_size:4d} txs, broadcast volume {volume}")

    return results

if __name__ == "__main__":
    run_consensus_demo()
