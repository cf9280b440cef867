from telephone.services.chain.divergence import DIVERGENCE_POLICY_VERSION, compute_divergence
from telephone.services.chain.generator import generate_random_chain, validate_chain
from telephone.services.chain.orchestrator import ChainOrchestrator, OrchestratorState

__all__ = [
    "ChainOrchestrator",
    "DIVERGENCE_POLICY_VERSION",
    "OrchestratorState",
    "compute_divergence",
    "generate_random_chain",
    "validate_chain",
]
