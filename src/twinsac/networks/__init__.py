from twinsac.networks.approximator import Network
from twinsac.networks.mlp import MLP, critic_factory, policy_factory

__all__ = [
    "MLP",
    "Network",
    "critic_factory",
    "policy_factory",
]
