"""Experience storage.

    - RandomReplay: numpy-backed circular store with jax.Array sampling
"""

from twinsac.dataprotocol.replay_buffer import RandomReplay

__all__ = ["RandomReplay"]
