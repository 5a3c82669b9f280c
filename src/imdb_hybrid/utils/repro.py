"""Seed resolution for the clustering step.

The seed is passed explicitly as ``random_state``; nothing here touches the
process-wide ``random`` or numpy generators, so concurrent sessions cannot
disturb each other's cluster assignments.
"""

from __future__ import annotations

import os

from ..errors import ClusterConfigError

ENV_VAR = "IMDBHYBRID_SEED"
DEFAULT_SEED = 42


def resolve_seed(seed: int | None = None) -> int:
    """Return the k-means ``random_state`` for a request.

    ``IMDBHYBRID_SEED`` wins over ``seed``; with neither set the default of
    42 is used. A non-integer environment value is a configuration error.
    """
    env_seed = os.getenv(ENV_VAR)
    if env_seed is not None and env_seed.strip():
        try:
            return int(env_seed)
        except ValueError as exc:
            raise ClusterConfigError(f"{ENV_VAR} must be an integer, got {env_seed!r}") from exc
    return DEFAULT_SEED if seed is None else int(seed)


__all__ = ["resolve_seed"]
