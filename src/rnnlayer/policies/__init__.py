from .base import (
    LayerPolicy, resolve_policy,
    WEIGHT_PLANE, BIAS_PLANE, ACTIVATION_PLANE, NUM_PLANES
)
from .feedforward import FeedforwardPolicy
from .recurrent import RecurrentPolicy

POLICIES = {
    FeedforwardPolicy.name: FeedforwardPolicy,
    RecurrentPolicy.name: RecurrentPolicy,
}

__all__ = [
    "LayerPolicy", "FeedforwardPolicy", "RecurrentPolicy", "POLICIES", "resolve_policy",
    "WEIGHT_PLANE", "BIAS_PLANE", "ACTIVATION_PLANE", "NUM_PLANES"
]
