import numpy as np

from .base import Layer
from ..policies import FeedforwardPolicy


class FeedforwardLayer(Layer):
    """FeedforwardPolicy'ye bağlı, tek sayfalık tam bağlantılı katman."""
    def __init__(self, nodes: int, inputs: int, depth: int = 1, dtype=np.float32, activation: str = "sigmoid"):
        super().__init__(nodes, inputs, depth, policy=FeedforwardPolicy, dtype=dtype, activation=activation)
