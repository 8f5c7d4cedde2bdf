import numpy as np

from .base import Layer
from ..policies import RecurrentPolicy


class RecurrentLayer(Layer):
    """
    RecurrentPolicy'ye bağlı katman. `depth`, girdi sayfası dahil kaç
    zaman adımının parametre tensöründe tutulduğunu belirler.
    """
    def __init__(self, nodes: int, inputs: int, depth: int = 2, dtype=np.float32, activation: str = "tanh"):
        super().__init__(nodes, inputs, depth, policy=RecurrentPolicy, dtype=dtype, activation=activation)

    @property
    def steps(self) -> int:
        return self._policy.steps

    def recurrent_errors(self) -> np.ndarray:
        """Hata sinyalinin önceki gizli durumlara dağılımı, şekil (depth - 1, nodes)."""
        return self._policy.recurrent_errors()
