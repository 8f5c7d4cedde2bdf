from collections import deque
from typing import Deque

import numpy as np

from .base import LayerPolicy, WEIGHT_PLANE


class RecurrentPolicy(LayerPolicy):
    """
    Tekrarlayan katman. 0. sayfa o anki girdiyle, d >= 1 sayfası ise katmanın
    d adım önceki çıktısıyla beslenir:

        pre_t = (W_0 x_t + b_0) + sum_{d=1}^{depth-1} (W_d h_{t-d} + b_d)
        h_t   = f(pre_t)

    Henüz oluşmamış geçmiş durumlar sıfır kabul edilir.
    """
    name = "recurrent"

    def __init__(self, num_nodes: int, num_inputs: int, depth: int, **kwargs):
        super().__init__(num_nodes, num_inputs, depth, **kwargs)
        # En yeni adım başta
        self.history: Deque[np.ndarray] = deque(maxlen=max(depth - 1, 0))
        self.pre_history: Deque[np.ndarray] = deque(maxlen=max(depth, 0))
        self.steps = 0

    def _previous_state(self, page: int) -> np.ndarray:
        if page - 1 < len(self.history):
            return self.history[page - 1]
        return np.zeros(self.num_nodes, dtype=self.dtype)

    def forward(self, inputs) -> np.ndarray:
        inputs = self._validate(inputs, self.num_inputs, "inputs", "num_inputs")
        pre = np.zeros(self.num_nodes, dtype=self.dtype)
        if self.depth > 0:
            pre += self._page_activation(0, inputs)
        for page in range(1, self.depth):
            pre += self._page_activation(page, self._previous_state(page))
        self._pre_activation[...] = pre

        outputs = self._activate(self._pre_activation).astype(self.dtype)
        if self.history.maxlen:
            self.history.appendleft(outputs.copy())
        if self.pre_history.maxlen:
            self.pre_history.appendleft(pre.copy())
        self.steps += 1
        return outputs

    def recurrent_errors(self) -> np.ndarray:
        """
        Son geri geçişteki düğüm hatalarının önceki adımlara yayılımı.

        Satır d-1, t-d adımındaki düğüm hatasıdır (delta):

            delta_{t-d} = (W_d^T delta_t) * f'(pre_{t-d})

        pre_{t-d} henüz oluşmamışsa (ya da reset_state sonrası) satır sıfırdır.
        Şekil (depth - 1, nodes).
        """
        pages = max(self.depth - 1, 0)
        out = np.zeros((pages, self.num_nodes), dtype=self.dtype)
        for page in range(1, self.depth):
            if page >= len(self.pre_history):
                continue
            w = self._wba.data[:, :self.num_nodes, page, WEIGHT_PLANE]
            out[page - 1] = (w.T @ self.errors) * self._activate_derivative(self.pre_history[page])
        return out

    def reset_state(self) -> None:
        super().reset_state()
        self.history.clear()
        self.pre_history.clear()
        self.steps = 0
