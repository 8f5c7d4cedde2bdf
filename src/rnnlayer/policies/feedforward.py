import numpy as np

from .base import LayerPolicy


class FeedforwardPolicy(LayerPolicy):
    """
    Tekrarlamasız katman: yalnızca 0. sayfa (girdi sayfası) kullanılır.
    depth > 1 verilirse ek sayfalar ayrılır ama ileri geçişte okunmaz.
    """
    name = "feedforward"

    def __init__(self, num_nodes: int, num_inputs: int, depth: int = 1, **kwargs):
        super().__init__(num_nodes, num_inputs, depth, **kwargs)
        if depth > 1:
            self.logger.warning(f"FeedforwardPolicy only reads page 0; {depth - 1} extra page(s) stay unused.")

    def forward(self, inputs) -> np.ndarray:
        inputs = self._validate(inputs, self.num_inputs, "inputs", "num_inputs")
        if self.depth == 0:
            pre = np.zeros(self.num_nodes, dtype=self.dtype)
        else:
            pre = self._page_activation(0, inputs)
        self._pre_activation[...] = pre
        return self._activate(self._pre_activation).astype(self.dtype)
