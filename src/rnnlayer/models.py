# src/rnnlayer/models.py
import logging
from typing import List, Optional

import numpy as np

from .errors import Result, report_dim_error
from .layers import Layer


def check_compatible(upstream: Layer, downstream: Layer,
                     upstream_name: str = "upstream", downstream_name: str = "downstream") -> Result:
    """Üst katmanın düğüm sayısı alt katmanın girdi sayısıyla eşleşmelidir."""
    if upstream.num_nodes != downstream.num_inputs:
        return Result.failure(report_dim_error(
            f"{upstream_name}.num_nodes", f"{downstream_name}.num_inputs",
            f"{upstream.num_nodes} != {downstream.num_inputs}"
        ))
    return Result.success((upstream, downstream))


class Sequential:
    """
    Katmanları sırayla zincirleyen yığın. Boyut uyumu kurulumda denetlenir,
    herhangi bir geçiş çalışmadan önce.
    """
    def __init__(self, *layers: Layer):
        self.logger = logging.getLogger(self.__class__.__name__)
        for k in range(1, len(layers)):
            check_compatible(layers[k - 1], layers[k], f"layers[{k - 1}]", f"layers[{k}]").unwrap()
        self.layers: List[Layer] = list(layers)
        self.logger.info(f"Sequential model assembled with {len(self.layers)} layer(s).")

    @property
    def num_inputs(self) -> int:
        return self.layers[0].num_inputs if self.layers else 0

    @property
    def num_outputs(self) -> int:
        return self.layers[-1].num_nodes if self.layers else 0

    def add(self, layer: Layer) -> "Sequential":
        if self.layers:
            k = len(self.layers)
            check_compatible(self.layers[-1], layer, f"layers[{k - 1}]", f"layers[{k}]").unwrap()
        self.layers.append(layer)
        return self

    def initialize_weights(self, min_value: float, max_value: float,
                           rng: Optional[np.random.Generator] = None) -> None:
        for layer in self.layers:
            layer.initialize_weights(min_value, max_value, rng=rng)

    def forward(self, x) -> np.ndarray:
        x = np.asarray(x)
        if x.ndim != 1 or x.shape[0] != self.num_inputs:
            raise report_dim_error("x", "layers[0].num_inputs", f"got shape {x.shape}, expected ({self.num_inputs},)")
        for layer in self.layers:
            x = layer.forward(x)
        return x

    def backward(self, output_errors) -> np.ndarray:
        """Hata sinyalini son katmandan ilk katmana doğru yayar."""
        signal = np.asarray(output_errors)
        for layer in reversed(self.layers):
            signal = layer.backward(signal)
        return signal

    def reset_state(self) -> None:
        for layer in self.layers:
            layer.reset_state()

    def __call__(self, x) -> np.ndarray:
        return self.forward(x)

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self):
        return iter(self.layers)
