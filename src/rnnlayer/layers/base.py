# src/rnnlayer/layers/base.py
import logging
import operator
from typing import Optional, Type, Union

import numpy as np

from ..mathutil import uniform
from ..policies import FeedforwardPolicy, LayerPolicy, WEIGHT_PLANE, resolve_policy
from ..tensor import readonly, zeros_vector


class Layer:
    """
    Bir ağ katmanı: düğüm, girdi ve derinlik boyutları sabit olan, depolama
    düzenini tamamen bağlı davranış politikasına bırakan bir cephe.

    Politika kalıtımla değil, bileşim ile tutulur; katman yalnızca `wba`
    ve `errors` erişimini kendi arayüzü üzerinden dışarı verir.
    """
    def __init__(self, nodes: int, inputs: int, depth: int = 1,
                 policy: Union[str, Type[LayerPolicy]] = FeedforwardPolicy,
                 dtype=np.float32, activation: str = "sigmoid"):
        dims = {}
        for name, value in (("nodes", nodes), ("inputs", inputs), ("depth", depth)):
            try:
                dims[name] = operator.index(value)
            except TypeError:
                raise TypeError(f"Layer '{name}' must be an integer, got {value!r}.") from None
            if dims[name] < 0:
                raise ValueError(f"Layer '{name}' must be non-negative, got {value}.")
        self.logger = logging.getLogger(self.__class__.__name__)
        self._num_nodes = dims["nodes"]
        self._num_inputs = dims["inputs"]
        self._depth = dims["depth"]

        policy_cls = resolve_policy(policy)
        # Politika ayırması başarısız olursa istisna buradan yayılır ve katman oluşmaz
        self._policy: LayerPolicy = policy_cls(
            self._num_nodes, self._num_inputs, self._depth, dtype=dtype, activation=activation
        )
        self.outputs: np.ndarray = zeros_vector(self._num_nodes, dtype=self._policy.dtype, name="outputs").unwrap()
        self.logger.debug(
            f"Layer created: nodes={self._num_nodes}, inputs={self._num_inputs}, "
            f"depth={self._depth}, policy={policy_cls.__name__}"
        )

    @property
    def num_nodes(self) -> int:
        return self._num_nodes

    @property
    def num_inputs(self) -> int:
        return self._num_inputs

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def policy_name(self) -> str:
        return self._policy.name

    @property
    def activation_name(self) -> str:
        return self._policy.activation_name

    @property
    def dtype(self) -> np.dtype:
        return self._policy.dtype

    def initialize_weights(self, min_value: float, max_value: float,
                           rng: Optional[np.random.Generator] = None) -> None:
        """
        Ağırlıkları [min, max] aralığında düzgün dağılımla başlatır.
        Her sayfa d, her girdi i ve her düğüm n için wba(n, i, d, WEIGHT_PLANE)
        bağımsız olarak çekilir. Bias ve aktivasyon düzlemlerine dokunulmaz.
        """
        if min_value > max_value:
            raise ValueError(f"initialize_weights: min ({min_value}) must not exceed max ({max_value}).")
        region = (self._num_nodes, self._num_inputs, self._depth)
        values = uniform(min_value, max_value, region, rng=rng, dtype=self._policy.dtype)
        self._policy.fill_weights(values)
        self.logger.debug(f"Weights initialized in [{min_value}, {max_value}] over region {region}")

    def wba(self, node: int, source: int, page: int, plane: int = WEIGHT_PLANE):
        return self._policy.wba(node, source, page, plane)

    def get_wba(self) -> np.ndarray:
        """Paketlenmiş tensörün (ağırlık, bias, aktivasyon) salt-okunur görünümü."""
        return self._policy.wba_view()

    def get_outputs(self) -> np.ndarray:
        return readonly(self.outputs)

    def get_errors(self) -> np.ndarray:
        # Hata vektörü politikaya aittir
        return self._policy.errors_view()

    def weights(self, page: int = 0) -> np.ndarray:
        return self._policy.weights(page)

    def bias(self, page: int = 0) -> np.ndarray:
        return self._policy.bias(page)

    def activation(self, page: int = 0) -> np.ndarray:
        return self._policy.activation(page)

    def set_bias(self, page: int, values) -> None:
        self._policy.set_bias(page, values)

    def forward(self, inputs) -> np.ndarray:
        self.outputs[...] = self._policy.forward(inputs)
        return self.get_outputs()

    def backward(self, output_errors) -> np.ndarray:
        return self._policy.backward(output_errors)

    def reset_state(self) -> None:
        self._policy.reset_state()
        self.outputs.fill(0)

    def to_device(self):
        return self._policy.to_device()

    def to_host(self):
        return self._policy.to_host()

    def __call__(self, inputs) -> np.ndarray:
        return self.forward(inputs)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(nodes={self._num_nodes}, inputs={self._num_inputs}, "
                f"depth={self._depth}, policy={self._policy.name!r})")
