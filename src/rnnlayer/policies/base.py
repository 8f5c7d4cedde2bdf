# src/rnnlayer/policies/base.py
"""
Katman davranış politikalarının temel sınıfı.

Politika, paketlenmiş parametre tensörünün (wba) ve hata vektörünün
sahibidir. Her sayfa (page) bir zaman adımına karşılık gelir ve şu
düzende saklanır:

    wba[n, i, d, WEIGHT_PLANE]      -> sayfa d'de kaynak i'den düğüm n'ye ağırlık
    wba[n, 0, d, BIAS_PLANE]        -> sayfa d'nin düğüm n için biası
    wba[n, 0, d, ACTIVATION_PLANE]  -> sayfa d'nin Wx + b değeri

Kaynak ekseni max(inputs, nodes) genişliğindedir; böylece aynı düzlem hem
girdi sayfası hem de önceki gizli durum sayfaları için kullanılabilir.
Bias ve aktivasyon düzlemlerinde kaynak > 0 hücreleri ayrılmıştır, sıfır kalır.
"""
import logging
from abc import ABC, abstractmethod

import numpy as np

from ..errors import report_dim_error
from ..mathutil import get_activation
from ..tensor import Tensor4, check_length, readonly, zeros_vector

WEIGHT_PLANE = 0
BIAS_PLANE = 1
ACTIVATION_PLANE = 2
NUM_PLANES = 3


class LayerPolicy(ABC):
    """Bir katman türünün depolama düzenini ve geçiş anlamını tanımlar."""
    name: str = "base"

    def __init__(self, num_nodes: int, num_inputs: int, depth: int,
                 dtype=np.float32, activation: str = "sigmoid"):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.num_nodes = num_nodes
        self.num_inputs = num_inputs
        self.depth = depth
        self.width = max(num_inputs, num_nodes)
        self.dtype = np.dtype(dtype)
        self.activation_name = activation
        self._activate, self._activate_derivative = get_activation(activation)

        # Ayırma başarısız olursa unwrap() fırlatır; yarım kalmış politika dışarı çıkmaz
        self._wba: Tensor4 = Tensor4.allocate(
            num_nodes, self.width, depth, NUM_PLANES, dtype=self.dtype, name="wba"
        ).unwrap()
        self.errors: np.ndarray = zeros_vector(num_nodes, dtype=self.dtype, name="errors").unwrap()
        self._pre_activation: np.ndarray = np.zeros(num_nodes, dtype=self.dtype)

    # --- Paketlenmiş tensöre erişim ---
    def wba(self, node: int, source: int, page: int, plane: int):
        return self._wba.at(node, source, page, plane)

    def set_wba(self, node: int, source: int, page: int, plane: int, value) -> None:
        self._wba.set(node, source, page, plane, value)

    def wba_view(self) -> np.ndarray:
        return self._wba.view()

    def _check_page(self, page: int) -> None:
        if not 0 <= page < self.depth:
            raise report_dim_error("page", "depth", f"page {page} is out of range [0, {self.depth})")

    def weights(self, page: int) -> np.ndarray:
        self._check_page(page)
        return readonly(self._wba.data[:, :, page, WEIGHT_PLANE])

    def bias(self, page: int) -> np.ndarray:
        self._check_page(page)
        return readonly(self._wba.data[:, 0, page, BIAS_PLANE])

    def activation(self, page: int) -> np.ndarray:
        self._check_page(page)
        return readonly(self._wba.data[:, 0, page, ACTIVATION_PLANE])

    def set_bias(self, page: int, values) -> None:
        self._check_page(page)
        values = self._validate(values, self.num_nodes, "bias", "num_nodes")
        self._wba.write((slice(None), 0, page, BIAS_PLANE), values)

    def errors_view(self) -> np.ndarray:
        return readonly(self.errors)

    def fill_weights(self, values: np.ndarray) -> None:
        """Ağırlık bölgesini [:nodes, :inputs, :depth] yerinde doldurur."""
        expected = (self.num_nodes, self.num_inputs, self.depth)
        if values.shape != expected:
            raise report_dim_error("values", "weight_region", f"got {values.shape}, expected {expected}")
        self._wba.write((slice(None), slice(0, self.num_inputs), slice(None), WEIGHT_PLANE), values)

    # --- Geçişler ---
    def _validate(self, values, expected: int, name: str, expected_name: str) -> np.ndarray:
        values = np.asarray(values, dtype=self.dtype)
        error = check_length(values, expected, name, expected_name)
        if error is not None:
            raise error
        return values

    def _page_activation(self, page: int, source_values: np.ndarray) -> np.ndarray:
        """Sayfa için Wx + b hesaplar ve aktivasyon düzlemine yazar."""
        k = source_values.shape[0]
        w = self._wba.data[:, :k, page, WEIGHT_PLANE]
        b = self._wba.data[:, 0, page, BIAS_PLANE]
        a = w @ source_values + b
        self._wba.write((slice(None), 0, page, ACTIVATION_PLANE), a)
        return a

    def _input_errors(self) -> np.ndarray:
        if self.depth == 0:
            return np.zeros(self.num_inputs, dtype=self.dtype)
        w = self._wba.data[:, :self.num_inputs, 0, WEIGHT_PLANE]
        return w.T @ self.errors

    @abstractmethod
    def forward(self, inputs) -> np.ndarray:
        """Girdileri alır, aktive edilmiş çıktıları döndürür."""
        raise NotImplementedError

    def backward(self, output_errors) -> np.ndarray:
        """
        Çıktı hatalarından düğüm hatalarını (delta) hesaplar ve `errors`'a yazar.
        Girdi tarafına yayılacak hata sinyalini döndürür.
        """
        output_errors = self._validate(output_errors, self.num_nodes, "output_errors", "num_nodes")
        self.errors[...] = output_errors * self._activate_derivative(self._pre_activation)
        return self._input_errors()

    def reset_state(self) -> None:
        self._pre_activation.fill(0)

    # --- Host/cihaz ---
    def to_device(self):
        return self._wba.to_device()

    def to_host(self):
        return self._wba.to_host()

    @property
    def shape(self):
        return self._wba.shape

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(nodes={self.num_nodes}, inputs={self.num_inputs}, "
                f"depth={self.depth}, activation={self.activation_name!r})")


def resolve_policy(policy) -> type:
    """İsimden ya da sınıftan politika sınıfını çözer."""
    from . import POLICIES
    if isinstance(policy, str):
        try:
            return POLICIES[policy]
        except KeyError:
            raise ValueError(f"Unknown layer policy '{policy}'. Available: {sorted(POLICIES)}") from None
    if isinstance(policy, type) and issubclass(policy, LayerPolicy):
        return policy
    raise TypeError(f"policy must be a LayerPolicy subclass or a name, got {policy!r}")
