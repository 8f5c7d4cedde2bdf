# src/rnnlayer/mathutil.py
"""Rastgele değer üretimi ve aktivasyon fonksiyonları."""
from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np

_rng = np.random.default_rng()

ArrayFn = Callable[[np.ndarray], np.ndarray]


def seed(value: Optional[int] = None) -> None:
    """Paket genelindeki rastgele sayı üretecini tohumlar."""
    global _rng
    _rng = np.random.default_rng(value)


def get_rng(rng: Optional[np.random.Generator] = None) -> np.random.Generator:
    return rng if rng is not None else _rng


def rand(min_value: float, max_value: float, rng: Optional[np.random.Generator] = None) -> float:
    """[min, max] aralığında düzgün dağılımlı tek bir değer üretir."""
    return float(get_rng(rng).uniform(min_value, max_value))


def uniform(min_value: float, max_value: float, size: Union[int, Tuple[int, ...]],
            rng: Optional[np.random.Generator] = None, dtype=np.float32) -> np.ndarray:
    """Vektörel `rand`: her eleman bağımsız olarak çekilir."""
    values = get_rng(rng).uniform(min_value, max_value, size)
    # float32'ye yuvarlama üst sınırı aşabilir
    return np.clip(values, min_value, max_value).astype(dtype, copy=False)


def sigmoid(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


def sigmoid_derivative(x: np.ndarray) -> np.ndarray:
    s = sigmoid(x)
    return s * (1.0 - s)


def tanh(x: np.ndarray) -> np.ndarray:
    return np.tanh(x)


def tanh_derivative(x: np.ndarray) -> np.ndarray:
    return 1.0 - np.tanh(x) ** 2


def relu(x: np.ndarray) -> np.ndarray:
    return np.maximum(x, 0)


def relu_derivative(x: np.ndarray) -> np.ndarray:
    return (x > 0).astype(x.dtype)


def identity(x: np.ndarray) -> np.ndarray:
    return x


def identity_derivative(x: np.ndarray) -> np.ndarray:
    return np.ones_like(x)


ACTIVATIONS: Dict[str, Tuple[ArrayFn, ArrayFn]] = {
    "sigmoid": (sigmoid, sigmoid_derivative),
    "tanh": (tanh, tanh_derivative),
    "relu": (relu, relu_derivative),
    "identity": (identity, identity_derivative),
}


def get_activation(name: str) -> Tuple[ArrayFn, ArrayFn]:
    """Aktivasyon fonksiyonunu ve türevini (ön-aktivasyon üzerinden) döndürür."""
    try:
        return ACTIVATIONS[name]
    except KeyError:
        raise ValueError(f"Unknown activation '{name}'. Available: {sorted(ACTIVATIONS)}") from None
