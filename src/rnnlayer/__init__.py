# src/rnnlayer/__init__.py
"""
rnnlayer kütüphanesinin ana paketi.
Paketlenmiş parametre tensörüne sahip RNN katmanlarını ve davranış
politikalarını dışa aktarır.
"""
from .errors import (
    LayerError, AllocationFailure, CopyFailure, DimensionMismatch,
    ErrorReporter, ErrorRecord, Result, reporter
)
from .tensor import Tensor4
from .policies import (
    LayerPolicy, FeedforwardPolicy, RecurrentPolicy,
    WEIGHT_PLANE, BIAS_PLANE, ACTIVATION_PLANE
)
from .layers import Layer, FeedforwardLayer, RecurrentLayer
from .models import Sequential, check_compatible
from .config import LayerConfig, NetworkConfig, build_layer, build_network


__all__ = [
    "LayerError", "AllocationFailure", "CopyFailure", "DimensionMismatch",
    "ErrorReporter", "ErrorRecord", "Result", "reporter",
    "Tensor4",
    "LayerPolicy", "FeedforwardPolicy", "RecurrentPolicy",
    "WEIGHT_PLANE", "BIAS_PLANE", "ACTIVATION_PLANE",
    "Layer", "FeedforwardLayer", "RecurrentLayer",
    "Sequential", "check_compatible",
    "LayerConfig", "NetworkConfig", "build_layer", "build_network",
]
