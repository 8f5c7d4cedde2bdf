# src/rnnlayer/config.py
"""
Katman ve ağ konfigürasyonlarını Pydantic modelleriyle doğrular ve
doğrulanmış konfigürasyondan nesne üretir.
"""
import logging
from typing import Any, Dict, List, Literal, Optional, Tuple

import numpy as np
from pydantic import BaseModel, Field, ValidationError, field_validator

from .layers import Layer
from .models import Sequential

logger = logging.getLogger(__name__)


class LayerConfig(BaseModel):
    nodes: int = Field(ge=0)
    inputs: int = Field(ge=0)
    depth: int = Field(default=1, ge=0)
    policy: Literal["feedforward", "recurrent"] = "feedforward"
    activation: Literal["sigmoid", "tanh", "relu", "identity"] = "sigmoid"
    dtype: Literal["float32", "float64"] = "float32"
    weight_range: Optional[Tuple[float, float]] = None
    seed: Optional[int] = None

    @field_validator("weight_range")
    @classmethod
    def _check_range(cls, value: Optional[Tuple[float, float]]):
        if value is not None and value[0] > value[1]:
            raise ValueError(f"min ({value[0]}) must not exceed max ({value[1]})")
        return value


class NetworkConfig(BaseModel):
    layers: List[LayerConfig] = Field(min_length=1)
    seed: Optional[int] = None


def _validate(model_cls: type[BaseModel], config: Dict[str, Any]) -> BaseModel:
    try:
        return model_cls(**config)
    except ValidationError as e:
        logger.error(f"Config validation failed for {model_cls.__name__}: {e}")
        error_details = "\n".join(
            [f"  - Field '{'.'.join(str(p) for p in err['loc'])}': {err['msg']}" for err in e.errors()]
        )
        raise ValueError(f"Invalid configuration for {model_cls.__name__}:\n{error_details}") from e


def _make_layer(cfg: LayerConfig, rng: Optional[np.random.Generator] = None) -> Layer:
    layer = Layer(
        cfg.nodes, cfg.inputs, cfg.depth,
        policy=cfg.policy, dtype=np.dtype(cfg.dtype), activation=cfg.activation
    )
    if cfg.weight_range is not None:
        if cfg.seed is not None:
            rng = np.random.default_rng(cfg.seed)
        layer.initialize_weights(*cfg.weight_range, rng=rng)
    return layer


def build_layer(config: Dict[str, Any]) -> Layer:
    """Sözlük halindeki konfigürasyonu doğrular ve bir `Layer` oluşturur."""
    cfg = _validate(LayerConfig, config)
    layer = _make_layer(cfg)
    logger.info(f"Layer built from config: {layer!r}")
    return layer


def build_network(config: Dict[str, Any]) -> Sequential:
    """
    `{"layers": [...], "seed": ...}` konfigürasyonundan bir `Sequential` kurar.
    Katmanlar arası boyut uyumsuzluğu DimensionMismatch olarak yükselir.
    """
    cfg = _validate(NetworkConfig, config)
    rng = np.random.default_rng(cfg.seed) if cfg.seed is not None else None
    layers = [_make_layer(layer_cfg, rng=rng) for layer_cfg in cfg.layers]
    model = Sequential(*layers)
    logger.info(f"Network built from config with {len(model)} layer(s).")
    return model
