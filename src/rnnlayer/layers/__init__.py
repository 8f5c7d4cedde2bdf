# Bu dosya, tüm katmanları tek bir yerden kolayca import etmeyi sağlar.
from .base import Layer
from .feedforward import FeedforwardLayer
from .recurrent import RecurrentLayer

__all__ = ["Layer", "FeedforwardLayer", "RecurrentLayer"]
