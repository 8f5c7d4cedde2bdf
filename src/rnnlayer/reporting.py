# src/rnnlayer/reporting.py

import os
import logging
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .layers import Layer
from .policies import WEIGHT_PLANE, BIAS_PLANE, ACTIVATION_PLANE


def set_professional_style():
    """Matplotlib için profesyonel bir stil ayarlar."""
    try:
        plt.style.use('seaborn-v0_8-whitegrid')
        plt.rcParams.update({
            'font.family': 'sans-serif', 'font.sans-serif': 'DejaVu Sans',
            'axes.labelweight': 'bold', 'axes.titleweight': 'bold',
            'grid.color': '#dddddd', 'axes.edgecolor': '#cccccc',
        })
    except Exception as e:
        logging.warning(f"Matplotlib stili yüklenemedi: {e}. Varsayılan kullanılacak.")


def layer_summary(layer: Layer) -> pd.DataFrame:
    """
    Katmanın her sayfası için ağırlık, bias ve aktivasyon istatistiklerini
    bir DataFrame olarak döndürür. Ağırlık istatistikleri yalnızca başlatılan
    bölgeyi (düğüm x girdi) kapsar.
    """
    wba = layer.get_wba()
    rows = []
    for page in range(layer.depth):
        w = wba[:, :layer.num_inputs, page, WEIGHT_PLANE]
        b = wba[:, 0, page, BIAS_PLANE]
        a = wba[:, 0, page, ACTIVATION_PLANE]
        has_w = w.size > 0
        rows.append({
            "page": page,
            "weight_mean": float(w.mean()) if has_w else np.nan,
            "weight_std": float(w.std()) if has_w else np.nan,
            "weight_min": float(w.min()) if has_w else np.nan,
            "weight_max": float(w.max()) if has_w else np.nan,
            "bias_mean": float(b.mean()) if b.size else np.nan,
            "activation_mean": float(a.mean()) if a.size else np.nan,
        })
    columns = ["page", "weight_mean", "weight_std", "weight_min", "weight_max", "bias_mean", "activation_mean"]
    return pd.DataFrame(rows, columns=columns).set_index("page")


def plot_weight_pages(layer: Layer, save_path: str) -> None:
    """Her sayfanın ağırlık matrisini (düğüm x kaynak) bir ısı haritası olarak çizer."""
    if layer.depth == 0:
        logging.warning(f"plot_weight_pages: layer has no pages, nothing to draw for {save_path}")
        return
    dir_path = os.path.dirname(save_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    set_professional_style()
    wba = layer.get_wba()
    fig, axes = plt.subplots(1, layer.depth, figsize=(4 * layer.depth, 4), squeeze=False)
    for page, ax in enumerate(axes[0]):
        im = ax.imshow(wba[:, :, page, WEIGHT_PLANE], aspect='auto', cmap='coolwarm')
        ax.set_title(f'Sayfa {page}')
        ax.set_xlabel('Kaynak')
        ax.set_ylabel('Düğüm')
        ax.grid(False)
        fig.colorbar(im, ax=ax)
    fig.suptitle(f'{layer!r} ağırlıkları')
    fig.tight_layout()
    fig.savefig(save_path)
    plt.close(fig)
    logging.info(f"Ağırlık ısı haritası kaydedildi: {save_path}")
