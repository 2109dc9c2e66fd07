"""
wellbeing/plots.py

Happiness index vs. one numeric predictor, coloured by low_happiness, with a
LOWESS smooth per class.
"""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from statsmodels.nonparametric.smoothers_lowess import lowess

from wellbeing.data import HAPPINESS, OUTCOME
from wellbeing.data_dictionary import DISPLAY_LABELS, VIZ_VARIABLES


CLASS_COLORS = {0: "#1f77b4", 1: "#d62728"}
CLASS_NAMES = {0: "0 (Moderate/High)", 1: "1 (Low)"}


def plot_happiness_vs(frame: pd.DataFrame, variable: str):
    """Return a matplotlib figure; raises ValueError for non-plottable variables."""
    if variable not in VIZ_VARIABLES:
        raise ValueError(f"Cannot plot '{variable}'. Choose one of: {VIZ_VARIABLES}")

    fig, ax = plt.subplots(figsize=(8, 5))
    for cls in (0, 1):
        subset = frame[frame[OUTCOME] == cls]
        if subset.empty:
            continue
        x = subset[variable].to_numpy(dtype=float)
        y = subset[HAPPINESS].to_numpy(dtype=float)
        ax.scatter(x, y, alpha=0.6, color=CLASS_COLORS[cls], label=CLASS_NAMES[cls])

        # lowess needs a few distinct x values to say anything useful
        if len(np.unique(x)) > 3:
            smooth = lowess(y, x, frac=2 / 3)
            ax.plot(smooth[:, 0], smooth[:, 1], color=CLASS_COLORS[cls], linewidth=2)

    ax.set_xlabel(DISPLAY_LABELS[variable])
    ax.set_ylabel(DISPLAY_LABELS[HAPPINESS])
    ax.legend(title=DISPLAY_LABELS[OUTCOME])
    ax.spines[["top", "right"]].set_visible(False)
    ax.grid(alpha=0.3)
    fig.tight_layout()
    return fig
