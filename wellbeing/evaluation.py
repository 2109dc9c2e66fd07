"""
wellbeing/evaluation.py

Confusion-matrix metrics at a probability threshold.

The probabilities are the cached in-sample ones from the fitted bundle; only
the thresholding changes between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix

if TYPE_CHECKING:
    from wellbeing.inference import ModelBundle


# Bounds of the UI slider; the functions below accept the whole [0, 1] range.
THRESHOLD_MIN = 0.10
THRESHOLD_MAX = 0.90
THRESHOLD_STEP = 0.05
DEFAULT_THRESHOLD = 0.50

NOT_APPLICABLE = "not applicable"


def check_threshold(threshold: float) -> float:
    threshold = float(threshold)
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"Threshold must be between 0 and 1, got {threshold}.")
    return threshold


def classify(probabilities, threshold: float) -> np.ndarray:
    """1 where probability >= threshold (inclusive), else 0."""
    threshold = check_threshold(threshold)
    return (np.asarray(probabilities, dtype=float) >= threshold).astype(int)


def _ratio(numerator: int, denominator: int) -> Optional[float]:
    if denominator == 0:
        return None
    return numerator / denominator


@dataclass(frozen=True)
class ThresholdMetrics:
    threshold: float
    tp: int
    fp: int
    fn: int
    tn: int

    @property
    def n(self) -> int:
        return self.tp + self.fp + self.fn + self.tn

    @property
    def accuracy(self) -> float:
        return (self.tp + self.tn) / self.n

    @property
    def sensitivity(self) -> Optional[float]:
        """True-positive rate; None when there are no actual positives."""
        return _ratio(self.tp, self.tp + self.fn)

    @property
    def specificity(self) -> Optional[float]:
        """True-negative rate; None when there are no actual negatives."""
        return _ratio(self.tn, self.tn + self.fp)

    @property
    def confusion_matrix(self) -> pd.DataFrame:
        """2x2 table, rows = predicted class, columns = actual class."""
        return pd.DataFrame(
            [[self.tn, self.fn], [self.fp, self.tp]],
            index=pd.Index([0, 1], name="Predicted"),
            columns=pd.Index([0, 1], name="Actual"),
        )


def evaluate_probabilities(probabilities, actual, threshold: float) -> ThresholdMetrics:
    """
    Compute confusion-matrix-based metrics at a given probability threshold.
    """
    y_true = np.asarray(actual, dtype=int)
    y_pred = classify(probabilities, threshold)
    if y_true.shape != y_pred.shape:
        raise ValueError(
            f"Got {len(y_pred)} probabilities for {len(y_true)} labels."
        )
    if len(y_true) == 0:
        raise ValueError("No rows to evaluate.")

    # labels=[0, 1] keeps the matrix 2x2 even when a class is absent
    cm = confusion_matrix(y_true, y_pred, labels=[0, 1])

    return ThresholdMetrics(
        threshold=float(threshold),
        tn=int(cm[0, 0]),
        fp=int(cm[0, 1]),
        fn=int(cm[1, 0]),
        tp=int(cm[1, 1]),
    )


def evaluate(bundle: "ModelBundle", threshold: float) -> ThresholdMetrics:
    return evaluate_probabilities(bundle.train_probabilities, bundle.actual, threshold)


def _fmt(value: Optional[float]) -> str:
    return NOT_APPLICABLE if value is None else f"{value:.3f}"


def format_metrics(metrics: ThresholdMetrics) -> str:
    return "\n".join(
        [
            f"Accuracy         : {_fmt(metrics.accuracy)}",
            f"Sensitivity (TPR): {_fmt(metrics.sensitivity)}",
            f"Specificity (TNR): {_fmt(metrics.specificity)}",
            f"TP: {metrics.tp}  FP: {metrics.fp}  FN: {metrics.fn}  TN: {metrics.tn}",
        ]
    )
