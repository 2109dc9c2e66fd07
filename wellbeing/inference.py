"""
wellbeing/inference.py

Purpose
-------
Centralizes "inference-time" logic: the fitted model bundle, the design-matrix
encoding shared with training, input validation, and single-case scoring.
UI code (Streamlit) only calls into here; nothing in this module touches
the UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Tuple

import numpy as np
import pandas as pd

from wellbeing.data import CATEGORICAL_FIELDS, PREDICTORS, CategoricalDomain
from wellbeing.evaluation import check_threshold


INTERCEPT = "(Intercept)"

CLASS_LABELS = {
    1: "LOW happiness (1)",
    0: "Moderate/High happiness (0)",
}


def sigmoid(x: np.ndarray) -> np.ndarray:
    return 1 / (1 + np.exp(-x))


def _read_only(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


def dummy_name(field: str, level: str) -> str:
    return f"{field}[T.{level}]"


def design_terms(domains: Mapping[str, CategoricalDomain]) -> Tuple[str, ...]:
    """
    Ordered model terms: intercept, then predictors in formula order, with one
    dummy per non-reference level for categorical fields.
    """
    terms = [INTERCEPT]
    for name in PREDICTORS:
        if name in CATEGORICAL_FIELDS:
            domain = domains[name]
            terms.extend(dummy_name(name, level) for level in domain.levels[1:])
        else:
            terms.append(name)
    return tuple(terms)


def build_design_matrix(
    frame: pd.DataFrame, domains: Mapping[str, CategoricalDomain]
) -> pd.DataFrame:
    """
    Encode predictor columns into the numeric design matrix.

    Categorical fields use treatment coding against the domain's first level.
    Values are assumed to be already validated against the domains.
    """
    columns = {INTERCEPT: np.ones(len(frame))}
    for name in PREDICTORS:
        if name in CATEGORICAL_FIELDS:
            values = frame[name].astype(object)
            for level in domains[name].levels[1:]:
                columns[dummy_name(name, level)] = (values == level).to_numpy(dtype=float)
        else:
            columns[name] = frame[name].to_numpy(dtype=float)

    X = pd.DataFrame(columns, index=frame.index)
    return X[list(design_terms(domains))]


@dataclass(frozen=True, eq=False)
class ModelBundle:
    """
    Everything needed for evaluation and scoring, built once at startup.

    All arrays are read-only; the bundle is shared by every UI session.

    terms                  : model term names, aligned with params
    params                 : fitted coefficients
    domains                : categorical domains used for encoding
    train_probabilities    : in-sample P(low_happiness = 1), one per cleaned row
    actual                 : observed low_happiness, aligned with train_probabilities
    summary                : human-readable fit summary (display only)
    coefficients           : estimate / std. error / z / p-value table (display only)
    null_deviance, deviance, aic : fit statistics
    """
    terms: Tuple[str, ...]
    params: np.ndarray
    domains: Mapping[str, CategoricalDomain]
    train_probabilities: np.ndarray
    actual: np.ndarray
    summary: str
    coefficients: pd.DataFrame
    null_deviance: float
    deviance: float
    aic: float

    @classmethod
    def create(cls, **kwargs) -> "ModelBundle":
        kwargs["params"] = _read_only(kwargs["params"])
        kwargs["train_probabilities"] = _read_only(kwargs["train_probabilities"])
        actual = np.array(kwargs["actual"], dtype=int)
        actual.setflags(write=False)
        kwargs["actual"] = actual
        kwargs["terms"] = tuple(kwargs["terms"])
        return cls(**kwargs)

    @property
    def n_obs(self) -> int:
        return len(self.actual)

    def linear_predictor(self, X: pd.DataFrame) -> np.ndarray:
        return X[list(self.terms)].to_numpy(dtype=float) @ self.params

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """P(low_happiness = 1) for each row of an encoded design matrix."""
        return sigmoid(self.linear_predictor(X))


@dataclass(frozen=True)
class Prediction:
    probability: float
    predicted_class: int
    threshold: float

    @property
    def label(self) -> str:
        return CLASS_LABELS[self.predicted_class]


def validate_record(
    record: Mapping[str, object], domains: Mapping[str, CategoricalDomain]
) -> Tuple[pd.DataFrame, List[str]]:
    """
    Validate one new respondent and return it as a single-row dataframe.

    This function:
      1) Ensures all predictor fields are present (hard error if missing).
      2) Ignores unexpected fields (warning only).
      3) Requires numeric fields to be finite numbers (hard error otherwise).
      4) Requires categorical fields to be levels of the fitted domains.

    Raises
    ------
    ValueError
        On missing fields, non-numeric values, or unknown categories. An
        unknown category is never mapped to the reference level.
    """
    warnings: List[str] = []

    missing = [c for c in PREDICTORS if c not in record]
    if missing:
        raise ValueError(f"Missing required fields: {missing}")

    extra = [c for c in record if c not in PREDICTORS]
    if extra:
        warnings.append(f"Ignoring extra fields: {extra}")

    row = {}
    for name in PREDICTORS:
        value = record[name]
        if name in CATEGORICAL_FIELDS:
            row[name] = domains[name].validate(value)
            continue

        number = pd.to_numeric(pd.Series([value]), errors="coerce").iloc[0]
        if isinstance(value, bool) or pd.isna(number) or not np.isfinite(number):
            raise ValueError(f"Field '{name}' must be a number, got {value!r}.")
        row[name] = float(number)

    return pd.DataFrame([row], columns=PREDICTORS), warnings


def predict_one(
    bundle: ModelBundle, record: Mapping[str, object], threshold: float
) -> Prediction:
    """
    Probability of low happiness for one new respondent, plus its class at
    the given threshold (1 if probability >= threshold).
    """
    threshold = check_threshold(threshold)
    row, _ = validate_record(record, bundle.domains)
    X = build_design_matrix(row, bundle.domains)

    probability = float(bundle.predict_proba(X)[0])
    predicted_class = int(probability >= threshold)
    return Prediction(
        probability=probability, predicted_class=predicted_class, threshold=threshold
    )


def format_prediction(prediction: Prediction) -> str:
    return (
        "Predicted probability of LOW happiness (Happiness <= 5): "
        f"{prediction.probability:.3f}\n"
        f"Threshold = {prediction.threshold:g} -> Predicted class: {prediction.label}"
    )
