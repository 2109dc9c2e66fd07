"""
wellbeing/train.py

Fits the low-happiness logistic regression once and packs the result into an
immutable ModelBundle for evaluation and scoring.

Model
-----
low_happiness ~ age + gender + daily_screen_time_hrs + sleep_quality
                + stress_level + days_without_social_media
                + exercise_frequency + social_media_platform

Binomial GLM with logit link, fitted by IRLS (statsmodels). Categorical
predictors use treatment coding against the first level of their domain.

Run (default)
-------------
python -m wellbeing.train

Run (custom)
------------
python -m wellbeing.train --data "data/Mental Health Social Media Balance Dataset.csv" --threshold 0.4
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
import statsmodels.api as sm

from wellbeing.data import OUTCOME, CleanedDataset, load_dataset
from wellbeing.evaluation import DEFAULT_THRESHOLD, evaluate, format_metrics
from wellbeing.inference import INTERCEPT, ModelBundle, build_design_matrix, sigmoid


MAX_ITER = 100
TOLERANCE = 1e-8


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fit the low-happiness logistic regression.")
    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Path to the survey CSV (default: $WELLBEING_DATA_PATH or data/...).",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help="Probability threshold for the confusion matrix.",
    )
    return parser.parse_args()


def aliased_terms(X: pd.DataFrame) -> List[str]:
    """
    Columns with no information, e.g. a level only seen on dropped rows.

    They are left out of the fit and reported as undefined, like glm()'s
    "not defined because of singularities".
    """
    return [c for c in X.columns if c != INTERCEPT and not X[c].any()]


def coefficient_table(result, terms) -> pd.DataFrame:
    """Estimate / SE / z / p per term; NaN for terms left out of the fit."""
    table = pd.DataFrame(
        {
            "Estimate": result.params,
            "Std. Error": result.bse,
            "z value": result.tvalues,
            "Pr(>|z|)": result.pvalues,
        }
    )
    return table.reindex(list(terms))


def summary_text(result, aliased: Sequence[str] = ()) -> str:
    """statsmodels summary plus the deviance/AIC footer people expect from glm()."""
    nobs = int(result.nobs)
    footer = []
    if aliased:
        footer.append(
            f"Coefficients: ({len(aliased)} not defined because of singularities: "
            f"{', '.join(aliased)})"
        )
    footer += [
        f"    Null deviance: {result.null_deviance:.2f}  on {nobs - 1} degrees of freedom",
        f"Residual deviance: {result.deviance:.2f}  on {int(result.df_resid)} degrees of freedom",
        f"AIC: {result.aic:.2f}",
        f"Number of IRLS iterations: {result.fit_history['iteration']}",
    ]
    return result.summary().as_text() + "\n\n" + "\n".join(footer)


def fit_model(
    dataset: CleanedDataset, max_iter: int = MAX_ITER, tol: float = TOLERANCE
) -> ModelBundle:
    """
    Fit the logistic regression on every cleaned row and cache in-sample
    probabilities.

    Raises
    ------
    ValueError
        If low_happiness does not contain both classes.
    """
    frame = dataset.frame
    y = frame[OUTCOME].astype(int)

    unique = set(np.unique(y).tolist())
    if unique != {0, 1}:
        raise ValueError(
            f"{OUTCOME} needs both classes 0 and 1 to fit a logistic regression. "
            f"Found values: {sorted(unique)}"
        )

    X = build_design_matrix(frame, dataset.domains)
    aliased = aliased_terms(X)

    model = sm.GLM(y, X.drop(columns=aliased), family=sm.families.Binomial())
    result = model.fit(maxiter=max_iter, tol=tol)

    # aliased terms contribute nothing to the linear predictor
    params = result.params.reindex(X.columns).fillna(0.0).to_numpy()
    probabilities = sigmoid(X.to_numpy(dtype=float) @ params)

    return ModelBundle.create(
        terms=X.columns,
        params=params,
        domains=dataset.domains,
        train_probabilities=probabilities,
        actual=y.to_numpy(),
        summary=summary_text(result, aliased),
        coefficients=coefficient_table(result, X.columns),
        null_deviance=float(result.null_deviance),
        deviance=float(result.deviance),
        aic=float(result.aic),
    )


def load_and_fit(path: Optional[str | Path] = None) -> tuple[CleanedDataset, ModelBundle]:
    """Startup barrier: load + clean the data and fit the model, in that order."""
    dataset = load_dataset(path)
    return dataset, fit_model(dataset)


def main() -> None:
    args = parse_args()

    dataset, bundle = load_and_fit(args.data)

    print(f"Loaded {len(dataset)} complete rows ({dataset.n_dropped} dropped).")
    for w in dataset.warnings:
        print(f"Warning: {w}")
    print(f"Positive rate ({OUTCOME}=1): {dataset.labels.mean():.3f}")
    print()
    print(bundle.summary)
    print()

    metrics = evaluate(bundle, args.threshold)
    print(f"Confusion matrix at threshold {metrics.threshold:.2f}:")
    print(metrics.confusion_matrix.to_string())
    print()
    print(format_metrics(metrics))


if __name__ == "__main__":
    main()
