import numpy as np
import pytest

from wellbeing.data import clean_dataset
from wellbeing.inference import INTERCEPT, build_design_matrix, predict_one
from wellbeing.make_synthetic_data import generate_survey_dataset
from wellbeing.train import fit_model, load_and_fit


def test_terms_follow_formula_order(bundle):
    assert bundle.terms == (
        INTERCEPT,
        "age",
        "gender[T.Male]",
        "gender[T.Other]",
        "daily_screen_time_hrs",
        "sleep_quality",
        "stress_level",
        "days_without_social_media",
        "exercise_frequency",
        "social_media_platform[T.Instagram]",
        "social_media_platform[T.LinkedIn]",
        "social_media_platform[T.TikTok]",
        "social_media_platform[T.X (Twitter)]",
        "social_media_platform[T.YouTube]",
    )
    assert len(bundle.params) == len(bundle.terms)


def test_reference_levels_have_no_term(bundle):
    assert "gender[T.Female]" not in bundle.terms
    assert "social_media_platform[T.Facebook]" not in bundle.terms


def test_cached_probabilities_cover_every_row(dataset, bundle):
    assert bundle.n_obs == len(dataset)
    assert bundle.train_probabilities.shape == (len(dataset),)
    assert np.all((bundle.train_probabilities > 0) & (bundle.train_probabilities < 1))
    np.testing.assert_array_equal(bundle.actual, dataset.frame["low_happiness"].to_numpy())


def test_cached_probabilities_match_linear_predictor(dataset, bundle):
    X = build_design_matrix(dataset.frame, dataset.domains)
    np.testing.assert_allclose(bundle.predict_proba(X), bundle.train_probabilities)


def test_bundle_arrays_are_read_only(bundle):
    with pytest.raises(ValueError):
        bundle.params[0] = 0.0
    with pytest.raises(ValueError):
        bundle.train_probabilities[0] = 0.0
    with pytest.raises(ValueError):
        bundle.actual[0] = 1


def test_coefficients_point_the_right_way(bundle):
    coefs = dict(zip(bundle.terms, bundle.params))
    # the synthetic data lowers happiness with stress and raises it with sleep
    assert coefs["stress_level"] > 0
    assert coefs["sleep_quality"] < 0


def test_summary_reports_fit_statistics(bundle):
    assert "low_happiness" in bundle.summary
    assert "Null deviance" in bundle.summary
    assert "Residual deviance" in bundle.summary
    assert "AIC" in bundle.summary
    assert list(bundle.coefficients.columns) == ["Estimate", "Std. Error", "z value", "Pr(>|z|)"]
    assert list(bundle.coefficients.index) == list(bundle.terms)
    assert bundle.deviance < bundle.null_deviance
    assert bundle.aic == pytest.approx(bundle.deviance + 2 * len(bundle.terms))


def test_fit_is_deterministic(dataset, bundle):
    again = fit_model(dataset)
    np.testing.assert_array_equal(again.params, bundle.params)
    np.testing.assert_array_equal(again.train_probabilities, bundle.train_probabilities)


def test_single_class_outcome_raises():
    raw = generate_survey_dataset(n_respondents=50, random_state=1)
    raw["Happiness_Index(1-10)"] = 9
    with pytest.raises(ValueError, match="both classes"):
        fit_model(clean_dataset(raw))


def test_load_and_fit(tmp_path):
    path = tmp_path / "survey.csv"
    generate_survey_dataset(n_respondents=300, random_state=3, missing_rate=0.01).to_csv(
        path, index=False
    )

    dataset, bundle = load_and_fit(path)
    assert dataset.n_dropped > 0
    assert bundle.n_obs == len(dataset) == dataset.n_raw - dataset.n_dropped


def test_level_only_on_dropped_row_is_undefined(new_case):
    raw = generate_survey_dataset(n_respondents=300, random_state=5)
    raw.loc[0, "Gender"] = "Nonbinary"
    raw.loc[0, "Age"] = np.nan

    dataset = clean_dataset(raw)
    assert "Nonbinary" in dataset.domains["gender"]
    assert "Nonbinary" not in set(dataset.frame["gender"].astype(str))

    bundle = fit_model(dataset)
    term = "gender[T.Nonbinary]"
    assert term in bundle.terms
    assert bundle.coefficients.loc[term].isna().all()
    assert bundle.coefficients.drop(index=term)["Estimate"].notna().all()
    assert dict(zip(bundle.terms, bundle.params))[term] == 0.0
    assert "1 not defined because of singularities: gender[T.Nonbinary]" in bundle.summary

    # an undefined level scores like the reference level
    as_reference = predict_one(bundle, dict(new_case, gender="Female"), 0.5)
    as_undefined = predict_one(bundle, dict(new_case, gender="Nonbinary"), 0.5)
    assert as_undefined.probability == as_reference.probability


def test_full_rank_fit_has_no_undefined_terms(bundle):
    assert bundle.coefficients.notna().all().all()
    assert "singularities" not in bundle.summary
