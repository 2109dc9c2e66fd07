import numpy as np
import pytest

from wellbeing.data import PREDICTORS
from wellbeing.inference import (
    CLASS_LABELS,
    build_design_matrix,
    format_prediction,
    predict_one,
    sigmoid,
    validate_record,
)


def test_prediction_is_deterministic(bundle, new_case):
    first = predict_one(bundle, new_case, 0.5)
    second = predict_one(bundle, dict(new_case), 0.5)
    assert first == second
    assert 0.0 < first.probability < 1.0


def test_class_follows_threshold(bundle, new_case):
    p = predict_one(bundle, new_case, 0.5).probability

    assert predict_one(bundle, new_case, p).predicted_class == 1
    assert predict_one(bundle, new_case, 0.0).predicted_class == 1
    assert predict_one(bundle, new_case, min(1.0, p + 1e-6)).predicted_class == 0


def test_matches_cached_training_probability(dataset, bundle):
    row = dataset.frame.iloc[17]
    record = {name: row[name] for name in PREDICTORS}

    prediction = predict_one(bundle, record, 0.5)
    assert prediction.probability == pytest.approx(bundle.train_probabilities[17])


def test_matches_manual_linear_combination(bundle, new_case):
    coefs = dict(zip(bundle.terms, bundle.params))
    eta = (
        coefs["(Intercept)"]
        + coefs["age"] * 30
        + coefs["gender[T.Male]"]
        + coefs["daily_screen_time_hrs"] * 5.0
        + coefs["sleep_quality"] * 7
        + coefs["stress_level"] * 5
        + coefs["days_without_social_media"] * 2
        + coefs["exercise_frequency"] * 3
        + coefs["social_media_platform[T.Instagram]"]
    )
    assert predict_one(bundle, new_case, 0.5).probability == pytest.approx(float(sigmoid(eta)))


def test_reference_levels_encode_as_zero(bundle, new_case):
    record = dict(new_case, gender="Female", social_media_platform="Facebook")
    row, _ = validate_record(record, bundle.domains)
    X = build_design_matrix(row, bundle.domains)

    dummies = [t for t in bundle.terms if "[T." in t]
    assert X.loc[0, dummies].tolist() == [0.0] * len(dummies)


def test_unknown_gender_is_rejected(bundle, new_case):
    record = dict(new_case, gender="Prefer not to say")
    with pytest.raises(ValueError, match="Unknown gender"):
        predict_one(bundle, record, 0.5)


def test_unknown_platform_is_rejected(bundle, new_case):
    record = dict(new_case, social_media_platform="MySpace")
    with pytest.raises(ValueError, match="Unknown social_media_platform"):
        predict_one(bundle, record, 0.5)


def test_missing_field_is_rejected(bundle, new_case):
    record = dict(new_case)
    del record["stress_level"]
    with pytest.raises(ValueError, match="stress_level"):
        predict_one(bundle, record, 0.5)


@pytest.mark.parametrize("value", ["lots", None, float("nan"), True])
def test_non_numeric_value_is_rejected(bundle, new_case, value):
    record = dict(new_case, daily_screen_time_hrs=value)
    with pytest.raises(ValueError, match="must be a number"):
        predict_one(bundle, record, 0.5)


def test_numeric_strings_are_accepted(bundle, new_case):
    as_text = dict(new_case, age="30")
    assert predict_one(bundle, as_text, 0.5) == predict_one(bundle, new_case, 0.5)


def test_extra_fields_only_warn(bundle, new_case):
    _, warnings = validate_record(dict(new_case, User_ID="U001"), bundle.domains)
    assert warnings == ["Ignoring extra fields: ['User_ID']"]


def test_prediction_does_not_touch_bundle(bundle, new_case):
    params = bundle.params.copy()
    predict_one(bundle, new_case, 0.5)
    np.testing.assert_array_equal(bundle.params, params)


def test_format_prediction(bundle, new_case):
    prediction = predict_one(bundle, new_case, 0.0)
    text = format_prediction(prediction)

    assert f"{prediction.probability:.3f}" in text
    assert CLASS_LABELS[1] in text
    assert prediction.label == "LOW happiness (1)"
