import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from wellbeing.data import clean_dataset
from wellbeing.make_synthetic_data import generate_survey_dataset
from wellbeing.train import fit_model


@pytest.fixture(scope="session")
def raw_survey() -> pd.DataFrame:
    return generate_survey_dataset(n_respondents=400, random_state=7)


@pytest.fixture(scope="session")
def dataset(raw_survey):
    return clean_dataset(raw_survey)


@pytest.fixture(scope="session")
def bundle(dataset):
    return fit_model(dataset)


@pytest.fixture
def new_case():
    return {
        "age": 30,
        "gender": "Male",
        "daily_screen_time_hrs": 5.0,
        "sleep_quality": 7,
        "stress_level": 5,
        "days_without_social_media": 2,
        "exercise_frequency": 3,
        "social_media_platform": "Instagram",
    }
