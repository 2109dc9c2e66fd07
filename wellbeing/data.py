"""
wellbeing/data.py

Loads the "Mental Health Social Media Balance" survey CSV and turns it into
the cleaned modelling table.

Cleaning steps
--------------
  1) Rename the unit-annotated raw headers to canonical snake_case names.
  2) Build the categorical domains (gender, platform) from ALL raw rows.
  3) Coerce numeric fields (non-numeric text becomes missing).
  4) Derive low_happiness = 1 if happiness_index <= 5 else 0.
  5) Keep the ten modelling fields and drop any row with a missing value.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

import pandas as pd


DEFAULT_DATA_PATH = Path("data/Mental Health Social Media Balance Dataset.csv")
DATA_PATH_ENV = "WELLBEING_DATA_PATH"

OUTCOME = "low_happiness"
HAPPINESS = "happiness_index"
LOW_HAPPINESS_CUTOFF = 5

CATEGORICAL_FIELDS = ["gender", "social_media_platform"]

# Model term order follows this list.
PREDICTORS = [
    "age",
    "gender",
    "daily_screen_time_hrs",
    "sleep_quality",
    "stress_level",
    "days_without_social_media",
    "exercise_frequency",
    "social_media_platform",
]

NUMERIC_FIELDS = [c for c in PREDICTORS if c not in CATEGORICAL_FIELDS] + [HAPPINESS]

MODEL_COLUMNS = [OUTCOME] + PREDICTORS + [HAPPINESS]

# canonical name -> accepted source headers (first match wins).
# The dotted variants are what R's read.csv makes of the original headers.
SOURCE_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "age": ("Age",),
    "gender": ("Gender",),
    "daily_screen_time_hrs": ("Daily_Screen_Time(hrs)", "Daily_Screen_Time.hrs."),
    "sleep_quality": ("Sleep_Quality(1-10)", "Sleep_Quality.1.10."),
    "stress_level": ("Stress_Level(1-10)", "Stress_Level.1.10."),
    "days_without_social_media": ("Days_Without_Social_Media",),
    "exercise_frequency": ("Exercise_Frequency(week)", "Exercise_Frequency.week."),
    "social_media_platform": ("Social_Media_Platform",),
    "happiness_index": ("Happiness_Index(1-10)", "Happiness_Index.1.10."),
}


def resolve_data_path(path: str | Path | None = None) -> Path:
    """Explicit path, else $WELLBEING_DATA_PATH, else the default location."""
    if path:
        return Path(path)
    return Path(os.environ.get(DATA_PATH_ENV) or DEFAULT_DATA_PATH)


@dataclass(frozen=True)
class CategoricalDomain:
    """
    Closed set of levels for one categorical field.

    The first level is the reference level absorbed into the intercept.
    """
    name: str
    levels: Tuple[str, ...]

    @property
    def reference(self) -> str:
        return self.levels[0]

    def __contains__(self, value: object) -> bool:
        return value in self.levels

    def validate(self, value: object) -> str:
        """Return value as a level string, or raise if it is not a known level."""
        if not isinstance(value, str) or value not in self.levels:
            raise ValueError(
                f"Unknown {self.name} value {value!r}. Expected one of: {list(self.levels)}"
            )
        return value

    @classmethod
    def from_values(cls, name: str, values: pd.Series) -> "CategoricalDomain":
        """
        Levels sorted case-insensitively (ties broken by code point), so
        "apple" sorts before "Banana" as it would in a locale-aware sort.
        """
        observed = values.dropna().astype(str)
        levels = tuple(sorted(observed.unique().tolist(), key=lambda s: (s.casefold(), s)))
        if not levels:
            raise ValueError(f"Column '{name}' has no observed values.")
        return cls(name=name, levels=levels)


@dataclass(frozen=True, eq=False)
class CleanedDataset:
    """
    The cleaned modelling table plus everything learned while cleaning it.

    frame    : one row per complete respondent, columns MODEL_COLUMNS
    domains  : read-only mapping field -> CategoricalDomain
    n_raw    : rows read from the source
    n_dropped: rows excluded because a required field was missing
    warnings : human-readable notes for the UI/CLI
    """
    frame: pd.DataFrame
    domains: Mapping[str, CategoricalDomain]
    n_raw: int
    n_dropped: int
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def labels(self) -> pd.Series:
        return self.frame[OUTCOME]


def _rename_columns(raw: pd.DataFrame) -> pd.DataFrame:
    renames = {}
    missing = []
    for canonical, sources in SOURCE_COLUMNS.items():
        for source in (canonical,) + sources:
            if source in raw.columns:
                renames[source] = canonical
                break
        else:
            missing.append(sources[0])

    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    return raw[list(renames)].rename(columns=renames).copy()


def derive_low_happiness(happiness: pd.Series) -> pd.Series:
    """1 when happiness_index <= 5, else 0. Missing stays missing."""
    low = (happiness <= LOW_HAPPINESS_CUTOFF).astype("Int64")
    return low.mask(happiness.isna())


def clean_dataset(raw: pd.DataFrame) -> CleanedDataset:
    """
    Clean a raw survey dataframe.

    Raises
    ------
    ValueError
        If required columns are missing, or no complete rows remain.
    """
    df = _rename_columns(raw)

    # Domains come from the full columns so that levels only seen on
    # incomplete rows are still offered as choices.
    domains = {
        name: CategoricalDomain.from_values(name, df[name]) for name in CATEGORICAL_FIELDS
    }

    for c in NUMERIC_FIELDS:
        df[c] = pd.to_numeric(df[c], errors="coerce")

    for name, domain in domains.items():
        values = df[name].astype(object)
        as_text = values.where(values.isna(), values.astype(str))
        df[name] = pd.Categorical(as_text, categories=list(domain.levels))

    df[OUTCOME] = derive_low_happiness(df[HAPPINESS])
    df = df[MODEL_COLUMNS]

    n_raw = len(df)
    df = df.dropna().reset_index(drop=True)
    df[OUTCOME] = df[OUTCOME].astype(int)
    n_dropped = n_raw - len(df)

    warnings: List[str] = []
    if n_dropped:
        warnings.append(
            f"Dropped {n_dropped} of {n_raw} rows with missing or non-numeric values."
        )

    if df.empty:
        raise ValueError("No complete rows left after cleaning.")

    return CleanedDataset(
        frame=df,
        domains=MappingProxyType(domains),
        n_raw=n_raw,
        n_dropped=n_dropped,
        warnings=tuple(warnings),
    )


def load_dataset(path: str | Path | None = None) -> CleanedDataset:
    """
    Read and clean the survey CSV.

    Raises
    ------
    FileNotFoundError
        If the data file does not exist. There is nothing to model without it.
    ValueError
        If the file cannot be parsed or lacks required columns.
    """
    data_path = resolve_data_path(path)
    if not data_path.exists():
        raise FileNotFoundError(
            f"Data file not found: {data_path}. "
            f"Place the CSV at {DEFAULT_DATA_PATH}, set ${DATA_PATH_ENV}, "
            f"or generate one with: python -m wellbeing.make_synthetic_data"
        )

    try:
        raw = pd.read_csv(data_path)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ValueError(f"Could not parse data file {data_path}: {e}") from e

    return clean_dataset(raw)
