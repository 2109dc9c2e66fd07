"""
wellbeing/make_synthetic_data.py

Creates a synthetic "Mental Health Social Media Balance" survey with the same
raw header layout as the public dataset, so the dashboard runs without it.

Outputs:
  data/Mental Health Social Media Balance Dataset.csv
"""

from __future__ import annotations

import argparse
from pathlib import Path
import numpy as np
import pandas as pd

from wellbeing.data import DEFAULT_DATA_PATH


GENDERS = ["Female", "Male", "Other"]
GENDER_WEIGHTS = [0.46, 0.46, 0.08]
PLATFORMS = ["Facebook", "Instagram", "LinkedIn", "TikTok", "X (Twitter)", "YouTube"]


def generate_survey_dataset(
    n_respondents: int = 500,
    random_state: int = 42,
    missing_rate: float = 0.0,
) -> pd.DataFrame:
    rng = np.random.default_rng(random_state)

    # --- Demographics
    age = rng.integers(16, 50, size=n_respondents)
    gender = rng.choice(GENDERS, p=GENDER_WEIGHTS, size=n_respondents)
    platform = rng.choice(PLATFORMS, size=n_respondents)

    # --- Habits
    screen_time = np.clip(rng.normal(5.5, 1.8, size=n_respondents), 1.0, 11.0)
    days_offline = np.clip(rng.poisson(3, size=n_respondents), 0, 9)
    exercise = np.clip(rng.poisson(2.5, size=n_respondents), 0, 7)

    # More screen time -> worse sleep, more stress
    sleep_quality = np.clip(
        np.round(9.5 - 0.6 * screen_time + rng.normal(0, 1.0, size=n_respondents)), 1, 10
    )
    stress_level = np.clip(
        np.round(3.0 + 0.7 * screen_time + rng.normal(0, 1.2, size=n_respondents)), 1, 10
    )

    # --- Happiness on a 1-10 scale
    happiness = (
        6.3
        + 0.45 * (sleep_quality - 6)
        - 0.40 * (stress_level - 6)
        - 0.15 * (screen_time - 5.5)
        + 0.12 * days_offline
        + 0.15 * exercise
        + rng.normal(0, 1.0, size=n_respondents)    # noise so it's not too clean
    )
    happiness = np.clip(np.round(happiness), 1, 10)

    df = pd.DataFrame(
        {
            "User_ID": [f"U{i + 1:03d}" for i in range(n_respondents)],
            "Age": age,
            "Gender": gender,
            "Daily_Screen_Time(hrs)": np.round(screen_time, 1),
            "Sleep_Quality(1-10)": sleep_quality,
            "Stress_Level(1-10)": stress_level,
            "Days_Without_Social_Media": days_offline,
            "Exercise_Frequency(week)": exercise,
            "Social_Media_Platform": platform,
            "Happiness_Index(1-10)": happiness,
        }
    )

    if missing_rate > 0:
        # Blank out random cells (never the ID) to exercise the cleaning step
        cols = [c for c in df.columns if c != "User_ID"]
        mask = rng.random((n_respondents, len(cols))) < missing_rate
        df[cols] = df[cols].mask(mask)

    return df


def main() -> None:
    parser = argparse.ArgumentParser(description="Write a synthetic survey CSV.")
    parser.add_argument("--out", type=str, default=str(DEFAULT_DATA_PATH))
    parser.add_argument("--n", type=int, default=500, help="Number of respondents.")
    parser.add_argument("--random-state", type=int, default=42)
    parser.add_argument("--missing-rate", type=float, default=0.0)
    args = parser.parse_args()

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    df = generate_survey_dataset(
        n_respondents=args.n, random_state=args.random_state, missing_rate=args.missing_rate
    )
    df.to_csv(out_path, index=False)

    # Print quick quality checks
    print(f"Wrote {len(df)} rows to {out_path}")
    print("Low happiness rate (<= 5):", (df["Happiness_Index(1-10)"] <= 5).mean().round(3))
    print("Columns:", list(df.columns))


if __name__ == "__main__":
    main()
