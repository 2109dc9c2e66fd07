"""
wellbeing/data_dictionary.py

Column descriptions and display labels used by the Streamlit UI.
"""

DATA_DICTIONARY = {
    "age": "Respondent age in years.",
    "gender": "Self-reported gender (categorical).",
    "daily_screen_time_hrs": "Average daily screen time in hours.",
    "sleep_quality": "Self-rated sleep quality (1–10).",
    "stress_level": "Self-rated stress level (1–10).",
    "days_without_social_media": "Days in the recent period spent without social media.",
    "exercise_frequency": "Exercise sessions per week.",
    "social_media_platform": "Platform the respondent uses most (categorical).",
    "happiness_index": "Self-reported happiness index (1–10).",
    "low_happiness": "Target variable (1 = happiness_index <= 5, 0 = otherwise).",
}

DISPLAY_LABELS = {
    "age": "Age",
    "gender": "Gender",
    "daily_screen_time_hrs": "Daily screen time (hrs)",
    "sleep_quality": "Sleep quality (1–10)",
    "stress_level": "Stress level (1–10)",
    "days_without_social_media": "Days without social media",
    "exercise_frequency": "Exercise freq (per week)",
    "social_media_platform": "Social media platform",
    "happiness_index": "Happiness Index (1–10)",
    "low_happiness": "Low_Happiness",
}

# Numeric predictors offered on the visualization x-axis
VIZ_VARIABLES = [
    "age",
    "daily_screen_time_hrs",
    "sleep_quality",
    "stress_level",
    "days_without_social_media",
    "exercise_frequency",
]
DEFAULT_VIZ_VARIABLE = "daily_screen_time_hrs"
