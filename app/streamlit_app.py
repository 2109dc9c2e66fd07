"""
app/streamlit_app.py

Purpose
-------
A Streamlit dashboard that:
  - loads the survey CSV and fits the logistic regression once per process
  - shows the model summary
  - shows the confusion matrix and metrics at a user-chosen threshold
  - plots happiness against a chosen predictor
  - predicts low happiness for a new respondent

All statistics live in the wellbeing package; this file only wires widgets.

Run
---
streamlit run app/streamlit_app.py
"""

import matplotlib.pyplot as plt
import streamlit as st

from wellbeing.data import CATEGORICAL_FIELDS, resolve_data_path
from wellbeing.data_dictionary import (
    DATA_DICTIONARY,
    DEFAULT_VIZ_VARIABLE,
    DISPLAY_LABELS,
    VIZ_VARIABLES,
)
from wellbeing.evaluation import (
    DEFAULT_THRESHOLD,
    THRESHOLD_MAX,
    THRESHOLD_MIN,
    THRESHOLD_STEP,
    evaluate,
    format_metrics,
)
from wellbeing.inference import format_prediction, predict_one
from wellbeing.plots import plot_happiness_vs
from wellbeing.train import load_and_fit


SHOW_VISUALIZATION = True

# Default new-case inputs
NEW_CASE_DEFAULTS = {
    "age": 30,
    "daily_screen_time_hrs": 5.0,
    "sleep_quality": 7,
    "stress_level": 5,
    "days_without_social_media": 2,
    "exercise_frequency": 3,
}


# ---------------------------------------------------------------------
# Streamlit page configuration
# ---------------------------------------------------------------------
st.set_page_config(
    page_title="Mental Health & Social Media – Logistic Regression",
    layout="wide",
)
st.title("Mental Health & Social Media – Logistic Regression")


# ---------------------------------------------------------------------
# Load + fit once per process
# ---------------------------------------------------------------------
# Streamlit reruns the script top-to-bottom on every interaction; the
# dataset and fitted bundle are built once and shared read-only.

@st.cache_resource
def get_state(path: str):
    """Load the data and fit the model once per process (unless code changes)."""
    return load_and_fit(path)


data_path = resolve_data_path()
try:
    dataset, bundle = get_state(str(data_path))
except Exception as e:
    st.error(f"Could not load data / fit model from `{data_path}`.")
    st.code(str(e))
    st.stop()

for w in dataset.warnings:
    st.warning(w)


# ---------------------------------------------------------------------
# Sidebar controls
# ---------------------------------------------------------------------
st.sidebar.header("Controls")

threshold = st.sidebar.slider(
    "Classification threshold",
    min_value=THRESHOLD_MIN,
    max_value=THRESHOLD_MAX,
    value=DEFAULT_THRESHOLD,
    step=THRESHOLD_STEP,
    help="Respondents with predicted probability >= threshold are classed as low happiness.",
)

if SHOW_VISUALIZATION:
    st.sidebar.subheader("Visualization Controls")
    viz_var = st.sidebar.selectbox(
        "Compare Happiness with:",
        options=VIZ_VARIABLES,
        index=VIZ_VARIABLES.index(DEFAULT_VIZ_VARIABLE),
        format_func=DISPLAY_LABELS.get,
    )

st.sidebar.divider()
st.sidebar.subheader("Single Prediction Input")

new_case = {
    "age": st.sidebar.number_input(
        DISPLAY_LABELS["age"], min_value=10, max_value=80, value=NEW_CASE_DEFAULTS["age"]
    ),
    "gender": st.sidebar.selectbox(
        DISPLAY_LABELS["gender"], options=list(bundle.domains["gender"].levels)
    ),
    "daily_screen_time_hrs": st.sidebar.number_input(
        DISPLAY_LABELS["daily_screen_time_hrs"],
        min_value=0.0,
        max_value=24.0,
        value=NEW_CASE_DEFAULTS["daily_screen_time_hrs"],
    ),
    "sleep_quality": st.sidebar.slider(
        DISPLAY_LABELS["sleep_quality"], 1, 10, NEW_CASE_DEFAULTS["sleep_quality"]
    ),
    "stress_level": st.sidebar.slider(
        DISPLAY_LABELS["stress_level"], 1, 10, NEW_CASE_DEFAULTS["stress_level"]
    ),
    "days_without_social_media": st.sidebar.number_input(
        DISPLAY_LABELS["days_without_social_media"],
        min_value=0,
        max_value=30,
        value=NEW_CASE_DEFAULTS["days_without_social_media"],
    ),
    "exercise_frequency": st.sidebar.number_input(
        DISPLAY_LABELS["exercise_frequency"],
        min_value=0,
        max_value=14,
        value=NEW_CASE_DEFAULTS["exercise_frequency"],
    ),
    "social_media_platform": st.sidebar.selectbox(
        DISPLAY_LABELS["social_media_platform"],
        options=list(bundle.domains["social_media_platform"].levels),
    ),
}


# ---------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------
tab_names = ["About", "Model Summary", "Performance"]
if SHOW_VISUALIZATION:
    tab_names.append("Visualization")
tab_names.append("Predict New Case")
tabs = dict(zip(tab_names, st.tabs(tab_names)))

with tabs["About"]:
    st.subheader("Project Description")
    st.write(
        "This app explores how social media habits, lifestyle behaviours, and "
        "demographics relate to mental well-being using the "
        "**Mental Health Social Media Balance Dataset**."
    )
    st.subheader("Target Variable: Low Happiness")
    st.markdown(
        "- `low_happiness = 1` when `happiness_index <= 5` (lower well-being)\n"
        "- `low_happiness = 0` when `happiness_index > 5` (moderate or higher well-being)"
    )
    st.subheader("Model: Logistic Regression")
    st.code("P(Y = 1 | X) = 1 / (1 + exp(-(b0 + b1*X1 + ... + bk*Xk)))")
    st.write(
        "Each coefficient shows how a predictor shifts the log-odds of low "
        "happiness, holding the other predictors constant. Categorical "
        "predictors are compared against their reference level: "
        + ", ".join(
            f"{DISPLAY_LABELS[name]} = **{bundle.domains[name].reference}**"
            for name in CATEGORICAL_FIELDS
        )
        + "."
    )
    st.caption(
        f"Fitted on {len(dataset)} complete rows "
        f"({dataset.n_dropped} of {dataset.n_raw} dropped for missing values)."
    )
    st.subheader("Data Dictionary")
    st.table({"column": list(DATA_DICTIONARY), "description": list(DATA_DICTIONARY.values())})

with tabs["Model Summary"]:
    st.text(bundle.summary)

with tabs["Performance"]:
    metrics = evaluate(bundle, threshold)
    st.subheader("Confusion Matrix")
    st.table(metrics.confusion_matrix)
    st.subheader("Performance Metrics")
    st.text(format_metrics(metrics))

if SHOW_VISUALIZATION:
    with tabs["Visualization"]:
        st.subheader("Happiness vs Selected Variable")
        fig = plot_happiness_vs(dataset.frame, viz_var)
        st.pyplot(fig)
        plt.close(fig)
        st.caption(
            "Points are coloured by the binary outcome low_happiness "
            "(1 = low happiness, 0 = moderate/high happiness)."
        )

with tabs["Predict New Case"]:
    st.subheader("Predicted Probability of Low Happiness (Happiness <= 5)")
    try:
        prediction = predict_one(bundle, new_case, threshold)
    except ValueError as e:
        st.error("New case failed validation.")
        st.code(str(e))
    else:
        st.text(format_prediction(prediction))
