"""Plotly chart helpers."""
from __future__ import annotations

from typing import Dict

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from ..sim.states import SeverityMix, StaffUtilization

PATIENT_SERIES: Dict[str, str] = {
    "occupied_beds": "Occupied Beds",
    "waiting_patients": "Waiting Patients",
    "treated_patients_cumulative": "Treated Patients",
}

SERIES_COLOURS: Dict[str, str] = {
    "occupied_beds": "#8884d8",
    "waiting_patients": "#82ca9d",
    "treated_patients_cumulative": "#ffc658",
}


def time_series_chart(
    df: pd.DataFrame,
    metrics: Dict[str, str] | None = None,
    title: str = "Time Series Data",
) -> go.Figure:
    metrics = metrics or PATIENT_SERIES
    fig = go.Figure()
    for metric, label in metrics.items():
        fig.add_trace(
            go.Scatter(
                x=df["hour"],
                y=df[metric],
                mode="lines",
                name=label,
                line=dict(color=SERIES_COLOURS.get(metric)),
            )
        )
    fig.update_layout(
        title=title,
        xaxis_title="Hours",
        yaxis_title="Patients",
        margin=dict(l=20, r=20, t=50, b=20),
    )
    fig.update_traces(hovertemplate="Hour %{x}<br>%{y}")
    return fig


def severity_bar(mix: SeverityMix) -> go.Figure:
    df = pd.DataFrame(
        {
            "severity": ["Mild", "Moderate", "Severe"],
            "patients": [mix.mild, mix.moderate, mix.severe],
        }
    )
    fig = px.bar(
        df,
        x="severity",
        y="patients",
        color="severity",
        color_discrete_sequence=["#22c55e", "#eab308", "#ef4444"],
        title="Patient severity mix",
    )
    fig.update_layout(showlegend=False, margin=dict(l=40, r=40, t=40, b=40))
    return fig


def utilization_gauge(utilization: StaffUtilization) -> go.Figure:
    fig = go.Figure(
        go.Bar(
            x=[utilization.doctors * 100, utilization.nurses * 100],
            y=["Doctors", "Nurses"],
            orientation="h",
            marker_color=["#3b82f6", "#a855f7"],
            text=[f"{utilization.doctors:.0%}", f"{utilization.nurses:.0%}"],
            textposition="auto",
        )
    )
    fig.update_layout(
        title="Staff utilisation",
        xaxis=dict(range=[0, 100], title="%"),
        margin=dict(l=40, r=40, t=40, b=40),
        height=220,
    )
    return fig


__all__ = ["PATIENT_SERIES", "time_series_chart", "severity_bar", "utilization_gauge"]
