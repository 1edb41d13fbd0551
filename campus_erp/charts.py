"""
campus_erp/charts.py

matplotlib figure builders for the dashboard. Each function returns a
Figure; the Streamlit app passes it to st.pyplot. Nothing is shown or saved
here.
"""

from __future__ import annotations

from typing import Mapping, Sequence

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

PRIMARY = (67 / 255, 97 / 255, 238 / 255)
PALETTE = [
    (67 / 255, 97 / 255, 238 / 255, 0.7),
    (76 / 255, 201 / 255, 240 / 255, 0.7),
    (247 / 255, 37 / 255, 133 / 255, 0.7),
    (72 / 255, 149 / 255, 239 / 255, 0.7),
    (230 / 255, 57 / 255, 70 / 255, 0.7),
]


def admissions_bar_chart(monthly: Mapping[str, int]) -> Figure:
    """Bar chart of new admissions per month."""
    fig, ax = plt.subplots()
    ax.bar(
        list(monthly.keys()),
        list(monthly.values()),
        color=(*PRIMARY, 0.5),
        edgecolor=PRIMARY,
        linewidth=1,
        label="New Admissions",
    )
    ax.set_title("New Admissions")
    ax.set_ylim(bottom=0)
    ax.legend()
    return fig


def fee_doughnut_chart(breakdown: Mapping[str, float]) -> Figure:
    """Doughnut of fee collection share per fee head, legend below."""
    fig, ax = plt.subplots()
    colors = [PALETTE[i % len(PALETTE)] for i in range(len(breakdown))]
    wedges, _ = ax.pie(
        list(breakdown.values()),
        colors=colors,
        startangle=90,
        counterclock=False,
        wedgeprops={"width": 0.4, "linewidth": 1, "edgecolor": "white"},
    )
    ax.legend(
        wedges,
        list(breakdown.keys()),
        loc="upper center",
        bbox_to_anchor=(0.5, 0.0),
        ncol=3,
        frameon=False,
    )
    ax.set_title("Fee Collection")
    ax.set_aspect("equal")
    return fig


def occupancy_bar_chart(occupancy_by_hostel: Mapping[str, int]) -> Figure:
    fig, ax = plt.subplots()
    labels = sorted(occupancy_by_hostel)
    ax.bar([f"Hostel {h}" for h in labels], [occupancy_by_hostel[h] for h in labels], color=PRIMARY)
    ax.set_title("Hostel Occupancy")
    ax.set_ylabel("students")
    ax.set_ylim(bottom=0)
    return fig


def sparkline(values: Sequence[float]) -> Figure:
    """
    Tiny trend line for a metric card.

    Values are scaled to the series maximum (at least 1) so that an all-zero
    series still draws a flat line.
    """
    peak = max(max(values, default=0), 1)
    fig, ax = plt.subplots(figsize=(1.6, 0.45))
    ax.plot(range(len(values)), [v / peak for v in values], color=PRIMARY, linewidth=2, solid_capstyle="round")
    ax.set_ylim(0, 1.05)
    ax.axis("off")
    fig.subplots_adjust(left=0, right=1, top=1, bottom=0)
    return fig
