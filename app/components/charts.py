"""Plotly chart helpers for the Streamlit site."""

from __future__ import annotations

from typing import List, Sequence

import plotly.graph_objects as go


def _extract_factors(factors: Sequence[dict]) -> tuple[list[str], list[int], list[str]]:
    scored = [f for f in factors if f.get("points")]
    names = [f.get("name", "") for f in scored]
    points = [int(f.get("points", 0)) for f in scored]
    hover = [
        f"value {f.get('value', 0):g}" + (f" · cap {f['cap']}" if f.get("cap") is not None else "")
        for f in scored
    ]
    return names, points, hover


def render_score_chart(factors: List[dict], total: int) -> go.Figure:
    """Horizontal bar of the points each amenity factor contributed."""

    names, points, hover = _extract_factors(factors)
    fig = go.Figure(
        go.Bar(
            x=points,
            y=names,
            orientation="h",
            marker_color="#7c5a3a",
            hovertext=hover,
        )
    )
    fig.update_layout(
        title=f"Equestrian score: {total}",
        margin=dict(l=10, r=10, t=40, b=30),
        height=max(200, 40 * len(names) + 80),
        xaxis_title="Points",
        yaxis=dict(autorange="reversed"),
        template="plotly_white",
    )
    return fig
