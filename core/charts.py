from __future__ import annotations

from typing import Any, Dict, List

import altair as alt

alt.data_transformers.disable_max_rows()

STATUS_COLORS = ["#dc2626", "#16a34a", "#f59e0b"]
AGE_BAND_COLORS = {"fresh": "#16a34a", "aging": "#f59e0b", "stale": "#dc2626"}


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def status_scale(statuses: List[str]) -> alt.Scale:
    return alt.Scale(domain=list(statuses), range=STATUS_COLORS[: len(statuses)])


def age_band_scale() -> alt.Scale:
    return alt.Scale(domain=list(AGE_BAND_COLORS), range=list(AGE_BAND_COLORS.values()))
