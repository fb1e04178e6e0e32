"""
Chart specs and the remote chart-image client.

Chart.js-style specs are built from the retirement projections and sent to a
chart rendering endpoint that answers with PNG bytes. Fetches are sequential
with a fixed timeout; a failed fetch is logged and that chart is skipped.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

import requests

from .logging_utils import get_logger
from .models import Diagnostic
from .projections import Projections, RetirementInputs

logger = get_logger(__name__)

DEFAULT_CHART_URL = "https://quickchart.io/chart"
DEFAULT_TIMEOUT = 30.0

PHASE_COLORS = {
    "accumulation": "rgba(52, 168, 83, 0.1)",
    "planning": "rgba(255, 193, 7, 0.1)",
    "distribution": "rgba(66, 133, 244, 0.1)",
    "wealth_transfer": "rgba(156, 39, 176, 0.1)",
}

# Pre-tax / Roth / brokerage split (percent) for each lifecycle stage.
DEFAULT_ALLOCATION = {
    "Accumulation": (50, 30, 20),
    "Retirement Planning": (60, 25, 15),
    "Distribution": (45, 35, 20),
    "Wealth Transfer": (30, 50, 20),
}

ACCOUNT_COLORS = {
    "Pre-Tax": "#7EF1F6",
    "Roth": "#4ECDC4",
    "Brokerage": "#2C5282",
}


class ChartFetchError(RuntimeError):
    """The chart service could not produce an image."""


@dataclass
class ChartPolicy:
    """Where and how charts are rendered, plus the allocation assumptions."""

    base_url: str = DEFAULT_CHART_URL
    method: str = "GET"
    timeout: float = DEFAULT_TIMEOUT
    sizes: Dict[str, Tuple[int, int]] = field(default_factory=lambda: {
        "lifecycle": (600, 300),
        "comparison": (600, 300),
        "allocation": (700, 400),
    })
    allocation: Dict[str, Tuple[int, int, int]] = field(default_factory=lambda: dict(DEFAULT_ALLOCATION))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ChartPolicy":
        data = data or {}
        policy = cls()
        if data.get("base_url"):
            policy.base_url = str(data["base_url"])
        if data.get("method"):
            policy.method = str(data["method"]).upper()
        if data.get("timeout"):
            policy.timeout = float(data["timeout"])
        for name, size in (data.get("sizes") or {}).items():
            policy.sizes[name] = (int(size[0]), int(size[1]))
        if data.get("allocation"):
            policy.allocation = {
                phase: tuple(int(p) for p in split) for phase, split in data["allocation"].items()
            }
        return policy

    def size_for(self, name: str) -> Tuple[int, int]:
        return self.sizes.get(name, (600, 300))


@dataclass
class ChartSpec:
    name: str
    title: str
    config: Dict[str, Any]
    width: int = 600
    height: int = 300


# -------------------------------------------------------------------
# SPEC BUILDERS
# -------------------------------------------------------------------


def lifecycle_chart(projections: Projections) -> Dict[str, Any]:
    points = projections.lifecycle
    return {
        "type": "line",
        "data": {
            "labels": [p.age for p in points],
            "datasets": [{
                "label": "Portfolio Value",
                "data": [round(p.total, 2) for p in points],
                "borderColor": "rgb(66, 133, 244)",
                "backgroundColor": "rgba(66, 133, 244, 0.1)",
                "pointBackgroundColor": [PHASE_COLORS.get(p.phase, "rgba(128, 128, 128, 0.1)") for p in points],
                "borderWidth": 3,
                "fill": True,
                "tension": 0.4,
            }],
        },
        "options": {
            "plugins": {
                "title": {"display": True, "text": "Retirement Lifecycle Portfolio"},
                "legend": {"display": False},
            },
            "scales": {
                "x": {"title": {"display": True, "text": "Age"}},
                "y": {"title": {"display": True, "text": "Portfolio Value ($)"}},
            },
        },
    }


def comparison_chart(inputs: RetirementInputs, projections: Projections) -> Dict[str, Any]:
    return {
        "type": "bar",
        "data": {
            "labels": ["Current Savings", "Target at Retirement", "Projected Income"],
            "datasets": [{
                "data": [
                    inputs.savings,
                    round(projections.total_at_retirement, 2),
                    round(projections.projected_income * 25, 2),
                ],
                "backgroundColor": [
                    "rgba(255, 193, 7, 0.8)",
                    "rgba(52, 168, 83, 0.8)",
                    "rgba(66, 133, 244, 0.8)",
                ],
                "borderWidth": 2,
            }],
        },
        "options": {
            "plugins": {
                "title": {"display": True, "text": "Retirement Readiness Comparison"},
                "legend": {"display": False},
            },
            "scales": {"y": {"title": {"display": True, "text": "Value ($)"}}},
        },
    }


def allocation_chart(allocation: Mapping[str, Tuple[int, int, int]]) -> Dict[str, Any]:
    """Stacked area of the three account types across lifecycle stages."""
    phases = list(allocation.keys())
    pre_tax, roth, brokerage = [], [], []
    for phase in phases:
        p, r, b = allocation[phase]
        pre_tax.append(p)
        roth.append(p + r)
        brokerage.append(p + r + b)

    def _dataset(label, values, fill):
        color = ACCOUNT_COLORS[label]
        return {
            "label": label,
            "data": values,
            "backgroundColor": color,
            "borderColor": color,
            "borderWidth": 2,
            "fill": fill,
            "tension": 0.4,
            "pointRadius": 0,
        }

    return {
        "type": "line",
        "data": {
            "labels": phases,
            "datasets": [
                _dataset("Pre-Tax", pre_tax, "origin"),
                _dataset("Roth", roth, "-1"),
                _dataset("Brokerage", brokerage, "-1"),
            ],
        },
        "options": {
            "plugins": {
                "title": {"display": True, "text": "Retirement Graph", "color": "#001f54"},
                "legend": {"display": True, "position": "top"},
            },
            "scales": {
                "x": {"title": {"display": True, "text": "Financial Lifetime Stages"}, "grid": {"display": False}},
                "y": {"min": 0, "max": 100, "title": {"display": True, "text": "Relative Dollar Value"}},
            },
        },
    }


def build_chart_specs(
    inputs: RetirementInputs,
    projections: Projections,
    policy: ChartPolicy | None = None,
) -> List[ChartSpec]:
    policy = policy or ChartPolicy()
    specs = [
        ChartSpec("lifecycle", "Portfolio Growth Over Time", lifecycle_chart(projections)),
        ChartSpec("comparison", "Retirement Readiness Analysis", comparison_chart(inputs, projections)),
        ChartSpec("allocation", "Three-Account Retirement Strategy", allocation_chart(policy.allocation)),
    ]
    for spec in specs:
        spec.width, spec.height = policy.size_for(spec.name)
    return specs


# -------------------------------------------------------------------
# CLIENT
# -------------------------------------------------------------------


class ChartClient:
    def __init__(self, policy: ChartPolicy | None = None, session: Optional[requests.Session] = None):
        self.policy = policy or ChartPolicy()
        self.session = session or requests.Session()

    def chart_url(self, spec: ChartSpec) -> str:
        query = urlencode({
            "c": json.dumps(spec.config, separators=(",", ":")),
            "w": spec.width,
            "h": spec.height,
            "f": "png",
        })
        return f"{self.policy.base_url}?{query}"

    def render(self, spec: ChartSpec) -> bytes:
        """Return PNG bytes for ``spec``; raises ChartFetchError on any failure."""
        try:
            if self.policy.method == "POST":
                resp = self.session.post(
                    self.policy.base_url,
                    json={"chart": spec.config, "width": spec.width, "height": spec.height, "format": "png"},
                    timeout=self.policy.timeout,
                )
            else:
                resp = self.session.get(self.chart_url(spec), timeout=self.policy.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise ChartFetchError(f"{spec.name} chart request failed: {exc}") from exc

        if not resp.content:
            raise ChartFetchError(f"{spec.name} chart response was empty")
        return resp.content

    def fetch_all(self, specs: List[ChartSpec]) -> Tuple[Dict[str, Optional[bytes]], List[Diagnostic]]:
        """Render each spec in turn; failures leave ``None`` and a diagnostic."""
        images: Dict[str, Optional[bytes]] = {}
        diagnostics: List[Diagnostic] = []
        for spec in specs:
            try:
                images[spec.name] = self.render(spec)
                logger.info("Fetched %s chart (%d bytes)", spec.name, len(images[spec.name]))
            except ChartFetchError as exc:
                logger.warning("Skipping chart: %s", exc)
                images[spec.name] = None
                diagnostics.append(Diagnostic("chart_unavailable", str(exc)))
        return images, diagnostics


__all__ = [
    "ChartClient",
    "ChartFetchError",
    "ChartPolicy",
    "ChartSpec",
    "build_chart_specs",
    "lifecycle_chart",
    "comparison_chart",
    "allocation_chart",
]
