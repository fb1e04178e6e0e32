"""
Retirement analysis templates.

``retirement_template`` is the two-page client report with a locally drawn
income bar chart. ``retirement_summary_template`` is the single-page layout
used by the PDF service; it embeds chart images fetched beforehand and
expects them under ``data["charts"]`` as PNG bytes (or None when a chart
could not be fetched).
"""

from __future__ import annotations

from ..layout import COLORS
from ..models import Diagnostic
from ..projections import (
    Projections,
    RetirementInputs,
    calculate_projections,
    generate_recommendations,
)
from .common import BOLD, REGULAR, body, format_date, section_heading

DISCLAIMER = (
    "This analysis is for educational purposes. "
    "Consult with a financial advisor for personalized advice."
)

CHART_WIDTH = 400
CHART_HEIGHT = 150


def _inputs_and_projections(data):
    inputs = data.get("inputs")
    if not isinstance(inputs, RetirementInputs):
        inputs = RetirementInputs.from_form(data)
    projections = data.get("projections")
    if not isinstance(projections, Projections):
        projections = calculate_projections(inputs)
    return inputs, projections


def render_income_chart(surface, x, y, current_income, target_income, projected_income):
    """Three bars: current income, retirement target, projected income."""
    max_income = max(current_income, target_income, projected_income) or 1
    bars = [
        ("Current Income", current_income, COLORS["bar_grey"]),
        ("Retirement Target", target_income, COLORS["amber"]),
        ("Projected Income", projected_income, COLORS["good"] if projected_income >= target_income else COLORS["bad"]),
    ]
    bar_width = CHART_WIDTH / len(bars) - 20
    bar_x = x + 10

    section_heading(surface, "Annual Income Comparison", x, y - 20, size=12)
    for label, value, color in bars:
        bar_height = (value / max_income) * CHART_HEIGHT
        bar_y = y + CHART_HEIGHT - bar_height
        surface.fill_color(color).rect(bar_x, bar_y, bar_width, bar_height)
        surface.font(REGULAR).font_size(10).fill_color(COLORS["black"])
        surface.text(f"${value / 1000:,.0f}k", bar_x, bar_y - 15, width=bar_width, align="center")
        surface.font_size(9).text(label, bar_x, y + CHART_HEIGHT + 10, width=bar_width, align="center")
        bar_x += bar_width + 20


def retirement_template(surface, data):
    inputs, projections = _inputs_and_projections(data)

    surface.font_size(28).font(BOLD).fill_color(COLORS["navy"]).text("Retirement Analysis Report", 50, 50)
    surface.font_size(14).font(REGULAR).fill_color(COLORS["muted"])
    surface.text(f"Prepared for {inputs.name}", 50, 85)
    surface.text(f"Generated on {format_date(inputs.timestamp)}", 50, 100)

    y = 140
    section_heading(surface, "Your Current Situation", 50, y)
    y += 25
    body(surface)
    situation = [
        f"Current Age: {inputs.age} years old",
        f"Annual Income: ${inputs.income:,}",
        f"Current Savings: ${inputs.savings:,}",
        f"Retirement Goal: Age {inputs.retire_age} ({projections.years_to_retire} years from now)",
        f"Lifestyle Target: {inputs.lifestyle.capitalize()}",
    ]
    for line in situation:
        surface.text(line, 70, y)
        y += 18

    y += 20
    section_heading(surface, "Retirement Projections", 50, y)
    y += 30
    render_income_chart(
        surface,
        50,
        y,
        current_income=inputs.income,
        target_income=projections.target_income,
        projected_income=projections.projected_income,
    )
    y += 200

    section_heading(surface, "Key Numbers for Your Retirement", 50, y, size=14)
    y += 25
    body(surface, size=11)
    key_numbers = [
        f"Monthly Income Needed: ${projections.monthly_target_income:,.0f}",
        f"Projected Monthly Income: ${projections.monthly_projected_income:,.0f}",
        f"Recommended Annual Contribution: ${projections.recommended_contribution:,.0f}",
        f"Total Projected Savings at {inputs.retire_age}: ${projections.total_at_retirement:,.0f}",
    ]
    for line in key_numbers:
        surface.text(line, 70, y)
        y += 16

    if inputs.summary:
        y += 25
        section_heading(surface, "Your Personalized Analysis", 50, y)
        y += 25
        body(surface, size=11).text(inputs.summary, 50, y, width=500, align="left")

    surface.add_page()
    y = 50
    section_heading(surface, "Recommendations & Next Steps", 50, y, size=20)
    y += 40
    for index, rec in enumerate(generate_recommendations(inputs, projections), start=1):
        section_heading(surface, f"{index}. {rec['title']}", 50, y, size=14, color=COLORS["accent"])
        y += 20
        body(surface, size=11).text(rec["description"], 70, y, width=450, align="left")
        y += surface.height_of_string(rec["description"], 450) + 20

    surface.font_size(10).font(REGULAR).fill_color(COLORS["muted"]).text(
        DISCLAIMER,
        50,
        surface.page_height - 100,
        align="center",
        width=surface.page_width - 100,
    )
    return surface


# -------------------------------------------------------------------
# SERVICE LAYOUT
# -------------------------------------------------------------------

SERVICE_RECOMMENDATIONS = [
    "Maintain a diversified portfolio across multiple account types",
    "Consider maximizing contributions to tax-advantaged accounts",
    "Review and adjust your retirement plan annually",
    "Plan for healthcare costs in retirement",
    "Consider working with a financial advisor for personalized guidance",
]

CHART_SECTIONS = [
    ("lifecycle", "Portfolio Growth Over Time", 220),
    ("comparison", "Retirement Readiness Analysis", 220),
    ("allocation", "Three-Account Retirement Strategy", 250),
]

BUTTON_COLORS = [COLORS["blue"], COLORS["green"], COLORS["purple"]]


def _status_badge(surface, projections, x, y):
    on_track = projections.on_track
    color = COLORS["green"] if on_track else COLORS["red"]
    background = COLORS["on_track_bg"] if on_track else COLORS["attention_bg"]
    label = "ON TRACK" if on_track else "NEEDS ATTENTION"
    surface.fill_color(background).rounded_rect(x, y, 170, 25, 5)
    surface.stroke_color(color).line_width(2).rounded_rect(x, y, 170, 25, 5, fill=False, stroke=True)
    surface.line_width(1)
    surface.font_size(12).font(BOLD).fill_color(color).text(f"STATUS: {label}", x + 10, y + 7)


def _ensure_room(surface, y, needed):
    if y + needed > surface.bottom_limit - 90:
        surface.add_page()
        return surface.margins.top
    return y


def retirement_summary_template(surface, data):
    """
    Service layout: branding header, status badge, client table, metric boxes,
    the fetched chart images, advice bullets and call-to-action buttons.
    """
    inputs, projections = _inputs_and_projections(data)
    charts = data.get("charts") or {}
    branding = data.get("branding") or {}
    company = branding.get("company_name") or "Financial Planning Associates"
    links = branding.get("links") or []
    diagnostics = []

    left = surface.margins.left
    page_width = surface.content_width

    surface.font_size(26).font(BOLD).fill_color(COLORS["brand"]).text(company.upper(), left, 40, align="center", width=page_width)
    surface.font_size(14).font(REGULAR).fill_color(COLORS["slate"]).text(
        "Professional Retirement Analysis Report", left, 75, align="center", width=page_width
    )
    surface.stroke_color(COLORS["rule"]).line_width(2).line(left, 95, left + page_width, 95)
    surface.line_width(1)

    surface.font_size(20).font(REGULAR).fill_color(COLORS["ink"]).text(f"Retirement Analysis for {inputs.name}", left, 115)
    _status_badge(surface, projections, left, 145)

    y = 190
    section_heading(surface, "Client Summary", left, y, color=COLORS["brand"])
    y += 25
    rows = [
        ("Current Age:", str(inputs.age)),
        ("Target Retirement Age:", str(inputs.retire_age)),
        ("Current Annual Income:", f"${inputs.income:,}"),
        ("Current Savings:", f"${inputs.savings:,}"),
        ("Years to Retirement:", str(projections.years_to_retire)),
        ("Target Retirement Income:", f"${round(projections.target_income):,}"),
    ]
    for index, (label, value) in enumerate(rows):
        row_y = y + index * 20
        if index % 2 == 0:
            surface.fill_color(COLORS["zebra"]).rect(left, row_y - 2, page_width, 18)
        body(surface, color=COLORS["ink"])
        surface.text(label, left + 10, row_y, width=200)
        surface.text(value, left + 260, row_y, width=200)
    y += len(rows) * 20 + 30

    section_heading(surface, "Retirement Projections", left, y, color=COLORS["brand"])
    y += 30
    metrics = [
        ("Portfolio at Retirement", f"${round(projections.total_at_retirement):,}", COLORS["green"]),
        ("Annual Retirement Income", f"${round(projections.projected_income):,}", COLORS["blue"]),
    ]
    box_width = page_width / 2 - 20
    for index, (label, value, color) in enumerate(metrics):
        box_x = left + index * (page_width / 2 + 10)
        surface.fill_color(COLORS["zebra"]).rounded_rect(box_x, y, box_width, 50, 8)
        surface.stroke_color(color).line_width(2).rounded_rect(box_x, y, box_width, 50, 8, fill=False, stroke=True)
        surface.line_width(1)
        surface.font_size(10).font(REGULAR).fill_color(COLORS["slate"]).text(label, box_x + 10, y + 10)
        surface.font_size(16).font(BOLD).fill_color(color).text(value, box_x + 10, y + 25)
    y += 70

    for name, title, advance in CHART_SECTIONS:
        image = charts.get(name)
        if not image:
            continue
        y = _ensure_room(surface, y, advance)
        section_heading(surface, title, left, y, size=14, color=COLORS["brand"])
        y += 20
        surface.y = y
        try:
            surface.image(image, x=left, width=page_width * 0.95)
        except Exception as exc:  # unreadable image bytes
            diagnostics.append(Diagnostic("chart_unreadable", f"{name} chart could not be drawn: {exc}"))
            y += 20
            continue
        y = surface.y + 20

    y = _ensure_room(surface, y, 25 + 18 * len(SERVICE_RECOMMENDATIONS))
    section_heading(surface, "Professional Recommendations", left, y, size=14, color=COLORS["brand"])
    y += 25
    body(surface, size=11, color=COLORS["ink"])
    surface.draw_list(SERVICE_RECOMMENDATIONS, x=left + 10, y=y, width=page_width - 40)
    y = surface.y + 20

    if links:
        y = _ensure_room(surface, y, 60)
        section_heading(surface, "Next Steps", left, y, color=COLORS["brand"])
        y += 25
        button_width, button_height, spacing = 160, 35, 20
        for index, link in enumerate(links[:3]):
            button_x = left + index * (button_width + spacing)
            surface.fill_color(BUTTON_COLORS[index]).rounded_rect(button_x, y, button_width, button_height, 8)
            surface.font_size(12).font(BOLD).fill_color(COLORS["white"]).text(
                link.get("label", ""), button_x, y + 12, width=button_width, align="center"
            )
            if link.get("url"):
                surface.link(button_x, y, button_width, button_height, link["url"])

    surface.font_size(10).font(REGULAR).fill_color(COLORS["footer"]).text(
        f"{company} | Professional Financial Planning Services",
        left,
        surface.page_height - 80,
        align="center",
        width=page_width,
    )
    surface.font_size(9).fill_color(COLORS["faint"]).text(
        "This analysis is for planning purposes only. Past performance does not guarantee future results. "
        "Consult a financial advisor for personalized advice.",
        left,
        surface.page_height - 60,
        align="center",
        width=page_width,
    )
    return diagnostics
