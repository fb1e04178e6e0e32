"""
Text-heavy document templates: report, resume, letter and contract.

Each is a straight run of drawing calls top to bottom; wrapped paragraphs use
``height_of_string`` to find where the next block starts.
"""

from ..layout import COLORS
from .common import BOLD, REGULAR, body, today

TEXT_WIDTH = 500


def report_template(surface, data):
    title = data.get("title") or "Report"
    author = data.get("author") or ""
    date = data.get("date") or today()
    sections = data.get("content") or []

    surface.font_size(24).font(BOLD).fill_color(COLORS["black"]).text(title, 50, 50)

    y = 90
    if author:
        surface.font_size(12).text(f"By: {author}", 50, y)
        y += 15
    surface.font_size(12).text(f"Date: {date}", 50, y)
    y += 30

    for section in sections:
        if not isinstance(section, dict):
            section = {"text": str(section)}
        if section.get("heading"):
            surface.font_size(16).font(BOLD).text(section["heading"], 50, y)
            y += 20
        if section.get("text"):
            body(surface).text(section["text"], 50, y, width=TEXT_WIDTH)
            y += surface.height_of_string(section["text"], TEXT_WIDTH) + 15
        if y > surface.bottom_limit:
            surface.add_page()
            y = surface.margins.top
    return surface


def resume_template(surface, data):
    name = data.get("name") or ""
    email = data.get("email") or ""
    phone = data.get("phone") or ""
    summary = data.get("summary") or ""
    experience = data.get("experience") or []
    education = data.get("education") or []

    surface.font_size(24).font(BOLD).fill_color(COLORS["black"]).text(name, 50, 50)
    contact = " | ".join(part for part in (email, phone) if part)
    surface.font_size(12).font(REGULAR).text(contact, 50, 80)

    y = 120
    if summary:
        surface.font_size(16).font(BOLD).text("Summary", 50, y)
        y += 20
        body(surface).text(summary, 50, y, width=TEXT_WIDTH)
        y += surface.height_of_string(summary, TEXT_WIDTH) + 20

    if experience:
        surface.font_size(16).font(BOLD).text("Experience", 50, y)
        y += 20
        for job in experience:
            surface.font_size(14).font(BOLD).text(job.get("title") or "", 50, y)
            surface.font_size(12).font(REGULAR).text(job.get("company") or "", 300, y)
            y += 15
            if job.get("description"):
                surface.text(job["description"], 50, y, width=TEXT_WIDTH)
                y += surface.height_of_string(job["description"], TEXT_WIDTH) + 15
            if y > surface.bottom_limit - 60:
                surface.add_page()
                y = surface.margins.top

    if education:
        y += 10
        surface.font_size(16).font(BOLD).text("Education", 50, y)
        y += 20
        for school in education:
            degree = school.get("degree") or ""
            institution = school.get("school") or ""
            year = str(school.get("year") or "")
            surface.font_size(12).font(BOLD).text(degree or institution, 50, y)
            detail = ", ".join(part for part in (institution if degree else "", year) if part)
            if detail:
                surface.font(REGULAR).text(detail, 300, y)
            y += 18
    return surface


def letter_template(surface, data):
    date = data.get("date") or today()
    recipient = data.get("recipient") or ""
    subject = data.get("subject") or ""
    text = data.get("body") or ""
    signature = data.get("signature") or ""

    y = 50
    surface.font_size(12).font(REGULAR).fill_color(COLORS["black"]).text(date, 400, y)
    y += 40

    if recipient:
        surface.text(recipient, 50, y)
        y += 40

    if subject:
        surface.font(BOLD).text(f"Subject: {subject}", 50, y)
        y += 30

    surface.font(REGULAR).text(text, 50, y, width=TEXT_WIDTH)
    y += surface.height_of_string(text, TEXT_WIDTH) + 30

    if signature:
        surface.text(f"Sincerely,\n\n{signature}", 50, y)
    return surface


def contract_template(surface, data):
    title = data.get("title") or "Contract"
    parties = data.get("parties") or []
    terms = data.get("terms") or []

    surface.font_size(20).font(BOLD).fill_color(COLORS["black"]).text(title, 50, 50, align="center", width=TEXT_WIDTH)

    y = 100
    surface.font_size(16).font(BOLD).text("Parties", 50, y)
    y += 20
    for party in parties:
        surface.font_size(12).font(REGULAR).text(str(party), 50, y)
        y += 15

    y += 20
    surface.font_size(16).font(BOLD).text("Terms and Conditions", 50, y)
    y += 20
    body(surface)
    for index, term in enumerate(terms, start=1):
        clause = f"{index}. {term}"
        surface.text(clause, 50, y, width=TEXT_WIDTH)
        y += surface.height_of_string(clause, TEXT_WIDTH) + 10
        if y > surface.bottom_limit - 80:
            surface.add_page()
            y = surface.margins.top

    y += 40
    surface.line(50, y, 200, y)
    surface.text("Date", 50, y + 10)
    surface.line(300, y, 450, y)
    surface.text("Signature", 300, y + 10)
    return surface
