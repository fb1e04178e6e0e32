"""
Invoice template: company block, bill-to, itemized lines and totals.
"""

from ..layout import COLORS
from .common import BOLD, REGULAR, money

COLUMNS = [
    ("Description", 250, "left"),
    ("Quantity", 80, "center"),
    ("Rate", 80, "right"),
    ("Amount", 80, "right"),
]
ROW_HEIGHT = 20


def invoice_template(surface, data):
    company = data.get("company") or {}
    client = data.get("client") or {}
    invoice = data.get("invoice") or {}
    items = data.get("items") or []
    totals = data.get("totals") or {}
    notes = data.get("notes") or ""

    surface.font_size(24).font(BOLD).fill_color(COLORS["navy"]).text("INVOICE", 50, 50)

    # Company block, top right
    surface.font_size(10)
    right_x = surface.page_width - 200
    y = 50
    if company.get("name"):
        surface.font(BOLD).text(company["name"], right_x, y)
        y += 15
    surface.font(REGULAR)
    for label, key in (("", "address"), ("Phone: ", "phone"), ("Email: ", "email")):
        if company.get(key):
            surface.text(f"{label}{company[key]}", right_x, y)
            y += 12

    y = 120
    surface.font(BOLD).font_size(12)
    for label, key in (("Invoice #", "number"), ("Date", "date"), ("Due Date", "dueDate")):
        if invoice.get(key):
            surface.text(f"{label}: {invoice[key]}", 50, y)
            y += 15

    y += 20
    surface.font(BOLD).text("Bill To:", 50, y)
    y += 15
    surface.font(REGULAR)
    for key in ("name", "address", "email"):
        if client.get(key):
            surface.text(client[key], 50, y)
            y += 12

    # Items table
    y += 30
    start_x = 50
    surface.font(BOLD).font_size(10)
    x = start_x
    for header, width, _ in COLUMNS:
        surface.text(header, x, y, width=width, align="left")
        x += width

    y += 15
    table_width = sum(width for _, width, _ in COLUMNS)
    surface.line(start_x, y, start_x + table_width, y)

    y += 10
    surface.font(REGULAR).font_size(9)
    for item in items:
        values = [
            item.get("description") or "",
            str(item.get("quantity") or ""),
            money(item.get("rate")) if item.get("rate") else "",
            money(item.get("amount")) if item.get("amount") else "",
        ]
        x = start_x
        for value, (_, width, align) in zip(values, COLUMNS):
            surface.text(value, x, y, width=width, align=align)
            x += width
        y += ROW_HEIGHT
        if y > surface.bottom_limit - 120:
            surface.add_page()
            y = surface.margins.top

    # Totals
    y += 20
    totals_x = surface.page_width - 200
    surface.font(REGULAR).font_size(10)
    for label, key in (("Subtotal:", "subtotal"), ("Tax:", "tax"), ("Total:", "total")):
        if not totals.get(key):
            continue
        if key == "total":
            surface.font(BOLD)
        surface.text(label, totals_x, y, width=80, align="right")
        surface.text(money(totals[key]), totals_x + 90, y, width=80, align="right")
        y += 20 if key == "total" else 15

    if notes:
        y += 20
        surface.font(BOLD).font_size(10).text("Notes:", 50, y)
        y += 15
        surface.font(REGULAR).text(notes, 50, y, width=400)

    surface.font_size(8).font(REGULAR).text(
        "Thank you for your business!",
        50,
        surface.page_height - 100,
        align="center",
        width=surface.page_width - 100,
    )
    return surface
