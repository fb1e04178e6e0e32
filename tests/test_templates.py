import pytest

from pdf_builder.generator import DocumentGenerator
from pdf_builder.projections import RetirementInputs, calculate_projections

SAMPLES = {
    "invoice": {
        "company": {"name": "Acme Ledger Co", "address": "1 Main St", "phone": "555-0100", "email": "billing@acme.test"},
        "client": {"name": "Ada Lovelace", "address": "12 St James Sq", "email": "ada@example.com"},
        "invoice": {"number": "INV-001", "date": "2024-01-15", "dueDate": "2024-02-15"},
        "items": [
            {"description": "Portfolio review", "quantity": 2, "rate": 150, "amount": 300},
            {"description": "Tax planning session", "quantity": 1, "rate": "1,200.00", "amount": "1,200.00"},
        ],
        "totals": {"subtotal": 1500, "tax": 120, "total": 1620},
        "notes": "Payment due within 30 days.",
    },
    "report": {
        "title": "Quarterly Review",
        "author": "Planning Desk",
        "content": [
            {"heading": "Summary", "text": "Markets were calm. " * 40},
            {"heading": "Outlook", "text": "Stay the course."},
            "A bare paragraph",
        ],
    },
    "resume": {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "555-0101",
        "summary": "Analyst with an eye for engines.",
        "experience": [{"title": "Analyst", "company": "Engines Ltd", "description": "Wrote the first program."}],
        "education": [{"degree": "Mathematics", "school": "Home tutoring", "year": 1833}, {"school": "Self-taught"}],
    },
    "letter": {
        "recipient": "Charles Babbage",
        "subject": "Your engine",
        "body": "Dear Charles,\nThe notes are attached.",
        "signature": "Ada",
    },
    "contract": {
        "title": "Advisory Agreement",
        "parties": ["Acme Ledger Co", "Ada Lovelace"],
        "terms": [f"Term number {i} applies to both parties." for i in range(1, 40)],
    },
    "retirement": {
        "name": "Ada Lovelace",
        "age": 52,
        "income": 90000,
        "savings": 20000,
        "retireAge": 65,
        "lifestyle": "luxury",
        "summary": "Late start, strong income.",
    },
}


@pytest.mark.parametrize("name", sorted(SAMPLES))
def test_builtin_templates_produce_pdf(name):
    result = DocumentGenerator().create_document(name, SAMPLES[name])

    assert result.rendered
    assert result.errors == []
    assert result.pdf_bytes().startswith(b"%PDF")


@pytest.mark.parametrize("name", sorted(SAMPLES))
def test_builtin_templates_tolerate_empty_data(name):
    result = DocumentGenerator().create_document(name, {})
    assert result.errors == []
    assert result.pdf_bytes().startswith(b"%PDF")


def test_retirement_report_has_recommendations_page():
    result = DocumentGenerator().create_document("retirement", SAMPLES["retirement"])
    assert result.surface.page_count == 2


def test_long_contract_paginates():
    result = DocumentGenerator().create_document("contract", SAMPLES["contract"])
    assert result.surface.page_count > 1


def _summary_data(charts):
    inputs = RetirementInputs.from_form(SAMPLES["retirement"])
    return {
        "inputs": inputs,
        "projections": calculate_projections(inputs),
        "charts": charts,
        "branding": {"company_name": "Acme Planning", "links": [{"label": "Book a call", "url": "https://example.com"}]},
    }


def test_summary_embeds_charts(png_bytes):
    charts = {"lifecycle": png_bytes, "comparison": png_bytes, "allocation": png_bytes}
    result = DocumentGenerator().create_document("retirement_summary", _summary_data(charts))

    assert result.diagnostics == []
    assert result.pdf_bytes().startswith(b"%PDF")


def test_summary_skips_missing_and_unreadable_charts(png_bytes):
    charts = {"lifecycle": None, "comparison": png_bytes, "allocation": b"not an image"}
    result = DocumentGenerator().create_document("retirement_summary", _summary_data(charts))

    assert result.rendered
    assert [d.code for d in result.diagnostics] == ["chart_unreadable"]
    assert result.pdf_bytes().startswith(b"%PDF")


def test_declarative_template_all_elements(tmp_path, png_bytes):
    logo = tmp_path / "logo.png"
    logo.write_bytes(png_bytes)
    template = {
        "header": [
            {"type": "image", "content": "{{logo}}", "width": 80},
            {"type": "heading", "content": "Statement for {{client.name}}", "style": "title", "level": 2},
            {"type": "line"},
        ],
        "content": [
            {"type": "text", "content": "Balance: {{balance}}", "style": "body"},
            {"type": "spacer", "height": 10},
            {"type": "table", "content": {"headers": ["Account", "Value"], "rows": [["IRA", "{{ira}}"]]}},
            {"type": "list", "content": ["Rebalance", "Review beneficiaries"]},
        ],
        "footer": {"type": "text", "content": "Prepared {{date}}", "style": "caption"},
    }
    data = {"logo": str(logo), "client": {"name": "Ada"}, "balance": "$10", "ira": "$7", "date": "today"}

    result = DocumentGenerator().register_template("statement", template).create_document("statement", data)

    assert result.diagnostics == []
    assert result.pdf_bytes().startswith(b"%PDF")
