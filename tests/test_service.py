import pytest

from pdf_builder.services import Branding, RetirementReportService, file_name_for


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Ada Lovelace", "Retirement_Analyzer_Ada_Lovelace.pdf"),
        ("  Mary   Ann  Smith ", "Retirement_Analyzer_Mary_Ann_Smith.pdf"),
        ("Client", "Retirement_Analyzer_Client.pdf"),
        ("", "Retirement_Analyzer_Client.pdf"),
    ],
)
def test_file_name_for(name, expected):
    assert file_name_for(name) == expected


def test_generate_with_all_charts(chart_client, png_bytes, retirement_form):
    client = chart_client(images={"lifecycle": png_bytes, "comparison": png_bytes, "allocation": png_bytes})
    service = RetirementReportService(chart_client=client)

    generated = service.generate(retirement_form)

    assert generated.pdf.startswith(b"%PDF")
    assert generated.file_name == "Retirement_Analyzer_Ada_Lovelace.pdf"
    assert generated.mime_type == "application/pdf"
    assert generated.diagnostics == []
    assert client.requested == ["lifecycle", "comparison", "allocation"]


def test_generate_survives_chart_outage(chart_client, retirement_form):
    client = chart_client(fail={"lifecycle", "comparison", "allocation"})
    generated = RetirementReportService(chart_client=client).generate(retirement_form)

    assert generated.pdf.startswith(b"%PDF")
    assert [d.code for d in generated.diagnostics] == ["chart_unavailable"] * 3


def test_generate_with_empty_form(chart_client):
    generated = RetirementReportService(chart_client=chart_client()).generate({})
    assert generated.file_name == "Retirement_Analyzer_Client.pdf"
    assert generated.pdf.startswith(b"%PDF")


def test_service_uses_a4_pages(chart_client):
    service = RetirementReportService(chart_client=chart_client())
    assert service.generator.config.page_size == "A4"
    assert service.generator.config.margin == 40


def test_from_config_applies_sections():
    cfg = {
        "generator": {"margin": 36},
        "charts": {"base_url": "http://charts.internal/chart", "timeout": 10},
        "branding": {"company_name": "Acme Planning", "links": []},
    }
    service = RetirementReportService.from_config(cfg, base_url="http://override/chart", method=None)

    assert service.chart_client.policy.base_url == "http://override/chart"
    assert service.chart_client.policy.timeout == 10.0
    assert service.chart_client.policy.method == "GET"
    assert service.generator.config.margin == 36
    assert service.generator.config.page_size == "A4"
    assert service.branding == Branding(company_name="Acme Planning", links=[])
