"""
Retirement PDF service.

Turns a submitted retirement form into a finished PDF: coerce the inputs,
compute projections, fetch the three chart images from the chart service and
render the ``retirement_summary`` template in memory.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..charts import ChartClient, ChartPolicy, build_chart_specs
from ..data_sources import merge_overrides
from ..generator import DocumentGenerator
from ..logging_utils import get_logger
from ..models import Diagnostic, GeneratorConfig
from ..projections import RetirementInputs, calculate_projections

logger = get_logger(__name__)

SUMMARY_TEMPLATE = "retirement_summary"
PDF_MIME_TYPE = "application/pdf"


@dataclass
class Branding:
    company_name: str = "Financial Planning Associates"
    links: List[Dict[str, str]] = field(default_factory=lambda: [
        {"label": "Schedule Consultation", "url": "https://example.com/schedule"},
        {"label": "Download Resources", "url": "https://example.com/resources"},
        {"label": "Contact Advisor", "url": "mailto:advisor@example.com"},
    ])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Branding":
        data = data or {}
        branding = cls()
        if data.get("company_name"):
            branding.company_name = str(data["company_name"])
        if "links" in data:
            branding.links = [dict(link) for link in data["links"] or []]
        return branding

    def to_dict(self) -> Dict[str, Any]:
        return {"company_name": self.company_name, "links": list(self.links)}


@dataclass
class GeneratedPDF:
    pdf: bytes
    file_name: str
    mime_type: str = PDF_MIME_TYPE
    diagnostics: List[Diagnostic] = field(default_factory=list)


def service_config() -> GeneratorConfig:
    return GeneratorConfig(page_size="A4", margin=40, title="Retirement Analysis Report")


WHITESPACE_RE = re.compile(r"\s+")


def file_name_for(name: str) -> str:
    safe_name = WHITESPACE_RE.sub("_", name.strip() or "Client")
    return f"Retirement_Analyzer_{safe_name}.pdf"


class RetirementReportService:
    def __init__(
        self,
        chart_client: Optional[ChartClient] = None,
        config: GeneratorConfig | None = None,
        branding: Branding | None = None,
    ):
        self.chart_client = chart_client or ChartClient()
        self.branding = branding or Branding()
        self.generator = DocumentGenerator(config or service_config())

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any] | None, **chart_overrides: Any) -> "RetirementReportService":
        """
        Build a service from a parsed YAML config with optional ``generator``,
        ``charts`` and ``branding`` sections. Non-empty keyword overrides win
        over the ``charts`` section (the backend passes env settings here).
        """
        cfg = dict(cfg or {})
        charts = dict(cfg.get("charts") or {})
        merge_overrides(charts, {k: v for k, v in chart_overrides.items() if v})
        config = service_config().merged(cfg.get("generator")).validated()
        return cls(
            chart_client=ChartClient(ChartPolicy.from_dict(charts)),
            config=config,
            branding=Branding.from_dict(cfg.get("branding")),
        )

    def generate(self, form: Mapping[str, Any] | None) -> GeneratedPDF:
        inputs = RetirementInputs.from_form(form)
        projections = calculate_projections(inputs)
        logger.info("Generating retirement PDF for %s", inputs.name)

        specs = build_chart_specs(inputs, projections, self.chart_client.policy)
        charts, diagnostics = self.chart_client.fetch_all(specs)

        data = {
            **inputs.to_dict(),
            "inputs": inputs,
            "projections": projections,
            "charts": charts,
            "branding": self.branding.to_dict(),
        }
        result = self.generator.create_document(SUMMARY_TEMPLATE, data)
        diagnostics.extend(result.diagnostics)
        if result.errors:
            raise RuntimeError("; ".join(d.message for d in result.errors))

        pdf = result.pdf_bytes()
        logger.info("Retirement PDF ready for %s (%d bytes)", inputs.name, len(pdf))
        return GeneratedPDF(pdf=pdf, file_name=file_name_for(inputs.name), diagnostics=diagnostics)


__all__ = ["Branding", "GeneratedPDF", "RetirementReportService", "file_name_for", "service_config"]
