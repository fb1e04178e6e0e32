from __future__ import annotations

from functools import lru_cache

from pdf_builder.data_sources import load_yaml_config
from pdf_builder.services import RetirementReportService

from .config import get_settings


@lru_cache()
def get_report_service() -> RetirementReportService:
    settings = get_settings()
    return RetirementReportService.from_config(
        load_yaml_config(settings.service_config),
        base_url=settings.chart_url,
        method=settings.chart_method,
        timeout=settings.chart_timeout,
    )
