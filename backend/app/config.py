from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel

from pdf_builder.charts import DEFAULT_CHART_URL, DEFAULT_TIMEOUT


class Settings(BaseModel):
    chart_url: str = DEFAULT_CHART_URL
    chart_timeout: float = DEFAULT_TIMEOUT
    chart_method: str = "GET"
    service_config: str | None = None
    api_title: str = "Retirement PDF Service"
    api_description: str = "Generates retirement analysis PDFs with embedded projection charts."
    api_version: str = "0.1.0"
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings(
        chart_url=os.getenv("PDF_CHART_URL", DEFAULT_CHART_URL),
        chart_timeout=float(os.getenv("PDF_CHART_TIMEOUT", DEFAULT_TIMEOUT)),
        chart_method=os.getenv("PDF_CHART_METHOD", "GET").upper(),
        service_config=os.getenv("PDF_SERVICE_CONFIG") or None,
        log_level=os.getenv("PDF_LOG_LEVEL", "INFO"),
    )
