import io

import pytest
from PIL import Image

from pdf_builder.charts import ChartPolicy
from pdf_builder.generator import DocumentGenerator
from pdf_builder.models import Diagnostic


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (60, 30), (66, 133, 244)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def generator():
    return DocumentGenerator()


@pytest.fixture
def open_surface(generator):
    result = generator.create_document(None)
    return result.surface


@pytest.fixture
def retirement_form():
    return {
        "name": "Ada Lovelace",
        "age": "40",
        "income": "85000",
        "savings": "120000",
        "retireAge": "67",
        "lifestyle": "comfortable",
        "summary": "Steady saver with a long runway.",
    }


class FakeChartClient:
    """Stands in for ChartClient; serves canned images, or failures, per chart name."""

    def __init__(self, images=None, fail=()):
        self.policy = ChartPolicy()
        self.images = images or {}
        self.fail = set(fail)
        self.requested = []

    def fetch_all(self, specs):
        images, diagnostics = {}, []
        for spec in specs:
            self.requested.append(spec.name)
            if spec.name in self.fail:
                images[spec.name] = None
                diagnostics.append(Diagnostic("chart_unavailable", f"{spec.name} chart request failed"))
            else:
                images[spec.name] = self.images.get(spec.name)
        return images, diagnostics


@pytest.fixture
def chart_client():
    return FakeChartClient
