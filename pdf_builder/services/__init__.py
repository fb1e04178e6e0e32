# services package
from .retirement_service import Branding, GeneratedPDF, RetirementReportService, file_name_for

__all__ = ["Branding", "GeneratedPDF", "RetirementReportService", "file_name_for"]
