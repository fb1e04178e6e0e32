# templates package
# Built-in procedural templates, keyed by the name they are registered under.

from .documents import contract_template, letter_template, report_template, resume_template
from .invoice import invoice_template
from .retirement import retirement_summary_template, retirement_template

DEFAULT_TEMPLATES = {
    "invoice": invoice_template,
    "report": report_template,
    "resume": resume_template,
    "letter": letter_template,
    "contract": contract_template,
    "retirement": retirement_template,
    "retirement_summary": retirement_summary_template,
}

__all__ = [
    "DEFAULT_TEMPLATES",
    "invoice_template",
    "report_template",
    "resume_template",
    "letter_template",
    "contract_template",
    "retirement_template",
    "retirement_summary_template",
]
