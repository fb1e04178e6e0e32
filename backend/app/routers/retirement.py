from __future__ import annotations

import base64

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pdf_builder.logging_utils import get_logger
from pdf_builder.services import RetirementReportService

from .. import schemas
from ..dependencies import get_report_service

logger = get_logger(__name__)

router = APIRouter(tags=["retirement"])


@router.post(
    "/generate-retirement-pdf",
    response_model=schemas.RetirementPDFResponse,
    responses={500: {"model": schemas.ErrorResponse}},
    summary="Generate a retirement analysis PDF",
)
def generate_retirement_pdf(
    payload: schemas.RetirementRequest,
    service: RetirementReportService = Depends(get_report_service),
):
    try:
        generated = service.generate(payload.model_dump())
    except Exception as exc:
        logger.exception("Retirement PDF generation failed")
        return JSONResponse(
            status_code=500,
            content=schemas.ErrorResponse(error=str(exc) or exc.__class__.__name__).model_dump(),
        )

    return schemas.RetirementPDFResponse(
        pdf=base64.b64encode(generated.pdf).decode("ascii"),
        fileName=generated.file_name,
        mimeType=generated.mime_type,
    )
