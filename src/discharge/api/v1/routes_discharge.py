from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from src.discharge.config import settings
from src.discharge.domain.models.discharge_request import (
    DischargeSummaryRequest,
    DischargeSummaryResponse,
    UploadedDocument,
)
from src.discharge.security import get_api_key
from src.discharge.services.documents.errors import (
    AttachmentReadError,
    AttachmentTooLargeError,
    DischargeSummaryError,
    MissingPatientError,
    UnknownPractitionerError,
    UnsupportedMediaTypeError,
)
from src.discharge.services.documents.payload import attachment_from_base64, read_upload
from src.discharge.services.documents.service import discharge_summary_service

router = APIRouter(
    prefix="/discharge-summaries",
    tags=["discharge-summaries"],
    dependencies=[Depends(get_api_key)],
)

ERROR_CODE_HEADER = "X-Error-Code"

_STATUS_BY_ERROR = {
    MissingPatientError: status.HTTP_400_BAD_REQUEST,
    UnknownPractitionerError: status.HTTP_404_NOT_FOUND,
    UnsupportedMediaTypeError: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    AttachmentTooLargeError: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    AttachmentReadError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def _http_error(exc: DischargeSummaryError) -> HTTPException:
    # Request validation also answers 422; the header tells the kinds apart.
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=status_code, detail=str(exc), headers={ERROR_CODE_HEADER: exc.code})


def _build(request: DischargeSummaryRequest, document: Optional[UploadedDocument]) -> DischargeSummaryResponse:
    try:
        bundle = discharge_summary_service.build_bundle_json(request, document=document)
    except DischargeSummaryError as exc:
        raise _http_error(exc) from exc
    return DischargeSummaryResponse(bundle=bundle)


@router.post("/", response_model=DischargeSummaryResponse)
async def build_discharge_summary(request: DischargeSummaryRequest) -> DischargeSummaryResponse:
    """Build a discharge summary Bundle from a JSON form snapshot.

    An attachment may be sent inline as base64 (or a data URL); without one a
    placeholder PDF is embedded.
    """

    document: Optional[UploadedDocument] = None
    if request.attachment is not None:
        try:
            document = attachment_from_base64(request.attachment, max_bytes=settings.max_upload_bytes)
        except DischargeSummaryError as exc:
            raise _http_error(exc) from exc
    return _build(request, document)


@router.post("/upload", response_model=DischargeSummaryResponse)
async def build_discharge_summary_with_upload(
    payload: str = Form(...),
    file: Optional[UploadFile] = File(None),
) -> DischargeSummaryResponse:
    """Multipart variant: ``payload`` holds the JSON snapshot, ``file`` the PDF/JPEG.

    The file's declared type is checked before it is read; read failures are
    reported as such and never replaced with the placeholder.
    """

    try:
        request = DischargeSummaryRequest.model_validate_json(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    document: Optional[UploadedDocument] = None
    try:
        if file is not None:
            document = await read_upload(file, max_bytes=settings.max_upload_bytes)
        elif request.attachment is not None:
            document = attachment_from_base64(request.attachment, max_bytes=settings.max_upload_bytes)
    except DischargeSummaryError as exc:
        raise _http_error(exc) from exc

    return _build(request, document)
