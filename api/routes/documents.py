"""Document upload and download-link routes."""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from api.dependencies import get_document_service
from application.dto import DocumentUploadResponseDTO, DownloadUrlResponseDTO
from application.services.document_service import DocumentApplicationService
from core.response import ErrorBody
from domain.common.exceptions import NoFileUploadedException
from infrastructure.rate_limiter import api_rate_limit, upload_rate_limit


router = APIRouter(
    prefix="/documents",
    tags=["Documents"],
)

_ERRORS = {
    400: {"model": ErrorBody, "description": "No file uploaded or invalid parameters"},
    429: {"model": ErrorBody, "description": "Rate limit exceeded"},
    500: {"model": ErrorBody, "description": "Storage failure"},
}


@router.post(
    "/upload",
    summary="Upload a document",
    status_code=status.HTTP_201_CREATED,
    response_model=DocumentUploadResponseDTO,
    responses=_ERRORS,
)
@api_rate_limit
@upload_rate_limit
async def upload_document(
    request: Request,
    document: Optional[UploadFile] = File(None, description="The file to upload"),
    document_type: Optional[str] = Form(
        None, alias="documentType", description="passport, visa, proxy, ... (default: general)"
    ),
    related_record_id: Optional[str] = Form(
        None, alias="relatedRecordId", description="Id of the record the document belongs to"
    ),
    service: DocumentApplicationService = Depends(get_document_service),
):
    """Relay one file to object storage and return its storage key."""
    if document is None or not document.filename:
        raise NoFileUploadedException()

    data = await document.read()
    return await service.upload_document(
        file_bytes=data,
        original_name=document.filename,
        content_type=document.content_type,
        document_type=document_type,
        related_record_id=related_record_id,
    )


@router.get(
    "/download/{key:path}",
    summary="Get a download URL for a document",
    response_model=DownloadUrlResponseDTO,
    responses={**_ERRORS, 404: {"model": ErrorBody, "description": "Document not found"}},
)
@api_rate_limit
@upload_rate_limit
async def get_document_download_url(
    request: Request,
    key: str,
    service: DocumentApplicationService = Depends(get_document_service),
):
    """Return a presigned URL valid for 15 minutes."""
    return await service.get_download_url(key)
