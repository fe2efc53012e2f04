"""
FastAPI Endpoints for the Ledger

Exposes the operation dispatcher to the insurer, shop, repair shop and police.
"""
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from claimledger.core.errors import (
    DecodingError,
    DuplicateKey,
    EncodingError,
    NotFound,
    ValidationError,
)
from claimledger.dispatcher import OperationDispatcher, Response, create_dispatcher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ledger"])

# Process-wide dispatcher over an in-memory ledger
dispatcher = create_dispatcher()

HTTP_STATUS_BY_KIND = {
    NotFound.kind: status.HTTP_404_NOT_FOUND,
    ValidationError.kind: status.HTTP_400_BAD_REQUEST,
    DecodingError.kind: status.HTTP_400_BAD_REQUEST,
    EncodingError.kind: status.HTTP_400_BAD_REQUEST,
    DuplicateKey.kind: status.HTTP_400_BAD_REQUEST,
}


def get_dispatcher() -> OperationDispatcher:
    return dispatcher


class InvokeRequest(BaseModel):
    """Request model for an invocation: the JSON-encoded arguments."""
    args: List[str] = Field(default_factory=list, description="JSON-encoded operation arguments")


class OperationsResponse(BaseModel):
    operations: List[str]


def _unwrap(response: Response) -> Any:
    if response.ok:
        return response.result()
    raise HTTPException(
        status_code=HTTP_STATUS_BY_KIND.get(response.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail={"error": response.kind, "message": response.message},
    )


@router.get("/operations", response_model=OperationsResponse)
async def list_operations(
    dispatcher: OperationDispatcher = Depends(get_dispatcher),
) -> OperationsResponse:
    """List the operation names accepted by `/invoke/{operation}`."""
    return OperationsResponse(operations=dispatcher.operations)


@router.post("/init")
def initialize(
    request: InvokeRequest | None = None,
    dispatcher: OperationDispatcher = Depends(get_dispatcher),
) -> Any:
    """Seed the contract-type catalog with a JSON array of contract types."""
    args = request.args if request else []
    return _unwrap(dispatcher.initialize(args))


@router.post("/invoke/{operation}")
def invoke(
    operation: str,
    request: InvokeRequest | None = None,
    dispatcher: OperationDispatcher = Depends(get_dispatcher),
) -> Any:
    """
    Invoke a workflow operation.

    Returns the decoded result, or null when the operation has no payload.
    """
    args = request.args if request else []
    return _unwrap(dispatcher.invoke(operation, args))
