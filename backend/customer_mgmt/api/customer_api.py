import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from customer_mgmt.dependencies import get_customer_service
from customer_mgmt.models.customer import (
    Customer,
    CustomerCreate,
    CustomerPatch,
    CustomerUpdate,
    StatusUpdate,
    VerificationStatus,
)
from customer_mgmt.services.customer_service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])


def _not_found(customer_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer with ID {customer_id} not found.")


def _server_error(action: str) -> HTTPException:
    # Faults are logged here; the client only gets the status code and a short message
    logger.exception("Failed to %s", action)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to {action}.")


@router.get("", response_model=List[Customer])
async def get_all_customers_api(service: CustomerService = Depends(get_customer_service)):
    try:
        return service.get_all_customers()
    except Exception:
        raise _server_error("fetch customers")


@router.get("/statuses", response_model=List[str])
async def get_verification_statuses_api():
    """Ordered list of the verification statuses a customer can hold."""
    return [s.value for s in VerificationStatus]


@router.get("/{customer_id}", response_model=Customer)
async def get_customer_api(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    try:
        customer = service.get_customer_by_id(customer_id)
    except Exception:
        raise _server_error("fetch customer")
    if customer is None:
        raise _not_found(customer_id)
    return customer


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
async def create_customer_api(customer: CustomerCreate, service: CustomerService = Depends(get_customer_service)):
    try:
        return service.create_customer(customer)
    except Exception:
        raise _server_error("create customer")


@router.put("/{customer_id}", response_model=Customer)
async def update_customer_api(customer_id: int, customer: CustomerUpdate,
                              service: CustomerService = Depends(get_customer_service)):
    try:
        updated = service.update_customer(customer_id, customer)
    except Exception:
        raise _server_error("update customer")
    if updated is None:
        raise _not_found(customer_id)
    return updated


@router.patch("/{customer_id}", response_model=Customer)
async def patch_customer_api(customer_id: int, customer: CustomerPatch,
                             service: CustomerService = Depends(get_customer_service)):
    try:
        patched = service.patch_customer(customer_id, customer)
    except Exception:
        raise _server_error("update customer")
    if patched is None:
        raise _not_found(customer_id)
    return patched


@router.patch("/{customer_id}/status", response_model=Customer)
async def update_customer_status_api(customer_id: int, body: StatusUpdate,
                                     service: CustomerService = Depends(get_customer_service)):
    try:
        updated = service.update_customer_status(customer_id, body.status)
    except Exception:
        raise _server_error("update customer status")
    if updated is None:
        raise _not_found(customer_id)
    return updated


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer_api(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    try:
        deleted = service.delete_customer(customer_id)
    except Exception:
        raise _server_error("delete customer")
    if not deleted:
        raise _not_found(customer_id)
    # HTTP 204 No Content for successful deletion
    return Response(status_code=status.HTTP_204_NO_CONTENT)
