# backend/customer_mgmt/services/customer_service.py
import logging
from typing import List, Optional

from customer_mgmt.models.customer import (
    Customer,
    CustomerCreate,
    CustomerPatch,
    CustomerUpdate,
    VerificationStatus,
)
from customer_mgmt.repositories.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)

# Fields a partial update may touch; id is never among them
PATCHABLE_FIELDS = ("name", "address", "phone_no", "email", "verification_status")


class CustomerService:
    """Customer use cases on top of a repository.

    Lookups that miss return None (or False for delete) and leave the HTTP
    mapping to the router.
    """

    def __init__(self, repository: CustomerRepository):
        self.repository = repository

    def get_all_customers(self) -> List[Customer]:
        return self.repository.find_all()

    def get_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        return self.repository.find_by_id(customer_id)

    def create_customer(self, payload: CustomerCreate) -> Customer:
        customer = Customer(
            name=payload.name,
            address=payload.address,
            phone_no=payload.phone_no,
            email=payload.email,
            verification_status=payload.verification_status or VerificationStatus.NOT_VERIFIED,
        )
        created = self.repository.save(customer)
        logger.info("Created customer %s", created.id)
        return created

    def update_customer(self, customer_id: int, payload: CustomerUpdate) -> Optional[Customer]:
        """Overwrite name, address, phone and email. The verification status is kept as stored."""
        customer = self.repository.find_by_id(customer_id)
        if customer is None:
            return None
        customer.name = payload.name
        customer.address = payload.address
        customer.phone_no = payload.phone_no
        customer.email = payload.email
        updated = self.repository.save(customer)
        if updated is not None:
            logger.info("Updated customer %s", customer_id)
        return updated

    def patch_customer(self, customer_id: int, payload: CustomerPatch) -> Optional[Customer]:
        customer = self.repository.find_by_id(customer_id)
        if customer is None:
            return None
        changed = []
        for field in PATCHABLE_FIELDS:
            value = getattr(payload, field)
            if value is not None:
                setattr(customer, field, value)
                changed.append(field)
        patched = self.repository.save(customer)
        if patched is not None:
            logger.info("Patched customer %s (%s)", customer_id, ", ".join(changed) or "no fields")
        return patched

    def update_customer_status(self, customer_id: int, status: VerificationStatus) -> Optional[Customer]:
        customer = self.repository.find_by_id(customer_id)
        if customer is None:
            return None
        customer.verification_status = status
        updated = self.repository.save(customer)
        if updated is not None:
            logger.info("Customer %s status set to %s", customer_id, status.value)
        return updated

    def delete_customer(self, customer_id: int) -> bool:
        if not self.repository.exists_by_id(customer_id):
            return False
        self.repository.delete_by_id(customer_id)
        logger.info("Deleted customer %s", customer_id)
        return True
