"""Part number request factory for test data generation."""

from uuid import UUID

from polyfactory import Use

from src.pnrelease.models import PartNumberRequest
from tests.factories.base import BaseFactory, generate_uuid7, utc_now


class PartNumberRequestFactory(BaseFactory):
    """Factory for requests. Role slots are empty unless given."""

    __model__ = PartNumberRequest

    id = Use(generate_uuid7)
    pn = Use(lambda: f"PN{generate_uuid7().hex[-8:]}")
    product_description = "Bracket, zinc plated"
    customer_code = "C-1001"
    comments = None
    created_by_employee_id = None
    product_manager_id = None
    product_specialist_id = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def fully_staffed(
        cls,
        creator_id: UUID | None = None,
        product_manager_id: UUID | None = None,
        product_specialist_id: UUID | None = None,
        **kwargs,
    ) -> PartNumberRequest:
        """Build a request with every role slot filled."""
        return cls.build(
            created_by_employee_id=creator_id or generate_uuid7(),
            product_manager_id=product_manager_id or generate_uuid7(),
            product_specialist_id=product_specialist_id or generate_uuid7(),
            **kwargs,
        )
