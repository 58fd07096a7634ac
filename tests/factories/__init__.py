"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import EmployeeFactory, PartNumberRequestFactory
"""

from tests.factories.base import BaseFactory, generate_uuid7, utc_now
from tests.factories.employee import EmployeeFactory
from tests.factories.request import PartNumberRequestFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid7",
    "utc_now",
    # Models
    "EmployeeFactory",
    "PartNumberRequestFactory",
]
