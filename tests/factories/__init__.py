"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, SubmissionFactory, ...
"""

from tests.factories.base import BaseFactory, next_suffix, utc_now
from tests.factories.project import ProjectFactory
from tests.factories.submission import SubmissionFactory
from tests.factories.user import UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "next_suffix",
    "utc_now",
    # Models
    "ProjectFactory",
    "SubmissionFactory",
    "UserFactory",
]
