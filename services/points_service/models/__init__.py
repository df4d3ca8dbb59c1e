"""Points Service models package.

Re-exports all models so that:
  - ``from services.points_service.models import User`` works
  - Alembic env.py sees every table on Base.metadata
  - SQLAlchemy's mapper registry resolves string relationship targets

IMPORTANT: Every model class must be listed here.
When adding a new model, add both its import and its __all__ entry.
"""

from services.points_service.models.airdrop import AirdropLog, FeePayment  # noqa: F401
from services.points_service.models.task import CompletedTask, Task  # noqa: F401
from services.points_service.models.user import User  # noqa: F401

__all__ = [
    # Referral program
    "User",
    "Task",
    "CompletedTask",
    # Airdrop ledger
    "AirdropLog",
    "FeePayment",
]
