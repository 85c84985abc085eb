"""
Services package for the Scheme Eligibility Wizard
"""

from .mongo_service import MongoService
from .wizard_service import WizardService, TreeNotFoundError

__all__ = [
    "MongoService",
    "WizardService",
    "TreeNotFoundError"
]
