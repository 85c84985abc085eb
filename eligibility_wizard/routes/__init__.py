"""
API routes for the Scheme Eligibility Wizard
"""

from .wizard import router as wizard_router, completions_router
from .trees import router as trees_router

__all__ = [
    "wizard_router",
    "completions_router",
    "trees_router"
]
