"""
Shared fixtures: sample decision trees and an in-memory tree store
"""
import copy
from typing import List, Optional

import pytest

from eligibility_wizard.models import CompletionRecord, DecisionTree, DecisionTreeRow

AGE_TREE = {
    "start": "q1",
    "nodes": {
        "q1": {
            "type": "question",
            "text": "Age?",
            "options": [
                {"label": "Under 60", "next": "r1"},
                {"label": "60+", "next": "r2"}
            ]
        },
        "r1": {"type": "result", "status": "ineligible", "message": "Too young"},
        "r2": {"type": "result", "status": "eligible", "message": "Qualifies"}
    }
}

RESIDENT_TREE = {
    "start": "q1",
    "nodes": {
        "q1": {
            "type": "question",
            "text": "Are you a Karnataka resident?",
            "text_kn": "ನೀವು ಕರ್ನಾಟಕದ ನಿವಾಸಿಯೇ?",
            "options": [
                {"label": "Yes", "label_kn": "ಹೌದು", "next": "q2"},
                {"label": "No", "label_kn": "ಇಲ್ಲ", "next": "result_not_resident"}
            ]
        },
        "q2": {
            "type": "question",
            "text": "Is your annual household income below Rs 2 lakh?",
            "options": [
                {"label": "Yes", "next": "result_eligible"},
                {"label": "No", "next": "result_income_high"}
            ]
        },
        "result_eligible": {
            "type": "result",
            "status": "eligible",
            "message": "Based on your answers, you may meet the basic eligibility criteria for Gruha Lakshmi.",
            "next_steps": "Apply through Seva Sindhu portal with required documents.",
            "documents": ["Aadhaar Card", "Ration Card"]
        },
        "result_not_resident": {
            "type": "result",
            "status": "ineligible",
            "message": "This scheme is only for Karnataka residents. You need to be a permanent resident of Karnataka.",
            "fix": "If you have recently moved to Karnataka, apply for a Karnataka domicile certificate first."
        },
        "result_income_high": {
            "type": "result",
            "status": "ineligible",
            "message": "Your household income exceeds the maximum limit for this scheme.",
            "fix": "Check if you qualify under a different income category."
        }
    }
}

# q1 offers a short route (straight to a result) and a long one (three more questions)
BRANCHING_TREE = {
    "start": "q1",
    "nodes": {
        "q1": {
            "type": "question",
            "text": "Do you own farm land?",
            "options": [
                {"label": "Yes", "next": "q2"},
                {"label": "No", "next": "r_no_land"}
            ]
        },
        "q2": {
            "type": "question",
            "text": "Is the land in your name?",
            "options": [
                {"label": "Yes", "next": "q3"},
                {"label": "No", "next": "r_review"}
            ]
        },
        "q3": {
            "type": "question",
            "text": "Is it under 2 hectares?",
            "options": [
                {"label": "Yes", "next": "q4"},
                {"label": "No", "next": "r_too_big"}
            ]
        },
        "q4": {
            "type": "question",
            "text": "Do you pay income tax?",
            "options": [
                {"label": "No", "next": "r_eligible"},
                {"label": "Yes", "next": "r_taxpayer"}
            ]
        },
        "r_no_land": {"type": "result", "status": "ineligible", "message": "Only land-owning farmers qualify."},
        "r_review": {"type": "result", "status": "needs_review", "message": "Land records need verification."},
        "r_too_big": {"type": "result", "status": "ineligible", "message": "Holding exceeds the small farmer limit."},
        "r_eligible": {"type": "result", "status": "eligible", "message": "You may meet the basic criteria."},
        "r_taxpayer": {"type": "result", "status": "ineligible", "message": "Income tax payers are excluded."}
    }
}

RESULT_ONLY_TREE = {
    "start": "r1",
    "nodes": {
        "r1": {"type": "result", "status": "eligible", "message": "Everyone qualifies"}
    }
}


@pytest.fixture
def age_tree_data():
    return copy.deepcopy(AGE_TREE)


@pytest.fixture
def age_tree():
    return DecisionTree.model_validate(AGE_TREE)


@pytest.fixture
def resident_tree():
    return DecisionTree.model_validate(RESIDENT_TREE)


@pytest.fixture
def branching_tree():
    return DecisionTree.model_validate(BRANCHING_TREE)


@pytest.fixture
def result_only_tree():
    return DecisionTree.model_validate(RESULT_ONLY_TREE)


class FakeTreeStore:
    """In-memory stand-in for MongoService"""

    def __init__(self, rows: Optional[List[DecisionTreeRow]] = None, scheme_names=None, fail_records=False):
        self.rows = rows or []
        self.scheme_names = scheme_names or {}
        self.fail_records = fail_records
        self.records: List[CompletionRecord] = []
        self.get_tree_calls = 0

    async def load_active_tree(self, scheme_id: str) -> Optional[DecisionTreeRow]:
        active = [row for row in self.rows if row.scheme_id == scheme_id and row.is_active]
        if not active:
            return None
        return max(active, key=lambda row: row.version)

    async def get_tree(self, tree_id: str) -> Optional[DecisionTreeRow]:
        self.get_tree_calls += 1
        for row in self.rows:
            if row.id == tree_id:
                return row
        return None

    async def get_scheme_name(self, scheme_id: str) -> Optional[str]:
        return self.scheme_names.get(scheme_id)

    async def record_completion(self, record: CompletionRecord) -> bool:
        if self.fail_records:
            return False
        self.records.append(record)
        return True


def make_row(tree_id: str, scheme_id: str, tree: dict, version: int = 1, is_active: bool = True) -> DecisionTreeRow:
    return DecisionTreeRow(
        _id=tree_id,
        scheme_id=scheme_id,
        version=version,
        is_active=is_active,
        tree=copy.deepcopy(tree)
    )


@pytest.fixture
def tree_store():
    return FakeTreeStore(
        rows=[
            make_row("tree-age-1", "senior_pension", AGE_TREE),
            make_row("tree-gl-1", "gruha_lakshmi", RESIDENT_TREE, version=1, is_active=False),
            make_row("tree-gl-2", "gruha_lakshmi", RESIDENT_TREE, version=2),
            make_row("tree-broken", "broken_scheme", {"start": "missing", "nodes": {}}),
        ],
        scheme_names={"gruha_lakshmi": "Gruha Lakshmi"}
    )
