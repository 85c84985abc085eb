"""
Tests for decision tree models
"""
import pytest
from pydantic import ValidationError

from eligibility_wizard.models import DecisionTree, DecisionTreeRow, QuestionNode, ResultNode, ResultStatus
from tests.conftest import AGE_TREE, RESIDENT_TREE


def test_nodes_parse_into_variants(age_tree):
    assert isinstance(age_tree.nodes["q1"], QuestionNode)
    assert isinstance(age_tree.nodes["r2"], ResultNode)
    assert age_tree.nodes["r2"].status == ResultStatus.ELIGIBLE


def test_node_ids_come_from_keys(age_tree):
    assert age_tree.nodes["q1"].id == "q1"
    assert age_tree.nodes["r1"].id == "r1"


def test_option_order_is_preserved(age_tree):
    labels = [option.label for option in age_tree.nodes["q1"].options]
    assert labels == ["Under 60", "60+"]


def test_models_are_immutable(age_tree):
    with pytest.raises(ValidationError):
        age_tree.nodes["q1"].text = "Changed"


def test_unknown_node_type_is_rejected():
    data = {"start": "q1", "nodes": {"q1": {"type": "banner", "text": "Hi"}}}
    with pytest.raises(ValidationError):
        DecisionTree.model_validate(data)


def test_unknown_status_is_rejected():
    data = {"start": "r1", "nodes": {"r1": {"type": "result", "status": "maybe", "message": "Hmm"}}}
    with pytest.raises(ValidationError):
        DecisionTree.model_validate(data)


def test_legacy_field_names_are_accepted():
    data = {
        "start": "q1",
        "nodes": {
            "q1": {
                "type": "question",
                "text_en": "Are you a resident?",
                "options": [{"label": "Yes", "next": "r1"}, {"label": "No", "next": "r1"}]
            },
            "r1": {"type": "result", "status": "eligible", "reason_en": "You may be eligible.", "fix_en": "None"}
        }
    }
    tree = DecisionTree.model_validate(data)
    assert tree.nodes["q1"].text == "Are you a resident?"
    assert tree.nodes["r1"].message == "You may be eligible."
    assert tree.nodes["r1"].fix == "None"


def test_to_storage_round_trips_layout():
    tree = DecisionTree.model_validate(RESIDENT_TREE)
    assert tree.to_storage() == RESIDENT_TREE


def test_to_storage_omits_ids_and_empty_fields():
    stored = DecisionTree.model_validate(AGE_TREE).to_storage()
    assert "id" not in stored["nodes"]["q1"]
    assert stored["nodes"]["r1"] == {"type": "result", "status": "ineligible", "message": "Too young"}


def test_display_text_falls_back_to_english(resident_tree):
    question = resident_tree.nodes["q1"]
    assert question.display_text("kn") == "ನೀವು ಕರ್ನಾಟಕದ ನಿವಾಸಿಯೇ?"
    assert resident_tree.nodes["q2"].display_text("kn") == resident_tree.nodes["q2"].text
    assert question.options[0].display_label("kn") == "ಹೌದು"


def test_tree_row_accepts_object_id_like_values():
    class FakeObjectId:
        def __str__(self):
            return "665f1c2ab9d1e2f3a4b5c6d7"

    row = DecisionTreeRow(_id=FakeObjectId(), scheme_id="s", tree=AGE_TREE)
    assert row.id == "665f1c2ab9d1e2f3a4b5c6d7"
    assert row.version == 1
    assert row.is_active is True
