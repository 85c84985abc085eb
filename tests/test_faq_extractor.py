"""
Tests for FAQ extraction
"""
from eligibility_wizard.models import DecisionTree
from eligibility_wizard.rules_engine import extract_faq_from_tree, generate_faq_json_ld
from eligibility_wizard.rules_engine.faq_extractor import DISCLAIMER


def test_extracts_one_item_per_result(resident_tree):
    faqs = extract_faq_from_tree(resident_tree, "Gruha Lakshmi")

    assert len(faqs) == 3


def test_items_follow_option_order(resident_tree):
    faqs = extract_faq_from_tree(resident_tree, "Gruha Lakshmi")

    assert faqs[0].question == "Am I eligible for Gruha Lakshmi based on income criteria?"
    assert faqs[1].question == "What are the income requirements for Gruha Lakshmi?"
    assert faqs[2].question == "Can I get Gruha Lakshmi if I'm not a Karnataka resident?"


def test_answers_include_fix_next_steps_and_documents(resident_tree):
    faqs = extract_faq_from_tree(resident_tree, "Gruha Lakshmi")

    eligible = faqs[0].answer
    assert "Next steps: Apply through Seva Sindhu portal" in eligible
    assert "Documents needed: Aadhaar Card, Ration Card" in eligible

    resident = next(f for f in faqs if "Karnataka residents" in f.answer)
    assert "How to fix: If you have recently moved" in resident.answer
    assert all(f.answer.endswith(DISCLAIMER) for f in faqs)


def test_short_messages_are_skipped():
    tree = DecisionTree.model_validate({
        "start": "q1",
        "nodes": {
            "q1": {
                "type": "question",
                "text": "Anything?",
                "options": [{"label": "A", "next": "r1"}, {"label": "B", "next": "r2"}]
            },
            "r1": {"type": "result", "status": "eligible", "message": "OK"},
            "r2": {"type": "result", "status": "needs_review", "message": "Your case needs a manual check."}
        }
    })

    faqs = extract_faq_from_tree(tree, "Test Scheme")

    assert len(faqs) == 1
    assert faqs[0].question == "What if my Test Scheme eligibility needs further verification?"


def test_shared_result_is_reported_once():
    tree = DecisionTree.model_validate({
        "start": "q1",
        "nodes": {
            "q1": {
                "type": "question",
                "text": "First?",
                "options": [{"label": "A", "next": "q2"}, {"label": "B", "next": "r1"}]
            },
            "q2": {
                "type": "question",
                "text": "Second?",
                "options": [{"label": "A", "next": "r1"}, {"label": "B", "next": "r1"}]
            },
            "r1": {"type": "result", "status": "ineligible", "message": "Applications from this group are rejected."}
        }
    })

    faqs = extract_faq_from_tree(tree, "Test Scheme")

    assert len(faqs) == 1
    assert faqs[0].question == "Why might my Test Scheme application be rejected?"


def test_short_keywords_match_whole_words_only():
    tree = DecisionTree.model_validate({
        "start": "q1",
        "nodes": {
            "q1": {
                "type": "question",
                "text": "Do you work in the public sector?",
                "options": [{"label": "Yes", "next": "r1"}, {"label": "No", "next": "r1"}]
            },
            "r1": {"type": "result", "status": "ineligible", "message": "You must be self employed to apply."}
        }
    })

    faqs = extract_faq_from_tree(tree, "Test Scheme")

    assert faqs[0].question == 'What if I answered "no" to "Do you work in the public sector?" for Test Scheme?'


def test_result_only_tree(result_only_tree):
    faqs = extract_faq_from_tree(result_only_tree, "Test Scheme")

    assert len(faqs) == 1
    assert faqs[0].question == "How do I know if I'm eligible for Test Scheme?"


def test_json_ld_structure(resident_tree):
    faqs = extract_faq_from_tree(resident_tree, "Gruha Lakshmi")

    json_ld = generate_faq_json_ld(faqs)

    assert json_ld["@context"] == "https://schema.org"
    assert json_ld["@type"] == "FAQPage"
    assert len(json_ld["mainEntity"]) == 3
    first = json_ld["mainEntity"][0]
    assert first["@type"] == "Question"
    assert first["name"] == faqs[0].question
    assert first["acceptedAnswer"] == {"@type": "Answer", "text": faqs[0].answer}


def test_age_keyword_matches_aged():
    tree = DecisionTree.model_validate({
        "start": "q1",
        "nodes": {
            "q1": {
                "type": "question",
                "text": "Are you aged 60 or above?",
                "options": [{"label": "Yes", "next": "r_ok"}, {"label": "No", "next": "r_young"}]
            },
            "r_ok": {"type": "result", "status": "eligible", "message": "You may meet the basic criteria for the pension."},
            "r_young": {"type": "result", "status": "ineligible", "message": "Applicants must be aged 60 or above."}
        }
    })

    faqs = extract_faq_from_tree(tree, "Pension")

    assert [faq.question for faq in faqs] == [
        "What are the age requirements for Pension?",
        "What if I don't meet the age criteria for Pension?",
    ]


def test_age_keyword_ignores_words_containing_age():
    tree = DecisionTree.model_validate({
        "start": "q1",
        "nodes": {
            "q1": {
                "type": "question",
                "text": "Do you live in a village?",
                "options": [{"label": "Yes", "next": "r_ok"}, {"label": "No", "next": "r_no"}]
            },
            "r_ok": {"type": "result", "status": "eligible", "message": "You may meet the basic criteria for the scheme."},
            "r_no": {"type": "result", "status": "ineligible", "message": "Only households in villages may apply."}
        }
    })

    faqs = extract_faq_from_tree(tree, "Pension")

    assert [faq.question for faq in faqs] == [
        "What happens if I meet all the criteria for Pension?",
        'What if I answered "no" to "Do you live in a village?" for Pension?',
    ]
