"""
FAQ extraction from decision trees

Reads a validated tree directly, independent of any session, and turns each
result node into a question/answer pair for static scheme pages.
"""
import re
from typing import Any, Dict, List, Optional, Sequence

from ..config import settings
from ..models.faq import FAQItem
from ..models.tree import DecisionTree, QuestionNode, ResultNode, ResultStatus

DISCLAIMER = "Note: This is for guidance only. Always verify on the official government portal."

# (keywords, question template) checked in order against an ineligible result's message
INELIGIBLE_TOPICS = [
    (("residen", "{state}"), "Can I get {scheme} if I'm not a {state} resident?"),
    (("income", "bpl", "poverty"), "What are the income requirements for {scheme}?"),
    (("age",), "What if I don't meet the age criteria for {scheme}?"),
    (("gender", "woman", "female"), "Who is eligible for {scheme} based on gender?"),
    (("caste", "category", "sc", "st"), "What category requirements does {scheme} have?"),
    (("land", "farmer"), "What are the land ownership requirements for {scheme}?"),
    (("document", "certificate"), "What documents are required for {scheme}?"),
    (("reject",), "Why might my {scheme} application be rejected?"),
]


def extract_faq_from_tree(tree: DecisionTree, scheme_name: str) -> List[FAQItem]:
    """
    Build FAQ entries by walking every path from start to a result

    Each result node is visited once and contributes at most one entry;
    results with very short messages are skipped.

    Args:
        tree: Validated decision tree
        scheme_name: Scheme name used in the generated questions

    Returns:
        FAQ items in depth-first, option order
    """
    faqs: List[FAQItem] = []
    visited = set()
    stack = [(tree.start, [])]

    while stack:
        node_id, question_path = stack.pop()
        if node_id in visited:
            continue
        visited.add(node_id)

        node = tree.nodes.get(node_id)
        if node is None:
            continue

        if isinstance(node, ResultNode):
            faq = _build_faq_from_result(node, question_path, scheme_name)
            if faq:
                faqs.append(faq)
            continue

        path = question_path + [node.text]
        # Reversed so the first option is walked first
        for option in reversed(node.options):
            stack.append((option.next, path))

    return faqs


def _build_faq_from_result(
    result: ResultNode,
    question_path: Sequence[str],
    scheme_name: str
) -> Optional[FAQItem]:
    if len(result.message) < settings.faq_min_message_length:
        return None

    if result.status == ResultStatus.ELIGIBLE:
        question = _eligible_question(question_path, scheme_name)
    elif result.status == ResultStatus.INELIGIBLE:
        question = _ineligible_question(result, question_path, scheme_name)
    else:
        question = f"What if my {scheme_name} eligibility needs further verification?"

    answer_parts = [result.message]
    if result.fix:
        answer_parts.append(f"How to fix: {result.fix}")
    if result.next_steps:
        answer_parts.append(f"Next steps: {result.next_steps}")
    if result.documents:
        answer_parts.append(f"Documents needed: {', '.join(result.documents)}")
    answer_parts.append(DISCLAIMER)

    return FAQItem(question=question, answer=" ".join(answer_parts))


def _eligible_question(question_path: Sequence[str], scheme_name: str) -> str:
    if not question_path:
        return f"How do I know if I'm eligible for {scheme_name}?"

    last_question = question_path[-1].lower()
    if _mentions(last_question, "income"):
        return f"Am I eligible for {scheme_name} based on income criteria?"
    if _mentions(last_question, "age"):
        return f"What are the age requirements for {scheme_name}?"
    if _mentions(last_question, "resid"):
        return f"Do I need to be a {settings.home_state_name} resident for {scheme_name}?"
    return f"What happens if I meet all the criteria for {scheme_name}?"


def _mentions(text: str, term: str) -> bool:
    # Short terms like "sc" or "age" must start a word ("aged" counts, "must" and "page" do not)
    if len(term) <= 3:
        return re.search(rf"\b{re.escape(term)}[sd]?\b", text) is not None
    return term in text


def _ineligible_question(result: ResultNode, question_path: Sequence[str], scheme_name: str) -> str:
    reason = result.message.lower()
    state_name = settings.home_state_name

    for keywords, template in INELIGIBLE_TOPICS:
        terms = [keyword.format(state=state_name.lower()) for keyword in keywords]
        if any(_mentions(reason, term) for term in terms):
            return template.format(scheme=scheme_name, state=state_name)

    if question_path:
        return f'What if I answered "no" to "{question_path[-1]}" for {scheme_name}?'

    return f"Why might I not be eligible for {scheme_name}?"


def generate_faq_json_ld(faqs: List[FAQItem]) -> Dict[str, Any]:
    """schema.org FAQPage structured data for search engine rich results"""
    return {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": faq.question,
                "acceptedAnswer": {
                    "@type": "Answer",
                    "text": faq.answer
                }
            }
            for faq in faqs
        ]
    }
