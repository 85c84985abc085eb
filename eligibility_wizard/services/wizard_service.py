"""
Wizard service: loads validated trees and applies engine operations for API callers
"""
import logging
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from ..config import settings
from ..models.completion import CompletionRecord
from ..models.faq import FAQResponse
from ..models.tree import DecisionTree, DecisionTreeRow
from ..models.validation import TreeValidationResult
from ..models.wizard import SessionSummary, WizardState, WizardStepResponse
from ..rules_engine import (
    TraversalError,
    TraversalErrorKind,
    answer_question,
    build_completion_record,
    extract_faq_from_tree,
    generate_faq_json_ld,
    get_answered_option,
    get_current_question,
    get_progress,
    get_session_summary,
    go_back,
    initialize_wizard,
    parse_decision_tree,
    reset_wizard,
    validate_decision_tree,
)
from .mongo_service import mongo_service

logger = logging.getLogger(__name__)


class TreeNotFoundError(LookupError):
    """No stored decision tree matches the request"""


class WizardService:
    """Service for running wizard sessions against stored decision trees.

    Sessions are not stored: callers send their current WizardState with every
    request and get the next one back. Validated trees are kept in a small LRU
    cache keyed by tree id, so a tree is validated once per load rather than
    on every transition.
    """

    def __init__(self, storage=None, cache_size: Optional[int] = None):
        self.storage = storage or mongo_service
        self.cache_size = cache_size or settings.tree_cache_size
        self._trees: "OrderedDict[str, DecisionTree]" = OrderedDict()

    def _remember(self, tree_id: str, tree: DecisionTree):
        self._trees[tree_id] = tree
        self._trees.move_to_end(tree_id)
        while len(self._trees) > self.cache_size:
            self._trees.popitem(last=False)

    def forget(self, tree_id: str):
        """Drop a cached tree, e.g. after a new version is published"""
        self._trees.pop(tree_id, None)

    @staticmethod
    def _parse_shape(row: DecisionTreeRow) -> DecisionTree:
        try:
            return DecisionTree.model_validate(row.tree)
        except ValidationError as e:
            logger.warning(f"Decision tree {row.id} for scheme {row.scheme_id} failed to parse: {e}")
            raise TraversalError(
                f"Decision tree for {row.scheme_id} is invalid. Please contact support.",
                TraversalErrorKind.INVALID_TREE
            )

    async def get_tree(self, tree_id: str) -> DecisionTree:
        """
        Get a validated tree by ID, from cache or storage

        Raises:
            TreeNotFoundError: if no such tree is stored
            TraversalError: INVALID_TREE if the stored tree fails validation
        """
        tree = self._trees.get(tree_id)
        if tree is not None:
            self._trees.move_to_end(tree_id)
            return tree

        row = await self.storage.get_tree(tree_id)
        if row is None:
            raise TreeNotFoundError(f"Decision tree not found: {tree_id}")

        try:
            tree = parse_decision_tree(row.tree)
        except TraversalError:
            logger.warning(f"Stored decision tree {tree_id} for scheme {row.scheme_id} is invalid")
            raise

        self._remember(tree_id, tree)
        logger.info(f"Loaded decision tree {tree_id} for scheme {row.scheme_id}")
        return tree

    async def _load_active(self, scheme_id: str) -> Tuple[DecisionTreeRow, DecisionTree]:
        row = await self.storage.load_active_tree(scheme_id)
        if row is None:
            raise TreeNotFoundError(f"No active decision tree found for scheme: {scheme_id}")
        return row, self._parse_shape(row)

    @staticmethod
    def _step(tree: DecisionTree, state: WizardState) -> WizardStepResponse:
        return WizardStepResponse(
            state=state,
            question=get_current_question(tree, state),
            progress=get_progress(tree, state)
        )

    # Session operations
    async def start(self, scheme_id: str) -> WizardStepResponse:
        """Start a session on the scheme's active tree"""
        row, tree = await self._load_active(scheme_id)

        try:
            state = initialize_wizard(scheme_id, row.id, tree)
        except TraversalError:
            logger.warning(f"Refusing to start wizard for {scheme_id}: tree {row.id} is invalid")
            raise

        self._remember(row.id, tree)
        logger.info(f"Wizard started for scheme {scheme_id} on tree {row.id} (v{row.version})")
        return self._step(tree, state)

    async def _session_tree(self, state: WizardState) -> DecisionTree:
        """Tree for a client-held state, with its history checked against the tree"""
        tree = await self.get_tree(state.tree_id)
        for entry in state.history:
            get_answered_option(tree, entry)
        return tree

    async def answer(self, state: WizardState, option_index: int) -> WizardStepResponse:
        tree = await self._session_tree(state)
        return self._step(tree, answer_question(tree, state, option_index))

    async def back(self, state: WizardState) -> WizardStepResponse:
        tree = await self._session_tree(state)
        return self._step(tree, go_back(tree, state))

    async def reset(self, state: WizardState) -> WizardStepResponse:
        tree = await self.get_tree(state.tree_id)
        return self._step(tree, reset_wizard(tree, state))

    async def summary(self, state: WizardState, language: str = "en") -> SessionSummary:
        tree = await self.get_tree(state.tree_id)
        return get_session_summary(tree, state, language)

    # Analytics
    async def record_completion(self, state: WizardState, language: str = "en") -> Dict[str, bool]:
        """
        Record a finished session for analytics

        Failures are logged and never reach the caller: analytics must not
        change what the user sees.
        """
        try:
            tree = await self.get_tree(state.tree_id)
            record = build_completion_record(tree, state, language)
        except (TreeNotFoundError, TraversalError, ValueError, KeyError, IndexError, AttributeError) as e:
            logger.warning(f"Skipping completion record for tree {state.tree_id}: {e}")
            return {"ok": True}

        await self.store_completion(record)
        return {"ok": True}

    async def store_completion(self, record: CompletionRecord) -> Dict[str, bool]:
        """Store a completion record built by the client; always succeeds"""
        stored = await self.storage.record_completion(record)
        if not stored:
            logger.warning(f"Completion for scheme {record.scheme_id} was not stored")
        return {"ok": True}

    # Read-only consumers
    async def faq(self, scheme_id: str) -> FAQResponse:
        """FAQ entries generated from the scheme's active tree"""
        row, tree = await self._load_active(scheme_id)
        report = validate_decision_tree(tree)
        if not report.valid:
            raise TraversalError(
                f"Decision tree for {scheme_id} is invalid. Please contact support.",
                TraversalErrorKind.INVALID_TREE
            )

        scheme_name = await self.storage.get_scheme_name(scheme_id) or scheme_id
        items = extract_faq_from_tree(tree, scheme_name)
        return FAQResponse(
            scheme_id=scheme_id,
            items=items,
            json_ld=generate_faq_json_ld(items)
        )

    @staticmethod
    def validate_tree(candidate: Any) -> TreeValidationResult:
        return validate_decision_tree(candidate)


# Global wizard service instance
wizard_service = WizardService()
