"""Update rules and the per-chunk rule evaluator."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Union

from .chunks import ChunkContext, build_context

logger = logging.getLogger(__name__)


class DeleteChunk:
    """Marker returned by an update to remove its chunk from the output."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DELETE_CHUNK"

    def __bool__(self) -> bool:
        return False


DELETE_CHUNK = DeleteChunk()

UpdateResult = Union[str, DeleteChunk]
Constraint = Callable[[ChunkContext, str], bool]
Update = Callable[[ChunkContext, str], UpdateResult]


def is_deleted(result: Any) -> bool:
    """Return True if an update result is the deletion marker."""
    return isinstance(result, DeleteChunk)


@dataclass
class UpdateRule:
    """A constraint/update pair applied to each chunk."""

    constraint: Constraint
    update: Update

    def is_callable(self) -> bool:
        return callable(self.constraint) and callable(self.update)

    def matches(self, context: ChunkContext, separator: str) -> bool:
        """Evaluate the constraint; a rule with non-callable parts never matches."""
        if not self.is_callable():
            logger.debug("Skipping rule with non-callable constraint or update: %r", self)
            return False
        return bool(self.constraint(context, separator))

    def apply(self, context: ChunkContext, separator: str) -> UpdateResult:
        return self.update(context, separator)


@dataclass(frozen=True)
class SingleRule:
    """One rule, optionally stopping after the first matching chunk."""

    rule: UpdateRule
    bail_on_first_match: bool = False


@dataclass(frozen=True)
class MultipleRules:
    """An ordered list of rules whose updates compose per chunk."""

    rules: List[UpdateRule] = field(default_factory=list)


@dataclass(frozen=True)
class NoRules:
    """No usable rule shape: every chunk passes through unchanged."""


RuleSet = Union[SingleRule, MultipleRules, NoRules]


def _as_rule(item: Any) -> UpdateRule:
    if isinstance(item, UpdateRule):
        return item
    if isinstance(item, dict):
        return UpdateRule(constraint=item.get("constraint"), update=item.get("update"))
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return UpdateRule(constraint=item[0], update=item[1])
    return UpdateRule(
        constraint=getattr(item, "constraint", None),
        update=getattr(item, "update", None),
    )


def resolve_rules(
    constraint: Optional[Constraint] = None,
    update: Optional[Update] = None,
    updates: Optional[Sequence[Any]] = None,
    bail_on_first_match: bool = False,
) -> RuleSet:
    """
    Decide the rule mode for one rewrite.

    A list of ``updates`` selects multi-rule mode and takes precedence.
    Otherwise a ``constraint`` together with an ``update`` selects
    single-rule mode. Anything else is a pass-through.

    Items in ``updates`` may be UpdateRule instances, mappings with
    ``constraint``/``update`` keys, ``(constraint, update)`` pairs, or
    objects exposing those attributes.
    """
    if isinstance(updates, (list, tuple)):
        if bail_on_first_match:
            logger.debug("bail_on_first_match is ignored in multi-rule mode")
        return MultipleRules(rules=[_as_rule(item) for item in updates])
    if constraint is not None and update is not None:
        return SingleRule(
            rule=UpdateRule(constraint=constraint, update=update),
            bail_on_first_match=bail_on_first_match,
        )
    logger.debug("No constraint/update pair or updates list given; content passes through")
    return NoRules()


def _evaluate_single(chunks: Sequence[str], mode: SingleRule, separator: str) -> List[UpdateResult]:
    results: List[UpdateResult] = []
    bailed = False
    for index in range(len(chunks)):
        context = build_context(chunks, index)
        if bailed:
            results.append(context.chunk)
            continue
        if mode.rule.matches(context, separator):
            results.append(mode.rule.apply(context, separator))
            if mode.bail_on_first_match:
                logger.debug("First match at index %d; remaining chunks pass through", index)
                bailed = True
        else:
            results.append(context.chunk)
    return results


def _evaluate_multiple(chunks: Sequence[str], mode: MultipleRules, separator: str) -> List[UpdateResult]:
    results: List[UpdateResult] = []
    for index in range(len(chunks)):
        # Every rule sees the original chunk, not the running value.
        context = build_context(chunks, index)
        value: UpdateResult = context.chunk
        for rule in mode.rules:
            if rule.matches(context, separator):
                value = rule.apply(context, separator)
        results.append(value)
    return results


def evaluate(chunks: Sequence[str], rules: RuleSet, separator: str) -> List[UpdateResult]:
    """
    Apply a rule set to every chunk, in the order given.

    Returns a list the same length as ``chunks`` holding replacement text
    or DELETE_CHUNK for each position.
    """
    if isinstance(rules, SingleRule):
        return _evaluate_single(chunks, rules, separator)
    if isinstance(rules, MultipleRules):
        return _evaluate_multiple(chunks, rules, separator)
    return list(chunks)
