"""Loading rewrite rules from YAML rule files."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..core.chunks import ChunkContext
from ..core.rules import DELETE_CHUNK, MultipleRules, RuleSet, SingleRule, UpdateRule
from .file_handler import FileHandler


class RuleFileError(ValueError):
    """Raised when a rule file cannot be turned into rules."""


FLAG_OPTIONS = ("remove_empty", "debug", "invert", "preserve_inverted_order")


def _check_flag(data: Dict[str, Any], key: str) -> None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise RuleFileError(f"'{key}' must be true or false, got {value!r}")


def _regex(value: Any) -> "re.Pattern":
    try:
        return re.compile(str(value))
    except re.error as e:
        raise RuleFileError(f"Invalid pattern {value!r}: {e}") from e


def _match_pattern(value):
    compiled = _regex(value)
    return lambda ctx: compiled.search(ctx.chunk) is not None


# Each factory takes the YAML value and returns a predicate over the chunk context.
MATCHERS: Dict[str, Callable[[Any], Callable[[ChunkContext], bool]]] = {
    "equals": lambda v: lambda ctx: ctx.chunk == str(v),
    "contains": lambda v: lambda ctx: str(v) in ctx.chunk,
    "startswith": lambda v: lambda ctx: ctx.chunk.startswith(str(v)),
    "endswith": lambda v: lambda ctx: ctx.chunk.endswith(str(v)),
    "pattern": _match_pattern,
    "blank": lambda v: lambda ctx: (ctx.chunk.strip() == "") == bool(v),
    "always": lambda v: lambda ctx: bool(v),
    "index": lambda v: lambda ctx: ctx.index == int(v),
    "prev_contains": lambda v: lambda ctx: ctx.prev_chunk is not None and str(v) in ctx.prev_chunk,
    "next_contains": lambda v: lambda ctx: ctx.next_chunk is not None and str(v) in ctx.next_chunk,
}


def _action_sub(value):
    if not isinstance(value, dict) or "pattern" not in value:
        raise RuleFileError("'sub' action needs a mapping with 'pattern' and 'repl'")
    compiled = _regex(value["pattern"])
    repl = str(value.get("repl", ""))
    return lambda ctx: compiled.sub(repl, ctx.chunk)


ACTIONS: Dict[str, Callable[[Any], Callable[[ChunkContext], Any]]] = {
    "replace": lambda v: lambda ctx: str(v),
    "prefix": lambda v: lambda ctx: f"{v}{ctx.chunk}",
    "suffix": lambda v: lambda ctx: f"{ctx.chunk}{v}",
    "upper": lambda v: lambda ctx: ctx.chunk.upper(),
    "lower": lambda v: lambda ctx: ctx.chunk.lower(),
    "strip": lambda v: lambda ctx: ctx.chunk.strip(),
    "sub": _action_sub,
    "delete": lambda v: lambda ctx: DELETE_CHUNK,
}


@dataclass
class LoadedRules:
    """Rules and options read from a rule file."""

    rules: RuleSet
    options: Dict[str, Any] = field(default_factory=dict)


class RuleLoader:
    """
    Builds rule sets from YAML.

    A rule file holds either a single ``rule`` (optionally with
    ``bail_on_first_match``) or an ordered ``rules`` list, plus an optional
    ``options`` mapping of rewrite options::

        options:
          separator: "\\n"
          remove_empty: true
        rules:
          - match: {blank: true}
            action: {delete: true}
          - match: {startswith: "#", next_contains: "TODO"}
            action: {prefix: "> "}

    All keys under ``match`` must hold for the rule to apply. ``action``
    takes exactly one key.
    """

    def __init__(self, file_handler: Optional[FileHandler] = None):
        self.file_handler = file_handler or FileHandler()

    def load(self, file_path: Union[str, Path]) -> LoadedRules:
        """Load rules from a YAML file."""
        return self.from_dict(self.file_handler.read_yaml(file_path))

    def from_dict(self, data: Any) -> LoadedRules:
        """Build rules from an already parsed rule file."""
        if not isinstance(data, dict):
            raise RuleFileError("Rule file must contain a mapping")

        options = data.get("options") or {}
        if not isinstance(options, dict):
            raise RuleFileError("'options' must be a mapping")
        for key in FLAG_OPTIONS:
            _check_flag(options, key)
        _check_flag(data, "bail_on_first_match")

        if "rules" in data and "rule" in data:
            raise RuleFileError("Use either 'rule' or 'rules', not both")

        if "rules" in data:
            items = data["rules"]
            if not isinstance(items, list):
                raise RuleFileError("'rules' must be a list")
            if data.get("bail_on_first_match"):
                raise RuleFileError("'bail_on_first_match' only applies to a single 'rule'")
            rules = MultipleRules(rules=[self.build_rule(item) for item in items])
        elif "rule" in data:
            rules = SingleRule(
                rule=self.build_rule(data["rule"]),
                bail_on_first_match=bool(data.get("bail_on_first_match", False)),
            )
        else:
            raise RuleFileError("Rule file needs a 'rule' or 'rules' entry")

        return LoadedRules(rules=rules, options=options)

    def build_rule(self, item: Any) -> UpdateRule:
        """Build an UpdateRule from one ``{match, action}`` mapping."""
        if not isinstance(item, dict):
            raise RuleFileError(f"Rule must be a mapping, got {item!r}")
        predicates = self._build_predicates(item.get("match") or {"always": True})
        transform = self._build_action(item.get("action"))

        def constraint(context: ChunkContext, separator: str = "\n") -> bool:
            return all(predicate(context) for predicate in predicates)

        def update(context: ChunkContext, separator: str = "\n"):
            return transform(context)

        return UpdateRule(constraint=constraint, update=update)

    def _build_predicates(self, match: Any) -> List[Callable[[ChunkContext], bool]]:
        if not isinstance(match, dict) or not match:
            raise RuleFileError(f"'match' must be a non-empty mapping, got {match!r}")
        unknown = set(match) - set(MATCHERS)
        if unknown:
            raise RuleFileError(f"Unknown match keys: {', '.join(sorted(unknown))}")
        return [MATCHERS[key](value) for key, value in match.items()]

    def _build_action(self, action: Any) -> Callable[[ChunkContext], Any]:
        if not isinstance(action, dict) or len(action) != 1:
            raise RuleFileError(f"'action' must be a mapping with exactly one key, got {action!r}")
        key, value = next(iter(action.items()))
        if key not in ACTIONS:
            raise RuleFileError(f"Unknown action: {key}")
        return ACTIONS[key](value)
