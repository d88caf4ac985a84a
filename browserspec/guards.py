# browserspec/guards.py
"""
Guards decide whether an example runs on the active Implementation.

A guard is declared with a pytest marker whose keyword arguments are guard
conditions (browser, platform, headless, remote) plus an optional `reason`:

    @pytest.mark.exclude(browser="ie", reason="IE does not like switching windows")
    @pytest.mark.except_on({"browser": "safari"}, {"browser": "firefox", "headless": True})

Marker semantics:

- ``except_on``: expected to fail where the conditions match.
- ``only``: expected to fail where the conditions do not match.
- ``exclude``: skipped where the conditions match.
- ``exclusive``: skipped where the conditions do not match.
- ``flaky_on``: skipped where the conditions match.

Expected failures are strict: an example that passes anyway is reported as a failure.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from browserspec.exceptions import GuardError
from browserspec.implementation import GUARD_CONDITION_KEYS, Implementation

GUARD_TYPES = ("except_on", "only", "exclude", "exclusive", "flaky_on")

RUN = "run"
SKIP = "skip"
PENDING = "pending"

_SCALARS = (str, bool, int, float, type(None))


@dataclass(frozen=True)
class Guard:
    kind: str
    conditions: Dict[str, Any] = field(default_factory=dict)
    reason: Optional[str] = None
    nodeid: str = ""

    def __post_init__(self):
        if self.kind not in GUARD_TYPES:
            raise GuardError(f"unknown guard type {self.kind!r}; expected one of {GUARD_TYPES}")
        unknown = set(self.conditions) - set(GUARD_CONDITION_KEYS)
        if unknown:
            raise GuardError(
                f"unknown guard condition(s) {sorted(unknown)} on {self.kind!r}; "
                f"expected keys from {GUARD_CONDITION_KEYS}"
            )
        for key, value in self.conditions.items():
            values = value if isinstance(value, (list, tuple, set)) else [value]
            if not all(isinstance(v, _SCALARS) for v in values):
                raise GuardError(
                    f"{self.kind!r} condition {key!r} must be a value or a list of values, got {value!r}"
                )

    def message(self) -> str:
        details = f"Test guarded; Guarded by {{{self.kind}: {self.conditions}}};"
        if self.reason:
            details = f"{details} {self.reason}"
        return details


@dataclass(frozen=True)
class Disposition:
    action: str
    message: str = ""


def guards_from_marker(kind: str, args: Iterable[Any], kwargs: Dict[str, Any], nodeid: str = "") -> List[Guard]:
    """Turns one marker's arguments into guards.

    Each positional dict is a guard of its own; keyword conditions form one
    more guard. A bare marker guards unconditionally.

    :raises GuardError: If a positional argument is not a dict or a key is unknown.
    """
    kwargs = dict(kwargs)
    shared_reason = kwargs.pop("reason", None)
    guards = []
    args = list(args)
    for arg in args:
        if not isinstance(arg, dict):
            raise GuardError(f"{kind} guard conditions must be dicts, got {type(arg).__name__}")
        conditions = dict(arg)
        reason = conditions.pop("reason", shared_reason)
        guards.append(Guard(kind, conditions, reason, nodeid))
    if kwargs or not args:
        guards.append(Guard(kind, kwargs, shared_reason, nodeid))
    return guards


def disposition(guards: Iterable[Guard], imp: Implementation, skip_pending: bool = False) -> Disposition:
    """Decides whether an example runs, is skipped, or is expected to fail.

    Skipping guards take precedence over pending ones.
    """
    guards = list(guards)

    def matching(kind: str, expected: bool) -> Optional[Guard]:
        for guard in guards:
            if guard.kind == kind and imp.matches_guard(guard.conditions) is expected:
                return guard
        return None

    skipping = matching("exclude", True) or matching("exclusive", False) or matching("flaky_on", True)
    if skipping is not None:
        return Disposition(SKIP, skipping.message())

    pending = matching("except_on", True) or matching("only", False)
    if pending is not None:
        return Disposition(SKIP if skip_pending else PENDING, pending.message())

    return Disposition(RUN)


class GuardRegistry:
    """Keeps every guard declared in the collected suite for reporting."""

    def __init__(self):
        self.guards: List[Guard] = []

    def record(self, guards: Iterable[Guard]) -> None:
        self.guards.extend(guards)

    def clear(self) -> None:
        self.guards.clear()

    def report(self, imp: Implementation) -> str:
        matched = imp.matching_guards_in(self.guards)
        header = "browserspec guards for this implementation: "
        if not matched:
            return header + "none"
        lines = [header]
        for guard in matched:
            line = f"\t{guard.kind.ljust(20)}: {guard.conditions} {guard.nodeid}"
            if guard.reason:
                line = f"{line} ({guard.reason})"
            lines.append(line)
        return "\n".join(lines)


registry = GuardRegistry()
