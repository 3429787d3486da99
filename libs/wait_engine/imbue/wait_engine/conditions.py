"""Conditions evaluated by the wait engine, and the combinators that compose them.

A condition is anything that can be evaluated against a probe once per attempt. Plain
callables are accepted everywhere a condition is; their return value is interpreted by
truthiness (truthy means satisfied, None/False/empty means not yet).
"""

from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from typing import Any
from typing import TypeAlias

from pydantic import Field

from imbue.wait_engine.data_types import ConditionOutcome
from imbue.wait_engine.errors import WaitConfigurationError
from imbue.wait_engine.frozen_model import FrozenModel

ExceptionTypes: TypeAlias = tuple[type[Exception], ...]


class Condition(FrozenModel, ABC):
    """Something that can be evaluated against a probe to decide whether a wait is over."""

    description: str

    @abstractmethod
    def evaluate(self, probe: Any, ignored_exceptions: ExceptionTypes) -> ConditionOutcome:
        """Evaluate once against the probe.

        Exceptions that are instances of ignored_exceptions become transient outcomes.
        Any other exception propagates unchanged.
        """
        ...

    def __and__(self, other: "ConditionLike") -> "Condition":
        return and_(self, other)

    def __or__(self, other: "ConditionLike") -> "Condition":
        return or_(self, other)

    def __invert__(self) -> "Condition":
        return not_(self)

    def __str__(self) -> str:
        return self.description


ConditionLike: TypeAlias = Condition | Callable[[Any], Any]


class FunctionCondition(Condition):
    """Adapts a plain `probe -> value` function into a condition."""

    fn: Callable[[Any], Any]

    def evaluate(self, probe: Any, ignored_exceptions: ExceptionTypes) -> ConditionOutcome:
        try:
            value = self.fn(probe)
        except ignored_exceptions as e:
            return ConditionOutcome.transient(self.description, e)
        if value:
            return ConditionOutcome.success(self.description, value)
        return ConditionOutcome.not_yet(self.description, value)


class AllOfCondition(Condition):
    """Satisfied only when every sub-condition is satisfied on the same attempt.

    Sub-conditions are evaluated left to right and evaluation stops at the first one
    that is not satisfied. The success value is the list of sub-condition values.
    """

    conditions: tuple[Condition, ...] = Field(min_length=1)

    def evaluate(self, probe: Any, ignored_exceptions: ExceptionTypes) -> ConditionOutcome:
        values: list[Any] = []
        for condition in self.conditions:
            outcome = condition.evaluate(probe, ignored_exceptions)
            if not outcome.is_success:
                return ConditionOutcome.not_yet(self.description, outcome.value, outcome.error)
            values.append(outcome.value)
        return ConditionOutcome.success(self.description, values)


class AnyOfCondition(Condition):
    """Satisfied as soon as one sub-condition is satisfied; returns that sub-condition's value."""

    conditions: tuple[Condition, ...] = Field(min_length=1)

    def evaluate(self, probe: Any, ignored_exceptions: ExceptionTypes) -> ConditionOutcome:
        first, *rest = self.conditions
        outcome = first.evaluate(probe, ignored_exceptions)
        for condition in rest:
            if outcome.is_success:
                break
            outcome = condition.evaluate(probe, ignored_exceptions)
        if outcome.is_success:
            return ConditionOutcome.success(self.description, outcome.value)
        return ConditionOutcome.not_yet(self.description, outcome.value, outcome.error)


class NegatedCondition(Condition):
    """Satisfied when the wrapped condition is not, and vice versa.

    Transient failures of the wrapped condition count as 'not satisfied' and so make the
    negation succeed. Fatal exceptions are not caught.
    """

    condition: Condition

    def evaluate(self, probe: Any, ignored_exceptions: ExceptionTypes) -> ConditionOutcome:
        outcome = self.condition.evaluate(probe, ignored_exceptions)
        if outcome.is_success:
            return ConditionOutcome.not_yet(self.description, outcome.value)
        return ConditionOutcome.success(self.description, True)


def _describe_callable(fn: Callable[..., Any]) -> str:
    name = getattr(fn, "__name__", None)
    if name is None:
        return repr(fn)
    return name


def as_condition(condition: ConditionLike, description: str | None = None) -> Condition:
    """Normalize a condition or plain callable into a Condition."""
    if isinstance(condition, Condition):
        if description is None:
            return condition
        return condition.model_copy(update={"description": description})
    if not callable(condition):
        raise WaitConfigurationError(f"Expected a condition or callable, got {condition!r}")
    return FunctionCondition(description=description or _describe_callable(condition), fn=condition)


def _as_conditions(conditions: tuple[ConditionLike, ...], combinator_name: str) -> tuple[Condition, ...]:
    if not conditions:
        raise WaitConfigurationError(f"{combinator_name} requires at least one condition")
    return tuple(as_condition(c) for c in conditions)


def and_(*conditions: ConditionLike, description: str | None = None) -> Condition:
    normalized = _as_conditions(conditions, "and_")
    return AllOfCondition(
        description=description or "all of (" + ", ".join(c.description for c in normalized) + ")",
        conditions=normalized,
    )


def or_(*conditions: ConditionLike, description: str | None = None) -> Condition:
    normalized = _as_conditions(conditions, "or_")
    return AnyOfCondition(
        description=description or "any of (" + ", ".join(c.description for c in normalized) + ")",
        conditions=normalized,
    )


def not_(condition: ConditionLike, description: str | None = None) -> Condition:
    normalized = as_condition(condition)
    # Double negation collapses back to the original condition (and its original value).
    if isinstance(normalized, NegatedCondition) and description is None:
        return normalized.condition
    return NegatedCondition(description=description or f"not ({normalized.description})", condition=normalized)
