"""Read filters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, Self

if TYPE_CHECKING:
    from bronto._types import MutablePayload


class FilterOperator(StrEnum):
    EQUAL_TO = "EqualTo"
    NOT_EQUAL_TO = "NotEqualTo"
    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"
    DOES_NOT_START_WITH = "DoesNotStartWith"
    DOES_NOT_END_WITH = "DoesNotEndWith"
    GREATER_THAN = "GreaterThan"
    LESS_THAN = "LessThan"
    GREATER_THAN_EQUAL_TO = "GreaterThanEqualTo"
    LESS_THAN_EQUAL_TO = "LessThanEqualTo"
    CONTAINS = "Contains"
    DOES_NOT_CONTAIN = "DoesNotContain"
    SAME_DAY = "SameDay"
    BEFORE = "Before"
    AFTER = "After"
    BEFORE_OR_SAME_DAY = "BeforeOrSameDay"
    AFTER_OR_SAME_DAY = "AfterOrSameDay"


@dataclass(frozen=True, slots=True)
class Criterion:
    operator: FilterOperator
    value: object

    def to_hash(self) -> MutablePayload:
        return {"operator": self.operator.value, "value": self.value}


@dataclass(slots=True)
class Filter:
    """Criteria for ``Resource.find``, combined with ``AND`` or ``OR``."""

    type: Literal["AND", "OR"] = "AND"
    criteria: dict[str, list[Criterion]] = field(default_factory=dict)
    ids: list[str] = field(default_factory=list)

    def add(
        self,
        field_name: str,
        operator: FilterOperator | str,
        value: object,
    ) -> Self:
        criterion = Criterion(operator=FilterOperator(operator), value=value)
        self.criteria.setdefault(field_name, []).append(criterion)
        return self

    def add_ids(self, *ids: str) -> Self:
        self.ids.extend(ids)
        return self

    def to_hash(self) -> MutablePayload:
        payload: MutablePayload = {"type": self.type}
        if self.ids:
            payload["id"] = list(self.ids)
        for name, criteria in self.criteria.items():
            payload[name] = [criterion.to_hash() for criterion in criteria]
        return payload
