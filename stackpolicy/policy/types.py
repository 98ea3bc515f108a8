"""
Stack policy document model.

A stack policy is a list of statements. Each statement is one of four
shapes, chosen by which action field and which resource field it uses:

    ActionResourceStatement        action      + resource
    ActionNotResourceStatement     action      + not_resource
    NotActionResourceStatement     not_action  + resource
    NotActionNotResourceStatement  not_action  + not_resource

The class picks the shape, so a statement can never carry both action
and not_action, or both resource and not_resource.

principal and condition are keyword-only. principal sits between the
action and resource fields and condition comes last, so the wire form
reads Effect, Action, Principal, Resource, Condition.

All classes are frozen. Invalid literals are rejected in __post_init__
with ConfigurationError, never at serialization time.

@see https://docs.aws.amazon.com/AWSCloudFormation/latest/UserGuide/protect-stack-resources.html
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from stackpolicy.core.exceptions import ConfigurationError


class Effect(str, Enum):
    """Whether the listed actions are allowed or denied."""
    ALLOW = "Allow"
    DENY  = "Deny"


class ActionValue(str, Enum):
    """Update actions a statement can allow or deny."""
    MODIFY  = "Update:Modify"
    REPLACE = "Update:Replace"
    DELETE  = "Update:Delete"
    ALL     = "Update:*"


# The only principal CloudFormation accepts in a stack policy.
PRINCIPAL_WILDCARD = "*"

Action = Union[ActionValue, Tuple[ActionValue, ...]]
ResourceIds = Union[str, Tuple[str, ...]]


# ─────────────────────────────────────────────────────────────
# Coercion helpers
# ─────────────────────────────────────────────────────────────

def _coerce_effect(value) -> Effect:
    try:
        return Effect(value)
    except (ValueError, TypeError):
        raise ConfigurationError(
            f"Invalid effect {value!r}",
            {"allowed": "|".join(e.value for e in Effect)},
        ) from None


def _coerce_action_value(value, field_name: str) -> ActionValue:
    try:
        return ActionValue(value)
    except (ValueError, TypeError):
        raise ConfigurationError(
            f"Invalid {field_name} {value!r}",
            {"allowed": "|".join(a.value for a in ActionValue)},
        ) from None


def _coerce_action(value) -> Action:
    if isinstance(value, (list, tuple)):
        return tuple(_coerce_action_value(v, "action") for v in value)
    return _coerce_action_value(value, "action")


def _coerce_resource(value, field_name: str) -> ResourceIds:
    # Shape is preserved: one id stays a string, a sequence stays a sequence.
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ConfigurationError(
        f"{field_name} must be a string or a sequence of strings",
        {"got": type(value).__name__},
    )


# ─────────────────────────────────────────────────────────────
# Conditions
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ConditionResourceType:
    """Resource types a condition applies to, e.g. AWS::RDS::DBInstance."""
    resource_type: Tuple[str, ...]

    def __post_init__(self):
        value = self.resource_type
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise ConfigurationError(
                "resource_type must be a sequence of strings, not a bare value",
                {"got": type(value).__name__},
            )
        if not all(isinstance(v, str) for v in value):
            raise ConfigurationError("resource_type entries must be strings")
        object.__setattr__(self, "resource_type", tuple(value))


@dataclass(frozen=True)
class StringEqualsCondition:
    """Exact match on resource type."""
    string_equals: ConditionResourceType

    def __post_init__(self):
        if not isinstance(self.string_equals, ConditionResourceType):
            raise ConfigurationError(
                "string_equals must be a ConditionResourceType",
                {"got": type(self.string_equals).__name__},
            )


@dataclass(frozen=True)
class StringLikeCondition:
    """Wildcard match on resource type. Required when using wildcards."""
    string_like: ConditionResourceType

    def __post_init__(self):
        if not isinstance(self.string_like, ConditionResourceType):
            raise ConfigurationError(
                "string_like must be a ConditionResourceType",
                {"got": type(self.string_like).__name__},
            )


Condition = Union[StringEqualsCondition, StringLikeCondition]

CONDITION_TYPES = (StringEqualsCondition, StringLikeCondition)


# ─────────────────────────────────────────────────────────────
# Statements
# ─────────────────────────────────────────────────────────────

class _StatementChecks:
    """Validation shared by every statement shape."""

    def _check_common(self) -> None:
        object.__setattr__(self, "effect", _coerce_effect(self.effect))

        if self.principal != PRINCIPAL_WILDCARD:
            raise ConfigurationError(
                f"Invalid principal {self.principal!r}",
                {"allowed": PRINCIPAL_WILDCARD},
            )

        if self.condition is not None and not isinstance(self.condition, CONDITION_TYPES):
            raise ConfigurationError(
                "condition must be a StringEqualsCondition or StringLikeCondition",
                {"got": type(self.condition).__name__},
            )


@dataclass(frozen=True)
class ActionResourceStatement(_StatementChecks):
    """Allow or deny `action` on `resource`."""
    effect:    Effect
    action:    Action
    principal: str = field(default=PRINCIPAL_WILDCARD, kw_only=True)
    resource:  ResourceIds
    condition: Optional[Condition] = field(default=None, kw_only=True)

    def __post_init__(self):
        self._check_common()
        object.__setattr__(self, "action", _coerce_action(self.action))
        object.__setattr__(self, "resource", _coerce_resource(self.resource, "resource"))


@dataclass(frozen=True)
class ActionNotResourceStatement(_StatementChecks):
    """Allow or deny `action` on every resource except `not_resource`."""
    effect:       Effect
    action:       Action
    principal:    str = field(default=PRINCIPAL_WILDCARD, kw_only=True)
    not_resource: ResourceIds
    condition:    Optional[Condition] = field(default=None, kw_only=True)

    def __post_init__(self):
        self._check_common()
        object.__setattr__(self, "action", _coerce_action(self.action))
        object.__setattr__(
            self, "not_resource", _coerce_resource(self.not_resource, "not_resource")
        )


@dataclass(frozen=True)
class NotActionResourceStatement(_StatementChecks):
    """Allow or deny every action except `not_action` on `resource`."""
    effect:     Effect
    not_action: ActionValue
    principal:  str = field(default=PRINCIPAL_WILDCARD, kw_only=True)
    resource:   ResourceIds
    condition:  Optional[Condition] = field(default=None, kw_only=True)

    def __post_init__(self):
        self._check_common()
        object.__setattr__(
            self, "not_action", _coerce_action_value(self.not_action, "not_action")
        )
        object.__setattr__(self, "resource", _coerce_resource(self.resource, "resource"))


@dataclass(frozen=True)
class NotActionNotResourceStatement(_StatementChecks):
    """Allow or deny every action except `not_action` on every resource except `not_resource`."""
    effect:       Effect
    not_action:   ActionValue
    principal:    str = field(default=PRINCIPAL_WILDCARD, kw_only=True)
    not_resource: ResourceIds
    condition:    Optional[Condition] = field(default=None, kw_only=True)

    def __post_init__(self):
        self._check_common()
        object.__setattr__(
            self, "not_action", _coerce_action_value(self.not_action, "not_action")
        )
        object.__setattr__(
            self, "not_resource", _coerce_resource(self.not_resource, "not_resource")
        )


StackPolicyStatement = Union[
    ActionResourceStatement,
    ActionNotResourceStatement,
    NotActionResourceStatement,
    NotActionNotResourceStatement,
]

STATEMENT_TYPES = (
    ActionResourceStatement,
    ActionNotResourceStatement,
    NotActionResourceStatement,
    NotActionNotResourceStatement,
)


# ─────────────────────────────────────────────────────────────
# Document
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class StackPolicyDocument:
    """
    An ordered list of statements.

    Order is kept exactly as given: CloudFormation evaluates statements
    in document order.
    """
    statement: Tuple[StackPolicyStatement, ...]

    def __post_init__(self):
        if isinstance(self.statement, (str, bytes)) or not isinstance(
            self.statement, Sequence
        ):
            raise ConfigurationError(
                "statement must be a sequence of statements",
                {"got": type(self.statement).__name__},
            )
        for index, stmt in enumerate(self.statement):
            if not isinstance(stmt, STATEMENT_TYPES):
                raise ConfigurationError(
                    "statement entries must be stack policy statements; "
                    "use stackpolicy.policy.loader for plain dicts",
                    {"index": index, "got": type(stmt).__name__},
                )
        object.__setattr__(self, "statement", tuple(self.statement))
