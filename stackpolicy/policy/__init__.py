"""
stackpolicy Policy Model

Components:
- types:        Statement shapes, conditions, document container
- loader:       Builds the model from dicts and JSON/YAML files
- stack_policy: StackPolicy node that renders the CloudFormation wire form
"""

from stackpolicy.policy.types import (
    Action,
    ActionNotResourceStatement,
    ActionResourceStatement,
    ActionValue,
    Condition,
    ConditionResourceType,
    Effect,
    NotActionNotResourceStatement,
    NotActionResourceStatement,
    PRINCIPAL_WILDCARD,
    STATEMENT_TYPES,
    StackPolicyDocument,
    StackPolicyStatement,
    StringEqualsCondition,
    StringLikeCondition,
)
from stackpolicy.policy.loader import (
    condition_from_dict,
    document_from_dict,
    load_document,
    statement_from_dict,
)
from stackpolicy.policy.stack_policy import StackPolicy

__all__ = [
    "Action",
    "ActionNotResourceStatement",
    "ActionResourceStatement",
    "ActionValue",
    "Condition",
    "ConditionResourceType",
    "Effect",
    "NotActionNotResourceStatement",
    "NotActionResourceStatement",
    "PRINCIPAL_WILDCARD",
    "STATEMENT_TYPES",
    "StackPolicy",
    "StackPolicyDocument",
    "StackPolicyStatement",
    "StringEqualsCondition",
    "StringLikeCondition",
    "condition_from_dict",
    "document_from_dict",
    "load_document",
    "statement_from_dict",
]
