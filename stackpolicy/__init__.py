"""
stackpolicy/__init__.py

stackpolicy: CloudFormation Stack Policy Documents

Build a stack policy as typed Python objects, attach it to a scope, and
render the PascalCase JSON body CloudFormation expects.

    root   = Scope(None, "MyStack")
    policy = StackPolicy(root, "StackPolicy", StackPolicyDocument(statement=[
        ActionResourceStatement(Effect.DENY, ActionValue.REPLACE, ["MyBucket", "MyTable"]),
    ]))
    policy.to_cloudformation()
    # {"Statement": [{"Effect": "Deny", "Action": "Update:Replace",
    #                 "Principal": "*", "Resource": ["MyBucket", "MyTable"]}]}
"""

__version__ = "0.1.0"

from stackpolicy.core.casing import (
    ABSENT,
    capitalize_key,
    capitalize_property_names,
    pascal_case,
)
from stackpolicy.core.canonical import canonical_hash, canonicalize
from stackpolicy.core.exceptions import (
    ConfigurationError,
    PolicyLoadError,
    ScopeError,
    StackPolicyError,
)
from stackpolicy.core.modes import (
    PolicyMode,
    init_lenient_mode,
    init_mode_from_env,
    init_strict_mode,
)
from stackpolicy.core.scope import Lazy, Scope
from stackpolicy.policy import (
    ActionNotResourceStatement,
    ActionResourceStatement,
    ActionValue,
    ConditionResourceType,
    Effect,
    NotActionNotResourceStatement,
    NotActionResourceStatement,
    PRINCIPAL_WILDCARD,
    StackPolicy,
    StackPolicyDocument,
    StringEqualsCondition,
    StringLikeCondition,
    document_from_dict,
    load_document,
)

__all__ = [
    # Model
    "ActionNotResourceStatement",
    "ActionResourceStatement",
    "ActionValue",
    "ConditionResourceType",
    "Effect",
    "NotActionNotResourceStatement",
    "NotActionResourceStatement",
    "StackPolicyDocument",
    "StringEqualsCondition",
    "StringLikeCondition",
    # Node and scope
    "StackPolicy",
    "Scope",
    "Lazy",
    # Serializer
    "ABSENT",
    "capitalize_property_names",
    "capitalize_key",
    "pascal_case",
    "canonicalize",
    "canonical_hash",
    # Loading and modes
    "document_from_dict",
    "load_document",
    "PolicyMode",
    "init_lenient_mode",
    "init_strict_mode",
    "init_mode_from_env",
    # Errors
    "StackPolicyError",
    "ConfigurationError",
    "ScopeError",
    "PolicyLoadError",
    # Constants
    "PRINCIPAL_WILDCARD",
]
