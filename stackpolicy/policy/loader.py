"""
Build the typed policy model from plain data.

Accepts the wire form CloudFormation uses (PascalCase keys), the
camelCase form used in code-defined policies, and snake_case. Keys are
normalized with pascal_case() before matching, so all three load the
same way.

Structural problems always raise ConfigurationError. Unknown keys are
handed to the active ModeManager: a warning in lenient mode, an error
in strict mode.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from stackpolicy.core.casing import pascal_case
from stackpolicy.core.exceptions import ConfigurationError, PolicyLoadError
from stackpolicy.core.modes import ModeManager, init_mode_from_env
from stackpolicy.policy.types import (
    ActionNotResourceStatement,
    ActionResourceStatement,
    ConditionResourceType,
    Condition,
    NotActionNotResourceStatement,
    NotActionResourceStatement,
    PRINCIPAL_WILDCARD,
    StackPolicyDocument,
    StackPolicyStatement,
    StringEqualsCondition,
    StringLikeCondition,
)


_STATEMENT_KEYS = frozenset({
    "Effect", "Action", "NotAction", "Principal",
    "Resource", "NotResource", "Condition",
})

_DOCUMENT_KEYS = frozenset({"Statement"})

# (action key, resource key) → statement class
_STATEMENT_SHAPES = {
    ("Action",    "Resource"):    ActionResourceStatement,
    ("Action",    "NotResource"): ActionNotResourceStatement,
    ("NotAction", "Resource"):    NotActionResourceStatement,
    ("NotAction", "NotResource"): NotActionNotResourceStatement,
}


def _normalize_keys(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"{what} must be a mapping",
            {"got": type(data).__name__},
        )
    normalized = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise ConfigurationError(f"{what} keys must be strings", {"key": repr(key)})
        name = pascal_case(key)
        if name in normalized:
            raise ConfigurationError(
                f"{what} has the same key in two spellings",
                {"key": name},
            )
        normalized[name] = value
    return normalized


def _report_unknown(fields: Dict[str, Any], known: frozenset, what: str,
                    mode: ModeManager) -> None:
    unknown = sorted(set(fields) - known)
    if unknown:
        mode.violation(
            f"Unknown {what} keys: {', '.join(unknown)}",
            {"unknown": ",".join(unknown)},
        )


def _pick_one(fields: Dict[str, Any], first: str, second: str) -> str:
    has_first = first in fields
    has_second = second in fields
    if has_first and has_second:
        raise ConfigurationError(
            f"Statement cannot have both {first} and {second}"
        )
    if not has_first and not has_second:
        raise ConfigurationError(
            f"Statement must have one of {first} or {second}"
        )
    return first if has_first else second


def condition_from_dict(data: Any, mode: Optional[ModeManager] = None) -> Condition:
    """
    Build a condition from {"StringEquals"|"StringLike": {"ResourceType": [...]}}.
    """
    mode = mode or init_mode_from_env()
    fields = _normalize_keys(data, "Condition")

    operators = [k for k in ("StringEquals", "StringLike") if k in fields]
    if len(operators) != 1:
        raise ConfigurationError(
            "Condition must have exactly one of StringEquals or StringLike",
            {"got": ",".join(sorted(fields)) or "nothing"},
        )
    _report_unknown(fields, frozenset({"StringEquals", "StringLike"}), "condition", mode)

    operator = operators[0]
    inner = _normalize_keys(fields[operator], operator)
    if "ResourceType" not in inner:
        raise ConfigurationError(f"{operator} must have ResourceType")
    _report_unknown(inner, frozenset({"ResourceType"}), operator, mode)

    resource_type = ConditionResourceType(resource_type=inner["ResourceType"])
    if operator == "StringEquals":
        return StringEqualsCondition(string_equals=resource_type)
    return StringLikeCondition(string_like=resource_type)


def statement_from_dict(data: Any, mode: Optional[ModeManager] = None) -> StackPolicyStatement:
    """Build the statement class matching the action and resource keys present."""
    mode = mode or init_mode_from_env()
    fields = _normalize_keys(data, "Statement")

    if "Effect" not in fields:
        raise ConfigurationError("Statement must have Effect")

    action_key = _pick_one(fields, "Action", "NotAction")
    resource_key = _pick_one(fields, "Resource", "NotResource")
    _report_unknown(fields, _STATEMENT_KEYS, "statement", mode)

    condition = None
    if fields.get("Condition") is not None:
        condition = condition_from_dict(fields["Condition"], mode)

    cls = _STATEMENT_SHAPES[(action_key, resource_key)]
    return cls(
        fields["Effect"],
        fields[action_key],
        fields[resource_key],
        principal=fields.get("Principal", PRINCIPAL_WILDCARD),
        condition=condition,
    )


def document_from_dict(data: Any, mode: Optional[ModeManager] = None) -> StackPolicyDocument:
    """Build a StackPolicyDocument from {"Statement": [...]}."""
    mode = mode or init_mode_from_env()
    fields = _normalize_keys(data, "Document")

    if "Statement" not in fields:
        raise ConfigurationError("Document must have Statement")
    _report_unknown(fields, _DOCUMENT_KEYS, "document", mode)

    raw_statements = fields["Statement"]
    # A single statement object is accepted, as CloudFormation does.
    if isinstance(raw_statements, Mapping):
        raw_statements = [raw_statements]
    if not isinstance(raw_statements, list):
        raise ConfigurationError(
            "Statement must be a list",
            {"got": type(raw_statements).__name__},
        )

    statements = []
    for index, raw in enumerate(raw_statements):
        try:
            statements.append(statement_from_dict(raw, mode))
        except ConfigurationError as exc:
            raise ConfigurationError(exc.message, {"index": index, **exc.details}) from exc

    return StackPolicyDocument(statement=statements)


def load_document(path: Union[str, Path],
                  mode: Optional[ModeManager] = None) -> StackPolicyDocument:
    """
    Load a stack policy document from a JSON or YAML file.

    Files ending in .json are parsed with json, everything else with
    yaml.safe_load. Every failure to read, decode or parse the file is
    raised as PolicyLoadError.
    """
    path = Path(path)
    if not path.exists():
        raise PolicyLoadError("Policy file not found", {"path": str(path)})

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except UnicodeDecodeError as exc:
        raise PolicyLoadError(
            "Policy file is not valid UTF-8",
            {"path": str(path), "position": exc.start},
        ) from exc
    except OSError as exc:
        raise PolicyLoadError(
            f"Could not read policy file: {exc.strerror or exc}",
            {"path": str(path)},
        ) from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise PolicyLoadError(
            f"Could not parse policy file: {exc}",
            {"path": str(path)},
        ) from exc

    if data is None:
        raise PolicyLoadError("Policy file is empty", {"path": str(path)})

    return document_from_dict(data, mode)
