"""
tests/test_loader.py

Loader tests: dict → typed model, file loading, and mode handling of
unknown keys.
"""

import json

import pytest
import yaml

from stackpolicy.core.exceptions import ConfigurationError, PolicyLoadError
from stackpolicy.core.modes import init_lenient_mode, init_strict_mode
from stackpolicy.core.scope import Scope
from stackpolicy.policy.loader import (
    condition_from_dict,
    document_from_dict,
    load_document,
    statement_from_dict,
)
from stackpolicy.policy.stack_policy import StackPolicy
from stackpolicy.policy.types import (
    ActionNotResourceStatement,
    ActionResourceStatement,
    ActionValue,
    Effect,
    NotActionNotResourceStatement,
    NotActionResourceStatement,
    StringEqualsCondition,
    StringLikeCondition,
)


WIRE_DOCUMENT = {
    "Statement": [
        {
            "Effect": "Allow",
            "Action": "Update:*",
            "Principal": "*",
            "Resource": "*",
        },
        {
            "Effect": "Deny",
            "Action": ["Update:Replace", "Update:Delete"],
            "Principal": "*",
            "Resource": ["LogicalResourceId/ProductionDatabase"],
        },
        {
            "Effect": "Deny",
            "NotAction": "Update:Modify",
            "Principal": "*",
            "NotResource": "LogicalResourceId/Queue",
            "Condition": {"StringLike": {"ResourceType": ["AWS::EC2::*", "AWS::RDS::*"]}},
        },
    ]
}


@pytest.fixture
def lenient():
    return init_lenient_mode()


@pytest.fixture
def strict():
    return init_strict_mode()


# ─────────────────────────────────────────────────────────────
# Statements
# ─────────────────────────────────────────────────────────────

class TestStatementFromDict:

    @pytest.mark.parametrize("action_key, resource_key, expected", [
        ("Action", "Resource", ActionResourceStatement),
        ("Action", "NotResource", ActionNotResourceStatement),
        ("NotAction", "Resource", NotActionResourceStatement),
        ("NotAction", "NotResource", NotActionNotResourceStatement),
    ])
    def test_shape_picked_from_keys(self, lenient, action_key, resource_key, expected):
        stmt = statement_from_dict({
            "Effect": "Deny",
            action_key: "Update:Delete",
            resource_key: "MyDb",
        }, lenient)
        assert type(stmt) is expected

    @pytest.mark.parametrize("data", [
        {"effect": "Deny", "notAction": "Update:Delete", "notResource": "MyDb"},
        {"effect": "Deny", "not_action": "Update:Delete", "not_resource": "MyDb"},
        {"Effect": "Deny", "NotAction": "Update:Delete", "NotResource": "MyDb"},
    ])
    def test_any_key_casing(self, lenient, data):
        stmt = statement_from_dict(data, lenient)
        assert stmt == NotActionNotResourceStatement(Effect.DENY, ActionValue.DELETE, "MyDb")

    def test_principal_defaults_to_wildcard(self, lenient):
        stmt = statement_from_dict({"Effect": "Allow", "Action": "Update:*", "Resource": "*"}, lenient)
        assert stmt.principal == "*"

    def test_both_actions_rejected(self, lenient):
        with pytest.raises(ConfigurationError, match="both Action and NotAction"):
            statement_from_dict({
                "Effect": "Deny", "Action": "Update:*", "NotAction": "Update:Delete",
                "Resource": "*",
            }, lenient)

    def test_both_resources_rejected(self, lenient):
        with pytest.raises(ConfigurationError, match="both Resource and NotResource"):
            statement_from_dict({
                "Effect": "Deny", "Action": "Update:*",
                "Resource": "*", "NotResource": "Db",
            }, lenient)

    def test_missing_resource_rejected(self, lenient):
        with pytest.raises(ConfigurationError, match="one of Resource or NotResource"):
            statement_from_dict({"Effect": "Deny", "Action": "Update:*"}, lenient)

    def test_missing_effect_rejected(self, lenient):
        with pytest.raises(ConfigurationError, match="Effect"):
            statement_from_dict({"Action": "Update:*", "Resource": "*"}, lenient)

    def test_invalid_effect_rejected(self, lenient):
        with pytest.raises(ConfigurationError, match="Invalid effect"):
            statement_from_dict({"Effect": "Block", "Action": "Update:*", "Resource": "*"}, lenient)

    def test_same_key_two_spellings_rejected(self, lenient):
        with pytest.raises(ConfigurationError):
            statement_from_dict({
                "effect": "Allow", "Effect": "Deny", "Action": "Update:*", "Resource": "*",
            }, lenient)

    def test_non_mapping_rejected(self, lenient):
        with pytest.raises(ConfigurationError):
            statement_from_dict(["Effect", "Allow"], lenient)

    def test_null_condition_treated_as_absent(self, lenient):
        stmt = statement_from_dict({
            "Effect": "Allow", "Action": "Update:*", "Resource": "*", "Condition": None,
        }, lenient)
        assert stmt.condition is None


# ─────────────────────────────────────────────────────────────
# Conditions
# ─────────────────────────────────────────────────────────────

class TestConditionFromDict:

    def test_string_equals(self, lenient):
        cond = condition_from_dict({"StringEquals": {"ResourceType": ["AWS::RDS::DBInstance"]}}, lenient)
        assert isinstance(cond, StringEqualsCondition)
        assert cond.string_equals.resource_type == ("AWS::RDS::DBInstance",)

    def test_string_like_camel_case(self, lenient):
        cond = condition_from_dict({"stringLike": {"resourceType": ["AWS::EC2::*"]}}, lenient)
        assert isinstance(cond, StringLikeCondition)

    def test_both_operators_rejected(self, lenient):
        with pytest.raises(ConfigurationError, match="exactly one"):
            condition_from_dict({
                "StringEquals": {"ResourceType": ["A"]},
                "StringLike": {"ResourceType": ["B"]},
            }, lenient)

    def test_no_operator_rejected(self, lenient):
        with pytest.raises(ConfigurationError, match="exactly one"):
            condition_from_dict({}, lenient)

    def test_missing_resource_type_rejected(self, lenient):
        with pytest.raises(ConfigurationError, match="ResourceType"):
            condition_from_dict({"StringLike": {}}, lenient)

    def test_bare_string_resource_type_rejected(self, lenient):
        with pytest.raises(ConfigurationError):
            condition_from_dict({"StringLike": {"ResourceType": "AWS::EC2::*"}}, lenient)


# ─────────────────────────────────────────────────────────────
# Documents
# ─────────────────────────────────────────────────────────────

class TestDocumentFromDict:

    def test_wire_document(self, lenient):
        doc = document_from_dict(WIRE_DOCUMENT, lenient)
        assert [type(s) for s in doc.statement] == [
            ActionResourceStatement,
            ActionResourceStatement,
            NotActionNotResourceStatement,
        ]
        assert doc.statement[1].action == (ActionValue.REPLACE, ActionValue.DELETE)

    def test_round_trip_through_stack_policy(self, lenient):
        """Loading the wire form and rendering it gives the same wire form."""
        doc = document_from_dict(WIRE_DOCUMENT, lenient)
        policy = StackPolicy(Scope(None, "Stack"), "StackPolicy", doc)
        assert policy.to_cloudformation() == WIRE_DOCUMENT

    def test_single_statement_object_accepted(self, lenient):
        doc = document_from_dict({
            "Statement": {"Effect": "Allow", "Action": "Update:*", "Resource": "*"},
        }, lenient)
        assert len(doc.statement) == 1

    def test_missing_statement_rejected(self, lenient):
        with pytest.raises(ConfigurationError, match="Statement"):
            document_from_dict({}, lenient)

    def test_error_reports_statement_index(self, lenient):
        data = {"Statement": [
            {"Effect": "Allow", "Action": "Update:*", "Resource": "*"},
            {"Effect": "Nope", "Action": "Update:*", "Resource": "*"},
        ]}
        with pytest.raises(ConfigurationError) as exc_info:
            document_from_dict(data, lenient)
        assert exc_info.value.details["index"] == 1

    def test_statement_must_be_list(self, lenient):
        with pytest.raises(ConfigurationError):
            document_from_dict({"Statement": "Allow"}, lenient)


# ─────────────────────────────────────────────────────────────
# Modes
# ─────────────────────────────────────────────────────────────

class TestUnknownKeys:

    DATA = {"Statement": [{
        "Sid": "AllowAll", "Effect": "Allow", "Action": "Update:*", "Resource": "*",
    }]}

    def test_lenient_warns_and_ignores(self, lenient):
        with pytest.warns(UserWarning, match="Sid"):
            doc = document_from_dict(self.DATA, lenient)
        assert len(doc.statement) == 1

    def test_strict_rejects(self, strict):
        with pytest.raises(ConfigurationError, match="Sid"):
            document_from_dict(self.DATA, strict)

    def test_unknown_document_key_strict(self, strict):
        with pytest.raises(ConfigurationError, match="Version"):
            document_from_dict({"Version": "2012-10-17", "Statement": []}, strict)

    def test_mode_from_env(self, monkeypatch):
        monkeypatch.setenv("STACKPOLICY_MODE", "strict")
        with pytest.raises(ConfigurationError):
            document_from_dict(self.DATA)

    def test_env_default_is_lenient(self, monkeypatch):
        monkeypatch.delenv("STACKPOLICY_MODE", raising=False)
        with pytest.warns(UserWarning):
            document_from_dict(self.DATA)


# ─────────────────────────────────────────────────────────────
# Files
# ─────────────────────────────────────────────────────────────

class TestLoadDocument:

    def test_json_file(self, tmp_path, lenient):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps(WIRE_DOCUMENT))
        doc = load_document(path, lenient)
        assert len(doc.statement) == 3

    def test_yaml_file(self, tmp_path, lenient):
        path = tmp_path / "policy.yaml"
        path.write_text(yaml.safe_dump({
            "statement": [{
                "effect": "Deny",
                "action": ["Update:Replace"],
                "resource": ["MyBucket", "MyTable"],
                "condition": {"stringEquals": {"resourceType": ["AWS::S3::Bucket"]}},
            }]
        }))
        doc = load_document(str(path), lenient)
        assert doc.statement[0].resource == ("MyBucket", "MyTable")
        assert isinstance(doc.statement[0].condition, StringEqualsCondition)

    def test_missing_file(self, tmp_path, lenient):
        with pytest.raises(PolicyLoadError, match="not found"):
            load_document(tmp_path / "absent.json", lenient)

    def test_malformed_json(self, tmp_path, lenient):
        path = tmp_path / "policy.json"
        path.write_text("{not json")
        with pytest.raises(PolicyLoadError, match="Could not parse"):
            load_document(path, lenient)

    def test_malformed_yaml(self, tmp_path, lenient):
        path = tmp_path / "policy.yaml"
        path.write_text("statement: [unclosed")
        with pytest.raises(PolicyLoadError):
            load_document(path, lenient)

    def test_empty_file(self, tmp_path, lenient):
        path = tmp_path / "policy.yaml"
        path.write_text("")
        with pytest.raises(PolicyLoadError, match="empty"):
            load_document(path, lenient)

    def test_non_utf8_json(self, tmp_path, lenient):
        path = tmp_path / "policy.json"
        path.write_bytes(b'{"Statement": "\xff"}')
        with pytest.raises(PolicyLoadError, match="UTF-8"):
            load_document(path, lenient)

    def test_non_utf8_yaml(self, tmp_path, lenient):
        path = tmp_path / "policy.yaml"
        path.write_bytes(b"statement:\n  - effect: \xff\n")
        with pytest.raises(PolicyLoadError):
            load_document(path, lenient)

    def test_directory_path(self, tmp_path, lenient):
        with pytest.raises(PolicyLoadError, match="Could not read") as exc_info:
            load_document(tmp_path, lenient)
        assert exc_info.value.details["path"] == str(tmp_path)
