"""
The StackPolicy node: owns one document and renders it for CloudFormation.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from stackpolicy.core.canonical import canonical_hash, canonicalize
from stackpolicy.core.casing import capitalize_property_names
from stackpolicy.core.exceptions import ConfigurationError
from stackpolicy.core.modes import ModeManager
from stackpolicy.core.scope import Scope
from stackpolicy.policy.loader import load_document
from stackpolicy.policy.types import StackPolicyDocument


class StackPolicy(Scope):
    """
    Represents a CloudFormation stack policy.

    The document is supplied whole by the caller and never changes after
    construction. Rendering can be repeated any number of times and
    always yields the same result.
    """

    def __init__(self, scope: Optional[Scope], node_id: str, document: StackPolicyDocument):
        if not isinstance(document, StackPolicyDocument):
            raise ConfigurationError(
                "document must be a StackPolicyDocument",
                {"got": type(document).__name__},
            )
        super().__init__(scope, node_id)
        self._document = document

    @classmethod
    def from_file(
        cls,
        scope: Optional[Scope],
        node_id: str,
        path: Union[str, Path],
        mode: Optional[ModeManager] = None,
    ) -> "StackPolicy":
        """Load the document from a JSON or YAML file."""
        return cls(scope, node_id, load_document(path, mode))

    @property
    def document(self) -> StackPolicyDocument:
        return self._document

    def to_cloudformation(self) -> Dict[str, Any]:
        """Wire form: the document with PascalCase keys, e.g. {"Statement": [...]}."""
        return capitalize_property_names(self, self._document)

    def to_json(self, indent: Optional[int] = None) -> str:
        """
        Render the wire form as JSON text.

        With indent=None the output is RFC 8785 canonical JSON (sorted keys,
        no whitespace), suitable for StackPolicyBody. Otherwise it is
        pretty-printed in document order.
        """
        wire = self.to_cloudformation()
        if indent is None:
            return canonicalize(wire).decode("utf-8")
        return json.dumps(wire, indent=indent)

    @property
    def policy_hash(self) -> str:
        """SHA-256 of the canonical wire form."""
        return canonical_hash(self.to_cloudformation())
