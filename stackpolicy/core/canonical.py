"""
Canonical StackPolicyBody text, RFC 8785 (JCS).

CloudFormation compares stack policies as text, so the compact body that
`stackpolicy render --format compact` prints and that StackPolicy.to_json()
returns goes through canonicalize(): keys sorted, no whitespace, numbers
in their shortest form. policy_hash is the SHA-256 of exactly those bytes,
so two documents that render the same body always share a hash.

Input is the wire form from capitalize_property_names(), never model
objects: Enum members and Lazy tokens must already be resolved.

RFC 8785: https://www.rfc-editor.org/rfc/rfc8785
"""

import hashlib

try:
    import jcs as _jcs
except ImportError as exc:
    raise ImportError(
        "stackpolicy renders StackPolicyBody with the 'jcs' package.\n"
        "Install with: pip install jcs\n"
        f"Original error: {exc}"
    ) from exc


def canonicalize(wire) -> bytes:
    """
    Canonical UTF-8 bytes of a wire document, e.g. {"Statement": [...]}.

    Statement order is list order and is kept; only object keys are sorted.
    """
    return _jcs.canonicalize(wire)


def canonical_hash(wire) -> str:
    """Hex SHA-256 of canonicalize(wire). Used as StackPolicy.policy_hash."""
    return hashlib.sha256(canonicalize(wire)).hexdigest()
