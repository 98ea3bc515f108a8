"""
stackpolicy errors

Everything the library raises on purpose is a StackPolicyError, so callers
(and the CLI, which maps it to exit code 2) need one except clause:

    ConfigurationError  a statement, condition or document was built with a
                        value CloudFormation would reject (Effect "Permit",
                        principal other than "*", Action next to NotAction),
                        or strict mode saw an unknown key
    ScopeError          a StackPolicy node could not be attached to its
                        scope (empty id, "/" in the id, duplicate sibling)
    PolicyLoadError     a policy file could not be turned into a document
                        (missing, unreadable, not UTF-8, not JSON/YAML, empty)

`details` carries the context the message leaves out (the offending path,
statement index, allowed values) and is appended to str(error).
"""


class StackPolicyError(Exception):
    """Base class for stack policy build, attach and load failures"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if not self.details:
            return self.message
        context = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({context})"


class ConfigurationError(StackPolicyError):
    """A document value outside what a stack policy allows"""


class ScopeError(StackPolicyError):
    """A node id the scope tree cannot accept"""


class PolicyLoadError(StackPolicyError):
    """A policy file that cannot be read, decoded or parsed"""
