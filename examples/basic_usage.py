"""
stackpolicy: Basic Usage Example

Demonstrates:
- Building a stack policy from typed statements
- Attaching it to a scope
- Rendering the CloudFormation body and its hash
- Loading the same policy back from plain data
"""

from stackpolicy import (
    ActionResourceStatement,
    ActionValue,
    ConditionResourceType,
    Effect,
    NotActionResourceStatement,
    Scope,
    StackPolicy,
    StackPolicyDocument,
    StringLikeCondition,
    document_from_dict,
    init_strict_mode,
)


def main():
    """Basic stackpolicy usage."""

    print("=" * 60)
    print("stackpolicy: Basic Usage Example")
    print("=" * 60)
    print()

    # 1️⃣ Build the document
    print("1️⃣ Building the policy document...")
    document = StackPolicyDocument(statement=[
        ActionResourceStatement(Effect.ALLOW, ActionValue.ALL, "*"),
        ActionResourceStatement(
            Effect.DENY,
            [ActionValue.REPLACE, ActionValue.DELETE],
            ["ProductionDatabase", "AuditBucket"],
        ),
        NotActionResourceStatement(
            Effect.DENY,
            ActionValue.MODIFY,
            "*",
            condition=StringLikeCondition(
                string_like=ConditionResourceType(resource_type=["AWS::EC2::*"]),
            ),
        ),
    ])
    print(f"✅ {len(document.statement)} statements")
    print()

    # 2️⃣ Attach to a scope
    print("2️⃣ Attaching to the stack scope...")
    stack = Scope(None, "ProductionStack")
    policy = StackPolicy(stack, "StackPolicy", document)
    print(f"✅ {policy.path}")
    print()

    # 3️⃣ Render
    print("3️⃣ CloudFormation body:")
    print(policy.to_json(indent=2))
    print()
    print(f"   hash: {policy.policy_hash}")
    print()

    # 4️⃣ Load it back
    print("4️⃣ Loading the wire form back (strict mode)...")
    reloaded = document_from_dict(policy.to_cloudformation(), init_strict_mode())
    print(f"✅ Round trip equal: {reloaded == document}")


if __name__ == "__main__":
    main()
