"""Domain models and rules.

Why:
- Pure, strict data structures (Pydantic v2) and the domain-syntax rule live here.
- The domain knows nothing about HTTP, the CLI or SDKs: only problem concepts.
"""
