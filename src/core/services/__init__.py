"""Core services: state controllers and pure transformations.

Why a package:
- The registry controller, the classifier and the sync workflow share the
  domain models but never call each other.
"""
