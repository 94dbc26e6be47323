"""Daily-care tracking for a household of pets.

This package holds the state and alert engine (domain models and services)
plus a thin HTTP adapter, kept apart so the engine can be tested without
any transport in the way.
"""
