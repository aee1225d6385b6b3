"""Schema migration engine.

This package stores versioned migrations, resolves routes between
schema versions, and applies them with all-or-nothing semantics.
"""
