"""Reusable patterns shared by the combo builder admin.

Each module is a self-contained pattern: a pure-function rules engine,
a generic async repository layer, and dataclass-based domain configuration.
"""
