"""Task Manager Application Package — planner, billing and AI chat backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
