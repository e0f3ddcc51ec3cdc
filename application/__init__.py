"""
Application Layer for the workout draft engine.

This package contains:
- ports/: Interfaces for collaborators supplied by the host (saver, medical lookup, timer)
- use_cases/: Editing session orchestration and auto-save scheduling
"""
