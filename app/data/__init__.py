"""
Data access layer.

Design rules:
- Views call ONLY functions in this package.
- Read paths degrade to empty results; write paths report failures to the caller.
- No env var reads here (config-only).
"""
