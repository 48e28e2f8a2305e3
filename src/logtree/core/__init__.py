"""
logtree Core Module - Configuration, diagnostics logging and exceptions.

Components:
    - config: Settings loaded from the environment
    - logging: structlog based diagnostics for logtree itself
    - exceptions: The LogTreeError hierarchy
"""
