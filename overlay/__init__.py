"""In-app diagnostics overlay.

A registry of diagnostic providers/tools, surfaced behind a host trigger with optional
authentication gating.
"""
