"""Time math, slot generation, validation, request building and booking lifecycle.

Import from the submodules directly; this package re-exports nothing so
that the schema modules can depend on ``time_math`` without a cycle.
"""
