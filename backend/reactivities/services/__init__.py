"""Services Layer — dispatcher, pipeline behaviors, authorization, handlers.

Invariants:
    - Request type -> handler mapping is explicit (services/composition.py)
    - Only handlers touch persistence state; the pipeline stages never do

Design Decisions:
    - Behaviors are plain async callables composed in a declared order
"""
