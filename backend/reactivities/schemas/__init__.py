"""Pydantic Schemas — request/response payloads for API endpoints.

Invariants:
    - Schemas parse types only; field rules live in core/validation.py so every
      rule failure reaches the caller through the same ValidationFailed envelope

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
