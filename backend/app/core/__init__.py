"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are pure; the only randomness is share-token generation

Design Decisions:
    - Functional core separated from imperative shell: Stripe and AI payload
      shaping lives here so it can be tested without SDKs
"""
