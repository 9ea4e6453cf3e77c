"""Services Layer — user-scoped persistence, billing flows and the AI chat proxy.

Invariants:
    - Services flush, routes commit (single unit of work per request)
    - Every query on owned data filters on user_id

Design Decisions:
    - Plain async functions per concern; classes only where state is carried
      (RecordStore per resource, StripeWebhookProcessor per event)
"""
