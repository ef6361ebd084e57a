"""
Contracts (data models).

This folder defines the result and error shapes for external integrations,
currently CRM lead delivery.

Why this exists:
- Ensures consistent data structures across mock and real clients
- Prevents “guessing” error formats in multiple places
- Makes integration safer: routes rely on stable models, not on ad-hoc dicts

Both mock and real HTTP clients should use these contracts.
"""
