"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- no CRM endpoint is configured
- we want to exercise the lead flow end-to-end without external dependencies

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped according to src/integrations/contracts/*

Switching to real:
Set CRM_ENDPOINT (or INTEGRATIONS_MODE=real) and src/api/main.py will build the
clients/real_http/* implementation instead.
"""
