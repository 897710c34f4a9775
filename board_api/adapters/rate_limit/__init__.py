"""Rate limiting adapters.

The quota component is an external collaborator: routes and services talk to
``AbstractRateLimiter`` only, so the in-process token bucket can be replaced
by a shared store without touching the pipeline.
"""
