"""
Core utilities shared across the voting services.

This package hosts:
- configuration helpers (env vars, ports, backend location)
- cross-cutting concerns such as logging, the error taxonomy and the
  health metrics exposed by every service.

Routers, services and repositories depend on these primitives instead of
reading os.environ directly.
"""
