"""Domain layer (pure logic).

- Keep melody rules here.
- Avoid I/O: no device access, no HTTP/FastAPI.
"""
