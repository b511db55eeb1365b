"""
API package containing versioned routes.

Version subpackages such as ``v1`` expose a top-level ``router``.
Shared dependencies live in ``deps`` and exception handlers in
``errors``.
"""
