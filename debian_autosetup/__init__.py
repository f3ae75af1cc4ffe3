"""Debian autosetup: two-stage Secure Boot host provisioning.

Core design goals:
- Stage selection derived from host state (MOK enrollment), never a state file
- Re-invocable at any point without corrupting progress
- Fixed-interval retries for flaky network operations
- Every external tool behind a narrow capability interface
- Centralized logging
"""

__all__ = []
