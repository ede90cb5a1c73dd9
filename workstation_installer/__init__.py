"""Workstation Installer (Windows provisioning, Chocolatey-first).

Core design goals:
- Fixed phase order, no retries
- Check-before-install packages
- One failing package or phase never aborts the run
- Every external tool reached through a single command runner
- Centralized logging
"""

__all__ = []
