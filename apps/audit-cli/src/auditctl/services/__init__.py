"""Helpers behind the auditctl commands."""
