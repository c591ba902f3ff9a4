"""auditctl sub-commands."""
