"""auditctl: command line access to audit events."""
