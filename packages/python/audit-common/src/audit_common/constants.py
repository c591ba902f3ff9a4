"""Shared constants for the auditable ecosystem."""

from pathlib import Path

# Event source fallback when no service name is configured
UNKNOWN_SERVICE = "unknown-service"

# Failure events without a usable error message
UNKNOWN_ERROR = "Unknown error"

# Destination naming: lowercase(entity_type) + suffix
DESTINATION_SUFFIX = ".events"

# Sinks
DEFAULT_SINK = "jsonl"
EVENTS_DIR = Path("/var/log/auditable")
DEFAULT_PUBLISH_TIMEOUT = 5.0

# Metadata that is not a JSON object is kept under this key
RAW_METADATA_KEY = "raw"
