"""Semantic event constants for structured logging.

All log events should use these constants rather than magic strings to ensure
consistency and enable reliable querying and analysis.
"""

# Subsegment session events
SUBSEGMENT_ENTERED = "subsegment_entered"
SUBSEGMENT_ENTER_FAILED = "subsegment_enter_failed"
SUBSEGMENT_CLOSED = "subsegment_closed"
SUBSEGMENT_CLOSE_FAILED = "subsegment_close_failed"

# Daemon client events
SEGMENT_SENT = "segment_sent"
SEGMENT_SEND_FAILED = "segment_send_failed"

# Construction fallbacks
CLIENT_UNAVAILABLE = "client_unavailable"
CONTEXT_UNAVAILABLE = "context_unavailable"

# Request interceptor events
INTERCEPTOR_HOOK_FAILED = "interceptor_hook_failed"

# Configuration events
SETTINGS_LOADED = "settings_loaded"
SETTINGS_LOAD_FAILED = "settings_load_failed"
ENV_FILES_LOADED = "env_files_loaded"
