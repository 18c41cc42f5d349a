"""errorlogger CLI: diagnostics for sink settings."""
