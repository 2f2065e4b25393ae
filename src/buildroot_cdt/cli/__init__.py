"""Command-line interface for buildroot-cdt."""
