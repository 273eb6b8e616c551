"""Classify shared attachments and hand them off to a host app."""
