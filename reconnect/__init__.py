"""Relationship tracking service: contacts, tags, interaction logs and reminders."""
