"""Issue Notifier Module

Decides whether a GitHub issue event deserves a chat notification, formats
the message and posts it to the configured Slack and Discord webhooks."""
