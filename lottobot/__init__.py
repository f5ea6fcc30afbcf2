"""Telegram notification and quick-action relay for the Kiya Lottery web app."""
