"""Lottery backend integration."""

from lottobot.backend.client import BackendSync

__all__ = ["BackendSync"]
