"""Relaybot: a Telegram to LLM relay with daily quotas."""
