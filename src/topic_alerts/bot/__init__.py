"""Telegram command bot."""

from .telegram_bot import TelegramBot

__all__ = ["TelegramBot"]
