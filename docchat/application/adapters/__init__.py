"""Application adapters."""

from docchat.application.adapters.chat_history_adapter import ChatHistoryAdapter, ChatTurn

__all__ = ["ChatHistoryAdapter", "ChatTurn"]
