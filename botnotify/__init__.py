"""Signed chat-bot webhook notifications for DingTalk and Lark."""
