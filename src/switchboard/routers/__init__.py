"""API routers for switchboard endpoints."""

from switchboard.routers import agents, chat, health, sessions

__all__ = ["agents", "chat", "health", "sessions"]
