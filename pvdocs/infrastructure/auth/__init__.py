from .session_provider import SessionProvider, SessionStore, StaticSessionProvider

__all__ = ["SessionProvider", "SessionStore", "StaticSessionProvider"]
