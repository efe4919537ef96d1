import threading
import logging

from conversation import HistoryStore

DEFAULT_SESSION = "default"


class Session:
    """One conversation: its history and the lock held for the length of a turn."""
    def __init__(self, session_id):
        self.session_id = session_id
        self.history = HistoryStore()
        self.lock = threading.Lock()


class SessionStore:
    def __init__(self):
        # sessions maps session id to Session
        self.sessions = {}  # {session_id: Session}
        self.lock = threading.Lock()

    def get(self, session_id=DEFAULT_SESSION) -> Session:
        """Returns the session for session_id, creating it on first use."""
        with self.lock:
            session = self.sessions.get(session_id)
            if session is None:
                session = Session(session_id)
                self.sessions[session_id] = session
                logging.info("Started conversation session '%s'", session_id)
            return session

    def drop(self, session_id) -> bool:
        """Forgets a session. Returns False if there was nothing to drop."""
        with self.lock:
            session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        # Wait for an in-flight turn on this session to finish.
        with session.lock:
            session.history.clear()
        logging.info("Dropped conversation session '%s'", session_id)
        return True
