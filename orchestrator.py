import logging

from conversation import Message
from sessions import DEFAULT_SESSION, SessionStore


class ConversationOrchestrator:
    """
    Runs one chat turn at a time per session:
      1. fetch the referenced document (if any) and add it as a user message,
      2. add the prompt (if any) as a user message,
      3. send the whole history to the completion service,
      4. add the reply as an assistant message,
      5. return the reply.
    Before every user message is appended, the budget manager evicts the
    oldest messages so the history plus that message fits in `budget`.

    A failure ends the turn. Messages appended before the failure are kept;
    the reply is only appended once the completion service has answered.
    """
    def __init__(self, estimator, budget_manager, completion_service, file_service, budget, sessions=None):
        self.estimator = estimator
        self.budget_manager = budget_manager
        self.completion_service = completion_service
        self.file_service = file_service
        self.budget = budget
        self.sessions = sessions if sessions is not None else SessionStore()

    def handle_turn(self, prompt=None, file_id=None, session_id=DEFAULT_SESSION) -> str:
        session = self.sessions.get(session_id)
        with session.lock:
            history = session.history
            logging.info("Turn started for session '%s' (prompt: %s, file: %s)",
                         session_id, bool(prompt), file_id or "none")

            if file_id:
                document = self.file_service.fetch(file_id)
                self._append_user_message(history, document)

            if prompt:
                self._append_user_message(history, prompt)

            reply = self.completion_service.complete(history.as_payload())
            history.append(Message("assistant", reply))
            logging.info("Turn finished for session '%s'; history holds %d message(s)", session_id, len(history))
            return reply

    def _append_user_message(self, history, content):
        cost = self.estimator.estimate(content)
        self.budget_manager.make_room(history, cost, self.budget)
        history.append(Message("user", content))

    def reset(self, session_id=DEFAULT_SESSION) -> bool:
        return self.sessions.drop(session_id)
