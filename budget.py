"""
Keeps a conversation inside the model's context window by dropping the oldest
messages before a new one is appended.
"""
import logging


class ContextBudgetManager:
    def __init__(self, estimator):
        self.estimator = estimator

    def make_room(self, history, new_message_cost, budget) -> int:
        """
        Evicts messages from the head of the history until the remaining
        history plus the new message fits in the budget, or the history is
        empty. Returns how many messages were evicted.

        A new message that is larger than the whole budget empties the
        history; the message itself is never truncated or refused.
        """
        if budget < 0 or new_message_cost < 0:
            raise ValueError("budget and new_message_cost must be non-negative")

        current = history.total_estimated_cost(self.estimator)
        evicted = 0
        while current + new_message_cost > budget and len(history) > 0:
            oldest = history.peek_oldest()
            current -= self.estimator.estimate(oldest.content)
            history.evict_oldest()
            evicted += 1

        if evicted:
            logging.info("Evicted %d oldest message(s); history now costs %d of budget %d (incoming %d)",
                         evicted, current, budget, new_message_cost)
        if current + new_message_cost > budget:
            logging.warning("Incoming message costs %d, more than the whole budget of %d", new_message_cost, budget)
        return evicted
