import pytest

from budget import ContextBudgetManager
from errors import CompletionServiceError, ExternalFetchError
from orchestrator import ConversationOrchestrator
from tokens import WordCountEstimator


class FakeCompletionService:
    """Replies with a fixed text and remembers every payload it was sent."""
    def __init__(self, reply="ok", fail=False):
        self.reply = reply
        self.fail = fail
        self.calls = []

    def complete(self, messages):
        self.calls.append(list(messages))
        if self.fail:
            raise CompletionServiceError("unexpected status code: 500")
        return self.reply


class FakeFileService:
    def __init__(self, files=None):
        self.files = dict(files or {})
        self.uploads = []

    def fetch(self, file_id):
        if file_id not in self.files:
            raise ExternalFetchError(f"could not fetch file {file_id}")
        return self.files[file_id]

    def upload(self, filename, data):
        self.uploads.append((filename, data))
        file_id = f"file-{len(self.uploads)}"
        self.files[file_id] = data.decode("utf-8")
        return file_id


@pytest.fixture
def estimator():
    return WordCountEstimator()


@pytest.fixture
def completion_service():
    return FakeCompletionService()


@pytest.fixture
def file_service():
    return FakeFileService({"file-doc": "alpha beta gamma"})


@pytest.fixture
def make_orchestrator(estimator, completion_service, file_service):
    def _make(budget=10, completion=None, files=None):
        return ConversationOrchestrator(
            estimator=estimator,
            budget_manager=ContextBudgetManager(estimator),
            completion_service=completion or completion_service,
            file_service=files or file_service,
            budget=budget,
        )
    return _make
