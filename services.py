import logging

import openai

from errors import CompletionServiceError, ExternalFetchError, FileUploadError

# Thin wrappers around the OpenAI client used by the orchestrator.
# Every failure is re-raised as one of the errors in errors.py; none is retried.

class OpenAICompletionService:
    """Sends the whole conversation to the chat completions endpoint and returns the reply text."""
    def __init__(self, client, model_name, timeout=60.0):
        self.client = client
        self.model_name = model_name
        self.timeout = timeout

    def complete(self, messages) -> str:
        logging.info("Requesting completion from %s with %d message(s)", self.model_name, len(messages))
        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=messages,
                timeout=self.timeout
            )
        except openai.OpenAIError as e:
            logging.error("Completion request failed: %s", e)
            raise CompletionServiceError(f"completion request failed: {e}") from e

        if not response.choices:
            raise CompletionServiceError("no choices found in response")
        reply = response.choices[0].message.content or ""
        logging.info("Received reply (%d characters)", len(reply))
        return reply


class OpenAIFileService:
    """
    Stores documents with the OpenAI files API and reads them back.
    Uploads use `purpose`; the files API only serves content back for some
    purposes, which is why "fine-tune" is the default.
    """
    def __init__(self, client, purpose="fine-tune"):
        self.client = client
        self.purpose = purpose

    def fetch(self, file_id: str) -> str:
        logging.info("Fetching content of file %s", file_id)
        try:
            content = self.client.files.content(file_id)
        except openai.OpenAIError as e:
            logging.error("Fetching file %s failed: %s", file_id, e)
            raise ExternalFetchError(f"could not fetch file {file_id}: {e}") from e
        return content.text

    def upload(self, filename: str, data: bytes) -> str:
        logging.info("Uploading %s (%d bytes, purpose=%s)", filename, len(data), self.purpose)
        try:
            uploaded = self.client.files.create(file=(filename, data), purpose=self.purpose)
        except openai.OpenAIError as e:
            logging.error("Uploading %s failed: %s", filename, e)
            raise FileUploadError(f"could not upload {filename}: {e}") from e
        logging.info("Uploaded %s as %s", filename, uploaded.id)
        return uploaded.id
