"""
HTTP surface of the relay:
  POST /chat                     {"prompt", "file_id", "session_id"} -> {"response"}
  POST /upload                   multipart "file" -> {"file_id"}
  DELETE /sessions/{session_id}  -> {"cleared"}
Errors come back as {"error": "..."}.
"""

import logging
from typing import Optional

from fastapi import FastAPI, File, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from errors import ChatRelayError
from sessions import DEFAULT_SESSION


class ChatRequest(BaseModel):
    prompt: Optional[str] = None
    file_id: Optional[str] = None
    session_id: str = DEFAULT_SESSION


def error_response(status_code, message):
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(orchestrator, file_service) -> FastAPI:
    app = FastAPI(title="chat-relay")

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        logging.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc.errors()))

    # Sync handlers run in the worker thread pool; the session lock serializes turns.
    @app.post("/chat")
    def chat(body: ChatRequest):
        try:
            reply = orchestrator.handle_turn(prompt=body.prompt, file_id=body.file_id, session_id=body.session_id)
        except ChatRelayError as e:
            logging.error("Chat turn failed for session '%s': %s", body.session_id, e, exc_info=True)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
        return {"response": reply}

    @app.post("/upload")
    def upload(file: Optional[UploadFile] = File(None)):
        if file is None:
            return error_response(status.HTTP_400_BAD_REQUEST, "No file is received")
        try:
            data = file.file.read()
        except OSError as e:
            logging.error("Unable to read uploaded file %s: %s", file.filename, e, exc_info=True)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unable to open the file")
        finally:
            file.file.close()

        try:
            file_id = file_service.upload(file.filename or "upload", data)
        except ChatRelayError as e:
            logging.error("Upload of %s failed: %s", file.filename, e, exc_info=True)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
        return {"file_id": file_id}

    @app.delete("/sessions/{session_id}")
    def clear_session(session_id: str):
        return {"cleared": orchestrator.reset(session_id)}

    return app
