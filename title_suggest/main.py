from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from loguru import logger
from pydantic import ValidationError

from .agent_graph import run_suggestion
from .config import settings
from .errors import InvalidRequestError, SuggestionError
from .generator import require_api_key
from .logger import setup_logger
from .schemas import ErrorResponse, SuggestionRequest, TitlesMeta, TitlesResponse

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}

app = FastAPI(title="Title Suggest")


@app.on_event("startup")
def configure_logging():
    setup_logger(level=settings.log_level, log_dir=settings.log_dir)


async def read_suggestion_request(request: Request) -> SuggestionRequest:
    # Unreadable or non-object bodies are treated as empty, like an empty form.
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    try:
        return SuggestionRequest.model_validate(body)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise InvalidRequestError(f"Invalid request body: {fields}") from e


def error_response(e: Exception, headers: dict | None = None) -> JSONResponse:
    if isinstance(e, SuggestionError):
        return JSONResponse(e.to_body(), status_code=e.status_code, headers=headers)
    logger.opt(exception=e).error("Unexpected error while suggesting titles")
    return JSONResponse({"error": str(e) or "Unexpected error"}, status_code=500, headers=headers)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.post("/api/suggest", responses=ERROR_RESPONSES)
async def suggest(request: Request):
    """Lenient endpoint for the bundled UI: returns the model's JSON as-is, or its raw text."""
    try:
        require_api_key()
        req = await read_suggestion_request(request)
        logger.info(f"/api/suggest request: description={bool(req.description)} keywords={len(req.keywords or [])}")
        state = await run_suggestion(req, normalize=False)
    except Exception as e:
        return error_response(e)

    if state.get("parsed") is None:
        return PlainTextResponse(state["raw_text"], status_code=200)
    return JSONResponse(state["parsed"])


@app.options("/api/public/titles")
async def public_titles_preflight():
    return Response(status_code=204, headers=CORS_HEADERS)


@app.post("/api/public/titles", response_model=TitlesResponse, responses=ERROR_RESPONSES)
async def public_titles(request: Request):
    try:
        require_api_key()
        req = await read_suggestion_request(request)
        logger.info(f"/api/public/titles request: description={bool(req.description)} keywords={len(req.keywords or [])}")
        state = await run_suggestion(req, normalize=True)
    except Exception as e:
        return error_response(e, headers=CORS_HEADERS)

    titles = state["titles"]
    logger.info(f"Produced {len(titles)} titles")
    body = TitlesResponse(
        titles=titles,
        meta=TitlesMeta(count=len(titles), max_length=settings.max_title_length, model=settings.model_name),
    )
    return JSONResponse(body.model_dump(by_alias=True), headers=CORS_HEADERS)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
