import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from repo_composer import core, github, llm, models

logger = logging.getLogger(__name__)


app = FastAPI(title="GitHub Repository Composer")


@app.exception_handler(github.GitHubError)
async def github_error_handler(request: Request, exc: github.GitHubError) -> JSONResponse:
    logger.error(f"GitHub error: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": exc.message},
    )


@app.exception_handler(llm.LLMError)
async def llm_error_handler(request: Request, exc: llm.LLMError) -> JSONResponse:
    logger.error(f"LLM error: {exc}")
    return JSONResponse(
        status_code=502,
        content={"status": "error", "message": f"Failed to generate music content: {exc}"},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content={"status": "error", "message": messages},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error")
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": "Internal server error"},
    )


@app.get("/")
async def root():
    return {
        "service": "GitHub Repository Composer",
        "usage": "POST /generate with {\"repoUrl\": \"https://github.com/owner/repo\", \"musicStyle\": \"auto\"}",
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.post(
    "/generate",
    response_model=models.GenerateEnvelope,
)
async def generate(request: models.GenerateRequest) -> models.GenerateEnvelope:
    result = await core.generate_from_repo(request.repo_url, request.music_style)
    return models.GenerateEnvelope(data=result)


@app.post(
    "/generate-multiple",
    response_model=models.GenerateMultipleEnvelope,
)
async def generate_multiple(request: models.GenerateMultipleRequest) -> models.GenerateMultipleEnvelope:
    result = await core.generate_multiple_styles(request.repo_url, request.styles)
    return models.GenerateMultipleEnvelope(data=result)
