import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import httpx

from repo_composer import analysis, artifacts, config, github, llm, models
from repo_composer.styles import AUTO, DEFAULT_STYLE

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _collaborators(
    cfg: config.Config,
    source: github.GitHubSource | None,
    generator: llm.TextGenerator | None,
):
    if generator is None:
        generator = llm.TextGenerator(cfg.llm)
    if source is not None:
        yield source, generator
        return
    async with httpx.AsyncClient(timeout=cfg.http_timeout, follow_redirects=True) as client:
        yield github.GitHubSource(client, cfg.github_token, cfg.github_api_base), generator


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _response_fields(repo_analysis: models.RepositoryAnalysis) -> dict:
    return {
        **repo_analysis.analysis.model_dump(),
        "repository": repo_analysis.repository,
        "file_stats": repo_analysis.file_stats,
        "selected_files": repo_analysis.selected_files,
    }


async def generate_from_repo(
    repo_url: str,
    music_style: str = "electronic",
    *,
    cfg: config.Config | None = None,
    source: github.GitHubSource | None = None,
    generator: llm.TextGenerator | None = None,
) -> models.GenerateResponse:
    cfg = cfg or config.get_config()
    owner, repo = github.parse_github_url(repo_url)
    logger.info(f"Generating {music_style} music for {owner}/{repo}")

    t0 = time.monotonic()
    async with _collaborators(cfg, source, generator) as (source, generator):
        repo_analysis = await analysis.analyze_repository(source, generator, owner, repo, cfg.pipeline)

    style = await artifacts.resolve_style(generator, repo_analysis, music_style, cfg.pipeline)
    prompt = await artifacts.generate_music_prompt(generator, repo_analysis, style, cfg.pipeline)
    lyrics = await artifacts.generate_lyrics(generator, repo_analysis, style, cfg.pipeline)
    logger.info(f"Generation for {owner}/{repo} completed in {time.monotonic() - t0:.1f}s")

    return models.GenerateResponse(
        **_response_fields(repo_analysis),
        selected_style=style,
        requested_style=music_style,
        music_prompt=prompt.text,
        lyrics=lyrics.text,
        generated_at=_now(),
    )


async def generate_multiple_styles(
    repo_url: str,
    styles: list[str],
    *,
    cfg: config.Config | None = None,
    source: github.GitHubSource | None = None,
    generator: llm.TextGenerator | None = None,
) -> models.GenerateMultipleResponse:
    cfg = cfg or config.get_config()
    owner, repo = github.parse_github_url(repo_url)
    logger.info(f"Generating {len(styles)} styles for {owner}/{repo}")

    async with _collaborators(cfg, source, generator) as (source, generator):
        repo_analysis = await analysis.analyze_repository(source, generator, owner, repo, cfg.pipeline)

    # Only ask for a style when some entry needs one
    if AUTO in styles:
        auto_style = await artifacts.resolve_style(generator, repo_analysis, AUTO, cfg.pipeline)
    else:
        auto_style = DEFAULT_STYLE.value
    prompt = await artifacts.generate_music_prompt(generator, repo_analysis, auto_style, cfg.pipeline)

    results = await asyncio.gather(
        *[
            artifacts.generate_lyrics(
                generator, repo_analysis, auto_style if style == AUTO else style, cfg.pipeline
            )
            for style in styles
        ],
        return_exceptions=True,
    )

    successes: list[models.LyricsResult] = []
    failures: list[models.LyricsFailure] = []
    for requested, result in zip(styles, results):
        if isinstance(result, llm.LLMError):
            logger.warning(f"Lyrics for {requested} failed: {result}")
            failures.append(models.LyricsFailure(style=requested, message=str(result)))
        elif isinstance(result, BaseException):
            raise result
        else:
            successes.append(
                models.LyricsResult(style=result.style, requested_style=requested, lyrics=result.text)
            )
    logger.info(f"Lyrics: {len(successes)} succeeded, {len(failures)} failed")

    return models.GenerateMultipleResponse(
        **_response_fields(repo_analysis),
        requested_styles=styles,
        music_prompt=prompt.text,
        lyrics=successes,
        errors=failures,
        generated_at=_now(),
    )
