import logging
import time

from repo_composer import config, prompts
from repo_composer.llm import MalformedOutputError, TextGenerator, with_fallback
from repo_composer.models import Artifact, RepositoryAnalysis
from repo_composer.styles import AUTO, DEFAULT_STYLE, STYLE_NAMES, Style, get_profile

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

# Longest first so "hardrock" is not reported as "rock"
_STYLES_BY_LENGTH = sorted(STYLE_NAMES, key=len, reverse=True)


def truncate(text: str, max_chars: int) -> str:
    """Cut text to max_chars, preferring a sentence end, then a word break, then a hard cut."""
    if len(text) <= max_chars:
        return text
    if max_chars <= len(ELLIPSIS):
        return text[:max_chars]

    truncated = text[:max_chars]
    last_sentence_end = max(truncated.rfind("."), truncated.rfind("!"), truncated.rfind("?"))
    if last_sentence_end > max_chars * 0.8:
        return truncated[: last_sentence_end + 1]

    # Only spaces that leave room for the ellipsis
    last_space = truncated.rfind(" ", 0, max_chars - len(ELLIPSIS) + 1)
    if last_space > max_chars * 0.9:
        return truncated[:last_space] + ELLIPSIS

    return truncated[: max_chars - len(ELLIPSIS)] + ELLIPSIS


def match_style(response: str) -> Style | None:
    cleaned = response.strip().strip(".!\"'`*").lower()
    if cleaned in STYLE_NAMES:
        return Style(cleaned)
    for name in _STYLES_BY_LENGTH:
        if name in cleaned:
            return Style(name)
    return None


async def _resolve_with_llm(
    generator: TextGenerator,
    analysis: RepositoryAnalysis,
    cfg: config.PipelineConfig,
) -> str:
    prompt = prompts.build_style_prompt(analysis.repository, analysis.analysis)
    response = await generator.complete(prompt, max_tokens=cfg.style_max_tokens)
    style = match_style(response)
    if style is None:
        raise MalformedOutputError(f"Invalid style response: {response[:50]!r}")
    logger.info(f"Auto mode resolved style: {style.value}")
    return style.value


async def resolve_style(
    generator: TextGenerator,
    analysis: RepositoryAnalysis,
    requested: str,
    cfg: config.PipelineConfig,
) -> str:
    """Return the requested style, or pick one of the fixed styles when it is "auto"."""
    if requested != AUTO:
        return requested
    return await with_fallback(
        lambda: _resolve_with_llm(generator, analysis, cfg),
        lambda: DEFAULT_STYLE.value,
        step="Style resolution",
    )


async def generate_music_prompt(
    generator: TextGenerator,
    analysis: RepositoryAnalysis,
    style: str,
    cfg: config.PipelineConfig,
) -> Artifact:
    prompt = prompts.build_music_prompt(
        analysis.repository,
        analysis.file_stats,
        analysis.analysis,
        style,
        get_profile(style),
        cfg.prompt_char_limit,
    )
    t0 = time.monotonic()
    text = await generator.complete(prompt, max_tokens=cfg.prompt_max_tokens)
    logger.info(f"Music prompt ({style}) generated in {time.monotonic() - t0:.1f}s")
    return Artifact(
        kind="prompt",
        style=style,
        text=truncate(text, cfg.prompt_char_limit),
        max_chars=cfg.prompt_char_limit,
    )


async def generate_lyrics(
    generator: TextGenerator,
    analysis: RepositoryAnalysis,
    style: str,
    cfg: config.PipelineConfig,
) -> Artifact:
    style = await resolve_style(generator, analysis, style, cfg)
    prompt = prompts.build_lyrics_prompt(
        analysis.repository,
        analysis.analysis,
        style,
        get_profile(style),
        cfg.lyrics_char_limit,
    )
    t0 = time.monotonic()
    text = await generator.complete(prompt, max_tokens=cfg.lyrics_max_tokens)
    logger.info(f"Lyrics ({style}) generated in {time.monotonic() - t0:.1f}s")
    return Artifact(
        kind="lyrics",
        style=style,
        text=truncate(text, cfg.lyrics_char_limit),
        max_chars=cfg.lyrics_char_limit,
    )
