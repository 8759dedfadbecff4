import logging
import time

from repo_composer import config, context, prompts
from repo_composer.classify import file_priority
from repo_composer.llm import MalformedOutputError, TextGenerator, with_fallback
from repo_composer.models import FileEntry, RepositoryMetadata
from repo_composer.parsing import parse_lenient_json

logger = logging.getLogger(__name__)


def fallback_select(files: list[FileEntry], count: int = 12) -> list[FileEntry]:
    # sorted() is stable, so equal scores keep listing order
    ranked = sorted(files, key=lambda f: file_priority(f.name, f.path), reverse=True)
    return ranked[:count]


def _selected_paths(data) -> list[str]:
    if isinstance(data, dict):
        data = data.get("files")
    if not isinstance(data, list):
        raise MalformedOutputError("File selection response is not a JSON array of paths")
    return [p for p in data if isinstance(p, str)]


def match_selection(files: list[FileEntry], selected_paths: list[str], limit: int) -> list[FileEntry]:
    wanted = {p.strip().lstrip("/") for p in selected_paths}
    return [f for f in files if f.path in wanted][:limit]


async def _select_with_llm(
    generator: TextGenerator,
    files: list[FileEntry],
    repository: RepositoryMetadata,
    cfg: config.PipelineConfig,
) -> list[FileEntry]:
    prompt = prompts.build_file_selection_prompt(repository, context.format_manifest(files), len(files))
    logger.info(f"File selection input: {len(files)} files, prompt={len(prompt)} chars")

    t0 = time.monotonic()
    text = await generator.complete(prompt, max_tokens=cfg.json_max_tokens, json_mode=True)
    logger.info(f"File selection completed in {time.monotonic() - t0:.1f}s")

    selected_paths = _selected_paths(parse_lenient_json(text))
    selected = match_selection(files, selected_paths, cfg.max_selected_files)
    logger.info(f"LLM selected {len(selected_paths)} paths, {len(selected)} valid")
    if not selected:
        raise MalformedOutputError("None of the selected paths exist in the repository")
    return selected


async def select_files(
    generator: TextGenerator,
    files: list[FileEntry],
    repository: RepositoryMetadata,
    cfg: config.PipelineConfig,
) -> list[FileEntry]:
    if len(files) < cfg.min_selected_files:
        logger.info(f"Only {len(files)} files, analysing all of them")
        return fallback_select(files, cfg.fallback_file_count)

    return await with_fallback(
        lambda: _select_with_llm(generator, files, repository, cfg),
        lambda: fallback_select(files, cfg.fallback_file_count),
        step="AI file selection",
    )
