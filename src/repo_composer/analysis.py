import logging
import time

from pydantic import ValidationError

from repo_composer import config, context, prompts
from repo_composer.classify import Category, extract_tags
from repo_composer.github import GitHubError, GitHubSource
from repo_composer.llm import MalformedOutputError, TextGenerator, with_fallback
from repo_composer.models import (
    AnalysisResult,
    FileEntry,
    FileStats,
    RepositoryAnalysis,
    RepositoryMetadata,
    SelectedFile,
    SelectedFileSummary,
)
from repo_composer.parsing import parse_lenient_json
from repo_composer.selection import select_files

logger = logging.getLogger(__name__)


async def assemble_contents(
    source: GitHubSource,
    files: list[FileEntry],
    max_file_chars: int,
) -> list[SelectedFile]:
    contents: list[SelectedFile] = []
    for entry in files:
        if not entry.download_url:
            logger.warning(f"Skipping {entry.path}: no download URL")
            continue
        try:
            content = await source.fetch_content(entry.download_url)
        except GitHubError as exc:
            logger.warning(f"Failed to fetch {entry.path}: {exc}")
            continue
        content = context.truncate_content(content, max_file_chars)
        contents.append(
            SelectedFile(entry=entry, content=content, tags=sorted(extract_tags(content, entry.category)))
        )
    return contents


def fallback_analysis(repository: RepositoryMetadata, contents: list[SelectedFile]) -> AnalysisResult:
    source_files = [c for c in contents if c.entry.category == Category.SOURCE_CODE]
    return AnalysisResult(
        purpose=repository.description or f"A {repository.language or 'software'} repository",
        themes=["technology", "innovation", "development"],
        emotions=["focused", "analytical", "creative"],
        technical_concepts=["programming", "software-development"],
        musical_metaphors=["rhythm", "structure", "harmony"],
        key_features=["code-organization", "problem-solving"],
        innovation_level="medium",
        complexity="complex" if len(source_files) > 10 else "moderate",
        user_impact="Provides tools or solutions for developers",
        artistic_interpretation="A structured approach to solving technical challenges",
    )


async def _analyze_with_llm(
    generator: TextGenerator,
    repository: RepositoryMetadata,
    contents: list[SelectedFile],
    cfg: config.PipelineConfig,
) -> AnalysisResult:
    summaries = context.format_file_summaries(contents, cfg.preview_chars)
    prompt = prompts.build_analysis_prompt(repository, summaries)
    logger.info(f"Analysis input: {len(contents)} files, prompt={len(prompt)} chars")

    t0 = time.monotonic()
    text = await generator.complete(prompt, max_tokens=cfg.json_max_tokens, json_mode=True)
    logger.info(f"Analysis completed in {time.monotonic() - t0:.1f}s")

    data = parse_lenient_json(text)
    if not isinstance(data, dict):
        raise MalformedOutputError("Analysis response is not a JSON object")
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as exc:
        raise MalformedOutputError(f"Analysis response is missing fields: {exc}") from exc


async def analyze_contents(
    generator: TextGenerator,
    repository: RepositoryMetadata,
    contents: list[SelectedFile],
    cfg: config.PipelineConfig,
) -> AnalysisResult:
    return await with_fallback(
        lambda: _analyze_with_llm(generator, repository, contents, cfg),
        lambda: fallback_analysis(repository, contents),
        step="AI analysis",
    )


async def analyze_repository(
    source: GitHubSource,
    generator: TextGenerator,
    owner: str,
    repo: str,
    cfg: config.PipelineConfig,
) -> RepositoryAnalysis:
    logger.info("Step 1: fetching repository metadata")
    repository = await source.fetch_metadata(owner, repo)

    logger.info("Step 2: listing repository files")
    all_files = await source.list_files(owner, repo)

    logger.info(f"Step 3: selecting relevant files from {len(all_files)}")
    selected = await select_files(generator, all_files, repository, cfg)

    logger.info(f"Step 4: fetching {len(selected)} selected files")
    contents = await assemble_contents(source, selected, cfg.max_file_chars)

    logger.info(f"Step 5: analysing {len(contents)} files")
    analysis = await analyze_contents(generator, repository, contents, cfg)

    return RepositoryAnalysis(
        repository=repository,
        file_stats=FileStats(total=len(all_files), selected=len(selected), analyzed=len(contents)),
        selected_files=[
            SelectedFileSummary(name=f.name, path=f.path, category=f.category) for f in selected
        ],
        analysis=analysis,
    )
