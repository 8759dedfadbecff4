import pytest

from repo_composer import config
from repo_composer.classify import classify
from repo_composer.github import GitHubError
from repo_composer.llm import GenerationUnavailableError
from repo_composer.models import FileEntry, RepositoryMetadata

RAW_BASE = "https://raw.githubusercontent.com/acme/widgets/main"


def make_entry(path: str, size: int = 100) -> FileEntry:
    name = path.rsplit("/", 1)[-1]
    return FileEntry(
        path=path,
        name=name,
        size=size,
        download_url=f"{RAW_BASE}/{path}",
        category=classify(name, path),
    )


SMALL_REPO = ["README.md", "src/index.js", "test/index.test.js"]

LARGE_REPO = [
    "LICENSE",
    "README.md",
    "package.json",
    "docs/guide.md",
    "src/index.js",
    "src/app.js",
    "src/router.js",
    "src/render.js",
    "src/config.js",
    "src/utils/sort.js",
    "src/utils/crypto.js",
    "lib/helpers.js",
    "test/app.test.js",
    "test/router.test.js",
    "scripts/release.sh",
    "styles/main.css",
    "public/favicon.ico",
    "Makefile",
]

FILE_CONTENTS = {
    "README.md": "# Widgets\n\nA tutorial-driven guide to building widgets.",
    "src/index.js": "async function main() { await render(); }\n",
    "test/index.test.js": "test('renders', () => {});\n",
}

METADATA = RepositoryMetadata(
    name="widgets",
    description="Composable widgets for the web",
    language="JavaScript",
    topics=["ui", "widgets"],
    stars=42,
    forks=7,
)


class FakeSource:
    """In-memory stand-in for GitHubSource."""

    def __init__(self, paths, contents=None, metadata=METADATA, failing=()):
        self.entries = [make_entry(p) for p in paths]
        self.contents = contents if contents is not None else {}
        self.metadata = metadata
        self.failing = set(failing)
        self.fetched: list[str] = []

    async def fetch_metadata(self, owner, repo):
        return self.metadata

    async def list_files(self, owner, repo, path=""):
        return list(self.entries)

    async def fetch_content(self, download_url):
        path = download_url.removeprefix(f"{RAW_BASE}/")
        self.fetched.append(path)
        if path in self.failing:
            raise GitHubError(f"File '{path}': not found (or private)", status_code=404)
        return self.contents.get(path, f"// {path}\n")


class FakeGenerator:
    """Scripted text generator.

    ``handler`` receives ``(prompt, json_mode)`` and returns text or an exception
    instance, which is raised.
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls: list[dict] = []

    async def complete(self, prompt, max_tokens, temperature=None, json_mode=False):
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens, "json_mode": json_mode})
        result = self.handler(prompt, json_mode)
        if isinstance(result, Exception):
            raise result
        return result


def failing_handler(prompt, json_mode):
    return GenerationUnavailableError("No response from text generation API")


@pytest.fixture
def pipeline_config():
    return config.PipelineConfig()


@pytest.fixture
def app_config():
    return config.Config(llm=config.LLMConfig(deepseek_api_key="test-key"))


@pytest.fixture
def small_source():
    return FakeSource(SMALL_REPO, dict(FILE_CONTENTS))


@pytest.fixture
def large_entries():
    return [make_entry(p) for p in LARGE_REPO]


@pytest.fixture
def dead_generator():
    return FakeGenerator(failing_handler)
