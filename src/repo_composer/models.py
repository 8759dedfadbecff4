from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from repo_composer.classify import Category


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RepositoryMetadata(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
    name: str
    description: str | None = None
    language: str | None = None
    topics: list[str] = []
    stars: int = 0
    forks: int = 0


class FileEntry(BaseModel):
    model_config = ConfigDict(frozen=True)
    path: str
    name: str
    size: int = 0
    download_url: str | None = None
    category: Category = Category.OTHER

    @property
    def extension(self) -> str:
        return self.name.lower().rsplit(".", 1)[-1]


class SelectedFile(BaseModel):
    entry: FileEntry
    content: str
    tags: list[str]


class AnalysisResult(CamelModel):
    purpose: str
    themes: list[str]
    emotions: list[str]
    technical_concepts: list[str]
    musical_metaphors: list[str]
    key_features: list[str]
    innovation_level: Literal["low", "medium", "high"]
    complexity: Literal["simple", "moderate", "complex"]
    user_impact: str
    artistic_interpretation: str

    @field_validator("innovation_level", "complexity", mode="before")
    @classmethod
    def _normalise_level(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class FileStats(CamelModel):
    total: int
    selected: int
    analyzed: int


class SelectedFileSummary(CamelModel):
    name: str
    path: str
    category: Category


class RepositoryAnalysis(CamelModel):
    repository: RepositoryMetadata
    file_stats: FileStats
    selected_files: list[SelectedFileSummary]
    analysis: AnalysisResult


class Artifact(BaseModel):
    kind: Literal["prompt", "lyrics"]
    style: str
    text: str
    max_chars: int

    @model_validator(mode="after")
    def _check_length(self) -> "Artifact":
        if len(self.text) > self.max_chars:
            raise ValueError(f"{self.kind} artifact exceeds {self.max_chars} characters")
        return self


# --- HTTP models ---


class GenerateRequest(CamelModel):
    repo_url: str
    music_style: str = "electronic"


class GenerateMultipleRequest(CamelModel):
    repo_url: str
    styles: list[str] = Field(default_factory=lambda: ["electronic", "rock", "pop", "jazz"])


class LyricsResult(CamelModel):
    style: str
    requested_style: str
    lyrics: str


class LyricsFailure(CamelModel):
    style: str
    message: str


class _GenerationBase(AnalysisResult):
    repository: RepositoryMetadata
    file_stats: FileStats
    selected_files: list[SelectedFileSummary]
    music_prompt: str
    generated_at: str


class GenerateResponse(_GenerationBase):
    selected_style: str
    requested_style: str
    lyrics: str


class GenerateMultipleResponse(_GenerationBase):
    requested_styles: list[str]
    lyrics: list[LyricsResult]
    errors: list[LyricsFailure]


class GenerateEnvelope(BaseModel):
    success: bool = True
    data: GenerateResponse


class GenerateMultipleEnvelope(BaseModel):
    success: bool = True
    data: GenerateMultipleResponse


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
