from enum import Enum


class Category(str, Enum):
    DOCUMENTATION = "documentation"
    CONFIGURATION = "configuration"
    TEST = "test"
    ENTRY_POINT = "entry-point"
    SOURCE_CODE = "source-code"
    FRONTEND = "frontend"
    OTHER = "other"


SOURCE_EXTENSIONS = {
    "js", "ts", "py", "java", "cpp", "c", "go", "rs", "php", "rb", "swift", "kt", "scala", "cs", "dart",
}
DOC_EXTENSIONS = {"md", "txt", "rst", "adoc"}
DATA_EXTENSIONS = {"json", "yaml", "yml", "toml", "ini", "conf", "config", "xml"}
FRONTEND_EXTENSIONS = {"html", "css", "scss", "sass", "less"}

# (keywords, tag) per category; any keyword present in the lowercased content adds the tag
TAG_RULES: dict[Category, list[tuple[tuple[str, ...], str]]] = {
    Category.SOURCE_CODE: [
        (("async", "await"), "asynchronous"),
        (("class",), "object-oriented"),
        (("function", "def"), "functional"),
        (("api", "http"), "api-interaction"),
        (("database", "sql"), "data-persistence"),
        (("algorithm", "sort"), "algorithms"),
        (("render", "draw"), "visualization"),
        (("encrypt", "secure"), "security"),
    ],
    Category.DOCUMENTATION: [
        (("tutorial", "guide"), "educational"),
        (("api", "endpoint"), "api-documentation"),
    ],
    Category.CONFIGURATION: [
        (("deploy", "build"), "deployment"),
        (("test", "ci"), "testing"),
    ],
}

DEFAULT_TAGS = frozenset({"general"})


def _extension(name: str) -> str:
    return name.rsplit(".", 1)[-1]


def _has_any(text: str, *needles: str) -> bool:
    return any(n in text for n in needles)


def classify(file_name: str, file_path: str) -> Category:
    """Map a file to a category. Rules are checked in order and the first match wins."""
    name = file_name.lower()
    path = file_path.lower()

    if _has_any(name, "readme", "contributing", "license"):
        return Category.DOCUMENTATION
    if _has_any(name, "package", "requirements", "cargo", "pom", "build", "makefile"):
        return Category.CONFIGURATION
    if "test" in name or _has_any(path, "test", "spec"):
        return Category.TEST
    if _has_any(name, "main", "index", "app"):
        return Category.ENTRY_POINT
    if _has_any(name, "config", "setting"):
        return Category.CONFIGURATION

    if "." not in name:
        return Category.OTHER
    ext = _extension(name)
    if ext in SOURCE_EXTENSIONS:
        return Category.SOURCE_CODE
    if ext in DOC_EXTENSIONS:
        return Category.DOCUMENTATION
    if ext in DATA_EXTENSIONS:
        return Category.CONFIGURATION
    if ext in FRONTEND_EXTENSIONS:
        return Category.FRONTEND
    return Category.OTHER


def extract_tags(content: str, category: Category) -> frozenset[str]:
    lowered = content.lower()
    tags = {
        tag
        for keywords, tag in TAG_RULES.get(category, [])
        if _has_any(lowered, *keywords)
    }
    return frozenset(tags) if tags else DEFAULT_TAGS


def file_priority(file_name: str, file_path: str) -> int:
    """Score used by the heuristic file selection; higher is more interesting."""
    name = file_name.lower()
    path = file_path.lower()

    if "readme" in name:
        return 100
    if _has_any(name, "main", "index"):
        return 90
    if "app" in name and "test" not in path:
        return 85
    if _has_any(path, "src", "lib"):
        return 80
    if _has_any(name, "package", "requirements"):
        return 75
    if "config" in name:
        return 70
    if "test" in path or "test" in name:
        return 10
    if "license" in name:
        return 60
    return 50
