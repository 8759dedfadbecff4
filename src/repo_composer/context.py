from repo_composer.models import FileEntry, SelectedFile

ELLIPSIS = "..."


def truncate_content(content: str, max_chars: int) -> str:
    if len(content) > max_chars:
        return content[:max_chars] + ELLIPSIS
    return content


def format_manifest(files: list[FileEntry]) -> str:
    return "\n".join(
        f"{i}. {f.path} ({f.category.value}, {f.size} bytes, .{f.extension})"
        for i, f in enumerate(files, start=1)
    )


def format_file_summaries(contents: list[SelectedFile], preview_chars: int) -> str:
    blocks = []
    for i, selected in enumerate(contents, start=1):
        blocks.append(
            f"File {i}: {selected.entry.path} ({selected.entry.category.value})\n"
            f"Preview: {truncate_content(selected.content, preview_chars)}\n"
            f"Key Features: {', '.join(selected.tags)}"
        )
    return "\n\n".join(blocks)
