from repo_composer.models import AnalysisResult, FileStats, RepositoryMetadata
from repo_composer.styles import STYLE_NAMES, StyleProfile

JSON_SYSTEM_PROMPT = """\
You are an AI assistant that analyzes GitHub repositories. Always respond with \
pure JSON only - no markdown formatting, no code blocks, no explanations, just \
the JSON response.\
"""

CREATIVE_SYSTEM_PROMPT = """\
You are a creative AI assistant that specializes in generating music prompts \
and lyrics based on code repositories. You analyze the technical content and \
create artistic interpretations.\
"""


def _topics(repository: RepositoryMetadata) -> str:
    return ", ".join(repository.topics) or "No topics"


def _repository_block(repository: RepositoryMetadata, label: str = "Primary Language") -> str:
    return (
        f"- Name: {repository.name}\n"
        f"- Description: {repository.description or 'No description'}\n"
        f"- {label}: {repository.language or 'Unknown'}\n"
        f"- Topics: {_topics(repository)}\n"
    )


def _analysis_block(analysis: AnalysisResult) -> str:
    return (
        f"- Purpose: {analysis.purpose}\n"
        f"- Core Themes: {', '.join(analysis.themes)}\n"
        f"- Emotional Tone: {', '.join(analysis.emotions)}\n"
        f"- Technical Concepts: {', '.join(analysis.technical_concepts)}\n"
        f"- Musical Metaphors: {', '.join(analysis.musical_metaphors)}\n"
        f"- Key Features: {', '.join(analysis.key_features)}\n"
        f"- Innovation Level: {analysis.innovation_level}\n"
        f"- Complexity: {analysis.complexity}\n"
        f"- User Impact: {analysis.user_impact}\n"
        f"- Artistic Interpretation: {analysis.artistic_interpretation}\n"
    )


def build_file_selection_prompt(repository: RepositoryMetadata, manifest: str, total: int) -> str:
    return (
        "You are helping to analyze a GitHub repository for music generation inspiration.\n\n"
        "Repository Information:\n"
        f"{_repository_block(repository)}\n"
        f"Available Files ({total} total):\n"
        f"{manifest}\n\n"
        "Your task: Select the 10-15 most relevant files that would provide the best "
        "understanding of this repository's purpose, functionality, and character for "
        "creative music generation. Consider:\n\n"
        "1. Core functionality files (main entry points, key classes/modules)\n"
        "2. Configuration and documentation that reveals purpose\n"
        "3. Unique or interesting algorithmic implementations\n"
        "4. Files that represent the project's main features\n"
        "5. Files with creative or interesting naming/patterns\n\n"
        "Prioritize files that would inspire musical themes over boilerplate or test files.\n\n"
        "Return your selection ONLY as a JSON array of paths copied exactly from the list "
        "above (no markdown formatting, no code blocks):\n"
        '["path/to/file1.js", "path/to/file2.py", ...]\n'
    )


def build_analysis_prompt(repository: RepositoryMetadata, file_summaries: str) -> str:
    return (
        "You are analyzing a GitHub repository to extract themes, concepts, and "
        "characteristics for music generation inspiration.\n\n"
        "Repository Context:\n"
        f"{_repository_block(repository, label='Language')}\n"
        "File Contents Analysis:\n"
        f"{file_summaries}\n\n"
        "Based on this analysis, provide a comprehensive assessment focusing on:\n\n"
        "1. Core Purpose & Functionality: What does this repository do? What problem does it solve?\n"
        "2. Technical Themes: What algorithms, patterns, or concepts are prominent?\n"
        "3. User Experience & Impact: How does this affect users? What emotions might it evoke?\n"
        "4. Architectural Patterns: What structures and design patterns are used?\n"
        "5. Innovation & Uniqueness: What makes this project special or innovative?\n"
        "6. Musical Metaphors: How could the technical concepts translate to musical elements?\n\n"
        "Respond ONLY with a JSON object (no markdown formatting, no code blocks):\n"
        "{\n"
        '  "purpose": "Brief description of what the repository does",\n'
        '  "themes": ["theme1", "theme2", "theme3"],\n'
        '  "emotions": ["emotion1", "emotion2", "emotion3"],\n'
        '  "technicalConcepts": ["concept1", "concept2", "concept3"],\n'
        '  "musicalMetaphors": ["metaphor1", "metaphor2", "metaphor3"],\n'
        '  "keyFeatures": ["feature1", "feature2", "feature3"],\n'
        '  "innovationLevel": "low|medium|high",\n'
        '  "complexity": "simple|moderate|complex",\n'
        '  "userImpact": "description of how users interact with this",\n'
        '  "artisticInterpretation": "creative interpretation of the project\'s essence"\n'
        "}\n"
    )


def build_style_prompt(repository: RepositoryMetadata, analysis: AnalysisResult) -> str:
    styles = ", ".join(STYLE_NAMES)
    return (
        "Based on the following GitHub repository analysis, determine the most suitable "
        "music style for generating lyrics:\n\n"
        "Repository Information:\n"
        f"{_repository_block(repository, label='Language')}\n"
        "Analysis:\n"
        f"- Purpose: {analysis.purpose}\n"
        f"- Themes: {', '.join(analysis.themes)}\n"
        f"- Emotions: {', '.join(analysis.emotions)}\n"
        f"- Technical Concepts: {', '.join(analysis.technical_concepts)}\n"
        f"- Complexity: {analysis.complexity}\n"
        f"- Innovation Level: {analysis.innovation_level}\n\n"
        f"Available styles: {styles}\n\n"
        "Choose the single best style that matches the repository's character and purpose. Consider:\n"
        "- High complexity/innovation → electronic, experimental styles\n"
        "- Technical/analytical → electronic, classical\n"
        "- Emotional/human-focused → pop, rock, jazz\n"
        "- Heavy/complex systems → heavy-metal, hardrock\n"
        "- Simple/elegant → classical, ambient\n"
        "- Modern/trendy → hip-hop, electronic\n\n"
        f"Respond with ONLY the style name (no explanation): {styles}\n"
    )


def build_music_prompt(
    repository: RepositoryMetadata,
    file_stats: FileStats,
    analysis: AnalysisResult,
    style: str,
    profile: StyleProfile,
    char_limit: int,
) -> str:
    upper = style.upper()
    return (
        "Based on the following GitHub repository analysis, generate a detailed music "
        "prompt for AI music generation:\n\n"
        "Repository Information:\n"
        f"{_repository_block(repository)}"
        f"- Stars: {repository.stars}, Forks: {repository.forks}\n\n"
        "AI-Enhanced Analysis:\n"
        f"{_analysis_block(analysis)}\n"
        "File Analysis:\n"
        f"- Total Files Scanned: {file_stats.total}\n"
        f"- AI-Selected Files: {file_stats.selected}\n"
        f"- Files Analyzed: {file_stats.analyzed}\n\n"
        f"Style Palette for {upper}:\n"
        f"- Signature Instruments: {', '.join(profile.instruments)}\n"
        f"- Character: {', '.join(profile.adjectives)}\n"
        f"- Production Direction: {profile.production}\n\n"
        f"Generate a comprehensive music prompt in {upper} style that includes:\n"
        f"1. Genre and Style: Must be {upper}, based on the repository's characteristics\n"
        "2. Mood and Atmosphere: Reflect the emotional tone and user impact\n"
        "3. Tempo and Rhythm: Inspired by technical concepts and innovation level\n"
        f"4. Instrumentation: Match the complexity and themes with {style} instruments\n"
        "5. Key and Scale: Complement the emotional tone\n"
        "6. Special Effects: Represent unique features and innovation\n"
        "7. Musical Elements: Directly incorporate the musical metaphors identified\n\n"
        f"CRITICAL: You MUST generate content specifically in {upper} style. Do not suggest "
        f"other genres or styles.\n\n"
        "IMPORTANT: Do NOT include timing instructions, section durations, timestamps, or any "
        "temporal references. Focus only on musical characteristics, mood, instruments, and "
        "creative elements.\n\n"
        "Format the response as a structured, detailed prompt ready for AI music generation tools.\n\n"
        f"IMPORTANT: Keep your response under {char_limit} characters total.\n"
    )


def build_lyrics_prompt(
    repository: RepositoryMetadata,
    analysis: AnalysisResult,
    style: str,
    profile: StyleProfile,
    char_limit: int,
) -> str:
    return (
        f"Based on the following GitHub repository analysis, generate song lyrics in the {style} style:\n\n"
        "Repository Information:\n"
        f"{_repository_block(repository)}\n"
        "AI-Enhanced Analysis:\n"
        f"{_analysis_block(analysis)}\n"
        f"The song should feel {', '.join(profile.adjectives)}.\n\n"
        "Generate song lyrics that:\n"
        "1. Tell the Story: Narrate the repository's purpose and impact\n"
        "2. Emotional Connection: Reflect the identified emotional tones\n"
        "3. Technical Poetry: Weave technical concepts into artistic metaphors\n"
        f"4. Style Authenticity: Match the {style} genre conventions\n"
        "5. Creative Structure: Include verses, choruses, and bridges naturally\n"
        "6. Metaphorical Depth: Use the musical metaphors as lyrical inspiration\n"
        "7. Human Experience: Connect the technical to universal human experiences\n\n"
        "Use technical terms not literally, but as poetic devices that convey emotion, "
        "struggle, innovation, and triumph. Make the lyrics accessible to non-technical "
        "listeners while keeping the essence of the repository.\n\n"
        "Format the response with clear [Verse], [Chorus], [Bridge], [Outro] labels for structure.\n\n"
        f"IMPORTANT: Keep your response under {char_limit} characters total.\n"
    )
