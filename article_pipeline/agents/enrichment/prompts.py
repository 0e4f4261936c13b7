"""Prompt directives for the article rewrite.

Each directive renders one section of the prompt from ``PromptInputs`` or
returns None when it does not apply. ``compose`` joins the sections in the
order of ``DIRECTIVES``.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

SECTION_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class ResearchSource:
    """Approved research page reduced to an excerpt."""

    url: str
    excerpt: str


@dataclass(frozen=True)
class SiblingArticle:
    """Other stored article offered as an interlinking target."""

    title: str
    url: str


@dataclass
class PromptInputs:
    """Everything the rewrite prompt is built from."""

    title: str
    original_content: str
    research: List[ResearchSource] = field(default_factory=list)
    siblings: List[SiblingArticle] = field(default_factory=list)
    tone: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    readability_level: Optional[int] = None
    custom_instructions: Optional[str] = None
    target_language: Optional[str] = None
    max_content_chars: int = 4000
    max_research_chars: int = 2000
    max_siblings: int = 50

    @property
    def has_research(self) -> bool:
        return bool(self.research)


Directive = Callable[[PromptInputs], Optional[str]]


def readability_band(level: Optional[int]) -> Optional[str]:
    """Map a 0-100 readability target to a descriptive band."""
    if level is None:
        return None
    if level <= 30:
        return "simple"
    if level <= 70:
        return "general audience"
    return "academic/expert"


def role_directive(inputs: PromptInputs) -> Optional[str]:
    return "You are an elite content editor and SEO strategist."


def original_article_directive(inputs: PromptInputs) -> Optional[str]:
    content = inputs.original_content[: inputs.max_content_chars]
    return f"ORIGINAL TITLE: {inputs.title}\n\nORIGINAL CONTENT:\n{content}"


def research_directive(inputs: PromptInputs) -> Optional[str]:
    if not inputs.has_research:
        return None
    lines = [
        "RESEARCH CONTEXT (numbered sources, cite them with footnotes in this order):",
    ]
    for index, source in enumerate(inputs.research, start=1):
        lines.append(f"[{index}] SOURCE: {source.url}\n{source.excerpt[: inputs.max_research_chars]}")
    return "\n\n".join(lines)


def siblings_directive(inputs: PromptInputs) -> Optional[str]:
    if not inputs.siblings:
        return None
    lines = [
        "OTHER ARTICLES ON THIS SITE (add inline Markdown links to them only when "
        "topically relevant, never force a link):",
    ]
    lines.extend(f"- {sibling.title}: {sibling.url}" for sibling in inputs.siblings[: inputs.max_siblings])
    return "\n".join(lines)


def tone_directive(inputs: PromptInputs) -> Optional[str]:
    if not inputs.tone or not inputs.tone.strip():
        return None
    return f"TONE: Write in a {inputs.tone.strip()} tone."


def keywords_directive(inputs: PromptInputs) -> Optional[str]:
    keywords = [keyword.strip() for keyword in inputs.keywords if keyword and keyword.strip()]
    if not keywords:
        return None
    return f"KEYWORDS: Work these keywords in naturally: {', '.join(keywords)}."


def readability_directive(inputs: PromptInputs) -> Optional[str]:
    band = readability_band(inputs.readability_level)
    if band is None:
        return None
    return f"READABILITY: Target a {band} reading level."


def custom_instructions_directive(inputs: PromptInputs) -> Optional[str]:
    if not inputs.custom_instructions or not inputs.custom_instructions.strip():
        return None
    return f"ADDITIONAL INSTRUCTIONS:\n{inputs.custom_instructions.strip()}"


def language_directive(inputs: PromptInputs) -> Optional[str]:
    if not inputs.target_language or not inputs.target_language.strip():
        return None
    language = inputs.target_language.strip()
    return (
        f"LANGUAGE: Write the entire response in {language}. Every textual field of the "
        f"JSON (summary, tags, rewrittenContent and all seo fields) must be in {language}."
    )


def task_directive(inputs: PromptInputs) -> Optional[str]:
    tasks = [
        "Write a concise 2-sentence summary.",
        "Extract 3-5 relevant tags.",
        "Rewrite the full article in Markdown with clear headers, more engaging and better structured.",
    ]
    if inputs.has_research:
        tasks.append(
            "Ground the rewrite in the research context and cite sources with numbered "
            "footnotes ([1], [2], ...) matching the source numbers above."
        )
    if inputs.siblings:
        tasks.append("Link to related site articles inline where it genuinely helps the reader.")
    tasks.append("Analyze the rewritten content for SEO.")
    return "TASKS:\n" + "\n".join(f"{index}. {task}" for index, task in enumerate(tasks, start=1))


def output_contract_directive(inputs: PromptInputs) -> Optional[str]:
    gap_field = (
        ',\n    "competitorGapAnalysis": ["Topic the sources cover that the article misses"]'
        if inputs.has_research
        else ""
    )
    return (
        "Return ONLY a JSON object with this exact shape:\n"
        "{\n"
        '  "summary": "...",\n'
        '  "tags": ["..."],\n'
        '  "rewrittenContent": "...",\n'
        '  "seo": {\n'
        '    "score": 85,\n'
        '    "readability": "High School",\n'
        '    "critique": ["Use more active voice"],\n'
        f'    "keywords": ["..."]{gap_field}\n'
        "  }\n"
        "}"
    )


DIRECTIVES: Sequence[Directive] = (
    role_directive,
    original_article_directive,
    research_directive,
    siblings_directive,
    tone_directive,
    keywords_directive,
    readability_directive,
    custom_instructions_directive,
    language_directive,
    task_directive,
    output_contract_directive,
)


def compose(inputs: PromptInputs, directives: Sequence[Directive] = DIRECTIVES) -> str:
    """
    Build the rewrite prompt.

    Args:
        inputs: Article, research, siblings and user configuration
        directives: Ordered directives (default: DIRECTIVES)

    Returns:
        Prompt text
    """
    sections = [directive(inputs) for directive in directives]
    return SECTION_SEPARATOR.join(section for section in sections if section)
