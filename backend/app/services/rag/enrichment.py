"""
Text Enrichment

Builds the natural-language blob that gets embedded for each playlist:
name, description, question/video counts, and the actual content of the
linked question and video instances.

How it works:
1. CLEAN   – question/explanation HTML is stripped to plain text
2. LATEX   – formulas live in data-latex="..." attributes of the raw HTML,
             so they are pulled out separately before stripping loses them
3. COMPOSE – sections are added only when they carry information and
             joined with ". "
"""

import html
import re

from app.core.errors import EnrichmentError
from app.models.catalog import Container, InstanceType, QuestionInstance, VideoInstance
from app.services.store.base import DocumentStore, QUESTION_INSTANCES, VIDEO_INSTANCES


TAG_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")
LATEX_PATTERN = re.compile(r'data-latex="([^"]+)"')

SECTION_SEPARATOR = ". "
ITEM_SEPARATOR = " | "


# ── HTML helpers ─────────────────────────────────────────────────────────────

def strip_html(s: str | None) -> str:
    """Remove HTML tags and &nbsp;, collapse whitespace."""
    if not s:
        return ""
    s = TAG_PATTERN.sub(" ", s)
    s = s.replace("&nbsp;", " ")
    s = WHITESPACE_PATTERN.sub(" ", s)
    return s.strip()


def extract_latex(s: str | None) -> list[str]:
    """
    Extract LaTeX expressions from data-latex attributes.

    For example:
        '<span data-latex="\\frac{1}{2}"></span>'  →  ['\\frac{1}{2}']
    """
    if not s:
        return []
    return [html.unescape(m) for m in LATEX_PATTERN.findall(s)]


def question_to_text(question: QuestionInstance) -> str:
    parts = [
        strip_html(question.question_text),
        " ".join(extract_latex(question.question_text)),
        strip_html(question.explanation_text),
    ]
    return " ".join(p for p in parts if p)


# ── Composition ──────────────────────────────────────────────────────────────

def build_enriched_text(
    container: Container,
    questions: list[QuestionInstance],
    videos: list[VideoInstance],
) -> str:
    """
    Build enriched text for a single container.

    Pure function of its inputs; `questions` and `videos` are expected in
    playlist order.
    """
    name = container.name or ""
    description = container.description or ""
    summary = container.instances_summary
    total_questions = summary.total_questions if summary else 0
    total_duration = summary.total_duration_seconds if summary else 0

    question_texts = [t for t in (question_to_text(q) for q in questions) if t]
    video_titles = [v.title for v in videos if v.title]

    parts = [f"Playlist: {name}"]
    if description and description != name:
        parts.append(f"Deskripsi: {description}")
    if total_questions > 0:
        parts.append(f"Jumlah soal: {total_questions}")
    if total_duration > 0:
        parts.append(f"Durasi video: {int(total_duration // 60)} menit")
    if question_texts:
        parts.append(f"Soal-soal: {ITEM_SEPARATOR.join(question_texts)}")
    if video_titles:
        parts.append(f"Video: {ITEM_SEPARATOR.join(video_titles)}")

    return SECTION_SEPARATOR.join(parts)


def _in_playlist_order(docs: list, ids: list[str]) -> list:
    """Docs in first-occurrence order of `ids`; repeated ids yield one doc."""
    by_id = {doc.id: doc for doc in docs}
    return [by_id[i] for i in dict.fromkeys(ids) if i in by_id]


class TextEnricher:
    """Fetches a container's related instances and builds its enriched text."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def fetch_questions(self, container: Container) -> list[QuestionInstance]:
        ids = container.instance_ids(InstanceType.QUESTION)
        if not ids:
            return []
        docs = await self.store.find_by_ids(QUESTION_INSTANCES, ids)
        return _in_playlist_order([QuestionInstance(**d) for d in docs], ids)

    async def fetch_videos(self, container: Container) -> list[VideoInstance]:
        ids = container.instance_ids(InstanceType.VIDEO)
        if not ids:
            return []
        docs = await self.store.find_by_ids(VIDEO_INSTANCES, ids)
        return _in_playlist_order([VideoInstance(**d) for d in docs], ids)

    async def enrich(self, container: Container) -> str:
        """
        Build the enriched text for one container.

        Raises:
            EnrichmentError: if fetching or processing related instances
                fails. The enclosing batch is expected to abort.
        """
        try:
            questions = await self.fetch_questions(container)
            videos = await self.fetch_videos(container)
            return build_enriched_text(container, questions, videos)
        except Exception as e:
            print(
                f"[Pipeline] ERROR in enrichment for container "
                f"_id={container.id} name={container.name}"
            )
            print(f"[Pipeline] Exception: {e!r}")
            raise EnrichmentError(
                f"Failed to enrich container {container.id} ({container.name}): {e}",
                container_id=container.id,
                name=container.name,
            ) from e
