from dataclasses import dataclass

from weblearn.config import SEARCH_MIN_QUERY


@dataclass(frozen=True)
class Page:
    title: str
    url: str
    content: str


SEARCHABLE_CONTENT = (
    Page("HTML Basics", "html-tutorial.html#intro", "html tags structure markup"),
    Page("CSS Styling", "css-tutorial.html#intro", "css style design layout"),
    Page("JavaScript Programming", "js-tutorial.html#intro", "javascript functions variables dom"),
    Page("Code Practice", "practice.html", "practice editor coding exercises"),
    Page("Quiz", "quiz.html", "quiz test questions"),
)


def search(query: str) -> list[Page]:
    """Pages whose title or keywords contain the query, in catalogue order."""
    query = (query or "").strip().lower()
    if len(query) < SEARCH_MIN_QUERY:
        return []
    return [
        page for page in SEARCHABLE_CONTENT
        if query in page.title.lower() or query in page.content.lower()
    ]


def format_results(query: str, pages: list[Page]) -> str:
    if not pages:
        return f"🔍 No results for “{query.strip()}”."
    lines = [f"🔍 Results for “{query.strip()}”:\n"]
    for page in pages:
        lines.append(f"• {page.title} — {page.url}")
    return "\n".join(lines)
