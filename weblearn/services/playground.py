"""Code playground: compose learner HTML/CSS/JS into a preview document.

The composed document is handed to whatever renders it (the bot sends it as
an .html file). No isolation policy is applied here; script errors are caught
inside the page and shown as text there.
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from weblearn.exceptions import PreviewError
from weblearn.storage.store import ProgressStore, StorageKey

logger = logging.getLogger(__name__)

JS_MARKERS = (
    "console.log", "alert", "function", "let ", "const ", "var ", "document.", "window.",
)

FENCE_RE = re.compile(r"```[ \t]*(html|css|js|javascript)?[ \t]*\n(.*?)```", re.DOTALL | re.IGNORECASE)

THEME_STYLES = {
    "light": "body { background: #ffffff; color: #1f2937; }",
    "dark": "body { background: #111827; color: #f9fafb; }",
}


@dataclass(frozen=True)
class CodeSubmission:
    html: str = ""
    css: str = ""
    javascript: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.html.strip() or self.css.strip() or self.javascript.strip())


def _theme_css(theme: str) -> str:
    return THEME_STYLES.get(theme, THEME_STYLES["light"])


def is_javascript(code: str) -> bool:
    return any(marker in code for marker in JS_MARKERS)


def compose_document(submission: CodeSubmission, theme: str = "light") -> str:
    """Full page from the three editors. Script errors are printed in the page
    and posted to the parent frame."""
    if submission.is_empty:
        raise PreviewError("Nothing to run: the submission has no HTML, CSS or JavaScript.")

    return f"""<!DOCTYPE html>
<html lang="en" data-theme="{theme}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>{_theme_css(theme)}</style>
    <style>{submission.css}</style>
</head>
<body>
    {submission.html}
    <pre id="weblearn-errors" style="color: #dc2626;"></pre>
    <script>
        try {{
            {submission.javascript}
        }} catch (error) {{
            console.error('JavaScript Error:', error);
            document.getElementById('weblearn-errors').textContent = 'JavaScript Error: ' + error.message;
            if (window.parent !== window) {{
                window.parent.postMessage({{type: 'error', message: error.message}}, '*');
            }}
        }}
    </script>
</body>
</html>
"""


def _console_page(code: str, theme: str) -> str:
    return f"""<!DOCTYPE html>
<html data-theme="{theme}">
<head>
    <meta charset="UTF-8">
    <style>
        {_theme_css(theme)}
        body {{ font-family: Arial, sans-serif; padding: 20px; }}
        .output {{ background: #f5f5f5; color: #111827; padding: 10px; border-radius: 5px; margin: 10px 0; }}
        .error {{ color: red; }}
    </style>
</head>
<body>
    <div id="output"></div>
    <script>
        const output = document.getElementById('output');
        const originalLog = console.log;
        const originalError = console.error;

        console.log = function(...args) {{
            const div = document.createElement('div');
            div.className = 'output';
            div.textContent = args.join(' ');
            output.appendChild(div);
            originalLog.apply(console, args);
        }};

        console.error = function(...args) {{
            const div = document.createElement('div');
            div.className = 'output error';
            div.textContent = 'Error: ' + args.join(' ');
            output.appendChild(div);
            originalError.apply(console, args);
        }};

        try {{
            {code}
        }} catch (error) {{
            console.error(error.message);
        }}
    </script>
</body>
</html>
"""


def _css_demo_page(code: str, theme: str) -> str:
    return f"""<!DOCTYPE html>
<html data-theme="{theme}">
<head>
    <meta charset="UTF-8">
    <style>
        {_theme_css(theme)}
        {code}
        body {{ font-family: Arial, sans-serif; padding: 20px; }}
    </style>
</head>
<body>
    <h3>CSS preview</h3>
    <div class="example">Example text with your styles applied</div>
    <p>Check the effect of your CSS in this area.</p>
</body>
</html>
"""


def compose_snippet(code: str, theme: str = "light") -> Optional[str]:
    """Preview a single snippet: JavaScript, then markup, then CSS. None if unknown."""
    if is_javascript(code):
        return _console_page(code, theme)
    if "<" in code:
        return code
    if "{" in code and "}" in code:
        return _css_demo_page(code, theme)
    return None


def parse_submission(text: str) -> CodeSubmission:
    """Split a chat message into html/css/js using ```lang fences.

    Unlabelled fences and unfenced text are treated as one snippet and sorted
    by the same rules as compose_snippet.
    """
    text = text or ""
    parts = {"html": [], "css": [], "javascript": []}
    blocks = FENCE_RE.findall(text)
    if not blocks:
        blocks = [("", text)]

    for lang, body in blocks:
        lang = (lang or "").lower()
        if lang == "js":
            lang = "javascript"
        if not lang:
            if is_javascript(body):
                lang = "javascript"
            elif "<" in body:
                lang = "html"
            elif "{" in body and "}" in body:
                lang = "css"
            else:
                lang = "html"
        parts[lang].append(body.strip())

    return CodeSubmission(
        html="\n".join(p for p in parts["html"] if p),
        css="\n".join(p for p in parts["css"] if p),
        javascript="\n".join(p for p in parts["javascript"] if p),
    )


def compose_message(text: str, theme: str = "light") -> tuple[CodeSubmission, str]:
    """Preview for a chat message.

    Fenced blocks are combined into one page; a bare snippet is previewed on
    its own via compose_snippet. Raises PreviewError if nothing can be run.
    """
    submission = parse_submission(text)
    if submission.is_empty:
        raise PreviewError("Nothing to run: the submission has no HTML, CSS or JavaScript.")
    if FENCE_RE.search(text):
        return submission, compose_document(submission, theme=theme)

    document = compose_snippet(text.strip(), theme=theme)
    if document is None:
        raise PreviewError(
            "Couldn't tell what kind of code this is. Wrap it in ```html, ```css or ```js fences."
        )
    return submission, document


EXAMPLES: dict[str, CodeSubmission] = {
    "basic": CodeSubmission(
        html="""<h1>Hello!</h1>
<p>This is a basic HTML structure.</p>
<button onclick="greet()">Say hello</button>""",
        css="""body {
    font-family: Arial, sans-serif;
    max-width: 800px;
    margin: 0 auto;
    padding: 20px;
}

h1 {
    text-align: center;
}

button {
    background-color: #007bff;
    color: white;
    padding: 10px 20px;
    border: none;
    border-radius: 5px;
    cursor: pointer;
}

button:hover {
    background-color: #0056b3;
}""",
        javascript="""function greet() {
    alert('Hello! Welcome to WebLearn!');
}

console.log('The page has loaded!');""",
    ),
    "css-styling": CodeSubmission(
        html="""<div class="card">
    <h2>CSS styling example</h2>
    <p>This card is styled with CSS.</p>
    <div class="buttons">
        <button class="btn-primary">Primary</button>
        <button class="btn-secondary">Secondary</button>
    </div>
</div>""",
        css=""".card {
    background: white;
    color: #333;
    border-radius: 10px;
    padding: 30px;
    box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1);
    max-width: 400px;
    margin: 50px auto;
    text-align: center;
}

.buttons {
    display: flex;
    gap: 10px;
    justify-content: center;
}

button {
    padding: 12px 24px;
    border: none;
    border-radius: 6px;
    cursor: pointer;
    transition: all 0.3s ease;
}

.btn-primary {
    background-color: #007bff;
    color: white;
}

.btn-secondary {
    background-color: #6c757d;
    color: white;
}""",
        javascript="""document.querySelectorAll('button').forEach(button => {
    button.addEventListener('click', function() {
        console.log(this.textContent + ' button clicked!');
    });
});""",
    ),
}


async def save_code(store: ProgressStore, submission: CodeSubmission) -> None:
    await store.set(StorageKey.SAVED_CODE, {
        "html": submission.html,
        "css": submission.css,
        "javascript": submission.javascript,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


async def load_code(store: ProgressStore) -> Optional[CodeSubmission]:
    data = await store.get(StorageKey.SAVED_CODE, {})
    submission = CodeSubmission(
        html=str(data.get("html") or ""),
        css=str(data.get("css") or ""),
        javascript=str(data.get("javascript") or ""),
    )
    if submission.is_empty:
        return None
    return submission
