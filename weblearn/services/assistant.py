"""Keyword-matching study assistant with canned answers.

Rules are checked in declaration order and the first keyword found in the
question wins, so more specific keywords are listed before generic ones.
"""
import logging
from typing import Optional

logger = logging.getLogger(__name__)

ASSISTANT_RULES: tuple[tuple[str, str], ...] = (
    # these contain later keywords ("form", "dom", "const") and must come first
    ("transform", "transform moves, rotates or scales an element without affecting layout: "
                  "transform: translateX(20px) rotate(45deg) scale(1.2);"),
    ("random", "Math.random() returns a number in [0, 1). For a whole number from 1 to 6 use "
               "Math.floor(Math.random() * 6) + 1."),
    ("constructor", "A class constructor runs when you call new: class User { constructor(name) "
                    "{ this.name = name; } } then const u = new User('Ana');"),
    # HTML
    ("semantic", "Semantic tags (<header>, <nav>, <main>, <article>, <footer>) describe the "
                 "meaning of content, which helps accessibility and search engines."),
    ("form", "Forms collect input: wrap controls in <form action=\"...\" method=\"post\">, "
             "use <label for=\"id\"> with each <input> and finish with a <button type=\"submit\">."),
    ("table", "Tables use <table>, rows <tr>, header cells <th> and data cells <td>. "
              "Use them for tabular data, not for page layout."),
    ("image", "Images use <img src=\"photo.jpg\" alt=\"description\">. Always give a "
              "meaningful alt text."),
    ("link", "Links use <a href=\"https://example.com\">text</a>. Add target=\"_blank\" "
             "to open in a new tab."),
    ("doctype", "<!DOCTYPE html> must be the first line: it puts the browser in standards mode."),
    ("html", "HTML describes the structure of a page with tags. Start with <!DOCTYPE html>, "
             "then <html>, <head> (metadata, <title>) and <body> (visible content)."),
    # CSS
    ("flexbox", "Flexbox lays items out in one direction: set display: flex on the container, "
                "then use justify-content (main axis) and align-items (cross axis)."),
    ("flex", "Flexbox lays items out in one direction: set display: flex on the container, "
             "then use justify-content (main axis) and align-items (cross axis)."),
    ("grid", "CSS Grid is two-dimensional: display: grid plus grid-template-columns, "
             "for example repeat(3, 1fr), and gap for spacing."),
    ("box model", "Every element is a box: content, padding, border, margin. "
                  "box-sizing: border-box makes width include padding and border."),
    ("selector", "Selectors pick elements: tag (p), class (.card), id (#main), "
                 "descendant (nav a) and pseudo-classes (a:hover)."),
    ("responsive", "Make layouts responsive with relative units, flexible images "
                   "(max-width: 100%) and media queries such as @media (max-width: 768px)."),
    ("media query", "Media queries apply rules conditionally: @media (max-width: 768px) { ... }."),
    ("color", "Colours can be names (red), hex (#6366f1), rgb(99, 102, 241) or hsl(). "
              "Use color for text and background-color for backgrounds."),
    ("css", "CSS styles HTML. A rule is a selector plus declarations: "
            "p { color: #333; font-size: 16px; }. Link a stylesheet with <link rel=\"stylesheet\">."),
    # JavaScript
    ("addeventlistener", "element.addEventListener('click', handler) runs handler on every click. "
                         "Remove it with removeEventListener and the same function reference."),
    ("event", "Events react to the user: button.addEventListener('click', () => { ... })."),
    ("dom", "The DOM is the page as objects. Select with document.getElementById or "
            "document.querySelector, then change textContent, classList or style."),
    ("arrow", "Arrow functions are short function expressions: const add = (a, b) => a + b;"),
    ("function", "Declare functions with function name(params) { ... } or as arrow functions "
                 "const name = (params) => { ... }."),
    ("const", "Use const for bindings that are never reassigned and let for ones that are. "
              "Avoid var in new code."),
    ("let", "Use let for variables that change and const for ones that do not. "
            "Both are block scoped, unlike var."),
    ("variable", "Declare variables with let (reassignable) or const (not reassignable)."),
    ("array", "Arrays hold ordered values: const xs = [1, 2, 3]; use push, map, filter "
              "and forEach to work with them."),
    ("promise", "A Promise represents a future value; use .then() or await inside an async function."),
    ("fetch", "fetch(url) returns a Promise of a Response: const data = await (await fetch(url)).json();"),
    ("javascript", "JavaScript adds behaviour to pages. Put scripts in <script> tags or "
                   "external .js files loaded with <script src=\"app.js\"></script>."),
    # Site
    ("quiz", "Use /quiz to test yourself on HTML, CSS or JavaScript. Your latest score per "
             "category feeds your overall progress."),
    ("deploy", "Static sites can be deployed to GitHub Pages, Netlify or Vercel: push the files "
               "and point the service at the folder containing index.html."),
)

FALLBACK_TOPICS = ("html", "css", "flexbox", "dom", "function")


def match_rule(question: str) -> Optional[tuple[str, str]]:
    """Return the first (keyword, response) whose keyword occurs in the question."""
    text = question.lower()
    for keyword, response in ASSISTANT_RULES:
        if keyword in text:
            return keyword, response
    return None


def answer(question: Optional[str]) -> str:
    if not question or not question.strip():
        return "🤖 Ask me something about HTML, CSS or JavaScript."

    match = match_rule(question)
    if match is None:
        logger.debug("No assistant rule matched: %r", question)
        topics = ", ".join(FALLBACK_TOPICS)
        return (
            "🤖 I don't have an answer for that yet.\n"
            f"Try asking about: {topics}."
        )

    return f"🤖 {match[1]}"
