"""
Demo Pages - bulk import of finished pages for side-by-side model comparison.

Reads every *.html file from a directory (one file per model run) and
upserts it by slug. When the directory can't be read, a built-in set of
small sample pages is imported instead so the list/gen endpoints have
something to show.
"""

import html as html_lib
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from pagen.services.html_metadata import extract_description, extract_title
from pagen.services.page_store import PageStore

logger = logging.getLogger("pagen.services.demo_pages")

IMPORT_PROMPT = "Test page generated by AI model"


# slug -> title, description, model of the built-in samples
SAMPLE_PAGES: Dict[str, Dict[str, str]] = {
    "flash-2.5-high-reasoning": {
        "title": "Akso医院6月表彰名单：黎深医师特刊",
        "description": "在Akso医院的六月表彰名单中，我们荣幸地将最高荣誉授予心外科主任医师——黎深。",
        "model": "flash 2.5 high reasoning",
    },
    "flash-2.5-low-reasoning": {
        "title": "Akso医院6月表彰名单",
        "description": "Flash 2.5 low reasoning model generated page for Li Shen character profile.",
        "model": "flash 2.5 low reasoning",
    },
    "gpt-5-mini": {
        "title": "Akso医院6月表彰名单",
        "description": "GPT-5 mini model generated page for Li Shen character profile.",
        "model": "gpt 5 mini",
    },
    "gpt-5-mini-retry": {
        "title": "Akso医院6月表彰名单",
        "description": "GPT-5 mini retry model generated page for Li Shen character profile.",
        "model": "gpt 5 mini retry",
    },
    "qwen3-232b": {
        "title": "Akso医院6月表彰名单",
        "description": "Qwen3 232B model generated page for Li Shen character profile.",
        "model": "qwen3 232b",
    },
    "sonnet-4": {
        "title": "Akso医院6月表彰名单",
        "description": "Claude Sonnet 4 model generated page for Li Shen character profile.",
        "model": "sonnet 4",
    },
    "streaming-page-demo": {
        "title": "Streaming Page Demo",
        "description": "Streaming page demonstration for character profile generation.",
        "model": "streaming demo",
    },
}


@dataclass
class ImportOutcome:
    """Result of one import run."""
    results: List[Dict[str, Optional[str]]]
    used_samples: bool

    @property
    def message(self) -> str:
        kind = "sample test files" if self.used_samples else "HTML files"
        return f"Successfully processed {len(self.results)} {kind}"

    @property
    def note(self) -> str:
        if self.used_samples:
            return "Used sample HTML data - test results directory not readable"
        return "Read actual HTML files from the test results directory"


def slug_from_filename(filename: str) -> str:
    """Turn "Sonnet 4.html" into "sonnet-4"."""
    stem = re.sub(r"\.html$", "", filename)
    return re.sub(r"[^a-z0-9]+", "-", stem.lower())


def model_from_filename(filename: str) -> str:
    """Turn "gpt-5-mini.html" into "gpt 5 mini"."""
    return re.sub(r"\.html$", "", filename).replace("-", " ")


def render_sample_page(title: str, description: str, model: str) -> str:
    title = html_lib.escape(title)
    description = html_lib.escape(description)
    model = html_lib.escape(model)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <meta name="description" content="{description}">
</head>
<body>
    <h1>{title}</h1>
    <p>{description}</p>
    <p>Generated by: {model}</p>
    <p>This is a sample HTML page for testing the database insertion functionality.</p>
</body>
</html>"""


def import_sample_pages(store: PageStore) -> ImportOutcome:
    results = []
    for slug, sample in SAMPLE_PAGES.items():
        page_html = render_sample_page(sample["title"], sample["description"], sample["model"])
        action = store.upsert_page(
            slug=slug,
            html=page_html,
            model=sample["model"],
            prompt=IMPORT_PROMPT,
            title=sample["title"],
            description=sample["description"],
        )
        results.append({
            "filename": None,
            "slug": slug,
            "title": sample["title"],
            "action": f"{action} (sample)",
            "model": sample["model"],
        })
    return ImportOutcome(results=results, used_samples=True)


def import_test_pages(store: PageStore, directory: str) -> ImportOutcome:
    """
    Import every *.html file of a directory, or the samples if it's unreadable.

    Args:
        store: Page store to upsert into
        directory: Directory with one HTML file per model run
    """
    try:
        files = sorted(p for p in Path(directory).iterdir() if p.name.endswith(".html"))
    except OSError as e:
        logger.warning(f"Cannot read {directory!r} ({e}), importing built-in samples")
        return import_sample_pages(store)

    results = []
    for path in files:
        page_html = path.read_text(encoding="utf-8")
        slug = slug_from_filename(path.name)
        title = extract_title(page_html)
        model = model_from_filename(path.name)

        action = store.upsert_page(
            slug=slug,
            html=page_html,
            model=model,
            prompt=IMPORT_PROMPT,
            title=title,
            description=extract_description(page_html),
        )
        results.append({
            "filename": path.name,
            "slug": slug,
            "title": title,
            "action": action,
            "model": model,
        })

    logger.info(f"Imported {len(results)} pages from {directory!r}")
    return ImportOutcome(results=results, used_samples=False)
