"""
Submission Service - turn a page request into a stored, not-yet-generated page.

Nothing is generated here. The page row is created with html = NULL and the
model only runs when /gen/{id} is first requested.
"""

import logging
import secrets
from typing import Callable

from slugify import slugify

from pagen.ai.prompts import build_submission_prompt
from pagen.models.page import HtmlPage
from pagen.schemas.page import PageSubmission
from pagen.services.page_store import PageStore

logger = logging.getLogger("pagen.services.submission")

PromptBuilder = Callable[[str, str, str, str], str]


def make_slug(character_name: str) -> str:
    """
    Build a unique slug: "<slugified name>----<6 random hex chars>".

    Names that slugify to nothing (e.g. only punctuation) fall back to "page".
    """
    base = slugify(character_name) or "page"
    return f"{base}----{secrets.token_hex(3)}"


def describe_character(character_name: str) -> str:
    return f"关于角色 {character_name} 的页面"


def submit_page(
    store: PageStore,
    submission: PageSubmission,
    default_model: str,
    prompt_builder: PromptBuilder = build_submission_prompt,
    use_default_model: bool = False,
) -> HtmlPage:
    """
    Compose the prompt for a validated submission and store the page.

    Args:
        store: Page store to insert into
        submission: Already-validated request fields
        default_model: Model used when the submission names none
        prompt_builder: Template used for the prompt (JSON or form variant)
        use_default_model: Ignore submission.model (the form entry point)

    Returns:
        The new page, html = None
    """
    prompt = prompt_builder(
        submission.character_name,
        submission.character_setting,
        submission.webpage_title,
        submission.character_comment,
    )
    if use_default_model or submission.model is None:
        chosen_model = default_model
    else:
        chosen_model = submission.model

    page = store.create_page(
        slug=make_slug(submission.character_name),
        prompt=prompt,
        model=chosen_model,
        title=submission.webpage_title,
        description=describe_character(submission.character_name),
    )

    logger.info(f"Page {page.id} submitted for {submission.character_name!r} using {chosen_model}")
    return page
