"""
Pages Router - submit page requests and serve (or first generate) pages.

Endpoints:
==========
- GET  /                  -> Landing page
- GET  /submit-demo       -> HTML form for manual testing
- POST /submit-page       -> JSON submission, returns {message, id, url}
- POST /submit-page-form  -> Form submission, redirects to /gen/{id}
- GET  /gen/{page_id}     -> Stored page, or stream it from the model first

Submission never calls the model. The page is generated the first time
/gen/{id} is requested; later requests get the stored HTML.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, RedirectResponse, StreamingResponse

from pagen.ai.gateway import ModelGateway
from pagen.ai.prompts import build_form_prompt, build_submission_prompt
from pagen.deps import get_generation_service, get_model_gateway, get_page_store
from pagen.schemas.page import PageSubmission, PageSubmitResponse
from pagen.services.page_errors import PageServiceError
from pagen.services.page_generation import PageGenerationService, PageState
from pagen.services.page_store import PageStore
from pagen.services.submission import submit_page

logger = logging.getLogger("pagen.routers.pages")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(tags=["pages"])


def gen_url(page_id: int) -> str:
    return f"/gen/{page_id}"


# ---------------------------------------------------------------------------
# HUMAN-FACING PAGES
# ---------------------------------------------------------------------------

_INPUT_CLASS = (
    "w-full px-3 py-2 border border-gray-300 rounded-md "
    "focus:outline-none focus:ring-2 focus:ring-blue-500"
)


@router.get("/", response_class=HTMLResponse)
def landing_page():
    """Landing page linking to the demo form."""
    return HTMLResponse(content="""<!DOCTYPE html>
<html lang="zh">
<head>
    <meta charset="UTF-8">
    <title>Pagen - AI 页面生成器</title>
    <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="bg-gray-50 min-h-screen">
    <div class="container mx-auto px-4 py-8">
        <div class="max-w-2xl mx-auto">
            <h1 class="text-4xl font-bold text-center mb-8 text-gray-800">Pagen - AI 页面生成器</h1>
            <div class="bg-white rounded-lg shadow-md p-6 text-center">
                <p class="text-gray-600 mb-6">使用 AI 技术快速生成个性化的网页内容</p>
                <a href="/submit-demo"
                   class="inline-block bg-blue-500 hover:bg-blue-600 text-white font-bold py-3 px-6 rounded-lg">
                    开始生成页面
                </a>
            </div>
        </div>
    </div>
</body>
</html>""")


@router.get("/submit-demo", response_class=HTMLResponse)
def submit_demo_page():
    """Test form posting to /submit-page-form."""
    return HTMLResponse(content=f"""<!DOCTYPE html>
<html lang="zh">
<head>
    <meta charset="UTF-8">
    <title>角色页面生成测试</title>
    <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="bg-gray-50 min-h-screen">
    <div class="container mx-auto px-4 py-8">
        <div class="max-w-2xl mx-auto">
            <h1 class="text-3xl font-bold text-center mb-8 text-gray-800">角色页面生成器</h1>
            <div class="bg-white rounded-lg shadow-md p-6">
                <form method="post" action="/submit-page-form" class="space-y-6">
                    <div>
                        <label class="block text-sm font-medium text-gray-700 mb-2">角色名字</label>
                        <input type="text" name="character_name" required class="{_INPUT_CLASS}"
                               placeholder="请输入角色名字">
                    </div>
                    <div>
                        <label class="block text-sm font-medium text-gray-700 mb-2">角色设定</label>
                        <textarea name="character_setting" required rows="4" class="{_INPUT_CLASS}"
                                  placeholder="请详细描述角色的背景、性格、能力等设定"></textarea>
                    </div>
                    <div>
                        <label class="block text-sm font-medium text-gray-700 mb-2">网页标题</label>
                        <input type="text" name="webpage_title" required class="{_INPUT_CLASS}"
                               placeholder="请输入网页标题">
                    </div>
                    <div>
                        <label class="block text-sm font-medium text-gray-700 mb-2">角色转发网页时的评论</label>
                        <textarea name="character_comment" required rows="3" class="{_INPUT_CLASS}"
                                  placeholder="请输入角色转发这个网页时会说的话或评论"></textarea>
                    </div>
                    <div class="text-center">
                        <button type="submit"
                                class="bg-blue-500 hover:bg-blue-600 text-white font-bold py-3 px-8 rounded-lg">
                            生成角色页面
                        </button>
                    </div>
                </form>
            </div>
        </div>
    </div>
</body>
</html>""")


# ---------------------------------------------------------------------------
# SUBMISSION
# ---------------------------------------------------------------------------

@router.post("/submit-page", response_model=PageSubmitResponse)
def submit_page_json(
    payload: PageSubmission,
    store: PageStore = Depends(get_page_store),
    gateway: ModelGateway = Depends(get_model_gateway),
):
    """
    Submit a page generation request.

    The page is NOT generated here; request the returned url to generate it.
    A model without a configured endpoint is rejected (422) before anything
    is stored.
    """
    if payload.model is not None and payload.model not in gateway.model_list:
        raise PageServiceError.validation(
            f"Unsupported model: {payload.model}",
            detail={"supported_models": gateway.model_list},
        )

    page = submit_page(
        store,
        payload,
        default_model=gateway.default_model,
        prompt_builder=build_submission_prompt,
    )
    return PageSubmitResponse(
        message="Page submission successful",
        id=page.id,
        url=gen_url(page.id),
    )


@router.post("/submit-page-form", response_class=RedirectResponse)
def submit_page_form(
    character_name: str = Form(..., min_length=1),
    character_setting: str = Form(..., min_length=1),
    webpage_title: str = Form(..., min_length=1),
    character_comment: str = Form(..., min_length=1),
    model: Optional[str] = Form(None),
    store: PageStore = Depends(get_page_store),
    gateway: ModelGateway = Depends(get_model_gateway),
):
    """
    Form variant of /submit-page for the demo form.

    Always generates with the default model and redirects straight to
    /gen/{id}, which starts the generation.
    """
    if model and model != gateway.default_model:
        logger.info(f"Form submission asked for {model!r}, using {gateway.default_model!r}")

    submission = PageSubmission(
        character_name=character_name,
        character_setting=character_setting,
        webpage_title=webpage_title,
        character_comment=character_comment,
    )
    page = submit_page(
        store,
        submission,
        default_model=gateway.default_model,
        prompt_builder=build_form_prompt,
        use_default_model=True,
    )
    return RedirectResponse(url=gen_url(page.id), status_code=status.HTTP_302_FOUND)


# ---------------------------------------------------------------------------
# GENERATE OR SERVE
# ---------------------------------------------------------------------------

@router.get("/gen/{page_id}", response_class=HTMLResponse)
def generate_or_serve_page(
    page_id: int,
    service: PageGenerationService = Depends(get_generation_service),
):
    """
    Serve a page, generating it on the first request.

    - Unknown id: 404
    - Stored HTML: returned as-is, no model call
    - No HTML yet: streamed from the model as it is generated, then stored
    """
    lookup = service.lookup(page_id)

    if lookup.state == PageState.NOT_FOUND:
        raise PageServiceError.not_found(page_id)

    if lookup.state == PageState.CACHED:
        logger.info(f"Serving stored page {page_id}")
        return HTMLResponse(content=lookup.html)

    logger.info(f"Streaming new page {page_id}")
    # identity encoding: no compression buffering, partial writes flush promptly
    return StreamingResponse(
        lookup.stream,
        media_type="text/html; charset=utf-8",
        headers={"Content-Encoding": "identity"},
    )
