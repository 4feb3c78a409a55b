"""
Webpage Prompts - system prompt and submission templates for page generation.

Two templates exist because the two submission entry points ask for
slightly different things:
- JSON submissions (/submit-page) describe the character and ask for a page
  about them.
- Form submissions (/submit-page-form) ask for a page built around the
  title, with the character's repost comment used only as inspiration.

Both embed every submitted field verbatim.
"""

# ---------------------------------------------------------------------------
# CODE FENCE MARKERS
# ---------------------------------------------------------------------------
# The system prompt asks the model to wrap the page in this fence;
# pagen.services.code_fence strips it again while streaming.
HTML_FENCE_OPENER = "```html"
HTML_FENCE_CLOSER = "```"


WEBPAGE_SYSTEM_PROMPT = """# System Instruction for Character-Based Web Design

Create HTML webpages that align with provided character information and specified titles.

## Design Style

- Avoid blue, indigo, or purple colors
- Choose color palettes according to character identity
- Adopt calm yet vibrant manga/cartoon aesthetic
- No gradient or shadow
- Maintain clean, simple design without compromising detail richness
- **No hover transitions or animations**

## Content Approach

- Integrate character details seamlessly into webpage narrative
- Mirror popular social media formats (WeChat articles, Xiaohongshu posts, etc.)
- Ensure high readability and visual engagement
- Include comprehensive information while maintaining aesthetic appeal

## Technical Requirements

- **Use Tailwind CSS for all styling** (include CDN link)
- **Output plain HTML only** - no separate CSS files
- Ensure responsive design with Tailwind's responsive utilities
- Focus on clean, semantic HTML structure
- **Use Lucide icons instead of emojis** (include Lucide CDN)
  - example `<i data-lucide="award" class="w-8 h-8 mr-3 text-custom-secondary-yellow"></i>`
  - use `window.lucide?.createIcons()` to initialize lucide
- Implement proper Tailwind color classes for your chosen palette
- It should be a single page with no real external link or download button

## Visual Elements

- **Icons**: Prefer Lucide icons over emojis for better consistency
- **Interactivity**: Static design - no hover effects or transitions
- **Layout**: Utilize Tailwind's flexbox and grid utilities for responsive layouts

## Image Integration
- **Use AI-generated images with the format: https://anyimage.bullet-on-bible.workers.dev/{image-name}.jpg
- **Place relevant keywords in the alt attribute (keep it concise, 2-4 keywords)
- **Include character portraits, scene illustrations, and relevant visual elements
- **Use descriptive, keyword-rich filenames that will help the service find appropriate images
- **Example: <img src="https://anyimage.bullet-on-bible.workers.dev/medieval-knight.jpg" alt="knight warrior armor">
- **Use at most 3 images
- **Avoid special characters and spaces - use hyphens instead
- **Keep filenames concise but meaningful

## Expected Output Format

Just output the final html and wrap it in code block

```html
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>[Character-appropriate title]</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <script src="https://unpkg.com/lucide@latest/dist/umd/lucide.js"></script>
  </head>
  <body>
    <!-- Complete webpage content with Tailwind classes -->
    <!-- Must contain at least 300 words across all text content -->
  </body>
</html>
```

Generate the webpage in Chinese"""


SUBMISSION_PROMPT_TEMPLATE = """角色名字：{character_name}

角色设定：{character_setting}

网页标题：{webpage_title}

角色转发网页时的评论：{character_comment}

请根据以上信息生成一个关于"{character_name}"的角色页面。"""


FORM_PROMPT_TEMPLATE = """请根据我所提供的角色信息以及明确的网页标题，精心打造出与之高度契合的网页。在创作过程中，务必仔细研读角色设定，确保网页内容能够紧密结合该角色所处的世界观，但要完全围绕网页标题，不能刻意使用太多角色信息

角色名字：{character_name}

角色设定：{character_setting}

网页标题：{webpage_title}

注意，{character_name}转发了这个网页并评论：“{character_comment}”，设计网页时可以考虑这条评价并巧妙的融入其中，但网页中不要直接暴露这条转发评论，仅作参考"""


def build_submission_prompt(
    character_name: str,
    character_setting: str,
    webpage_title: str,
    character_comment: str,
) -> str:
    """Build the prompt for a JSON submission."""
    return SUBMISSION_PROMPT_TEMPLATE.format(
        character_name=character_name,
        character_setting=character_setting,
        webpage_title=webpage_title,
        character_comment=character_comment,
    )


def build_form_prompt(
    character_name: str,
    character_setting: str,
    webpage_title: str,
    character_comment: str,
) -> str:
    """Build the prompt for a form submission (title-centred variant)."""
    return FORM_PROMPT_TEMPLATE.format(
        character_name=character_name,
        character_setting=character_setting,
        webpage_title=webpage_title,
        character_comment=character_comment,
    )
