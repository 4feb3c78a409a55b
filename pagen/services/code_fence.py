"""
Code Fence Stripping - expose only the HTML inside a streamed ```html block.

The model is told to answer with

    ```html
    <!DOCTYPE html>...
    ```

but the browser must receive the page itself, while it is still being
generated. The closing fence only shows up in the last chunk(s), and any
marker can be split across chunks, so the visible text is recomputed from
the whole accumulated output on every chunk and only the part that wasn't
sent yet goes out:

    stream = CodeFenceStream()
    for chunk in chunks:
        send(stream.feed(chunk))
    send(stream.finish())
    save(stream.visible)
"""

from pagen.ai.prompts import HTML_FENCE_CLOSER, HTML_FENCE_OPENER

# The opener occupies a whole line
OPENER_LINE = HTML_FENCE_OPENER + "\n"


def strip_code_fence(raw: str, final: bool = True) -> str:
    """
    Return the displayable HTML inside a (possibly partial) fenced answer.

    Args:
        raw: Everything the model produced so far
        final: False while more chunks may follow. Text that could still
               turn out to be part of a fence marker (a prefix of the opener
               line, trailing backticks) is then held back.

    Returns:
        The visible HTML. For a growing raw the non-final results only ever
        extend each other, ending in the final result.
    """
    if not final and OPENER_LINE.startswith(raw):
        return ""

    if raw.startswith(HTML_FENCE_OPENER):
        candidate = raw[len(HTML_FENCE_OPENER):]
        if candidate.startswith("\n"):
            candidate = candidate[1:]
    else:
        # Model skipped the fence
        candidate = raw

    # Whitespace after the closing fence is not part of the page
    trimmed = candidate.rstrip()
    if trimmed.endswith(HTML_FENCE_CLOSER):
        return trimmed[:-len(HTML_FENCE_CLOSER)]

    if not final:
        return candidate.rstrip("`")

    return candidate


class CodeFenceStream:
    """
    Incremental fence stripper for one streamed answer.

    Attributes:
        raw: All chunks received so far, never modified
        emitted: Number of visible characters already handed out
        chunks: Number of chunks fed
    """

    def __init__(self):
        self.raw = ""
        self.emitted = 0
        self.chunks = 0

    def feed(self, chunk: str) -> str:
        """Add a chunk and return the newly revealed text (may be empty)."""
        self.raw += chunk
        self.chunks += 1
        return self._advance(strip_code_fence(self.raw, final=False))

    def finish(self) -> str:
        """Close the stream and return whatever was still held back."""
        return self._advance(self.visible)

    @property
    def visible(self) -> str:
        """The final HTML for everything received so far."""
        return strip_code_fence(self.raw, final=True)

    def _advance(self, visible: str) -> str:
        delta = visible[self.emitted:]
        self.emitted = len(visible)
        return delta
