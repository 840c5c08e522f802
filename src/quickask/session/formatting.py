"""Reply text normalization."""

EMPHASIS_MARKER = "*"


def normalize_reply(reply: str) -> str:
    """Turn markdown-style emphasis markers into line breaks.

    Splits on every literal "*", trims each segment and joins the segments
    with newlines, so "A*B*C" becomes "A\\nB\\nC". Text without markers is
    only trimmed.
    """
    return "\n".join(segment.strip() for segment in reply.split(EMPHASIS_MARKER))
