"""
share.py: Result text for the share/export boundary.
"""

from urllib.parse import quote

TWEET_INTENT_URL = "https://twitter.com/intent/tweet?text="


def share_text(score: int, victory: bool) -> str:
    if victory:
        return f"I escaped the galaxy with {score} points in $fullsend Community Challenge! #FullSend"
    return f"Scored {score} in $fullsend Community Challenge! #FullSend"


def share_url(text: str) -> str:
    return TWEET_INTENT_URL + quote(text, safe="")
