"""Request filtering for training pages."""

BLOCKED_RESOURCE_TYPES = frozenset(
    {
        "image",
        "font",
        "media",
        "texttrack",
        "websocket",
        "eventsource",
        "manifest",
        "beacon",
        "ping",
        "prefetch",
        "preflight",
        "csp_violation_report",
        "signedexchange",
    }
)

ALWAYS_ALLOWED_RESOURCE_TYPES = frozenset({"document", "script", "xhr", "fetch"})

# Only the editor widget needs its styles to render
EDITOR_STYLESHEET_MARKERS = ("codemirror", "editor")


def should_block(resource_type: str, url: str) -> bool:
    """Return True when a request is not needed to read the page's editors."""
    if resource_type in ALWAYS_ALLOWED_RESOURCE_TYPES:
        return False

    if resource_type in BLOCKED_RESOURCE_TYPES:
        return True

    if resource_type == "stylesheet":
        lowered = url.lower()
        return not any(marker in lowered for marker in EDITOR_STYLESHEET_MARKERS)

    return False
