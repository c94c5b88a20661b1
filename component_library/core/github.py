"""GitHub raw-content URL helpers."""

from __future__ import annotations

# Directory segments between the language folder and the entry's own path.
COMPONENTS_SEGMENT = "components/aspect-ui"
UTILS_SEGMENT = "components"


def raw_file_url(base_url: str, language: str, segment: str, path: str, filename: str) -> str:
    """Join the parts of a raw file address.

    >>> raw_file_url("https://raw.example/o/r", "javascript", "components", "utils", "cn.js")
    'https://raw.example/o/r/javascript/components/utils/cn.js'
    """
    parts = [base_url.rstrip("/"), language, segment.strip("/"), path.strip("/"), filename]
    return "/".join(parts)


def repo_from_raw_base(base_url: str) -> str | None:
    """Extract 'owner/repo' from a ``raw.githubusercontent.com`` base URL."""
    base_url = base_url.strip().rstrip("/")
    marker = "raw.githubusercontent.com/"
    idx = base_url.find(marker)
    if idx == -1:
        return None
    parts = base_url[idx + len(marker):].split("/")
    if len(parts) >= 2 and parts[0] and parts[1]:
        return f"{parts[0]}/{parts[1]}"
    return None
