from urllib.parse import urlparse

DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(url: str) -> str:
    """Prefix ``https://`` unless the URL already uses http or https."""
    url = (url or "").strip()

    if not url.startswith("http://") and not url.startswith("https://"):
        return f"https://{url}"

    return url


def origin_of(url: str) -> str:
    parsed = urlparse(url)

    if not parsed.hostname:
        raise ValueError(f"Invalid URL: {url}")

    origin = f"{parsed.scheme}://{parsed.hostname}"
    if parsed.port and parsed.port != DEFAULT_PORTS.get(parsed.scheme):
        origin = f"{origin}:{parsed.port}"
    return origin


def is_https(url: str) -> bool:
    return url.startswith("https://")
