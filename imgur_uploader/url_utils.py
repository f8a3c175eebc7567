import re

ALBUM_URL_TEMPLATE = "https://imgur.com/a/{}"


def extract_album_id(value: str) -> str:
    """Extract album ID from an Imgur URL or return the ID directly.

    Supports URLs like:
    - https://imgur.com/a/Xy2AbCd
    - https://imgur.com/gallery/Xy2AbCd
    - https://imgur.com/gallery/some-album-title-Xy2AbCd
    - https://m.imgur.com/album/Xy2AbCd
    - Xy2AbCd

    Args:
        value: Imgur album URL or album ID

    Returns:
        Album ID as a string

    Raises:
        ValueError: If the value is not a valid Imgur album URL or ID
    """
    value = value.strip()

    # If it's just an ID, return it
    if value.isalnum() and value.isascii():
        return value

    # Try to extract from URL: titled gallery URLs end with -<id>
    regex = (
        r"(?:^|//)(?:www\.|m\.)?imgur\.com/(?:a|gallery|album)/"
        r"(?:[\w-]*-)?([A-Za-z0-9]+)/?(?:[?#].*)?$"
    )
    m = re.search(regex, value)
    if m:
        return m.group(1)

    raise ValueError(f"Not a valid Imgur album URL or ID: {value}")


def album_link(album_id: str) -> str:
    return ALBUM_URL_TEMPLATE.format(album_id)
