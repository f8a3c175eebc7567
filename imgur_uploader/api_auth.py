from importlib.metadata import PackageNotFoundError, version

import requests

from .api import ImgurClient


def _user_agent():
    try:
        v = version("imgur-uploader")
    except PackageNotFoundError:
        v = "dev"
    return f"imgur-uploader/{v}"


def auth_imgur(client_id=None, access_token=None) -> ImgurClient:
    session = requests.Session()
    session.headers.update({"User-Agent": _user_agent()})

    return ImgurClient(
        client_id=client_id, access_token=access_token, session=session
    )
