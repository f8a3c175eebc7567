import base64
import json
import logging

from addict import Dict as Addict
import requests

BASE_URL = "https://api.imgur.com/3"

# seconds
API_TIMEOUT = 15
UPLOAD_TIMEOUT = 60

logger = logging.getLogger(__name__)


class ImgurAPIError(Exception):
    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class UploadError(Exception):
    pass


class AlbumCreationError(Exception):
    pass


class ImgurClient:
    """Thin wrapper over the Imgur v3 REST API.

    Anonymous requests are signed with the application Client-ID, account
    requests with an OAuth access token. Exactly one of the two is required.
    """

    def __init__(self, client_id=None, access_token=None, session=None):
        if bool(client_id) == bool(access_token):
            raise ValueError(
                "Must provide either client_id OR access_token, but not both"
            )
        self.client_id = client_id or None
        self.access_token = access_token or None
        self.session = session if session is not None else requests.Session()

    @property
    def is_authenticated(self):
        return self.access_token is not None

    def _authorization(self):
        if self.access_token:
            return f"Bearer {self.access_token}"
        return f"Client-ID {self.client_id}"

    def _api_request(
        self, method, endpoint, data=None, headers=None, timeout=API_TIMEOUT
    ):
        headers = dict(headers or {})
        headers["Accept"] = "application/json"
        headers["Authorization"] = self._authorization()

        url = f"{BASE_URL}{endpoint}"
        logger.debug(f"{method} {url}")
        try:
            resp = self.session.request(
                method, url, data=data, headers=headers, timeout=timeout
            )
        except requests.RequestException as e:
            raise ImgurAPIError(f"API Request failed: {e}") from e

        status = resp.status_code
        try:
            # Content-Type is not reliable: Imgur uses custom json variants
            payload = resp.json()
        except ValueError:
            payload = None

        if payload is not None:
            detail = "Unknown error"
            if isinstance(payload, dict):
                payload = Addict(payload)
                if payload.success and resp.ok:
                    return payload.data
                detail = _first_error_detail(payload)
            raise ImgurAPIError(f"API Request failed: [{status}] {detail}", status)

        # html error page
        if status == 404:
            raise ImgurAPIError("API Request failed: [404] Not Found", status)
        raise ImgurAPIError(
            f"API Request failed: [{status}] Unknown error (non-json response)",
            status,
        )

    def _api_request_json(self, method, endpoint, json_body, timeout=API_TIMEOUT):
        headers = {"Content-Type": "application/json"}
        return self._api_request(
            method,
            endpoint,
            data=json.dumps(json_body),
            headers=headers,
            timeout=timeout,
        )

    def upload_image(self, image_path):
        try:
            with open(image_path, "rb") as f:
                image_data = base64.b64encode(f.read()).decode("ascii")
            return self._api_request_json(
                "POST",
                "/image",
                {"image": image_data, "type": "base64"},
                timeout=UPLOAD_TIMEOUT,
            )
        except Exception as e:
            msg = f"Error uploading image {image_path}: {e}"
            raise UploadError(msg) from e

    def create_album(self, deletehashes, title=None, description=None):
        album_info = {}
        if title:
            album_info["title"] = title
        if description:
            album_info["description"] = description

        album = self._api_request_json("POST", "/album", album_info)
        if not album.deletehash:
            raise AlbumCreationError("Couldn't find deletehash in new album")

        # deletehashes passed at creation are ignored for anonymous albums so
        # always add the images in a separate call
        self.add_images_to_album(album.deletehash, deletehashes)
        # id + deletehash
        return album

    def add_images_to_album(self, album_id_or_deletehash, deletehashes):
        return self._api_request_json(
            "PUT",
            f"/album/{album_id_or_deletehash}/add",
            {"deletehashes": list(deletehashes)},
        )

    def get_album(self, album_hash):
        return self._api_request("GET", f"/album/{album_hash}")

    def get_account(self):
        if not self.access_token:
            raise ImgurAPIError("No access token provided. Cannot fetch account info.")
        return self._api_request("GET", "/account/me")


def _first_error_detail(payload):
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict) and first.get("detail"):
            return first["detail"]

    # legacy format: {"data": {"error": ...}, "success": false, "status": ...}
    data = payload.get("data")
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, str) and error:
            return error
        if isinstance(error, dict) and error.get("message"):
            return error["message"]

    return "Unknown error"
