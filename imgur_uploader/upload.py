import logging
import os
import stat

from attrs import define
import click

from .api import ImgurClient
from .api_auth import auth_imgur
from .base import CatchAllExceptionsCommand
from .url_utils import album_link, extract_album_id

IMAGE_EXTENSIONS = (
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".apng",
    ".tif",
    ".tiff",
    ".webp",
    ".heic",
    ".heif",
    ".mp4",
)

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    pass


def _option_value(ctx, param, value):
    # a following option is never a value: --client-id --create-album a.jpg
    if value and value.startswith("--"):
        raise click.BadParameter(
            f"Missing value (got option '{value}' instead)", ctx=ctx, param=param
        )
    return value


@define
class UploadOptions:
    client_id: str = None
    access_token: str = None
    is_create_album: bool = False
    album_title: str = None
    album_description: str = None
    album_id: str = None


client_id_option = click.option(
    "--client-id",
    "client_id",
    metavar="CLIENT_ID",
    help="Application client ID (anonymous upload)",
    envvar="IMGUR_CLIENT_ID",
    callback=_option_value,
)

access_token_option = click.option(
    "--access-token",
    "access_token",
    metavar="ACCESS_TOKEN",
    help="OAuth access token (account upload)",
    envvar="IMGUR_ACCESS_TOKEN",
    callback=_option_value,
)

create_album_option = click.option(
    "--create-album",
    "is_create_album",
    is_flag=True,
    help="Add uploaded images to a new album",
)

album_title_option = click.option(
    "--album-title",
    "album_title",
    metavar="ALBUM_TITLE",
    help="Title of the album created with --create-album",
    callback=_option_value,
)

album_description_option = click.option(
    "--album-description",
    "album_description",
    metavar="TEXT",
    help="Description of the album created with --create-album",
    callback=_option_value,
)

update_album_option = click.option(
    "--update-album",
    "album_id",
    metavar="ALBUM_ID",
    help="Album ID or URL owned by the account to add uploaded images to",
    callback=_option_value,
)


@click.command(
    "imgur-uploader",
    cls=CatchAllExceptionsCommand,
    context_settings={"show_default": True},
)
@client_id_option
@access_token_option
@create_album_option
@album_title_option
@album_description_option
@update_album_option
@click.argument("images", metavar="IMAGE...", nargs=-1)
@click.version_option(package_name="imgur-uploader")
def upload(images, **kwargs):
    """Upload local images to Imgur.

    Uploads are anonymous with --client-id, or linked to an account with
    --access-token. The uploaded images can be added to a new album
    (--create-album) or to an existing album of the account (--update-album).
    """
    upload_options = _prepare_upload_options(UploadOptions(**kwargs), images)

    validate_requested_images(images)

    imgur = auth_imgur(upload_options.client_id, upload_options.access_token)

    account = None
    if imgur.is_authenticated:
        account = imgur.get_account()
        logger.info(f"Uploading as {account.url}")
    else:
        logger.info("Uploading anonymously")

    # make sure the album exists and belongs to the account before uploading
    if upload_options.album_id:
        _check_album_owner(imgur, upload_options.album_id, account)

    uploaded_images = _upload_images(imgur, images)

    if uploaded_images:
        deletehashes = [image.deletehash for image in uploaded_images]
        if upload_options.is_create_album:
            _create_album(imgur, upload_options, deletehashes)
        elif upload_options.album_id:
            _add_to_album(imgur, upload_options.album_id, deletehashes)

    logger.info("Done")


def _prepare_upload_options(upload_options, images):
    if not images:
        raise ValidationError("At least one image is required")

    if bool(upload_options.client_id) == bool(upload_options.access_token):
        raise ValidationError(
            "Exactly one of --client-id and --access-token is required"
        )

    if upload_options.is_create_album and upload_options.album_id:
        raise ValidationError("Cannot use --update-album with --create-album")

    if upload_options.album_id and not upload_options.access_token:
        raise ValidationError("Cannot use --update-album without --access-token")

    if upload_options.album_title and not upload_options.is_create_album:
        raise ValidationError("--album-title is only allowed with --create-album")

    if upload_options.album_description and not upload_options.is_create_album:
        raise ValidationError(
            "--album-description is only allowed with --create-album"
        )

    if upload_options.album_id:
        upload_options.album_id = extract_album_id(upload_options.album_id)

    return upload_options


def validate_requested_images(image_paths):
    invalid_images = []
    for image_path in image_paths:
        try:
            st = os.stat(image_path)
        except OSError as e:
            invalid_images.append(f"{image_path} ({e.strerror or e})")
            continue

        if not stat.S_ISREG(st.st_mode):
            invalid_images.append(f"{image_path} (not a file)")
            continue

        if not image_path.lower().endswith(IMAGE_EXTENSIONS):
            logger.warning(
                f"{image_path} does not look like an image. Uploading anyway"
            )

    if invalid_images:
        raise ValidationError(
            "The following images are invalid or inaccessible:\n"
            + "\n".join(f"- {image}" for image in invalid_images)
        )


def _check_album_owner(imgur: ImgurClient, album_id, account):
    try:
        album = imgur.get_album(album_id)
    except Exception as e:
        raise ValidationError(f"Couldn't retrieve album: {e}") from e

    account_id = account.id if account else None
    if album.account_id != account_id:
        raise ValidationError("Album must belong to account")

    logger.debug(f"Will add to album {album_id} ('{album.title}')")


def _upload_images(imgur: ImgurClient, image_paths):
    # sequential on purpose: the order of the album follows the upload order
    uploaded_images = []
    total = len(image_paths)
    for index, image_path in enumerate(image_paths, start=1):
        logger.info(f"Uploading {image_path} ({index}/{total})...")

        image = imgur.upload_image(image_path)
        uploaded_images.append(image)

        logger.info(f"Successfully uploaded image {index}/{total}")
        logger.info(f"Image ID: {image.id}")
        logger.info(f"Image deletehash: {image.deletehash}")
        logger.info(f"Link: {image.link}")

    return uploaded_images


def _create_album(imgur: ImgurClient, upload_options, deletehashes):
    logger.info("Creating new album...")
    album = imgur.create_album(
        deletehashes,
        title=upload_options.album_title,
        description=upload_options.album_description,
    )
    logger.info("Successfully created album")
    logger.info(f"Album ID: {album.id}")
    logger.info(f"Album deletehash: {album.deletehash}")
    logger.info(f"Link: {album_link(album.id)}")
    return album


def _add_to_album(imgur: ImgurClient, album_id, deletehashes):
    logger.info("Adding images to existing album...")
    imgur.add_images_to_album(album_id, deletehashes)
    logger.info("Successfully added images to album")
    logger.info(f"Link: {album_link(album_id)}")
