import logging
import sys

import click

logger = logging.getLogger(__name__)


class CatchAllExceptionsCommand(click.Command):
    def parse_args(self, ctx, args):
        # bare invocation: show usage on stderr and fail
        if not args:
            click.echo(self.get_help(ctx), err=True)
            ctx.exit(1)
        return super().parse_args(ctx, args)

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except Exception as ex:
            raise UnrecoverableUploadError(str(ex), sys.exc_info()) from ex


class UnrecoverableUploadError(click.ClickException):
    def __init__(self, message, exc_info):
        super().__init__(message)
        self.exc_info = exc_info

    def show(self, file=None):
        exc_info = None
        if logger.isEnabledFor(logging.DEBUG):
            exc_info = self.exc_info
        logger.error("*** An unrecoverable error occured ***")
        logger.error(self.message, exc_info=exc_info)
