"""Write a rendered report to a text stream."""

import base64
import logging
import sys
from typing import Optional, TextIO

from common.errors import DeliveryError
from presentation.models import DataPresented

logger = logging.getLogger(__name__)


def inline_images(data: DataPresented) -> str:
    """Return the report content with every ``cid:`` reference replaced by a data URI."""
    content = data.content
    for image in data.images:
        encoded = base64.b64encode(image.data).decode("ascii")
        content = content.replace(f"cid:{image.cid}", f"data:{image.mime};base64,{encoded}")
    return content


def to_stdout(data: DataPresented, stream: Optional[TextIO] = None) -> None:
    """Write the report to ``stream`` (standard output by default)."""
    stream = stream if stream is not None else sys.stdout
    try:
        stream.write(inline_images(data))
        stream.flush()
    except OSError as exc:
        raise DeliveryError(f"Writing report failed: {exc}") from exc
    logger.debug(f"Report written with {len(data.images)} inline images")
