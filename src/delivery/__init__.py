"""Report delivery: standard output and mail."""

from delivery.mail import MailSettings, build_message, to_mail
from delivery.stdout import inline_images, to_stdout

__all__ = ["MailSettings", "build_message", "inline_images", "to_mail", "to_stdout"]
