"""
Contact Mail Service

Delivers contact form messages over SMTP. Without SMTP credentials the
message is only logged.
"""
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

from services.errors import MailDeliveryError

logger = logging.getLogger(__name__)


class MailService:
    """Sends contact messages to the studio inbox"""

    def __init__(self, user: Optional[str], password: Optional[str], recipient: str,
                 host: str = 'smtp.gmail.com', port: int = 465, timeout: int = 10):
        """
        Initialize mail service

        Args:
            user: SMTP login, also used as the sender address
            password: SMTP password
            recipient: Inbox that receives contact messages
            host: SMTP server (implicit TLS)
            port: SMTP port
            timeout: Socket timeout in seconds
        """
        self.user = user
        self.password = password
        self.recipient = recipient
        self.host = host
        self.port = port
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.user and self.password)

    def build_email(self, message) -> EmailMessage:
        email = EmailMessage()
        email['From'] = formataddr(('xatom.space Contact', self.user or self.recipient))
        email['To'] = self.recipient
        email['Reply-To'] = message.email
        email['Subject'] = f'[xatom Contact] {message.name}'
        email.set_content(
            f'Name: {message.name}\n'
            f'Email: {message.email}\n\n'
            f'Message:\n{message.message}\n'
        )
        return email

    def send(self, message) -> bool:
        """
        Deliver a contact message

        Args:
            message: Validated ContactMessage

        Returns:
            True if sent over SMTP, False if only logged (transport not configured)

        Raises:
            MailDeliveryError: if the SMTP transport fails
        """
        if not self.configured:
            logger.warning(
                f'Mail transport not configured; contact message from {message.name} '
                f'<{message.email}> logged only:\n{message.message}'
            )
            return False

        email = self.build_email(message)
        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.login(self.user, self.password)
                smtp.send_message(email)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f'Error sending contact message: {e}')
            raise MailDeliveryError() from e

        logger.info(f'Contact message from {message.email} sent to {self.recipient}')
        return True
