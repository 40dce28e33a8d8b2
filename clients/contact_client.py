"""
Contact Submission Client

Posts contact form messages to POST /api/contact. Empty fields are rejected
locally. When the server cannot be reached, a pre-filled mailto: link is
offered instead and the result still reports a failure.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Union
from urllib.parse import quote

import requests
from pydantic import ValidationError

from models import ContactMessage

logger = logging.getLogger(__name__)

DEFAULT_ERROR = 'Message send failed.'
ALREADY_SENDING = 'A message is already being sent.'
FALLBACK_STATUS = 'Could not reach the server. Your mail client was opened instead.'


@dataclass(frozen=True)
class ContactSent:
    info: str
    ok: bool = True


@dataclass(frozen=True)
class ContactFailed:
    error: str
    fallback_link: Optional[str] = None
    ok: bool = False

    @property
    def used_fallback(self) -> bool:
        return self.fallback_link is not None


ContactResult = Union[ContactSent, ContactFailed]


def build_mailto_link(recipient: str, name: str, email: str, message: str) -> str:
    """
    Compose a mail-client link carrying the contact message

    Args:
        recipient: Address the link opens a draft to
        name, email, message: Form fields

    Returns:
        mailto: URL with an encoded subject and body
    """
    subject = quote('[xatom.space] Contact')
    body = quote(f'{name}\n{email}\n\n{message}')
    return f'mailto:{recipient}?subject={subject}&body={body}'


class ContactClient:
    """Contact form submission with one request in flight at a time"""

    def __init__(self, base_url: str, fallback_recipient: str = 'hello@xatom.space',
                 open_mail_client: Optional[Callable[[str], None]] = None,
                 session: Optional[requests.Session] = None, timeout: int = 10):
        self.endpoint = base_url.rstrip('/') + '/api/contact'
        self.fallback_recipient = fallback_recipient
        self.open_mail_client = open_mail_client
        self.session = session or requests.Session()
        self.timeout = timeout
        self.sending = False
        self.status = ''
        self._lock = threading.Lock()

    @property
    def submit_enabled(self) -> bool:
        return not self.sending

    def submit(self, name: str, email: str, message: str) -> ContactResult:
        """
        Send a contact message

        Args:
            name: Sender name
            email: Sender address
            message: Message text

        Returns:
            ContactSent with the service's confirmation, or ContactFailed
        """
        try:
            contact = ContactMessage(name=name or '', email=email or '', message=message or '')
        except ValidationError as e:
            self.status = ContactMessage.describe_error(e)
            return ContactFailed(self.status)

        if not self._lock.acquire(blocking=False):
            return ContactFailed(ALREADY_SENDING)

        self.sending = True
        self.status = ''
        try:
            result = self._send(contact)
        finally:
            self.sending = False
            self._lock.release()

        self.status = result.info if result.ok else result.error
        return result

    def _send(self, contact: ContactMessage) -> ContactResult:
        try:
            response = self.session.post(self.endpoint, json=contact.model_dump(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f'Contact request failed: {e}')
            return self._fallback(contact)
        except Exception as e:
            logger.error(f'Error during contact submission: {e}', exc_info=True)
            return ContactFailed(DEFAULT_ERROR)

        try:
            return self._read(response)
        except Exception as e:
            logger.error(f'Error reading contact response: {e}', exc_info=True)
            return ContactFailed(DEFAULT_ERROR)

    def _read(self, response: requests.Response) -> ContactResult:
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.ok:
            error = data.get('error') or DEFAULT_ERROR
            logger.warning(f'Contact message rejected ({response.status_code}): {error}')
            return ContactFailed(str(error))

        return ContactSent(str(data.get('message') or 'Message sent.'))

    def _fallback(self, contact: ContactMessage) -> ContactFailed:
        link = build_mailto_link(self.fallback_recipient, contact.name, contact.email, contact.message)
        if self.open_mail_client is not None:
            try:
                self.open_mail_client(link)
            except Exception as e:
                logger.error(f'Could not open mail client: {e}')
        return ContactFailed(FALLBACK_STATUS, fallback_link=link)
