"""
Checkout Request Client

Sends one product configuration to POST /api/checkout per user submission and
turns the response into a result value. At most one submission is in flight.
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

import requests

from models import CheckoutRequest
from services.pricing import ProductConfiguration

logger = logging.getLogger(__name__)

DEFAULT_ERROR = 'Checkout failed.'
ALREADY_PENDING = 'Checkout already in progress.'
ALREADY_COMPLETED = 'Checkout already completed.'


class SubmissionState(Enum):
    IDLE = 'idle'
    PENDING = 'pending'
    SUCCEEDED = 'succeeded'


@dataclass(frozen=True)
class CheckoutSucceeded:
    url: str
    ok: bool = True


@dataclass(frozen=True)
class CheckoutFailed:
    error: str
    ok: bool = False


CheckoutResult = Union[CheckoutSucceeded, CheckoutFailed]


def _error_from(response: requests.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get('error'):
        return str(data['error'])
    return None


class CheckoutClient:
    """Checkout submission with an Idle -> Pending -> Succeeded/Failed lifecycle"""

    def __init__(self, base_url: str, navigate: Optional[Callable[[str], None]] = None,
                 session: Optional[requests.Session] = None, timeout: int = 10):
        """
        Initialize checkout client

        Args:
            base_url: Storefront base URL, e.g. http://localhost:5000
            navigate: Called with the hosted checkout URL on success
            session: requests session to send through (a new one by default)
            timeout: Request timeout in seconds
        """
        self.endpoint = base_url.rstrip('/') + '/api/checkout'
        self.navigate = navigate
        self.session = session or requests.Session()
        self.timeout = timeout
        self.state = SubmissionState.IDLE
        self.status = ''
        self._lock = threading.Lock()

    @property
    def submit_enabled(self) -> bool:
        """Whether the pay action may be triggered right now"""
        return self.state is SubmissionState.IDLE

    def submit(self, configuration: ProductConfiguration) -> CheckoutResult:
        """
        Submit a configuration for checkout

        The configuration is copied into an immutable request before any I/O.
        A call made while another submission is pending returns a failure
        without sending anything and leaves the pending one untouched.

        Args:
            configuration: Current product configuration

        Returns:
            CheckoutSucceeded with the redirect URL, or CheckoutFailed
        """
        if not self._lock.acquire(blocking=False):
            logger.info('Checkout submit ignored: another submission is pending')
            return CheckoutFailed(ALREADY_PENDING)
        if self.state is SubmissionState.SUCCEEDED:
            self._lock.release()
            return CheckoutFailed(ALREADY_COMPLETED)

        self.state = SubmissionState.PENDING
        self.status = ''
        try:
            result = self._send(configuration)
        finally:
            if self.state is SubmissionState.PENDING:
                self.state = SubmissionState.IDLE
            self._lock.release()
        return result

    def _send(self, configuration: ProductConfiguration) -> CheckoutResult:
        try:
            payload = CheckoutRequest.from_configuration(configuration).to_payload()
            response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
            if not response.ok:
                return self._fail(_error_from(response) or DEFAULT_ERROR)

            data = response.json()
            url = data.get('url') if isinstance(data, dict) else None
            if not isinstance(url, str) or not url:
                return self._fail(_error_from(response) or DEFAULT_ERROR)
        except requests.exceptions.RequestException as e:
            logger.error(f'Checkout request failed: {e}')
            return self._fail(DEFAULT_ERROR)
        except Exception as e:
            logger.error(f'Error during checkout submission: {e}', exc_info=True)
            return self._fail(DEFAULT_ERROR)

        self.state = SubmissionState.SUCCEEDED
        logger.info(f'Checkout session created, navigating to {url}')
        if self.navigate is not None:
            try:
                self.navigate(url)
            except Exception as e:
                logger.error(f'Navigation to {url} failed: {e}', exc_info=True)
        return CheckoutSucceeded(url)

    def _fail(self, message: str) -> CheckoutFailed:
        logger.warning(f'Checkout failed: {message}')
        self.state = SubmissionState.IDLE
        self.status = message
        return CheckoutFailed(message)
