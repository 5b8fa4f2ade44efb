"""Spreadsheet submission service."""
import asyncio
import functools
import json
import logging
from datetime import datetime, timezone

import requests

from shared.enums import SubmissionOutcome
from ..config_manager import PLACEHOLDER_SUBMISSION_URL


class SubmissionFailure(Exception):
    """Raised when a record could not be delivered to the spreadsheet."""
    pass


class SheetsService:
    """Sends survey records to a spreadsheet-backed ingestion endpoint.

    The endpoint is a Google Apps Script web app. Records are posted once as
    a JSON document; there is no retry and the response body is ignored.
    """

    CONTENT_TYPE = 'text/plain;charset=utf-8'

    def __init__(self, submission_url, timeout=None, session=None):
        self.submission_url = (submission_url or '').strip()
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def is_configured(self):
        return bool(self.submission_url) and self.submission_url != PLACEHOLDER_SUBMISSION_URL

    def build_payload(self, record):
        """Serialize a record into the document posted to the endpoint."""
        payload = record.to_payload()
        payload['submittedAt'] = datetime.now(timezone.utc).isoformat()
        return payload

    def _post(self, payload):
        """Perform the HTTP request (blocking)."""
        if not self.is_configured:
            raise SubmissionFailure("Submission endpoint URL is not configured")

        try:
            response = self.session.post(
                self.submission_url,
                data=json.dumps(payload, ensure_ascii=False).encode('utf-8'),
                headers={'Content-Type': self.CONTENT_TYPE},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SubmissionFailure(str(e)) from e
        return response

    async def submit(self, record):
        """Send a record and report whether it was accepted.

        Returns SubmissionOutcome.SUCCESS when the request completes with a
        2xx status, SubmissionOutcome.FAILURE otherwise.
        """
        payload = self.build_payload(record)
        self.logger.info(
            f"Submitting {payload['propertyType']} record with {len(payload.get('photos', []))} photo(s)"
        )

        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(None, functools.partial(self._post, payload))
        except SubmissionFailure as e:
            self.logger.error(f"Error submitting record: {e}")
            return SubmissionOutcome.FAILURE

        self.logger.info(f"Record accepted by spreadsheet endpoint ({response.status_code})")
        return SubmissionOutcome.SUCCESS
