import unittest
from unittest import mock

import requests

from djeautomation.models import Job, RejectedJob
from djeautomation.webhook import PENDING_JOBS_PATH, RECEIVER_PATH, SECRET_HEADER, WebhookClient, WebhookError
from tests.fakes import make_settings


def _response(status: int = 200, payload=None, text: str = "") -> mock.Mock:
    response = mock.Mock()
    response.ok = 200 <= status < 400
    response.status_code = status
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def _client(response=None, error=None) -> tuple[WebhookClient, mock.Mock]:
    session = mock.Mock()
    session.headers = {}
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = response
    return WebhookClient(make_settings(http_timeout=7), session=session), session


class WebhookClientTests(unittest.TestCase):
    def test_sets_secret_header(self) -> None:
        _, session = _client(_response(payload={}))
        self.assertEqual(session.headers[SECRET_HEADER], "segredo")
        self.assertEqual(session.headers["Content-Type"], "application/json")

    def test_pending_jobs_keeps_incomplete_entries_with_id(self) -> None:
        payload = {
            "count": 3,
            "jobs": [
                {"id": 7, "oab_number": "123456", "oab_state": "sp", "target_date": "2024-03-10", "lawyer_name": "Maria Souza"},
                {"id": 8, "oab_number": "123456", "oab_state": "SP"},
                {"oab_state": "SP"},
            ],
        }
        client, session = _client(_response(payload=payload))
        jobs = client.get_pending_jobs()

        session.request.assert_called_once_with(
            "GET", "https://hooks.example.test/functions/v1" + PENDING_JOBS_PATH, timeout=7
        )
        self.assertEqual(len(jobs), 2)
        job, rejected = jobs
        self.assertIsInstance(job, Job)
        self.assertEqual(job.id, "7")
        self.assertEqual(job.registration_state, "SP")
        self.assertEqual(job.attorney_name, "Maria Souza")
        self.assertIsInstance(rejected, RejectedJob)
        self.assertEqual(rejected.id, "8")
        self.assertEqual(rejected.registration_number, "123456")
        self.assertEqual(rejected.target_date, "")
        self.assertIn("Job incompleto", rejected.error)

    def test_pending_jobs_without_list(self) -> None:
        client, _ = _client(_response(payload={"count": 0}))
        self.assertEqual(client.get_pending_jobs(), [])

    def test_send_results_posts_json(self) -> None:
        client, session = _client(_response(payload={"success": True}))
        payload = {"jobId": "7", "status": "completed", "publications": [], "resultsCount": 0}
        self.assertEqual(client.send_results(payload), {"success": True})
        session.request.assert_called_once_with(
            "POST", "https://hooks.example.test/functions/v1" + RECEIVER_PATH, timeout=7, json=payload
        )

    def test_send_results_accepts_body_without_json(self) -> None:
        client, _ = _client(_response(payload=ValueError("not json"), text="OK"))
        self.assertEqual(client.send_results({"jobId": "7"}), {"response": "OK"})

    def test_http_error(self) -> None:
        client, _ = _client(_response(status=401, text="Unauthorized"))
        with self.assertRaises(WebhookError) as ctx:
            client.get_pending_jobs()
        self.assertIn("401", str(ctx.exception))

    def test_connection_error(self) -> None:
        client, _ = _client(error=requests.ConnectionError("recusada"))
        with self.assertRaises(WebhookError):
            client.send_results({})

    def test_invalid_json(self) -> None:
        client, _ = _client(_response(payload=ValueError("bad json"), text="<html>"))
        with self.assertRaises(WebhookError):
            client.get_pending_jobs()


if __name__ == "__main__":
    unittest.main()
