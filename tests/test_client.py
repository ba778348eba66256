import json

import requests

from bookkeeping_client import BookkeepingAPI


def _response(status_code, body=None, url="http://api.test/api/v1/x"):
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return response


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "timeout": timeout})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _client(*responses):
    session = FakeSession(*responses)
    return BookkeepingAPI(base_url="http://api.test/", session=session), session


def test_create_transaction_sends_payload():
    stored = {"id": "abc", "user": "alice", "item": "Book", "amount": 9.5, "timestamp": 1}
    api, session = _client(_response(201, stored))

    data, error = api.create_transaction("alice", "Book", 9.5)

    assert error is None
    assert data == stored
    assert session.calls == [
        {
            "method": "POST",
            "url": "http://api.test/api/v1/transactions",
            "json": {"user": "alice", "item": "Book", "amount": 9.5},
            "timeout": 15,
        }
    ]


def test_update_sends_only_given_fields():
    api, session = _client(_response(200, {"id": "abc"}))
    api.update_transaction("abc", item="NewItem")
    assert session.calls[0]["method"] == "PUT"
    assert session.calls[0]["url"].endswith("/transactions/abc")
    assert session.calls[0]["json"] == {"item": "NewItem"}


def test_http_error_is_returned_not_raised():
    api, _ = _client(_response(404, {"detail": "not found"}))
    data, error = api.get_transaction("abc")
    assert data is None
    assert error == {"status_code": 404, "message": "not found"}


def test_delete_success_has_no_body():
    api, _ = _client(_response(204))
    assert api.delete_transaction("abc") == (True, None)


def test_delete_failure():
    api, _ = _client(_response(500, {"detail": "failed to persist delete"}))
    ok, error = api.delete_transaction("abc")
    assert ok is False
    assert error["status_code"] == 500


def test_connection_error():
    api, _ = _client(requests.ConnectionError("refused"))
    items, error = api.list_transactions()
    assert items == []
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_user_summary_quotes_user_name():
    api, session = _client(_response(200, {"user": "a b", "count": 0, "total_amount": 0, "records": []}))
    data, error = api.user_summary("a b")
    assert error is None
    assert session.calls[0]["url"] == "http://api.test/api/v1/users/a%20b/summary"


def test_error_body_that_is_not_an_object():
    api, _ = _client(_response(502, ["upstream", "down"]), _response(500, "boom"))

    data, error = api.get_transaction("abc")
    assert data is None
    assert error == {"status_code": 502, "message": "['upstream', 'down']"}

    _, error = api.health()
    assert error == {"status_code": 500, "message": "boom"}
