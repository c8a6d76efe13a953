import pytest
import requests

from dashboard.data import api_client
from dashboard.visualizations import category_bar_chart, format_currency, trend_line_chart
from factories import TOKEN, USER


class _Response:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.ok = status_code < 400
        self.reason = reason
        self._payload = payload
        self.text = str(payload)

    def json(self):
        return self._payload


class _Session:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def _configure(user_email):
    secrets = {("API_BASE_URL",): "http://api.local/", ("BACKEND_SESSION_SECRET",): TOKEN}
    api_client.configure(lambda path, default=None: secrets.get(path, default), lambda: user_email)


@pytest.fixture(autouse=True)
def reset_client(monkeypatch):
    monkeypatch.delenv("API_BASE_URL", raising=False)
    yield
    api_client.configure(None, None)


def test_signed_in_requests_carry_identity_headers(monkeypatch):
    _configure(USER)
    session = _Session(_Response(payload={"items": []}))
    monkeypatch.setattr(api_client, "_SESSION", session)

    assert api_client.request("GET", "/v1/todos") == {"items": []}
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "http://api.local/v1/todos")
    assert kwargs["headers"] == {"X-User-Email": USER, "X-Backend-Token": TOKEN}


def test_anonymous_overview_request_sends_no_identity(monkeypatch):
    _configure(None)
    session = _Session(_Response(payload={"authenticated": False}))
    monkeypatch.setattr(api_client, "_SESSION", session)

    api_client.request("GET", "/v1/overview", allow_anonymous=True)

    assert session.calls[0][2]["headers"] == {}


def test_anonymous_write_is_refused():
    _configure(None)

    with pytest.raises(RuntimeError):
        api_client.request("POST", "/v1/todos", json={"title": "x"})


def test_error_responses_raise_api_error(monkeypatch):
    _configure(USER)
    monkeypatch.setattr(api_client, "_SESSION", _Session(_Response(404, {"detail": "Todo not found"}, "Not Found")))

    with pytest.raises(api_client.ApiError) as excinfo:
        api_client.request("DELETE", "/v1/todos/t1")

    assert excinfo.value.status_code == 404


def test_connection_errors_raise_api_error(monkeypatch):
    _configure(USER)
    monkeypatch.setattr(api_client, "_SESSION", _Session(error=requests.ConnectionError("refused")))

    with pytest.raises(api_client.ApiError) as excinfo:
        api_client.request("GET", "/v1/todos")

    assert excinfo.value.status_code is None


def test_is_enabled_needs_url_and_token():
    api_client.configure(None, None)
    assert not api_client.is_enabled()
    _configure(USER)
    assert api_client.is_enabled()


def test_empty_series_render_no_chart():
    assert category_bar_chart([]) is None
    assert trend_line_chart([]) is None


def test_trend_chart_keeps_backend_order():
    series = [{"label": "Oct 18", "value": 3.0}, {"label": "Oct 5", "value": 4.0}]

    fig = trend_line_chart(series)

    assert list(fig.layout.xaxis.categoryarray) == ["Oct 18", "Oct 5"]


def test_category_chart_uses_assigned_colors():
    series = [{"label": "Food", "value": 19.75, "color": "#8B5CF6"}]

    fig = category_bar_chart(series)

    assert list(fig.data[0].marker.color) == ["#8B5CF6"]


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(None) == "$0.00"


def test_todo_completion_caption():
    from dashboard.tabs.todos_tab import completion_caption

    todos = [{"completed": True}, {"completed": False}, {"completed": True}]

    assert completion_caption(todos) == "2 of 3 tasks completed"
    assert completion_caption([]) == "0 of 0 tasks completed"
