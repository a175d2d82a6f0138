"""Tests for the mandrill-mailer CLI."""

import json
from email.message import EmailMessage
from unittest.mock import MagicMock, patch

import pytest
import requests
from click.testing import CliRunner
from rich.console import Console

from mandrill_mailer import cli
from mandrill_mailer.cli import load_eml, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("MANDRILL_API_KEY", raising=False)


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Uncolored, wide consoles so output can be parsed."""
    monkeypatch.setattr(cli, "console", Console(color_system=None, width=200))
    monkeypatch.setattr(cli, "err_console", Console(stderr=True, color_system=None, width=200))


@pytest.fixture
def eml_file(tmp_path):
    msg = EmailMessage()
    msg["From"] = "Shop <noreply@shop.example>"
    msg["To"] = "Alice <alice@example.com>"
    msg["Cc"] = "orders@shop.example"
    msg["Subject"] = "Your order"
    msg["Tags"] = "orders"
    msg.set_content("Thanks for your order.")
    msg.add_attachment(b"%PDF-1.4", maintype="application", subtype="pdf", filename="invoice.pdf")
    path = tmp_path / "order.eml"
    path.write_bytes(msg.as_bytes())
    return path


def _response(status: int, body) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = body
    return resp


def test_load_eml(eml_file):
    msg = load_eml(str(eml_file))
    assert isinstance(msg, EmailMessage)
    assert str(msg["Subject"]) == "Your order"


def test_render_prints_params(eml_file):
    """render shows the message parameters without calling the API."""
    runner = CliRunner()
    with patch.object(requests, "post") as mock_post:
        result = runner.invoke(main, ["render", str(eml_file)])

        assert mock_post.call_count == 0

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["subject"] == "Your order"
    assert payload["from_email"] == "noreply@shop.example"
    assert [r["type"] for r in payload["to"]] == ["to", "cc"]
    assert payload["tags"] == ["orders"]
    assert payload["attachments"][0]["name"] == "invoice.pdf"


def test_send_shows_results(eml_file):
    runner = CliRunner()
    with patch.object(requests, "post") as mock_post:
        mock_post.return_value = _response(
            200, [{"email": "alice@example.com", "status": "sent", "_id": "abc123"}]
        )
        result = runner.invoke(main, ["send", str(eml_file), "--api-key", "cli-key"])

        body = json.loads(mock_post.call_args.kwargs["data"])

    assert result.exit_code == 0, result.output
    assert body["key"] == "cli-key"
    assert "alice@example.com" in result.output
    assert "sent" in result.output


def test_send_json_output(eml_file):
    runner = CliRunner()
    with patch.object(requests, "post") as mock_post:
        mock_post.return_value = _response(200, [{"email": "alice@example.com", "status": "queued"}])
        result = runner.invoke(main, ["send", str(eml_file), "-k", "cli-key", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [{"email": "alice@example.com", "status": "queued"}]


def test_send_uses_config_file(eml_file, tmp_path):
    config_file = tmp_path / "config.ini"
    config_file.write_text("[mandrill]\napi_key = file-key\nendpoint = http://localhost:9000/api\n")
    runner = CliRunner()
    with patch.object(requests, "post") as mock_post:
        mock_post.return_value = _response(200, [])
        result = runner.invoke(main, ["send", str(eml_file), "--config", str(config_file)])

        url = mock_post.call_args.args[0]

    assert result.exit_code == 0, result.output
    assert url == "http://localhost:9000/api/messages/send.json"


def test_send_api_error_exits_nonzero(eml_file):
    runner = CliRunner()
    with patch.object(requests, "post") as mock_post:
        mock_post.return_value = _response(500, {"message": "invalid key"})
        result = runner.invoke(main, ["send", str(eml_file), "-k", "bad"])

    assert result.exit_code == 1
    assert "invalid key" in result.output


def test_send_without_api_key(eml_file):
    runner = CliRunner()
    with patch.object(requests, "post") as mock_post:
        result = runner.invoke(main, ["send", str(eml_file)])

        assert mock_post.call_count == 0

    assert result.exit_code == 1
    assert "API key" in result.output


def test_render_missing_sender(tmp_path):
    msg = EmailMessage()
    msg["To"] = "alice@example.com"
    msg["Subject"] = "No sender"
    msg.set_content("Hi")
    path = tmp_path / "nosender.eml"
    path.write_bytes(msg.as_bytes())

    result = CliRunner().invoke(main, ["render", str(path)])

    assert result.exit_code == 1
    assert "From" in result.output
