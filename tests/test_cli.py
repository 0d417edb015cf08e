# ABOUTME: Tests for CLI argument parsing and command dispatch.
# ABOUTME: Validates argparse configuration and the status and publish commands.

import argparse
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from newsletter_desk.__main__ import cmd_publish, cmd_status, create_parser, main
from newsletter_desk.exceptions import StoreError
from newsletter_desk.models import DeliveryReport


class TestCreateParser:
    """Tests for argument parser creation."""

    def test_parser_creation(self) -> None:
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)

    def test_serve_command_defaults(self) -> None:
        args = create_parser().parse_args(["serve"])
        assert args.command == "serve"
        assert args.host is None
        assert args.port is None

    def test_serve_command_with_port(self) -> None:
        args = create_parser().parse_args(["serve", "--host", "0.0.0.0", "--port", "9000"])
        assert args.host == "0.0.0.0"
        assert args.port == 9000

    def test_publish_requires_title(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["publish", "--html-file", "a", "--text-file", "b"])

    def test_publish_command(self) -> None:
        args = create_parser().parse_args(
            ["publish", "--title", "Issue 1", "--html-file", "a.html", "--text-file", "a.txt"]
        )
        assert args.title == "Issue 1"
        assert args.html_file == "a.html"
        assert args.text_file == "a.txt"


class TestMain:
    def test_no_command_prints_help(self) -> None:
        with (
            patch("sys.argv", ["newsletter_desk"]),
            patch("newsletter_desk.__main__.configure_logging"),
        ):
            assert main() == 1

    def test_dispatches_to_status(self) -> None:
        with (
            patch("sys.argv", ["newsletter_desk", "status"]),
            patch("newsletter_desk.__main__.configure_logging"),
            patch("newsletter_desk.__main__.cmd_status", return_value=0) as cmd,
        ):
            assert main() == 0
        cmd.assert_called_once()


class TestCmdStatus:
    def test_prints_counts(self, capsys: pytest.CaptureFixture[str]) -> None:
        repo = MagicMock()
        repo.count_by_status = AsyncMock(
            return_value={"pending_confirmation": 2, "confirmed": 5}
        )

        with (
            patch("newsletter_desk.db.repository.SubscriberRepository", return_value=repo),
            patch("newsletter_desk.db.session.close_db", new_callable=AsyncMock),
        ):
            assert cmd_status(argparse.Namespace()) == 0

        output = capsys.readouterr().out
        assert "pending_confirmation: 2" in output
        assert "confirmed: 5" in output
        assert "Total: 7" in output

    def test_store_error_returns_1(self) -> None:
        repo = MagicMock()
        repo.count_by_status = AsyncMock(side_effect=StoreError("down"))

        with (
            patch("newsletter_desk.db.repository.SubscriberRepository", return_value=repo),
            patch("newsletter_desk.db.session.close_db", new_callable=AsyncMock),
        ):
            assert cmd_status(argparse.Namespace()) == 1


class TestCmdPublish:
    @pytest.fixture
    def issue_files(self, tmp_path: Path) -> argparse.Namespace:
        html_file = tmp_path / "issue.html"
        text_file = tmp_path / "issue.txt"
        html_file.write_text("<p>Hello</p>", encoding="utf-8")
        text_file.write_text("Hello", encoding="utf-8")
        return argparse.Namespace(
            title="Issue 1", html_file=str(html_file), text_file=str(text_file)
        )

    def test_publishes_issue(self, issue_files: argparse.Namespace) -> None:
        service = MagicMock()
        service.publish = AsyncMock(return_value=DeliveryReport(delivered=3))

        with (
            patch("newsletter_desk.db.repository.SubscriberRepository"),
            patch("newsletter_desk.email.sender.build_email_client"),
            patch(
                "newsletter_desk.services.newsletter_service.NewsletterService",
                return_value=service,
            ),
            patch("newsletter_desk.db.session.close_db", new_callable=AsyncMock),
        ):
            assert cmd_publish(issue_files) == 0

        issue = service.publish.await_args.args[0]
        assert issue.title == "Issue 1"
        assert issue.content.html == "<p>Hello</p>"
        assert issue.content.text == "Hello"

    def test_failed_recipients_return_1(self, issue_files: argparse.Namespace) -> None:
        service = MagicMock()
        service.publish = AsyncMock(
            return_value=DeliveryReport(delivered=1, failed=["x@example.com"])
        )

        with (
            patch("newsletter_desk.db.repository.SubscriberRepository"),
            patch("newsletter_desk.email.sender.build_email_client"),
            patch(
                "newsletter_desk.services.newsletter_service.NewsletterService",
                return_value=service,
            ),
            patch("newsletter_desk.db.session.close_db", new_callable=AsyncMock),
        ):
            assert cmd_publish(issue_files) == 1
