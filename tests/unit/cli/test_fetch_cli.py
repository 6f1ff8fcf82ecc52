"""Unit tests for the CLI module."""

import argparse
import json
from unittest import mock

import pytest
import requests

from crowdtangle_api.cli.fetch_cli import (
    build_parameters,
    main,
    parse_args,
    parse_key_value,
    run_command,
)
from crowdtangle_api.infrastructure.api.resource_client import (
    CrowdTangleResourceClient,
)
from crowdtangle_api.infrastructure.exceptions.api_exceptions import BadRequestError
from tests.helpers import build_response


class TestArgumentParsing:
    """Tests for command-line parsing."""

    def test_parse_key_value(self) -> None:
        """Test parsing KEY=VALUE pairs."""
        assert parse_key_value("searchTerm=a=b") == ("searchTerm", "a=b")

        with pytest.raises(argparse.ArgumentTypeError):
            parse_key_value("novalue")

    def test_posts_arguments(self) -> None:
        """Test parsing a posts command with options."""
        args = parse_args(
            ["--max-records", "50", "--count", "20", "--param", "listIds=1,2", "posts"]
        )

        assert args.command == "posts"
        assert args.max_records == 50
        assert build_parameters(args) == {"listIds": "1,2", "count": 20}

    def test_post_requires_id(self) -> None:
        """Test that the post command needs an id."""
        with pytest.raises(SystemExit):
            parse_args(["post"])


class TestRunCommand:
    """Tests for dispatching commands to the client."""

    @pytest.fixture
    def client(self) -> mock.MagicMock:
        """Fixture providing a mock resource client."""
        return mock.MagicMock(spec=CrowdTangleResourceClient)

    def test_lists(self, client: mock.MagicMock) -> None:
        """Test the lists command."""
        client.get_lists.return_value = [{"id": 1}]

        assert run_command(client, parse_args(["lists"])) == [{"id": 1}]

    def test_accounts(self, client: mock.MagicMock) -> None:
        """Test the accounts command."""
        run_command(client, parse_args(["--max-records", "10", "accounts", "77"]))

        client.get_accounts_for_list.assert_called_once_with("77", {}, 10)

    def test_posts(self, client: mock.MagicMock) -> None:
        """Test the posts command."""
        run_command(client, parse_args(["--param", "searchTerm=news", "posts"]))

        client.get_posts.assert_called_once_with({"searchTerm": "news"}, 1000)

    def test_post(self, client: mock.MagicMock) -> None:
        """Test the post command."""
        run_command(client, parse_args(["post", "123_456"]))

        client.get_post.assert_called_once_with("123_456")


class TestMain:
    """Tests for the CLI entry point."""

    def test_prints_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that results are printed as JSON."""
        client = mock.MagicMock(spec=CrowdTangleResourceClient)
        client.get_lists.return_value = [{"id": 1, "title": "Outlets"}]

        with mock.patch(
            "crowdtangle_api.cli.fetch_cli.create_client", return_value=client
        ) as mock_create:
            exit_code = main(["--token", "abc", "lists"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == [{"id": 1, "title": "Outlets"}]
        assert mock_create.call_args.kwargs["token"] == "abc"

    def test_bad_request_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that API rejections are reported on stderr."""
        client = mock.MagicMock(spec=CrowdTangleResourceClient)
        client.get_posts.side_effect = BadRequestError(
            build_response(400), "bad filter", 12
        )

        with mock.patch(
            "crowdtangle_api.cli.fetch_cli.create_client", return_value=client
        ):
            exit_code = main(["--token", "abc", "posts"])

        assert exit_code == 1
        err = capsys.readouterr().err
        assert "code 12" in err
        assert "bad filter" in err

    def test_transport_error_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that transport failures are reported on stderr."""
        client = mock.MagicMock(spec=CrowdTangleResourceClient)
        client.get_post.side_effect = requests.ConnectionError("unreachable")

        with mock.patch(
            "crowdtangle_api.cli.fetch_cli.create_client", return_value=client
        ):
            exit_code = main(["--token", "abc", "post", "1_2"])

        assert exit_code == 1
        assert "unreachable" in capsys.readouterr().err
