"""Tests for the jot command line."""

import unittest
from unittest.mock import patch

from typer.testing import CliRunner

from jot.cli.main import app
from jot.exceptions import NotFoundError, RemoteError
from jot.services.notes.models import Note

from helpers import execute_ok, http_response, note_row, pipeline_body, stub_session

ENV = {"JOT_URL": "libsql://db.turso.io", "JOT_TOKEN": "tok", "JOT_DEBUG": None}
NO_ENV = {"JOT_URL": None, "JOT_TOKEN": None, "JOT_DEBUG": None}


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        patcher = patch("jot.cli.main.NotesService")
        self.service_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.service = self.service_cls.return_value

    def invoke(self, *args, env=ENV):
        return self.runner.invoke(app, list(args), env=env)


class HelpTest(CliTestCase):
    def test_usage_without_config(self):
        for args in ([], ["-h"], ["--help"], ["help"]):
            with self.subTest(args=args):
                result = self.invoke(*args, env=NO_ENV)
                self.assertEqual(result.exit_code, 0)
                self.assertIn("jot — quick sticky notes", result.output)
                self.assertIn("jot peek <id>", result.output)
        self.service_cls.assert_not_called()


class ConfigTest(CliTestCase):
    def test_missing_config_exits_before_service(self):
        result = self.invoke("ls", env=NO_ENV)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("jot: missing env vars", result.output)
        self.assertIn('export JOT_TOKEN="your-auth-token"', result.output)
        self.service_cls.assert_not_called()

    def test_config_is_passed_to_service(self):
        self.service.add.return_value = 1
        self.invoke("hello")

        config = self.service_cls.call_args.args[0]
        self.assertEqual(config.url, "https://db.turso.io")
        self.assertEqual(config.token, "tok")


class AddTest(CliTestCase):
    def test_words_joined_into_body(self):
        self.service.add.return_value = 7
        result = self.invoke("buy", "milk", "and", "eggs")

        self.assertEqual(result.exit_code, 0)
        self.service.init_schema.assert_called_once()
        self.service.add.assert_called_once_with("buy milk and eggs")
        self.assertIn("noted (#7)", result.output)

    def test_add_word_is_part_of_body(self):
        self.service.add.return_value = 2
        self.invoke("add", "milk")
        self.service.add.assert_called_once_with("add milk")

    def test_double_dash_kept_in_body(self):
        self.service.add.return_value = 3
        result = self.invoke("foo", "--", "bar")

        self.assertEqual(result.exit_code, 0)
        self.service.add.assert_called_once_with("foo -- bar")

    def test_lone_double_dash_is_a_note(self):
        self.service.add.return_value = 4
        result = self.invoke("--")

        self.assertEqual(result.exit_code, 0)
        self.service.add.assert_called_once_with("--")

    def test_option_like_words_kept_in_body(self):
        self.service.add.return_value = 5
        self.invoke("-x", "--y=1", "-abc", "--", "--help", "-")
        self.service.add.assert_called_once_with("-x --y=1 -abc -- --help -")

    def test_remote_failure(self):
        self.service.add.side_effect = RemoteError("turso API error (500): boom")
        result = self.invoke("hello")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("jot: turso API error (500): boom", result.output)


class ListTest(CliTestCase):
    def test_lists_notes(self):
        self.service.list.return_value = [
            Note(id=2, body="second", created_at="2024-01-02 00:00:00"),
            Note(id=1, body="first", created_at="2024-01-01 00:00:00"),
        ]
        result = self.invoke("ls")

        self.assertEqual(result.exit_code, 0)
        self.assertLess(result.output.index("second"), result.output.index("first"))

    def test_empty(self):
        self.service.list.return_value = []
        result = self.invoke("ls")
        self.assertIn("no notes yet", result.output)


class PeekTest(CliTestCase):
    def test_shows_note(self):
        self.service.get.return_value = Note(
            id=5, body="the whole body", created_at="2024-01-01 00:00:00"
        )
        result = self.invoke("peek", "5")

        self.assertEqual(result.exit_code, 0)
        self.service.get.assert_called_once_with(5)
        self.assertIn("#5", result.output)
        self.assertIn("the whole body", result.output)

    def test_body_printed_verbatim(self):
        self.service.get.return_value = Note(
            id=6, body="col1\tcol2 [red]x[/red]", created_at="2024-01-01 00:00:00"
        )
        result = self.invoke("peek", "6")
        self.assertIn("\n\ncol1\tcol2 [red]x[/red]\n", result.output)

    def test_missing_id(self):
        result = self.invoke("peek")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("jot: usage: jot peek <id>", result.output)

    def test_invalid_id(self):
        result = self.invoke("peek", "abc")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("jot: invalid note id: abc", result.output)
        self.service.get.assert_not_called()

    def test_not_found(self):
        self.service.get.side_effect = NotFoundError("note #9 not found")
        result = self.invoke("peek", "9")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("jot: note #9 not found", result.output)


class RemoveTest(CliTestCase):
    def test_removes(self):
        result = self.invoke("rm", "3")

        self.assertEqual(result.exit_code, 0)
        self.service.delete.assert_called_once_with(3)
        self.assertIn("removed #3", result.output)

    def test_invalid_id(self):
        result = self.invoke("rm", "1.5")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("jot: invalid note id: 1.5", result.output)

    def test_missing_id(self):
        result = self.invoke("rm")
        self.assertIn("jot: usage: jot rm <id>", result.output)


class PopTest(CliTestCase):
    def test_shows_then_deletes_latest(self):
        self.service.latest.return_value = Note(
            id=11, body="latest thing", created_at="2024-01-01 00:00:00"
        )
        result = self.invoke("pop")

        self.assertEqual(result.exit_code, 0)
        self.service.delete.assert_called_once_with(11)
        self.assertIn("latest thing", result.output)
        self.assertIn("(removed)", result.output)

    def test_empty_store(self):
        self.service.latest.side_effect = NotFoundError("no notes yet")
        result = self.invoke("pop")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("jot: no notes yet", result.output)
        self.service.delete.assert_not_called()


class EndToEndTest(unittest.TestCase):
    """Real service and codec over a stubbed HTTP session."""

    def test_add_round_trip(self):
        session = stub_session(
            http_response(200, pipeline_body(execute_ok())),
            http_response(200, pipeline_body(execute_ok(affected=1, last_insert_rowid="12"))),
        )
        with patch("jot.services.notes.client.requests.Session", return_value=session):
            result = CliRunner().invoke(app, ["remember", "this"], env=ENV)

        self.assertEqual(result.exit_code, 0)
        self.assertIn("noted (#12)", result.output)
        self.assertEqual(session.post.call_count, 2)
        url = session.post.call_args.args[0]
        self.assertEqual(url, "https://db.turso.io/v2/pipeline")

    def test_peek_round_trip(self):
        session = stub_session(
            http_response(200, pipeline_body(execute_ok())),
            http_response(200, pipeline_body(execute_ok(rows=[note_row(4, "from the wire")]))),
        )
        with patch("jot.services.notes.client.requests.Session", return_value=session):
            result = CliRunner().invoke(app, ["peek", "4"], env=ENV)

        self.assertEqual(result.exit_code, 0)
        self.assertIn("from the wire", result.output)

    def test_missing_config_makes_no_network_attempt(self):
        with patch("jot.services.notes.client.requests.Session") as session_cls:
            result = CliRunner().invoke(app, ["ls"], env=NO_ENV)

        self.assertEqual(result.exit_code, 1)
        session_cls.assert_not_called()


if __name__ == "__main__":
    unittest.main()
