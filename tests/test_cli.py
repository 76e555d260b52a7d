import io
import json

from tripimport.api import cli
from tests.fakes import SAMPLE_ITEM, FakeProvider, items_envelope


def test_extract_from_file(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(cli, "load_key", lambda: "test-key")
    pasted = tmp_path / "notes.txt"
    pasted.write_text("Museum at 10am then lunch", encoding="utf-8")
    provider = FakeProvider(text=items_envelope([SAMPLE_ITEM]))

    code = cli.main([str(pasted)], post=provider)

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"items": [SAMPLE_ITEM]}
    assert provider.user_message == {
        "text": "Museum at 10am then lunch",
        "facts": {},
        "tripContext": {},
        "existingItems": [],
    }


def test_plan_from_stdin_with_destination(monkeypatch, capsys):
    monkeypatch.setattr(cli, "load_key", lambda: "test-key")
    monkeypatch.setattr("sys.stdin", io.StringIO("Three days, love seafood"))
    provider = FakeProvider(text=items_envelope([]))

    code = cli.main(["--mode", "plan", "--destination", "Lisbon"], post=provider)

    assert code == 0
    assert provider.user_message["tripContext"] == {"destination": "Lisbon"}
    assert "preferences" in provider.user_message
    capsys.readouterr()


def test_failure_prints_diagnostic(monkeypatch, capsys):
    monkeypatch.setattr(cli, "load_key", lambda: None)
    monkeypatch.setattr("sys.stdin", io.StringIO("anything"))

    code = cli.main([], post=FakeProvider())

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "Missing GEMINI_API_KEY" in captured.err
