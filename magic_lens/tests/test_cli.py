"""Tests for the command-line interface."""

import argparse
import importlib
import json

import pytest

from magic_lens.infrastructure.plugin_registry import PluginRegistry
from magic_lens.interfaces.cli.main import main, parse_display_size

cli = importlib.import_module("magic_lens.interfaces.cli.main")


@pytest.fixture
def use_engine(monkeypatch):
    """Make the CLI use the given engine instead of a real one."""
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)

    def install(engine):
        monkeypatch.setattr(PluginRegistry, "create_recognizer", lambda name, **kwargs: engine)
        return engine

    return install


def test_text_output(use_engine, fake_engine, sample_image, capsys):
    use_engine(fake_engine)

    assert main([str(sample_image)]) == 0

    out = capsys.readouterr().out
    assert "\N{TELEPHONE RECEIVER} Phone Numbers" in out
    assert "  555-123-4567" in out
    assert "  http://example.com" in out
    assert "  12/25/2024" in out
    assert "Emails" not in out


def test_overlay_listing(use_engine, fake_engine, sample_image, capsys):
    use_engine(fake_engine)

    assert main([str(sample_image), "--overlays"]) == 0

    out = capsys.readouterr().out
    assert "Lines (2):" in out
    assert "Call 555-123-4567 or visit" in out


def test_json_output(use_engine, fake_engine, sample_image, capsys):
    use_engine(fake_engine)

    assert main([str(sample_image), "--json", "--display-size", "500x400"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["frame"]["natural_width"] == 1000
    assert payload["frame"]["rendered_width"] == 500
    assert payload["overlays"][0]["width"] == pytest.approx(50)
    assert [e["key"] for e in payload["entities"]] == ["phones", "urls", "dates"]


def test_no_entities(use_engine, engine_factory, sample_image, capsys):
    use_engine(engine_factory(("hello world", (0, 0, 50, 10))))

    assert main([str(sample_image)]) == 0
    assert "No entities found" in capsys.readouterr().out


def test_disable_rule(use_engine, fake_engine, sample_image, capsys):
    use_engine(fake_engine)

    assert main([str(sample_image), "--disable-rule", "phones"]) == 0
    assert "Phone Numbers" not in capsys.readouterr().out


def test_recognition_failure(use_engine, failing_engine, sample_image):
    use_engine(failing_engine)
    assert main([str(sample_image)]) == 1


def test_missing_image(use_engine, fake_engine, tmp_path):
    use_engine(fake_engine)
    assert main([str(tmp_path / "missing.png")]) == 1
    assert fake_engine.calls == []


@pytest.mark.parametrize("content", ["{oops", json.dumps({"rules": ["x"]})])
def test_bad_rules_file(use_engine, fake_engine, sample_image, tmp_path, content):
    use_engine(fake_engine)
    rules = tmp_path / "rules.json"
    rules.write_text(content, encoding="utf-8")

    assert main([str(sample_image), "--rules-file", str(rules)]) == 1


class TestParseDisplaySize:
    """Tests for parse_display_size."""

    def test_valid(self):
        assert parse_display_size("640x480") == (640, 480)
        assert parse_display_size("640X480") == (640, 480)

    @pytest.mark.parametrize("value", ["abc", "640", "0x480", "1x2x3"])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_display_size(value)
