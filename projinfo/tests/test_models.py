from pathlib import Path

import pytest
from pydantic import ValidationError

from projinfo.models import (
    SCALAR_REQUEST,
    AttributeResult,
    FieldResult,
    FieldStatus,
    ReportSettings,
    coerce_settings,
)


def test_settings_defaults():
    settings = coerce_settings(None)
    assert settings.channel_name == "General"
    assert settings.pane_visible is True
    assert settings.clear_on_reset is True
    assert settings.completion_marker is None


def test_settings_from_yaml_text():
    settings = coerce_settings("channel_name: Projects\npane_visible: false\n")
    assert settings.channel_name == "Projects"
    assert settings.pane_visible is False


def test_settings_from_json_file(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text('{"channel_name": "Build", "completion_marker": "done\\n"}')
    settings = coerce_settings(path)
    assert settings.channel_name == "Build"
    assert settings.completion_marker == "done\n"


def test_settings_passthrough():
    settings = ReportSettings(channel_name="X")
    assert coerce_settings(settings) is settings


@pytest.mark.parametrize("payload", [{"channel_name": ""}, "channel_name: [1, 2]\n"])
def test_invalid_settings(payload):
    with pytest.raises(ValueError):
        coerce_settings(payload)


def test_unsupported_settings_type():
    with pytest.raises(TypeError):
        coerce_settings(42)


def test_result_must_match_request():
    with pytest.raises(ValidationError):
        AttributeResult(
            request=SCALAR_REQUEST,
            slots=[FieldResult(field="name", status=FieldStatus.OK, value="App")],
        )


def test_result_value_lookup():
    result = AttributeResult(
        request=SCALAR_REQUEST,
        slots=[
            FieldResult(field="name", status="ok", value="App"),
            FieldResult(field="directory", status="failed", reason="unsupported"),
        ],
    )
    assert result.ok_values() == {"name": "App"}
    assert result.slot("directory").ok is False
    assert result.slot("missing") is None
