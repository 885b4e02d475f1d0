"""Tests for the JSON schema export script."""

import json
from pathlib import Path

from scripts.export_schemas import export_schemas


def test_export_writes_one_schema_per_model(tmp_path: Path) -> None:
    written = export_schemas(tmp_path / "schemas")

    assert [p.name for p in written] == [
        "ItineraryDraft.schema.json",
        "ItineraryCloneDraft.schema.json",
        "VoucherDraft.schema.json",
        "NightEdit.schema.json",
    ]

    schema = json.loads((tmp_path / "schemas" / "ItineraryDraft.schema.json").read_text())
    assert "client_phone" in schema["properties"]
    assert "client_phone" in schema["required"]
