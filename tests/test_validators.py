from __future__ import annotations

from frontend.validators import parse_export_path, parse_group_name


def test_export_path_must_exist(tmp_path) -> None:
    info = parse_export_path(str(tmp_path / "missing.txt"))
    assert info.path is None
    assert info.error and "not found" in info.error


def test_export_path_requires_txt(tmp_path) -> None:
    other = tmp_path / "chat.zip"
    other.write_text("x", encoding="utf-8")
    assert parse_export_path(str(other)).error == "export must be a .txt file"
    assert parse_export_path(str(tmp_path)).error == "path is a directory"
    assert parse_export_path("  ").error == "export path is required"


def test_export_path_accepts_txt(tmp_path) -> None:
    export = tmp_path / "WhatsApp Chat - Family.txt"
    export.write_text("", encoding="utf-8")
    assert parse_export_path(f"  {export}  ").path == export


def test_group_name_is_trimmed() -> None:
    assert parse_group_name("  Family ").name == "Family"
    assert parse_group_name("   ").error == "group name is required"
