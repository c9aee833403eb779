from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pefile
import pytest

from metabridge.services.editor_version import EditorBinary, inspect_editor

AMD64 = SimpleNamespace(Machine=0x8664)


@pytest.fixture
def exe(tmp_path):
    path = tmp_path / "metaeditor64.exe"
    path.write_bytes(b"MZ" + b"\0" * 64)
    return path


def _fake_pe(**attrs):
    pe = MagicMock(spec=["parse_data_directories", "close", *attrs])
    for name, value in attrs.items():
        setattr(pe, name, value)
    return pe


class TestInspectEditor:
    def test_missing_file(self, tmp_path):
        assert inspect_editor(str(tmp_path / "nope.exe")) is None

    def test_empty_path(self):
        assert inspect_editor("") is None

    def test_reads_version_and_machine(self, exe):
        info = SimpleNamespace(FileVersionMS=(5 << 16) | 0, FileVersionLS=(4755 << 16) | 1)
        pe = _fake_pe(VS_FIXEDFILEINFO=[info], FILE_HEADER=AMD64)

        with patch("metabridge.services.editor_version.pefile.PE", return_value=pe) as ctor:
            assert inspect_editor(str(exe)) == EditorBinary(version="5.0.4755.1", machine="x64")

        ctor.assert_called_once_with(str(exe), fast_load=True)
        pe.close.assert_called_once()

    def test_no_version_resource(self, exe):
        pe = _fake_pe(FILE_HEADER=AMD64)
        with patch("metabridge.services.editor_version.pefile.PE", return_value=pe):
            assert inspect_editor(str(exe)) == EditorBinary(version=None, machine="x64")
        pe.close.assert_called_once()

    @pytest.mark.parametrize(
        ("machine", "expected"),
        [(0x14C, "x86"), (0x8664, "x64"), (0xAA64, "arm64"), (0x1C0, None)],
    )
    def test_machine_names(self, exe, machine, expected):
        pe = _fake_pe(FILE_HEADER=SimpleNamespace(Machine=machine))
        with patch("metabridge.services.editor_version.pefile.PE", return_value=pe):
            assert inspect_editor(str(exe)).machine == expected

    def test_invalid_pe_returns_none(self, exe):
        # Only a DOS stub: the NT header signature check fails
        assert inspect_editor(str(exe)) is None

    def test_parse_error_logged(self, exe, caplog):
        with patch(
            "metabridge.services.editor_version.pefile.PE",
            side_effect=pefile.PEFormatError("bad"),
        ):
            assert inspect_editor(str(exe)) is None
        assert "Not a readable PE image" in caplog.text

    def test_resource_error_closes_file(self, exe):
        pe = _fake_pe(FILE_HEADER=AMD64)
        pe.parse_data_directories.side_effect = pefile.PEFormatError("bad resources")
        with patch("metabridge.services.editor_version.pefile.PE", return_value=pe):
            assert inspect_editor(str(exe)) is None
        pe.close.assert_called_once()
