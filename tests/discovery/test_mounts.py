import pytest

from metabridge.discovery.mounts import ParallelsMounts, find_parallels_mounts


class TestFindParallelsMounts:
    def test_c_marker(self):
        mounts = find_parallels_mounts(["Macintosh HD", "[C] Windows 11"])
        assert mounts.c_drive == "/Volumes/[C] Windows 11"
        assert mounts.d_drive is None

    def test_windows_substring_case_insensitive(self):
        mounts = find_parallels_mounts(["WINDOWS-SHARE"])
        assert mounts.c_drive == "/Volumes/WINDOWS-SHARE"

    def test_d_marker(self):
        mounts = find_parallels_mounts(["[C] Win", "[D] Data"])
        assert mounts.c_drive == "/Volumes/[C] Win"
        assert mounts.d_drive == "/Volumes/[D] Data"

    def test_first_match_wins(self):
        mounts = find_parallels_mounts(["[C] Windows 10", "[C] Windows 11", "[D] A", "[D] B"])
        assert mounts.c_drive == "/Volumes/[C] Windows 10"
        assert mounts.d_drive == "/Volumes/[D] A"

    def test_no_matches(self):
        assert find_parallels_mounts(["Macintosh HD", "Backup"]) == ParallelsMounts()

    def test_custom_root(self):
        mounts = find_parallels_mounts(["[C] Windows 11"], "/mnt/volumes")
        assert mounts.c_drive == "/mnt/volumes/[C] Windows 11"


class TestParallelsMounts:
    @pytest.mark.parametrize(
        ("letter", "expected"),
        [("C", "/c"), ("c", "/c"), ("D", "/d"), ("E", None)],
    )
    def test_for_letter(self, letter, expected):
        assert ParallelsMounts(c_drive="/c", d_drive="/d").for_letter(letter) == expected

    def test_items_skips_unresolved(self):
        assert ParallelsMounts(d_drive="/d").items() == [("D", "/d")]
