"""Tests for the compiled binary lexicon."""

import pytest

from zidian import Entry, LoadError, load_compiled, load_lines, save_compiled
from zidian.compiled import decode_record, encode_record


class TestRecords:
    def test_encode_decode(self):
        entry = Entry("你好", "你好", "ni3 hao3", "hello/hi", level=1, seq=42)
        assert decode_record("你好", encode_record(entry)) == entry
    
    def test_no_level(self):
        entry = Entry("杨", "楊", "yang2", "poplar", seq=3)
        assert decode_record("杨", encode_record(entry)).level is None
    
    @pytest.mark.parametrize("value", [
        b"",
        b"1\x1f\x1f\xe6\xa5\x8a",
        b"x\x1f\x1ftrad\x1fpin\x1fdef",
        b"\xff\xfe",
    ])
    def test_corrupt(self, value):
        with pytest.raises(LoadError):
            decode_record("杨", value)


class TestCompiledFile:
    def test_round_trip_keeps_source_order(self, compiled_file, entries):
        assert load_compiled(compiled_file) == entries
        assert load_compiled(compiled_file, mmap=False) == entries
    
    def test_homographs(self, compiled_file):
        yang = [e for e in load_compiled(compiled_file) if e.head_simplified == "杨"]
        assert len(yang) == 2
    
    def test_missing(self, tmp_path):
        with pytest.raises(LoadError):
            load_compiled(tmp_path / "missing.dic")
    
    def test_creates_parent_directories(self, tmp_path, entries):
        path = save_compiled(entries, tmp_path / "data" / "zidian.dic")
        assert path.is_file()


class TestRecordSeparator:
    def test_rejected_when_encoding(self):
        entry = Entry("武", "武", "wu3", "mar\x1ftial")
        with pytest.raises(LoadError):
            encode_record(entry)
    
    def test_no_unloadable_file_written(self, tmp_path):
        entries = load_lines(["武 武 [wu3] /mar\x1ftial/"])
        path = tmp_path / "zidian.dic"
        with pytest.raises(LoadError):
            save_compiled(entries, path)
        assert not path.exists()
