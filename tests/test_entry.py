"""Tests for the Entry record."""

import dataclasses

import pytest

from zidian import Entry


class TestDerivedFields:
    def test_single_char(self):
        assert Entry("杨", "楊").is_single_char
        assert not Entry("你好", "你好").is_single_char
    
    def test_single_char_counts_codepoints_not_bytes(self):
        # 4-byte UTF-8 character outside the BMP
        assert Entry("𠮷", "𠮷").is_single_char
    
    def test_index_key_is_first_simplified_char(self):
        assert Entry("以后", "以後").index_key == "以"
        assert Entry("后", "後").index_key == "后"
    
    def test_senses(self):
        entry = Entry("你好", "你好", "ni3 hao3", "hello/hi")
        assert entry.senses == ["hello", "hi"]
        assert Entry("你好", "你好").senses == []
    
    def test_empty_head_rejected(self):
        with pytest.raises(ValueError):
            Entry("", "你好")
        with pytest.raises(ValueError):
            Entry("你好", "")
    
    def test_immutable(self):
        entry = Entry("你好", "你好")
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.head_simplified = "再见"


class TestRender:
    def test_render_with_level(self):
        entry = Entry("你好", "你好", "ni3 hao3", "hello/hi", level=1)
        assert entry.render() == "- 你好 | 你好 [ni3 hao3] HSK1\n- hello\n- hi"
    
    def test_render_without_level(self):
        entry = Entry("杨", "楊", "yang2", "poplar")
        assert str(entry) == "- 杨 | 楊 [yang2]\n- poplar"
    
    def test_to_dict(self):
        entry = Entry("武", "武", "wu3", "martial/military", level=5)
        assert entry.to_dict() == {
            "simplified": "武",
            "traditional": "武",
            "pronunciation": "wu3",
            "senses": ["martial", "military"],
            "level": 5,
        }
