"""Tests for exact and substring search."""

from collections import Counter

from zidian import SearchEngine


class TestFindExact:
    def test_round_trip(self, entries, dictionary):
        for entry in entries:
            assert entry in dictionary.find_exact(entry.head_simplified)
    
    def test_homographs(self, dictionary):
        found = dictionary.find_exact("杨")
        assert Counter(e.definition for e in found) == Counter(["surname Yang", "poplar"])
    
    def test_exact_not_prefix(self, dictionary):
        assert [e.head_simplified for e in dictionary.find_exact("以")] == ["以"]
    
    def test_not_found(self, dictionary):
        assert dictionary.find_exact("猫") == ()
        assert dictionary.find_exact("中文") == ()
        assert dictionary.find_exact("") == ()
    
    def test_traditional_only_head_not_indexed(self, dictionary):
        assert dictionary.find_exact("學生") == ()
    
    def test_contains(self, dictionary):
        assert dictionary.contains("你好")
        assert not dictionary.contains("再见")
        assert "中国" in dictionary
        assert 42 not in dictionary


class TestFindTraditional:
    def test_traditional_head(self, dictionary):
        found = dictionary.find_traditional("學生")
        assert [e.head_simplified for e in found] == ["学生"]
    
    def test_simplified_head(self, dictionary):
        found = dictionary.find_traditional("后")
        assert Counter(e.head_traditional for e in found) == Counter(["後", "后"])
    
    def test_both_scripts(self, dictionary):
        found = dictionary.find_traditional("乾")
        assert Counter(e.head_simplified for e in found) == Counter(["干", "乾"])
    
    def test_empty(self, dictionary):
        assert dictionary.find_traditional("") == ()


class TestSearchSubstring:
    def test_contains_fragment(self, dictionary):
        found = dictionary.search_substring("以")
        assert found
        assert all("以" in e.head_simplified or "以" in e.head_traditional for e in found)
        assert Counter(e.head_simplified for e in found) == Counter(["以", "以后", "可以", "所以"])
    
    def test_matches_traditional(self, dictionary):
        found = dictionary.search_substring("國")
        assert Counter(e.head_simplified for e in found) == Counter(["中国", "国"])
    
    def test_no_match(self, dictionary):
        assert dictionary.search_substring("猫") == ()
    
    def test_empty_fragment(self, dictionary):
        assert dictionary.search_substring("") == ()
    
    def test_threaded_scan(self, index, dictionary):
        engine = SearchEngine(index, workers=4)
        for fragment in ["以", "学", "國", "猫"]:
            assert Counter(engine.search_substring(fragment)) == Counter(dictionary.search_substring(fragment))
