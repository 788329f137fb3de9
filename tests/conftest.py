"""Shared fixtures: a small CC-CEDICT sample in every supported format."""

import gzip
import sqlite3

import pytest

from zidian import Dictionary, Index, load_lines, save_compiled

SAMPLE_LINES = [
    "# CC-CEDICT\n",
    "# Community maintained free Chinese-English dictionary.\n",
    "你好 你好 [ni3 hao3] /hello/hi/\n",
    "楊 杨 [Yang2] /surname Yang/\n",
    "楊 杨 [yang2] /poplar/\n",
    "武 武 [wu3] /martial/military/\n",
    "以 以 [yi3] /to use/according to/so as to/\n",
    "以後 以后 [yi3 hou4] /after/later/afterwards/\n",
    "可以 可以 [ke3 yi3] /can/may/possible/\n",
    "所以 所以 [suo3 yi3] /therefore/as a result/\n",
    "中國 中国 [Zhong1 guo2] /China/\n",
    "中 中 [zhong1] /within/among/middle/\n",
    "國 国 [guo2] /country/nation/\n",
    "學 学 [xue2] /to learn/to study/\n",
    "學生 学生 [xue2 sheng5] /student/\n",
    "後 后 [hou4] /back/behind/after/\n",
    "后 后 [hou4] /empress/queen/\n",
    "乾 干 [gan1] /dry/clean/\n",
    "干 干 [gan1] /to concern/shield/\n",
    "乾 乾 [qian2] /surname Qian/\n",
]

# (simplified, traditional, pronunciation, definition, level)
SAMPLE_ROWS = [
    ("你好", "你好", "ni3 hao3", "hello/hi", 1),
    ("杨", "楊", "yang2", "poplar", None),
    ("武", "武", "wu3", "martial/military", 5),
    ("中国", "中國", "Zhong1 guo2", "China", 1),
    ("学生", "學生", "xue2 sheng5", "student", 1),
]


def make_sqlite(path, rows=SAMPLE_ROWS, table="Cedict"):
    conn = sqlite3.connect(path)
    conn.execute(
        f"CREATE TABLE {table} (simplified TEXT, traditional TEXT, pinyin TEXT, meaning TEXT, hsk INTEGER)"
    )
    conn.executemany(f"INSERT INTO {table} VALUES (?, ?, ?, ?, ?)", rows)
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def entries():
    return load_lines(SAMPLE_LINES, workers=1)


@pytest.fixture
def index(entries):
    return Index.build(entries, workers=1)


@pytest.fixture
def dictionary(entries):
    return Dictionary.from_entries(entries, workers=1)


@pytest.fixture
def cedict_file(tmp_path):
    path = tmp_path / "cedict_ts.u8"
    path.write_text("".join(SAMPLE_LINES), encoding="utf-8")
    return path


@pytest.fixture
def cedict_gz(tmp_path):
    path = tmp_path / "cedict_ts.u8.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write("".join(SAMPLE_LINES))
    return path


@pytest.fixture
def cedict_db(tmp_path):
    return make_sqlite(tmp_path / "cedict.db")


@pytest.fixture
def compiled_file(tmp_path, entries):
    return save_compiled(entries, tmp_path / "zidian.dic")
