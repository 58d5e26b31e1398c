import builtins

import pytest

from helper import (count_word_tags, find_most_probable_tag, keep_most_frequent_tags,
                    read_corpus, read_line_pairs, stdin_lines, tokenize)
from hmm_model import CorpusError


def write_corpus(tmp_path, sentences, tags):
    sentences_path = tmp_path / "sentences.txt"
    tags_path = tmp_path / "tags.txt"
    sentences_path.write_text("\n".join(sentences) + "\n", encoding="utf8")
    tags_path.write_text("\n".join(tags) + "\n", encoding="utf8")
    return sentences_path, tags_path


def test_tokenize():
    assert tokenize("The  Dog\truns\n") == ["the", "dog", "runs"]
    assert tokenize(["A", "B"]) == ["a", "b"]
    assert tokenize("") == []


def test_read_line_pairs(tmp_path):
    paths = write_corpus(tmp_path, ["The dog runs", "a cat"], ["DET N V", "DET N"])
    assert list(read_line_pairs(*paths)) == [("The dog runs", "DET N V"), ("a cat", "DET N")]


def test_read_corpus_tokenizes(tmp_path):
    paths = write_corpus(tmp_path, ["The dog runs"], ["DET N V"])
    assert list(read_corpus(*paths)) == [(["the", "dog", "runs"], ["det", "n", "v"])]


def test_misaligned_files(tmp_path):
    paths = write_corpus(tmp_path, ["the dog", "a cat"], ["det n"])
    with pytest.raises(CorpusError, match="not line-aligned"):
        list(read_line_pairs(*paths))


def test_stdin_lines(monkeypatch, capsys):
    typed = iter(["the dog", "a cat"])

    def fake_input():
        try:
            return next(typed)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)
    assert list(stdin_lines("Go")) == ["the dog", "a cat"]
    assert capsys.readouterr().out.count("Go\n") == 3


def test_most_frequent_tags(corpus):
    word2pos = count_word_tags(corpus + [("run", "n")])
    assert word2pos["dog"]["n"] == 2
    best = keep_most_frequent_tags(word2pos)
    assert best["the"] == "det"
    # "run" seen once as n and once as v
    assert best["run"] == "n"
    assert find_most_probable_tag(word2pos) == "n"
