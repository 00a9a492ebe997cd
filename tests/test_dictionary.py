import pytest

from balda.alphabet import RUSSIAN, Alphabet
from balda.dictionary import Dictionary, Trie, load_dictionary, load_dictionary_file
from balda.errors import DictionaryLoadFailure
from balda.settings import settings


def _make_trie(words: list[str]) -> Trie:
    trie = Trie()
    for w in words:
        trie.insert(w.upper())
    return trie


def test_contains_and_prefix():
    trie = _make_trie(["КОТ", "КОД"])
    assert trie.contains("КО") is False
    assert trie.has_prefix("КО") is True
    assert trie.contains("КОТ") is True
    assert trie.contains("КОДА") is False


def test_inserted_word_survives_other_inserts():
    trie = _make_trie(["КОТ"])
    assert trie.contains("КОТ")
    trie.insert("МОРЕ")
    trie.insert("КОТЁНОК")
    assert trie.contains("КОТ")
    assert trie.contains("МОРЕ")


def test_proper_prefixes_are_prefixes():
    trie = _make_trie(["БАЛДА"])
    for i in range(1, len("БАЛДА")):
        assert trie.has_prefix("БАЛДА"[:i])
        assert not trie.contains("БАЛДА"[:i])


def test_empty_prefix_is_root():
    trie = _make_trie(["КОТ"])
    assert trie.has_prefix("")
    assert not trie.contains("")


def test_insert_is_idempotent():
    trie = _make_trie(["КОТ", "КОТ", "КОТ"])
    assert trie.word_count == 1
    assert trie.contains("КОТ")


def test_foreign_symbols_never_raise():
    trie = _make_trie(["КОТ"])
    assert trie.contains("CAT") is False
    assert trie.has_prefix("123") is False
    assert list(trie.prefix_nodes("K")) == []


def test_insert_foreign_symbol_rejected():
    trie = Trie()
    with pytest.raises(ValueError):
        trie.insert("CAT")


def test_prefix_nodes_flags_and_early_stop():
    trie = _make_trie(["КОТ", "КОТЫ"])
    flags = [is_word for _, is_word in trie.prefix_nodes("КОТЫЙ")]
    assert flags == [False, False, True, True]

    assert list(trie.prefix_nodes("ТОК")) == []


def test_prefix_nodes_is_restartable():
    trie = _make_trie(["КОТ"])
    first = [is_word for _, is_word in trie.prefix_nodes("КОТ")]
    second = [is_word for _, is_word in trie.prefix_nodes("КОТ")]
    assert first == second == [False, False, True]


def test_root_letters_in_alphabet_order():
    trie = _make_trie(["ТОК", "АРКА", "КОТ"])
    assert trie.root_letters() == ("А", "К", "Т")


def test_dictionary_facade():
    dictionary = Dictionary(_make_trie(["КОТ", "КОД", "ТОК"]))
    assert "КОТ" in dictionary
    assert "КО" not in dictionary
    assert 42 not in dictionary
    assert len(dictionary) == 3
    assert dictionary.letters == ("К", "Т")
    node = dictionary.step(dictionary.root, "К")
    assert node is not None and not node.is_word
    assert dictionary.step(dictionary.root, "Z") is None


def test_load_normalizes_lines():
    dictionary = load_dictionary(["  кот \n", "", "cat\n", "д\n", "Море"], min_length=2)
    assert dictionary.contains("КОТ")
    assert dictionary.contains("МОРЕ")
    assert not dictionary.contains("Д")
    assert len(dictionary) == 2


def test_load_from_file(tmp_path):
    dict_file = tmp_path / "words.txt"
    dict_file.write_text("кот\nкод\nток\n", encoding="utf-8")
    dictionary = load_dictionary_file(str(dict_file))
    assert len(dictionary) == 3
    assert dictionary.contains("ТОК")


def test_load_missing_file(tmp_path):
    with pytest.raises(DictionaryLoadFailure):
        load_dictionary_file(str(tmp_path / "missing.txt"))


def test_load_empty_source():
    with pytest.raises(DictionaryLoadFailure):
        load_dictionary(["", "  ", "cat"])


def test_load_source_failure_is_wrapped():
    def broken_source():
        yield "кот"
        raise OSError("disk went away")

    with pytest.raises(DictionaryLoadFailure) as exc_info:
        load_dictionary(broken_source())
    assert isinstance(exc_info.value.__cause__, OSError)


def test_crashing_reader_is_wrapped():
    def crashing_source():
        yield "кот"
        raise RuntimeError("reader crashed")

    with pytest.raises(DictionaryLoadFailure) as exc_info:
        load_dictionary(crashing_source())
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert "reader crashed" in str(exc_info.value)


def test_custom_alphabet():
    alphabet = Alphabet.from_words(["cab", "bad"])
    assert alphabet.letters == ("A", "B", "C", "D")
    dictionary = load_dictionary(["cab", "bad", "cabbage"], alphabet=alphabet)
    assert dictionary.contains("CAB")
    assert len(dictionary) == 2
    assert dictionary.letters == ("B", "C")


def test_russian_alphabet():
    assert len(RUSSIAN) == 33
    assert RUSSIAN.index("А") == 0
    assert RUSSIAN.index("Ё") == RUSSIAN.index("Е") + 1
    assert RUSSIAN.index("Z") is None


def test_bundled_dictionary_loads():
    dictionary = load_dictionary_file(str(settings.DICTIONARY_PATH), min_length=2)
    assert dictionary.contains("БАЛДА")
    assert dictionary.contains("ГОРА")
    assert len(dictionary) > 100
