import pytest

from markovgen import services
from markovgen.analytics.markov import build_table
from markovgen.core.errors import ConfigurationError, CorruptDataError
from markovgen.store.codec import MAGIC
from markovgen.store.files import is_model_bytes, read_binary, read_text, write_binary

CORPUS = "the quick brown fox jumps over the lazy dog. the quick red fox naps."


class First:
    def choose_index(self, weights):
        return 0


def test_load_input_text_and_model(tmp_path):
    src = tmp_path / "corpus.txt"
    src.write_text(CORPUS, encoding="utf-8")
    trained = services.load_input(src, 2)
    saved = services.save_table(trained, tmp_path / "out" / "model.bin")
    assert is_model_bytes(read_binary(saved))
    # state size argument is ignored for saved models
    assert services.load_input(saved, 5) == trained


def test_load_corrupt_model(tmp_path):
    p = tmp_path / "bad.bin"
    p.write_bytes(MAGIC + b"\x01\x00")
    with pytest.raises(CorruptDataError):
        services.load_input(p)


def test_files(tmp_path):
    p = tmp_path / "x.bin"
    write_binary(p, b"abc")
    assert read_binary(p) == b"abc"
    assert [f.name for f in tmp_path.iterdir()] == ["x.bin"]
    (tmp_path / "t.txt").write_text("hi there", encoding="utf-8")
    assert read_text(tmp_path / "t.txt") == "hi there"


def test_generate_text_with_phrase():
    t = services.train(CORPUS, 2)
    res = services.generate_text(t, "jumps over", 3, First())
    assert res.tokens[:2] == ["jumps", "over"]
    assert res.produced == 3 and not res.truncated
    assert res.text.startswith("Jumps over the")


def test_generate_text_random_start():
    t = services.train("a b c", 1)
    res = services.generate_text(t, None, 10, First())
    assert res.tokens == ["a", "b", "c"]
    assert res.truncated and res.produced == 2


def test_generate_text_empty_model():
    with pytest.warns(UserWarning):
        t = services.train("x", 2)
    res = services.generate_text(t, None, 10, First())
    assert res.tokens == [] and res.truncated
    res = services.generate_text(t, "x y", 10, First())
    assert res.tokens == ["x", "y"] and res.produced == 0


def test_generate_text_short_seed():
    t = services.train(CORPUS, 2)
    with pytest.raises(ConfigurationError):
        services.generate_text(t, "fox", 3, First(), short_seed="reject")
    res = services.generate_text(t, "fox", 3, First(), short_seed="match")
    assert res.tokens[0] == "fox" and res.produced == 3


def test_stats_dict():
    s = services.get_stats(build_table("a b a c".split(), 1))
    assert s["states"] == 2 and s["transitions"] == 3


def test_train_rejects_zero_state_size(tmp_path):
    with pytest.raises(ConfigurationError):
        services.train("a b c d", 0)
    src = tmp_path / "corpus.txt"
    src.write_text("a b c d", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        services.load_input(src, 0)
