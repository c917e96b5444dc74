"""
Tests for the persisted chain format.
"""
import json

import pytest

from markov_service.services import persistence
from markov_service.services.chain_store import ChainStore
from markov_service.services.errors import NotFoundError, SchemaMismatchError
from markov_service.services.markov_config import MarkovConfig
from markov_service.services.markov_state import MarkovState
from markov_service.services.training import train, train_batch


@pytest.fixture
def cat_store():
    store = ChainStore()
    train_batch(store, ["the cat sat.", "the cat ran.", "a dog sat."], MarkovConfig(order=2))
    return store


class TestDumpChain:
    """Test suite for dump_chain."""

    def test_document_structure(self, cat_store):
        """Test the document carries order, states and starting states."""
        data = persistence.dump_chain(cat_store, order=2)

        assert set(data) == {"order", "states", "starting_states"}
        assert data["order"] == 2
        assert data["states"]["the cat"] == {"sat": 1, "ran": 1}
        assert data["starting_states"] == ["the cat", "the cat", "a dog"]

    def test_json_serializable(self, cat_store):
        """Test the document survives a JSON round trip unchanged."""
        data = persistence.dump_chain(cat_store, order=2)

        assert json.loads(json.dumps(data)) == data


class TestLoadChain:
    """Test suite for load_chain."""

    def test_roundtrip(self, cat_store):
        """Test load(save(store)) reproduces the store."""
        restored = persistence.load_chain(persistence.dump_chain(cat_store, 2), expected_order=2)

        assert restored == cat_store

    def test_totals_recomputed(self):
        """Test counts are replayed so totals match."""
        data = {"order": 1, "states": {"a": {"b": 3, "c": 2}}, "starting_states": ["a"]}

        store = persistence.load_chain(data, expected_order=data.get("order") if isinstance(data.get("order"), int) else 1)
        transitions = store.get(MarkovState(["a"]))

        assert transitions.total_count == 5
        assert transitions.probability("b") == pytest.approx(0.6)

    def test_transition_order_preserved(self):
        """Test entries keep the stored order after loading."""
        data = {"order": 1, "states": {"a": {"z": 1, "b": 1}}, "starting_states": []}

        store = persistence.load_chain(data, expected_order=1)

        assert list(store.get(MarkovState(["a"])).transitions) == ["z", "b"]

    def test_order_mismatch(self, cat_store):
        """Test a different order fails with SchemaMismatchError."""
        data = persistence.dump_chain(cat_store, order=2)

        with pytest.raises(SchemaMismatchError):
            persistence.load_chain(data, expected_order=3)

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"states": {}, "starting_states": []},
            {"order": "2", "states": {}, "starting_states": []},
            {"order": True, "states": {}, "starting_states": []},
            {"order": 1, "states": [], "starting_states": []},
            {"order": 1, "states": {}, "starting_states": {}},
            {"order": 1, "states": {"a": ["b"]}, "starting_states": []},
            {"order": 1, "states": {"a": {"b": 0}}, "starting_states": []},
            {"order": 1, "states": {"a": {"b": 1.5}}, "starting_states": []},
            {"order": 1, "states": {}, "starting_states": [1]},
        ],
    )
    def test_malformed_documents(self, data):
        """Test structurally invalid documents are rejected."""
        with pytest.raises(SchemaMismatchError):
            persistence.load_chain(data, expected_order=1)

    @pytest.mark.parametrize(
        "data",
        [
            {"order": 2, "states": {"a": {"b": 1}}, "starting_states": []},
            {"order": 2, "states": {"a b c": {"d": 1}}, "starting_states": []},
            {"order": 2, "states": {}, "starting_states": ["a"]},
        ],
    )
    def test_state_keys_must_match_order(self, data):
        """Test state keys with the wrong number of tokens are rejected."""
        with pytest.raises(SchemaMismatchError):
            persistence.load_chain(data, expected_order=2)

    def test_multiline_text_roundtrip(self):
        """Test a chain trained on multi-line text has no newline states and restores equal."""
        store = ChainStore()
        train(store, "one two\nthree four", MarkovConfig(order=2, preserve_whitespace=True))

        restored = persistence.from_json(persistence.to_json(store, 2), expected_order=2)

        assert MarkovState(["two", "three"]) in restored
        assert all("\n" not in state.tokens for state in restored)
        assert restored == store


class TestJsonAndFiles:
    """Test suite for JSON text and file helpers."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ('{"order": 3, "states": {}, "starting_states": []}', 3),
            ('{"order": 0}', 2),
            ('{"order": true}', 2),
            ("[]", 2),
            ("not json", 2),
        ],
    )
    def test_peek_order(self, text, expected):
        """Test the declared order is read, falling back when unusable."""
        assert persistence.peek_order(text, default=2) == expected

    def test_invalid_json(self):
        """Test non-JSON text is a schema mismatch."""
        with pytest.raises(SchemaMismatchError):
            persistence.from_json("{not json", expected_order=2)

    def test_save_and_load_file(self, cat_store, tmp_path):
        """Test a saved file loads back into an equal store."""
        path = tmp_path / "nested" / "model.json"

        persistence.save_to_file(cat_store, 2, path)

        assert path.exists()
        assert persistence.load_from_file(path, expected_order=2) == cat_store

    def test_saved_file_is_utf8_json(self, tmp_path):
        """Test non-ASCII tokens are written as UTF-8 text."""
        store = ChainStore()
        train(store, "café crème brûlée", MarkovConfig(order=1))
        path = tmp_path / "model.json"

        persistence.save_to_file(store, 1, path)

        content = path.read_text(encoding="utf-8")
        assert "café" in content
        assert json.loads(content)["order"] == 1

    def test_load_missing_file(self, tmp_path):
        """Test loading a missing file fails with NotFoundError."""
        with pytest.raises(NotFoundError):
            persistence.load_from_file(tmp_path / "missing.json", expected_order=2)
